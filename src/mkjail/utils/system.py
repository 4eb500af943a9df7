# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os
import shutil
import stat
from pathlib import Path

from mkjail.errors import ExternalOperationError
from mkjail.utils import libc


class SystemOperations:
    """
    The side-effecting operations used while building or tearing down a jail.
    Each one either completes or raises ExternalOperationError.
    """

    def bind_mount(self, source, target):
        try:
            libc.mount(source, target, None, libc.MS_BIND)
        except OSError as e:
            raise ExternalOperationError.from_oserror(
                "bind mount", f"{source} -> {target}", e
            )

    def remount_read_only(self, target):
        try:
            libc.mount(
                None, target, None, libc.MS_REMOUNT | libc.MS_BIND | libc.MS_RDONLY
            )
        except OSError as e:
            raise ExternalOperationError.from_oserror("read-only remount", target, e)

    def unmount(self, target):
        try:
            libc.umount(target)
        except OSError as e:
            raise ExternalOperationError.from_oserror("umount", target, e)

    def copy_file(self, source, target):
        """
        Copy source to target, keeping mode and modification time.
        """
        try:
            shutil.copy2(source, target)
        except OSError as e:
            raise ExternalOperationError.from_oserror("copy", f"{source} -> {target}", e)

    def make_device_node(self, path, major, minor, mode):
        try:
            os.mknod(path, stat.S_IFCHR | mode, os.makedev(major, minor))
            # mknod is subject to the umask
            os.chmod(path, mode)
        except OSError as e:
            raise ExternalOperationError.from_oserror("mknod", path, e)

    def create_marker_file(self, path):
        try:
            Path(path).touch()
        except OSError as e:
            raise ExternalOperationError.from_oserror("touch", path, e)
