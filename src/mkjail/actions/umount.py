# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os

from mkjail.errors import FilesystemError
from mkjail.utils.console import verbose
from mkjail.utils.mounts import MOUNTS_PATH, get_mount_points_under


def umount_jail(root, system, mounts_path=MOUNTS_PATH):
    """
    Unmount everything mounted below the jail root, in mount table order.
    """
    if not os.path.isdir(root):
        raise FilesystemError("umount", root, "jail root does not exist")

    unmounted = []
    for mount_point in get_mount_points_under(root, mounts_path):
        verbose(f"Unmounting {mount_point}")
        system.unmount(mount_point)
        unmounted.append(mount_point)

    return unmounted
