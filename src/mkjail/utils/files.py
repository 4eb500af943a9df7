# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os
import stat

from mkjail.errors import FilesystemError


def stat_chmod(file_path, mode):
    """
    Change mode if file doesn't already have this mode.
    """
    try:
        if mode != stat.S_IMODE(os.stat(file_path).st_mode):
            os.chmod(file_path, mode)
    except OSError as e:
        raise FilesystemError.from_oserror("chmod", file_path, e)


def ensure_directory(path):
    """
    Create path and any missing ancestors, walking down from the top.
    Anything already present at path (even a file) counts as done.
    """
    if os.path.lexists(path):
        return

    current = os.sep if os.path.isabs(path) else ""
    for part in path.split(os.sep):
        if not part:
            continue
        current = os.path.join(current, part)
        if os.path.lexists(current):
            continue
        try:
            os.mkdir(current)
        except FileExistsError:
            pass
        except OSError as e:
            raise FilesystemError.from_oserror("mkdir", current, e)


def is_empty_dir(path):
    """
    Return True if the directory has no entries besides . and ..
    """
    try:
        with os.scandir(path) as entries:
            return next(entries, None) is None
    except OSError as e:
        raise FilesystemError.from_oserror("read directory", path, e)


def ensure_symlink(target, link_path):
    """
    Create link_path pointing at target, unless link_path is already a symlink.
    """
    if os.path.islink(link_path):
        return
    ensure_directory(os.path.dirname(link_path))
    try:
        os.symlink(target, link_path)
    except OSError as e:
        raise FilesystemError.from_oserror("symlink", link_path, e)
