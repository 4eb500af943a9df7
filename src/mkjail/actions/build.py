# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

"""
Build the jail skeleton under the jail root.

Every step checks what is already in place before touching anything,
so running the build again against a finished (or half finished) jail
only fills in what is missing.
"""

import os

from mkjail.data import BIND_MARKER_NAME
from mkjail.errors import FilesystemError
from mkjail.utils.console import verbose
from mkjail.utils.files import ensure_directory, ensure_symlink, is_empty_dir, stat_chmod

TEMP_DIR_MODE = 0o1777


def _in_root(root, relative_path):
    return os.path.join(root, relative_path.lstrip("/"))


def provision_directories(root, tables):
    for path in tables.new_dirs + tables.temp_dirs:
        ensure_directory(_in_root(root, path))

    # Shared scratch space, mkdir doesn't set the sticky bit for us
    for path in tables.temp_dirs:
        stat_chmod(_in_root(root, path), TEMP_DIR_MODE)

    for link_path, target in tables.symlinks:
        ensure_symlink(target, _in_root(root, link_path))


def seed_files(root, tables, system, host_root="/"):
    """
    Copy host files into the jail, but never overwrite a file that is
    already there: it may have been customized.
    """
    for path in tables.copy_files:
        target = _in_root(root, path)
        if os.path.lexists(target):
            continue
        verbose(f"Copying {path}")
        system.copy_file(_in_root(host_root, path), target)


def mirror_bind_dirs(root, tables, system, host_root="/"):
    """
    Make the host system directories available in the jail.
    Symlinks are recreated, directories are bind mounted read-only.
    """
    for path in tables.bind_dirs:
        source = _in_root(host_root, path)
        target = _in_root(root, path)

        if os.path.islink(source):
            if os.path.islink(target):
                continue
            try:
                link_target = os.readlink(source)
            except OSError as e:
                raise FilesystemError.from_oserror("readlink", source, e)
            verbose(f"Linking {target} -> {link_target}")
            ensure_symlink(link_target, target)
            continue

        ensure_directory(target)
        # Something inside means we've already mounted it
        if not is_empty_dir(target):
            continue

        verbose(f"Mounting {source} on {target} (read-only)")
        system.bind_mount(source, target)
        # A failed remount leaves a writable mount, which later runs take as done.
        # Recover with --umount and a rebuild.
        system.remount_read_only(target)


def bind_custom_dirs(root, binds, system):
    """
    Bind mount caller specified host directories into the jail (read-write).
    """
    for bind in binds:
        if os.path.isdir(bind.source) and is_empty_dir(bind.source):
            # Once mounted, an empty source would leave the target looking unmounted
            system.create_marker_file(os.path.join(bind.source, BIND_MARKER_NAME))

        target = _in_root(root, bind.destination)
        ensure_directory(target)
        if not is_empty_dir(target):
            continue

        verbose(f"Mounting {bind.source} on {target}")
        system.bind_mount(bind.source, target)


def provision_devices(root, tables, system):
    for node in tables.device_nodes:
        path = _in_root(root, node.path)
        if os.path.lexists(path):
            continue
        ensure_directory(os.path.dirname(path))
        verbose(f"Creating device {path} ({node.major}, {node.minor})")
        system.make_device_node(path, node.major, node.minor, node.mode)


def build_jail(config, tables, system, host_root="/"):
    """
    Build (or complete) the jail described by config.
    """
    provision_directories(config.root, tables)
    seed_files(config.root, tables, system, host_root)
    mirror_bind_dirs(config.root, tables, system, host_root)
    bind_custom_dirs(config.root, config.binds, system)
    provision_devices(config.root, tables, system)
