# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os
import re

from mkjail.errors import FilesystemError

MOUNTS_PATH = "/proc/self/mounts"


def clean_field(field):
    """
    Put back whitespace and backslashes which the kernel encodes as octal,
    e.g. a space is written as \\040.
    """
    return re.sub(r"\\([0-7]{3})", lambda m: chr(int(m.group(1), 8)), field)


def get_mount_points(mounts_path=MOUNTS_PATH):
    """
    Return the mount points of the live mount table, in table order.
    """
    mount_points = []
    try:
        # Mount points are raw bytes, not necessarily valid in any encoding
        with open(mounts_path, "rb") as f:
            for line in f:
                fields = line.split()
                if len(fields) > 1:
                    mount_points.append(clean_field(os.fsdecode(fields[1])))
    except OSError as e:
        raise FilesystemError.from_oserror("read mount table", mounts_path, e)
    return mount_points


def get_mount_points_under(root, mounts_path=MOUNTS_PATH):
    """
    Return the mount points strictly below root, in table order.
    """
    prefix = root.rstrip("/") + "/"
    return [
        mount_point
        for mount_point in get_mount_points(mounts_path)
        if mount_point.startswith(prefix)
    ]
