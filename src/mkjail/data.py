# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os
from typing import NamedTuple

from mkjail import __disclaimer__
from mkjail.utils.console import BOLD, NORMAL, YELLOW

DISCLAIMER = f"""{YELLOW}{BOLD}{__disclaimer__}{NORMAL}"""

# Name of the file dropped into an empty custom bind source
BIND_MARKER_NAME = ".mkjail"


class DeviceNode(NamedTuple):
    path: str
    major: int
    minor: int
    mode: int


class JailTables(NamedTuple):
    """
    Paths (relative to the jail root) that make up the jail skeleton.
    Never mutated, a filtered copy is made with for_host() instead.
    """

    new_dirs: tuple
    temp_dirs: tuple
    bind_dirs: tuple
    copy_files: tuple
    symlinks: tuple
    device_nodes: tuple
    keep_caps: frozenset

    def for_host(self, host_root="/"):
        """
        Return a copy with bind_dirs limited to the ones present on the host.
        """
        return self._replace(
            bind_dirs=tuple(
                path
                for path in self.bind_dirs
                if os.path.lexists(os.path.join(host_root, path))
            )
        )


DEFAULT_TABLES = JailTables(
    new_dirs=("etc", "run", "usr", "var/log"),
    temp_dirs=("tmp", "run/lock", "var/tmp"),
    bind_dirs=(
        "bin",
        "etc/alternatives",
        "etc/ssl/certs",
        "lib",
        "lib64",
        "sbin",
        "usr/bin",
        "usr/include",
        "usr/lib",
        "usr/lib64",
        "usr/libexec",
        "usr/sbin",
        "usr/share",
        "usr/src",
    ),
    copy_files=("etc/group", "etc/passwd", "etc/resolv.conf"),
    symlinks=(("var/lock", "../run/lock"),),
    device_nodes=(
        DeviceNode("dev/null", 1, 3, 0o666),
        DeviceNode("dev/zero", 1, 5, 0o666),
        DeviceNode("dev/random", 1, 9, 0o444),
        DeviceNode("dev/urandom", 1, 9, 0o444),
    ),
    keep_caps=frozenset(),
)
