# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

from typing import NamedTuple

from mkjail.errors import ConfigurationError


class BindSpec(NamedTuple):
    # Absolute path on the host
    source: str
    # Relative to the jail root
    destination: str


class JailConfig(NamedTuple):
    root: str
    binds: tuple = ()
    umount: bool = False
    command: tuple = ()


def parse_bind(value):
    """
    Parse a SRC[:DEST] bind argument. DEST defaults to SRC.
    """
    source, sep, destination = value.partition(":")
    if not source or (sep and not destination):
        raise ConfigurationError(f"Malformed bind (expected SRC[:DEST]): {value}")
    if not sep:
        destination = source

    for path in (source, destination):
        if not path.startswith("/"):
            raise ConfigurationError(f"Bind paths must be absolute: {value}")

    return BindSpec(source, destination.lstrip("/"))


def make_config(root, binds=(), umount=False, command=()):
    """
    Validate the raw options and return a JailConfig.
    Raises ConfigurationError before anything touches the filesystem.
    """
    if not root:
        raise ConfigurationError("Please specify the jail root with --root")
    if not root.startswith("/"):
        raise ConfigurationError(f"Jail root must be an absolute path: {root}")

    root = root.rstrip("/")
    if not root:
        raise ConfigurationError("Jail root can not be the host root directory")

    return JailConfig(
        root=root,
        binds=tuple(parse_bind(bind) for bind in binds),
        umount=bool(umount),
        command=tuple(command),
    )
