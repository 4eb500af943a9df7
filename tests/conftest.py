# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import errno
import os
from pathlib import Path

import pytest

from mkjail.data import DEFAULT_TABLES
from mkjail.errors import ExternalOperationError


class RecordingSystem:
    """
    Stands in for SystemOperations. Records every call and leaves just enough
    behind in the (temporary) filesystem for the idempotency checks to see it.
    """

    def __init__(self):
        self.calls = []

    def bind_mount(self, source, target):
        self.calls.append(("bind_mount", source, target))
        if not os.path.isdir(source):
            raise ExternalOperationError("bind mount", f"{source} -> {target}", "No such file or directory")
        # Make the mounted content visible at the target
        for name in os.listdir(source):
            Path(target, name).touch()

    def remount_read_only(self, target):
        self.calls.append(("remount_read_only", target))

    def unmount(self, target):
        self.calls.append(("unmount", target))

    def copy_file(self, source, target):
        self.calls.append(("copy_file", source, target))
        Path(target).write_bytes(Path(source).read_bytes())

    def make_device_node(self, path, major, minor, mode):
        self.calls.append(("make_device_node", path, major, minor, mode))
        Path(path).touch()

    def create_marker_file(self, path):
        self.calls.append(("create_marker_file", path))
        Path(path).touch()

    def names(self):
        return [call[0] for call in self.calls]


class FakeCapabilities:
    def __init__(self, last_cap=40, fail_on=()):
        self.last_cap = last_cap
        self.fail_on = set(fail_on)
        self.dropped = []
        self.probed = []

    def probe_exists(self, index):
        self.probed.append(index)
        return index <= self.last_cap

    def drop(self, index):
        if index in self.fail_on:
            raise OSError(errno.EPERM, os.strerror(errno.EPERM))
        self.dropped.append(index)


@pytest.fixture
def system():
    return RecordingSystem()


@pytest.fixture
def host(tmp_path):
    """
    A small fake host filesystem with a merged /usr and a few real directories.
    """
    host = tmp_path / "host"
    (host / "usr/bin").mkdir(parents=True)
    (host / "usr/bin/true").write_text("#!/bin/sh\n")
    (host / "usr/lib").mkdir()
    (host / "usr/lib/libc.so.6").write_text("")
    (host / "usr/share").mkdir()
    (host / "usr/share/doc").mkdir()
    (host / "bin").symlink_to("usr/bin")
    (host / "lib").symlink_to("usr/lib")
    (host / "etc/ssl/certs").mkdir(parents=True)
    (host / "etc/ssl/certs/ca.pem").write_text("cert")
    (host / "etc/group").write_text("root:x:0:\n")
    (host / "etc/passwd").write_text("root:x:0:0:root:/root:/bin/sh\n")
    (host / "etc/resolv.conf").write_text("nameserver 127.0.0.1\n")
    return host


@pytest.fixture
def tables(host):
    return DEFAULT_TABLES.for_host(str(host))


@pytest.fixture
def root(tmp_path):
    return str(tmp_path / "jail")
