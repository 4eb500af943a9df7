# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import os

import pytest

from mkjail.actions.umount import umount_jail
from mkjail.errors import ExternalOperationError, FilesystemError
from mkjail.utils.mounts import clean_field, get_mount_points


def write_mounts(path, root):
    path.write_text(
        "proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0\n"
        f"/dev/sda1 {root}/usr/bin ext4 ro,relatime 0 0\n"
        f"/dev/sda1 {root}2/usr/bin ext4 ro,relatime 0 0\n"
        f"/dev/sdb1 {root}/my\\040data ext4 rw,relatime 0 0\n"
        f"/dev/sda1 {root} ext4 rw,relatime 0 0\n"
        f"/dev/sda1 {root}/usr/lib ext4 ro,relatime 0 0\n"
    )
    return str(path)


def test_clean_field():
    assert clean_field("/mnt/my\\040pool\\011tab") == "/mnt/my pool\ttab"


def test_get_mount_points(tmp_path):
    mounts = write_mounts(tmp_path / "mounts", "/jail")
    assert get_mount_points(mounts)[:2] == ["/proc", "/jail/usr/bin"]


def test_umount_in_table_order(tmp_path, system):
    root = tmp_path / "jail"
    root.mkdir()
    mounts = write_mounts(tmp_path / "mounts", root)

    unmounted = umount_jail(str(root), system, mounts)

    expected = [f"{root}/usr/bin", f"{root}/my data", f"{root}/usr/lib"]
    assert unmounted == expected
    assert system.calls == [("unmount", path) for path in expected]


def test_umount_missing_root(tmp_path, system):
    with pytest.raises(FilesystemError):
        umount_jail(str(tmp_path / "missing"), system, str(tmp_path / "mounts"))
    assert system.calls == []


def test_umount_failure_stops(tmp_path, system, monkeypatch):
    root = tmp_path / "jail"
    root.mkdir()
    mounts = write_mounts(tmp_path / "mounts", root)

    def unmount(target):
        system.calls.append(("unmount", target))
        raise ExternalOperationError("umount", target, "Device or resource busy")

    monkeypatch.setattr(system, "unmount", unmount)

    with pytest.raises(ExternalOperationError):
        umount_jail(str(root), system, mounts)
    assert system.calls == [("unmount", f"{root}/usr/bin")]


def test_umount_with_undecodable_mount_point(tmp_path, system):
    root = tmp_path / "jail"
    root.mkdir()
    mounts = tmp_path / "mounts"
    mounts.write_bytes(
        b"/dev/sdc1 /media/caf\xe9 vfat rw 0 0\n"
        + f"/dev/sda1 {root}/usr/bin ext4 ro 0 0\n".encode()
        + f"/dev/sdc1 {root}/caf".encode()
        + b"\xe9 vfat rw 0 0\n"
    )

    unmounted = umount_jail(str(root), system, str(mounts))

    assert unmounted == [f"{root}/usr/bin", os.fsdecode(f"{root}/caf".encode() + b"\xe9")]
    assert os.fsencode(unmounted[1]).endswith(b"/caf\xe9")


def test_unreadable_mount_table(tmp_path, system):
    root = tmp_path / "jail"
    root.mkdir()
    with pytest.raises(FilesystemError) as excinfo:
        umount_jail(str(root), system, str(tmp_path / "no-mounts"))
    assert excinfo.value.message.startswith("read mount table failed: ")
