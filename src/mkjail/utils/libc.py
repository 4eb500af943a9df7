# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

"""
Thin ctypes wrappers around the few glibc calls the os module doesn't expose.
Each wrapper raises OSError with errno set when the call fails.
"""

import ctypes
import ctypes.util
import functools
import os

# http://man7.org/linux/man-pages/man2/mount.2.html
MS_RDONLY = 0x1
MS_REMOUNT = 0x20
MS_BIND = 0x1000

# http://man7.org/linux/man-pages/man2/prctl.2.html
PR_CAPBSET_READ = 23
PR_CAPBSET_DROP = 24


@functools.lru_cache(maxsize=None)
def get_libc():
    """
    Return a ctypes wrapper around glibc. Only wraps functions needed by mkjail.
    """
    libc = ctypes.CDLL(ctypes.util.find_library("c") or "libc.so.6", use_errno=True)

    libc.mount.restype = ctypes.c_int
    libc.mount.argtypes = [
        ctypes.c_char_p,
        ctypes.c_char_p,
        ctypes.c_char_p,
        ctypes.c_ulong,
        ctypes.c_void_p,
    ]

    # http://man7.org/linux/man-pages/man2/umount.2.html
    libc.umount2.restype = ctypes.c_int
    libc.umount2.argtypes = [ctypes.c_char_p, ctypes.c_int]

    libc.prctl.restype = ctypes.c_int
    libc.prctl.argtypes = [
        ctypes.c_int,
        ctypes.c_ulong,
        ctypes.c_ulong,
        ctypes.c_ulong,
        ctypes.c_ulong,
    ]

    return libc


def _encode(path):
    return None if path is None else os.fsencode(path)


def _raise_errno(filename=None):
    err = ctypes.get_errno()
    raise OSError(err, os.strerror(err), filename)


def mount(source, target, fstype, flags):
    if get_libc().mount(_encode(source), _encode(target), _encode(fstype), flags, None) != 0:
        _raise_errno(target)


def umount(target, flags=0):
    if get_libc().umount2(_encode(target), flags) != 0:
        _raise_errno(target)


def prctl(option, arg2):
    """
    Return the (non-negative) result of prctl(option, arg2, 0, 0, 0).
    """
    result = get_libc().prctl(option, arg2, 0, 0, 0)
    if result < 0:
        _raise_errno()
    return result
