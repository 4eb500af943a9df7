# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import itertools
import os

from mkjail.errors import PrivilegedSyscallError
from mkjail.utils.console import verbose, warn


def drop_capabilities(controller, keep_caps=frozenset()):
    """
    Drop every capability the kernel knows about, except keep_caps.
    Best effort: a failed drop is reported but doesn't stop anything.
    """
    dropped = []
    for index in itertools.count():
        if index in keep_caps:
            continue
        if not controller.probe_exists(index):
            break
        try:
            controller.drop(index)
        except OSError as e:
            warn(f"Failed to drop capability {index}: {e.strerror or e}")
            continue
        dropped.append(index)

    verbose(f"Dropped {len(dropped)} capabilities")
    return dropped


def enter_jail(config, tables, controller):
    """
    Run config.command inside the jail, replacing the current process.
    Without a command there is nothing to run and we just report back.
    """
    if not config.command:
        print(f"Jail ready at {config.root}.")
        return 0

    try:
        os.chroot(config.root)
    except OSError as e:
        raise PrivilegedSyscallError.from_oserror("chroot", config.root, e)

    try:
        os.chdir("/")
    except OSError as e:
        raise PrivilegedSyscallError.from_oserror("chdir", "/", e)

    drop_capabilities(controller, tables.keep_caps)

    command = list(config.command)
    try:
        os.execvp(command[0], command)
    except OSError as e:
        raise PrivilegedSyscallError.from_oserror("exec", command[0], e)

    # execvp never returns on success
    raise PrivilegedSyscallError("exec", command[0], "returned without replacing the process")
