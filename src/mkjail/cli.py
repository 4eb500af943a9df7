# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import argparse
import os
import sys

from mkjail import __doc__ as DESCRIPTION
from mkjail import __version__
from mkjail.actions.build import build_jail
from mkjail.actions.enter import enter_jail
from mkjail.actions.umount import umount_jail
from mkjail.config import make_config
from mkjail.data import DEFAULT_TABLES, DISCLAIMER
from mkjail.errors import JailError
from mkjail.paths import ROOT_ENV_NAME, SHORTNAME, get_config_path, get_settings
from mkjail.utils.capabilities import CapabilityController
from mkjail.utils.console import fail, set_verbose
from mkjail.utils.system import SystemOperations


def main(argv=None):
    parser = JailArgumentParser(
        prog=SHORTNAME,
        description=DESCRIPTION,
        allow_abbrev=False,
        epilog=DISCLAIMER,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--root",
        metavar="PATH",
        help=(
            "absolute path of the jail root; when omitted it is taken from "
            f"${ROOT_ENV_NAME}, then from the root= line of {get_config_path()}"
        ),
    )
    parser.add_argument(
        "--bind",
        metavar="SRC[:DEST]",
        action="append",
        default=[],
        help="bind mount host directory SRC at DEST inside the jail (repeatable)",
    )
    parser.add_argument(
        "--umount",  #
        help="unmount everything mounted below the jail root",
        action="store_true",
    )
    parser.add_argument(
        "-v",  #
        "--verbose",
        help="print each step while building the jail",
        action="store_true",
    )
    parser.add_argument(
        "cmd",
        nargs=argparse.REMAINDER,
        help="command to run inside the jail (build only if omitted)",
    )

    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    # Ignore the "--" separating our options from the command
    cmd = split_at_string(args.cmd, "--")[1] if args.cmd[:1] == ["--"] else args.cmd

    try:
        settings = get_settings()
        config = make_config(
            args.root or settings.root,
            binds=settings.binds + args.bind,
            umount=args.umount,
            command=cmd,
        )
    except JailError as e:
        fail(e.message)

    if os.getuid() != 0:
        fail("Run this script as root...")

    system = SystemOperations()

    try:
        if config.umount:
            umount_jail(config.root, system)
            return 0

        tables = DEFAULT_TABLES.for_host()
        build_jail(config, tables, system)
        return enter_jail(config, tables, CapabilityController())
    except JailError as e:
        fail(e.message)


class JailArgumentParser(argparse.ArgumentParser):
    """
    Exit with status 1 (instead of the argparse default 2) on parse errors.
    """

    def error(self, message):
        self.print_usage(sys.stderr)
        fail(f"{self.prog}: error: {message}")


def split_at_string(lst, string):
    try:
        index = lst.index(string)
        return lst[:index], lst[index + 1 :]
    except ValueError:
        return lst, []
