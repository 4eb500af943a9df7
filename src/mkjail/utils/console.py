# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

import sys

# Only set a color if we have an interactive tty
if sys.stdout.isatty():
    BOLD = "\033[1m"
    YELLOW = "\033[93m"
    NORMAL = "\033[0m"
else:
    BOLD = YELLOW = NORMAL = ""

# Toggled by --verbose
VERBOSE = False


def set_verbose(enabled):
    global VERBOSE
    VERBOSE = bool(enabled)


def eprint(*args, **kwargs):
    """
    Print to stderr.
    """
    print(*args, file=sys.stderr, **kwargs)


def fail(*args, **kwargs):
    """
    Print to stderr and exit.
    """
    eprint(*args, **kwargs)
    sys.exit(1)


def warn(message):
    """
    Print a highlighted, non-fatal warning to stderr.
    """
    eprint(f"{YELLOW}{BOLD}WARNING:{NORMAL} {message}")


def verbose(*args, **kwargs):
    """
    Print to stderr, but only when running with --verbose.
    """
    if VERBOSE:
        eprint(*args, **kwargs)
