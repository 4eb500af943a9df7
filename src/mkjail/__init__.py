# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

"""Build a minimal chroot jail from read-only bind mounts of the host system, \
then run a command inside it."""

__version__ = "1.0.0"
__author__ = "Jip-Hop"
__copyright__ = "Copyright © 2024, Jip-Hop and the Jailmakers"
__license__ = "LGPL-3.0-only"
__disclaimer__ = """USE THIS SCRIPT AT YOUR OWN RISK!
IT COMES WITHOUT WARRANTY."""
