# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only

from mkjail.utils import libc


class CapabilityController:
    """
    Access to the capability bounding set of the current process.
    """

    def probe_exists(self, index):
        """
        Return False if the running kernel doesn't know capability index.
        """
        try:
            libc.prctl(libc.PR_CAPBSET_READ, index)
        except OSError:
            # EINVAL past the last capability
            return False
        return True

    def drop(self, index):
        libc.prctl(libc.PR_CAPBSET_DROP, index)
