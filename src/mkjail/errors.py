# SPDX-FileCopyrightText: © 2024 Jip-Hop and the Jailmakers <https://github.com/Jip-Hop/jailmaker>
#
# SPDX-License-Identifier: LGPL-3.0-only


class JailError(Exception):
    """
    Base class for every fatal condition. The message is a single line
    suitable for printing to stderr as is.
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class ConfigurationError(JailError):
    pass


class _ActionError(JailError):
    def __init__(self, action, target, reason):
        self.action = action
        self.target = target
        self.reason = reason
        super().__init__(f"{action} failed: {target}: {reason}")

    @classmethod
    def from_oserror(cls, action, target, error):
        return cls(action, target, error.strerror or str(error))


class FilesystemError(_ActionError):
    pass


class ExternalOperationError(_ActionError):
    pass


class PrivilegedSyscallError(_ActionError):
    pass
