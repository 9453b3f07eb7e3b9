"""
Error taxonomy for the phone FTP client.

Usage, validation and connection errors are fatal and end the process with
a non-zero status. Failures during a transfer are reported through
``TransferResult`` instead of being raised.
"""


class PhoneFtpError(Exception):
    """Base class for fatal client errors."""


class UsageError(PhoneFtpError):
    """Missing or unknown command, or a missing required argument."""


class ValidationError(PhoneFtpError):
    """A local or remote path failed the pre-flight checks."""


class ConnectionFailedError(PhoneFtpError):
    """Connecting or authenticating to the FTP server failed."""
