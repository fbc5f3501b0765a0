class DotpError(Exception):
    """
    Base class for errors raised by dotp.
    """


class InvalidSecretEncoding(DotpError, ValueError):
    """
    The secret is not valid base32 (bad character or bad padding).
    """


class RandomSourceUnavailable(DotpError, RuntimeError):
    """
    The operating system could not supply cryptographically secure random bytes.
    """


class SecretSourceError(DotpError):
    """
    The secret could not be read from the requested source.
    """
