import hashlib
import hmac
from typing import Optional

from .utils import decode_secret

DIGITS = 6


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    if i < 0:
        raise ValueError("input must be positive integer")
    return i.to_bytes(padding, "big")


def truncate(key: bytes, counter: int) -> str:
    """
    RFC 4226 HOTP value for ``counter`` under ``key``, as a 6-digit string.

    An empty key is valid input for HMAC and is not rejected.
    """
    hmac_hash = hmac.new(key, int_to_bytestring(counter), hashlib.sha1).digest()
    # Low nibble of the last byte picks which 4 of the 20 bytes to read
    offset = hmac_hash[-1] & 0xF
    code = int.from_bytes(hmac_hash[offset : offset + 4], "big") & 0x7FFFFFFF
    return "{:0{width}d}".format(code % 10**DIGITS, width=DIGITS)


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, s: str, name: Optional[str] = None, issuer: Optional[str] = None) -> None:
        """
        :param s: secret in base32 format
        :param name: account name
        :param issuer: issuer
        """
        self.digits = DIGITS
        self.digest = hashlib.sha1
        self.secret = s
        self.name = name or "Secret"
        self.issuer = issuer

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually the computed integer based on the Unix timestamp
        """
        return truncate(self.byte_secret(), input)

    def byte_secret(self) -> bytes:
        return decode_secret(self.secret)
