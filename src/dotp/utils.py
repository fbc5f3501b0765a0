import base64
import binascii
from hmac import compare_digest
from secrets import token_bytes
from typing import Dict, Optional
from urllib.parse import quote, urlencode

from .exceptions import InvalidSecretEncoding, RandomSourceUnavailable

SECRET_BYTES = 10


def decode_secret(secret: str) -> bytes:
    """
    Decodes a base32 secret (RFC 4648 alphabet) into raw key bytes.

    Decoding is case-sensitive and padding, when present, must be complete.

    :param secret: base32 text
    :returns: raw secret bytes
    :raises InvalidSecretEncoding: on characters outside the alphabet or bad padding
    """
    try:
        return base64.b32decode(secret)
    # binascii.Error for the alphabet/padding, ValueError for non-ASCII str input
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecretEncoding("Error decoding secret: {}".format(exc)) from exc


def random_secret(length: int = SECRET_BYTES) -> str:
    """
    Returns a new base32 secret drawn from the OS entropy source.

    :param length: number of random bytes, 10 by default (16 base32 characters)
    :raises RandomSourceUnavailable: when no secure entropy is available
    """
    try:
        raw = token_bytes(length)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceUnavailable("Error generating secret: {}".format(exc)) from exc
    return base64.b32encode(raw).decode("ascii")


def build_uri(secret: str, name: str, issuer: Optional[str] = None) -> str:
    """
    Returns the provisioning URI for a TOTP secret.

    This can then be encoded in a QR Code and used to provision an
    authenticator app. Digits, period and algorithm are never emitted
    since dotp only uses the defaults (6 digits, 30 seconds, SHA1).

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the base32 secret
    :param name: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :returns: provisioning uri
    """
    # otpauth://totp/demo-app:alice%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=demo-app
    base_uri = "otpauth://totp/{0}?{1}"
    url_args: Dict[str, str] = {"secret": secret}

    label = quote(name, safe="")
    if issuer:
        label = quote(issuer, safe="") + ":" + label
        url_args["issuer"] = issuer

    return base_uri.format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length. No normalization is applied: "012345" and "12345" differ.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
