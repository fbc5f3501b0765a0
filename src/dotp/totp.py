import datetime
import time
from typing import Optional

from . import utils
from .otp import OTP, truncate
from .window import TIMESTEP_SECONDS, Instant, unix_seconds


def timecode(for_time: Instant) -> int:
    """
    The TOTP counter for an instant: floor(unix seconds / 30).
    """
    return unix_seconds(for_time) // TIMESTEP_SECONDS


def derive_code(secret: bytes, for_time: Instant) -> str:
    """
    Computes the 6-digit code for raw secret bytes at an exact instant.

    :param secret: decoded secret bytes
    :param for_time: Unix seconds or a datetime
    :returns: zero-padded 6-digit code
    """
    return truncate(secret, timecode(for_time))


def validate(secret: bytes, otp: str, for_time: Instant) -> bool:
    """
    True only when ``otp`` is exactly the code for the step containing ``for_time``.

    Adjacent steps are not accepted.
    """
    return utils.strings_equal(str(otp), derive_code(secret, for_time))


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(self, s: str, name: Optional[str] = None, issuer: Optional[str] = None) -> None:
        """
        :param s: secret in base32 format
        :param name: account name
        :param issuer: issuer
        """
        self.interval = TIMESTEP_SECONDS
        super().__init__(s=s, name=name, issuer=issuer)

    def at(self, for_time: Instant) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(datetime.datetime.now())

    def verify(self, otp: str, for_time: Optional[Instant] = None) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()
        return validate(self.byte_secret(), otp, for_time)

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param name: name of the user account
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        return utils.build_uri(
            self.secret,
            name=name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
        )

    def timecode(self, for_time: Instant) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).
        """
        return timecode(for_time)
