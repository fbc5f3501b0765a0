__version__ = "1.0.0"

from .exceptions import DotpError as DotpError
from .exceptions import InvalidSecretEncoding as InvalidSecretEncoding
from .exceptions import RandomSourceUnavailable as RandomSourceUnavailable
from .otp import OTP as OTP
from .render import run as run
from .totp import TOTP as TOTP
from .totp import derive_code as derive_code
from .totp import validate as validate
from .utils import build_uri as build_uri
from .utils import decode_secret as decode_secret
from .utils import random_secret as random_secret
from .window import progress as progress
from .window import remaining_seconds as remaining_seconds
