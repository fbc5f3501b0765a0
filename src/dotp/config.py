from dataclasses import dataclass
from typing import Optional

DEFAULT_ACCOUNT = "demo-account"
DEFAULT_ISSUER = "demo-app"


@dataclass
class Config:
    # The name of the account for which the TOTP code is generated, e.g. foo@bar.com
    account: str = DEFAULT_ACCOUNT
    # The name of the service that issued the TOTP secret, e.g. Google
    issuer: str = DEFAULT_ISSUER
    # Name of the environment variable holding the secret
    secret_env: Optional[str] = None
    secret_file: Optional[str] = None
    secret_fd: Optional[int] = None
    secret_stdin: bool = False
    # Plaintext secret value
    secret_unsafe_value: Optional[str] = None
    color: bool = True
    verbose: bool = False
