import logging
import os
import sys
from typing import Mapping, Optional, TextIO

from .config import Config
from .exceptions import SecretSourceError
from .utils import random_secret

logger = logging.getLogger(__name__)


def load_secret(
    config: Config,
    environ: Optional[Mapping[str, str]] = None,
    stdin: Optional[TextIO] = None,
) -> str:
    """
    Returns the base32 secret text from the first configured source.

    Precedence: unsafe value argument, environment variable, file, file
    descriptor, stdin. With none configured a random secret is generated.
    Surrounding whitespace (such as a trailing newline) is stripped.
    """
    environ = os.environ if environ is None else environ

    if config.secret_unsafe_value:
        logger.info("Using secret passed as an argument")
        return config.secret_unsafe_value.strip()

    if config.secret_env:
        value = environ.get(config.secret_env)
        if value:
            logger.info("Using secret from environment variable %s", config.secret_env)
            return value.strip()

    if config.secret_file:
        try:
            with open(config.secret_file, encoding="utf-8") as f:
                value = f.read()
        except OSError as exc:
            raise SecretSourceError("Error reading secret file {}: {}".format(config.secret_file, exc)) from exc
        logger.info("Reading secret from file %s", config.secret_file)
        return value.strip()

    if config.secret_fd is not None and config.secret_fd > 0:
        logger.info("Reading secret from file descriptor %d", config.secret_fd)
        try:
            with os.fdopen(config.secret_fd, encoding="utf-8") as f:
                return f.read().strip()
        except OSError as exc:
            raise SecretSourceError("Error reading file descriptor {}: {}".format(config.secret_fd, exc)) from exc

    if config.secret_stdin:
        logger.info("Reading secret from stdin")
        return (stdin if stdin is not None else sys.stdin).read().strip()

    logger.warning(
        "WARNING: Using random secret.\n"
        "To use your secret, provide one of\n"
        "\t--secret-env\n\t--secret-file\n\t--secret-fd\n\t--secret-stdin\n\t--secret-unsafe-value\n"
        "Run dotp --help for more information."
    )
    return random_secret()
