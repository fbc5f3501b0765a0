import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from . import __version__, render
from .config import DEFAULT_ACCOUNT, DEFAULT_ISSUER, Config
from .exceptions import DotpError
from .source import load_secret
from .totp import derive_code, validate
from .utils import build_uri, decode_secret, random_secret
from .window import remaining_seconds

logger = logging.getLogger(__name__)

ACTIONS = ("get", "new", "uri", "validate", "watch", "version", "help")

EXAMPLES = """\
examples:
  Using a file
    dotp new > ./mysecret
    dotp uri --account foo@bar --issuer myapp --secret-file ./mysecret
    dotp validate 112233 --secret-file ./mysecret

  Using an environment variable
    export TOTP_SECRET=mysecret
    dotp uri --account foo@bar --issuer myapp --secret-env TOTP_SECRET
    dotp validate 112233 --secret-env TOTP_SECRET

  Using standard input
    echo mysecret | dotp uri --account foo@bar --issuer myapp --secret-stdin
    echo mysecret | dotp validate 112233 --secret-stdin

  Integration with pass utility
    dotp new | pass insert -e 'TOTP/mykey'
    pass show 'TOTP/mykey' | dotp get --secret-stdin

  Integration with qrencode
    pass show 'TOTP/mykey' | dotp uri --account foo@bar --issuer myapp --secret-stdin | qrencode -t ANSI
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotp",
        description="Simple TOTP (Time-based One-time Password) utility",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "action",
        nargs="?",
        default="watch",
        choices=ACTIONS,
        help="get: print the current code; new: print a new secret; "
        "uri: print a provisioning URI; validate: check CODE; watch: live display (default)",
    )
    parser.add_argument("code", nargs="?", help="code to check with the validate action")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("--account", default=DEFAULT_ACCOUNT, help="Account name, e.g. foo@bar.com")
    parser.add_argument("--issuer", default=DEFAULT_ISSUER, help="Issuer, e.g. myapp")
    parser.add_argument("--secret-env", metavar="ENV_NAME", help="Name of the environment variable holding the secret")
    parser.add_argument("--secret-file", metavar="PATH", help="Path to the file containing the secret")
    parser.add_argument("--secret-fd", metavar="FD", type=int, help="File descriptor to read the secret from")
    parser.add_argument("--secret-stdin", action="store_true", help="Read secret from standard input")
    parser.add_argument("--secret-unsafe-value", metavar="SECRET", help="Use the secret provided as an argument")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Report where the secret was read from")
    return parser


def make_config(args: argparse.Namespace) -> Config:
    return Config(
        account=args.account,
        issuer=args.issuer,
        secret_env=args.secret_env,
        secret_file=args.secret_file,
        secret_fd=args.secret_fd,
        secret_stdin=args.secret_stdin,
        secret_unsafe_value=args.secret_unsafe_value,
        color=args.color,
        verbose=args.verbose,
    )


def choose_palette(config: Config) -> render.Palette:
    if not config.color or os.environ.get("NO_COLOR") or not sys.stdout.isatty():
        return render.PLAIN
    return render.ANSI


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = make_config(args)

    logging.basicConfig(
        level=logging.INFO if config.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    if args.action == "help":
        parser.print_help()
        return 0
    if args.action == "version":
        print(__version__, end="")
        return 0

    try:
        return dispatch(args.action, args.code, config)
    except DotpError as exc:
        logger.error("%s", exc)
        return 1


def dispatch(action: str, code: Optional[str], config: Config) -> int:
    if action == "new":
        print(random_secret(), end="")
        return 0

    if action == "validate" and code is None:
        print("Usage: dotp validate <CODE> [OPTIONS]", file=sys.stderr)
        return 1

    secret = load_secret(config)
    secret_bytes = decode_secret(secret)

    if action == "get":
        print(derive_code(secret_bytes, time.time()), end="")
        return 0

    if action == "uri":
        print(build_uri(secret, config.account, config.issuer), end="")
        return 0

    if action == "validate":
        now = time.time()
        if validate(secret_bytes, code, now):
            print("Valid code (expires in {} seconds)".format(remaining_seconds(now)), file=sys.stderr)
            return 0
        print("Invalid code", file=sys.stderr)
        return 1

    palette = choose_palette(config)
    print("{}Press Ctrl+C to exit{}".format(palette.neutral, palette.reset), file=sys.stderr)
    print("Your TOTP code is:", file=sys.stderr)
    try:
        render.run(secret_bytes, palette=palette)
    except KeyboardInterrupt:
        return 130
    return 0
