#!/usr/bin/env python3
"""
totpgen CLI - Command-line authenticator.

Usage:
    totpgen code <secret> [--at TIMESTAMP] [--remaining]
    totpgen uri <otpauth-uri>
    totpgen watch <secret-or-uri> [--count N]
    totpgen setup [--label LABEL] [--issuer ISSUER]

Examples:
    # Current code for a Base32 secret
    totpgen code JBSWY3DPEHPK3PXP

    # Inspect a provisioning URI decoded from a QR code
    totpgen uri "otpauth://totp/Example:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=Example"

    # Live code with countdown (Ctrl-C to stop)
    totpgen watch JBSWY3DPEHPK3PXP

    # New secret for 2FA setup
    totpgen setup --label alice@example.com --issuer Example
"""

import argparse
import logging
import sys
import time
from typing import Callable, Optional, TextIO

from totpgen import __version__
from totpgen.config import TotpConfig
from totpgen.errors import OTPError
from totpgen.hotp import Algorithm
from totpgen.session import TotpSession
from totpgen.totp import TOTP

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Log to stderr; WARNING unless -v (INFO) or --debug (DEBUG)."""
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def config_from_args(args: argparse.Namespace) -> TotpConfig:
    """Build TotpConfig from optional --algorithm/--digits/--period/... flags."""
    return TotpConfig().with_overrides(
        algorithm=getattr(args, "algorithm", None),
        digits=getattr(args, "digits", None),
        period=getattr(args, "period", None),
        issuer=getattr(args, "issuer", None),
        label=getattr(args, "label", None),
    )


def report_error(e: OTPError) -> int:
    """Print a user-facing message for an OTPError."""
    logger.info("Rejected input: %s", e.kind.value)
    print(f"Error: {e.message}", file=sys.stderr)
    return 1


def cmd_code(args: argparse.Namespace) -> int:
    """Print the code for a Base32 secret."""
    try:
        totp = TOTP.from_base32(args.secret, config_from_args(args))
        print(totp.generate(args.at))
        if args.remaining:
            print(f"{totp.seconds_remaining(args.at)}s remaining")
        return 0
    except OTPError as e:
        return report_error(e)


def cmd_uri(args: argparse.Namespace) -> int:
    """Parse a provisioning URI and print its fields and current code."""
    try:
        totp = TOTP.from_uri(args.uri)
    except OTPError as e:
        return report_error(e)

    config = totp.config
    print("Issuer:   ", config.issuer)
    print("Label:    ", config.label)
    print("Algorithm:", config.algorithm.value)
    print("Digits:   ", config.digits)
    print("Period:   ", config.period)
    print()
    print("Current code:", totp.generate(), f"({totp.seconds_remaining()}s remaining)")
    return 0


def watch(
    session: TotpSession,
    count: Optional[int] = None,
    interval: float = 1.0,
    out: Optional[TextIO] = None,
    clock: Callable[[], float] = time.time,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Poll a session, printing each new code and the countdown.

    Args:
        session: Active session
        count: Number of polls (default: until interrupted)
        interval: Seconds between polls
        out: Output stream (default: stdout)
        clock: Time source
        sleep: Delay function

    Returns:
        Number of code changes printed
    """
    if out is None:
        out = sys.stdout
    changes = 0
    polls = 0
    while count is None or polls < count:
        tick = session.tick(clock())
        if tick.changed:
            changes += 1
            print(f"Code: {tick.code}", file=out)
        print(f"  {tick.seconds_remaining:>3}s remaining", file=out)
        polls += 1
        if count is None or polls < count:
            sleep(interval)
    return changes


def cmd_watch(args: argparse.Namespace) -> int:
    """Show a live code with countdown."""
    try:
        session = TotpSession.from_text(args.secret, config_from_args(args))
    except OTPError as e:
        return report_error(e)

    try:
        watch(session, count=args.count, interval=args.interval)
    except KeyboardInterrupt:
        print()
    finally:
        session.clear()
    return 0


def cmd_setup(args: argparse.Namespace) -> int:
    """Generate a secret and provisioning URI for a new authenticator entry."""
    try:
        totp = TOTP(TOTP.generate_secret(args.length), config_from_args(args))
    except OTPError as e:
        return report_error(e)

    print("TOTP Secret (Base32):", TOTP.secret_to_base32(totp.secret))
    print()
    print("QR Code URI:", totp.provisioning_uri())
    print()
    print("Add this secret to your authenticator app (Google Authenticator, Authy, etc.)")
    print()
    print("Current code:", totp.generate())
    return 0


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by commands that take a bare secret."""
    parser.add_argument(
        "--algorithm",
        choices=[a.value for a in Algorithm],
        type=str.upper,
        help="HMAC algorithm (default: SHA1)",
    )
    parser.add_argument("--digits", type=int, help="Code length, 6-8 (default: 6)")
    parser.add_argument("--period", type=int, help="Time step in seconds (default: 30)")


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="totpgen",
        description="totpgen - TOTP authenticator codes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"totpgen {__version__}"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    parser.add_argument("--debug", action="store_true", help="Log debug detail to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # code command
    code_parser = subparsers.add_parser("code", help="Print current code for a secret")
    code_parser.add_argument("secret", help="Base32 secret")
    code_parser.add_argument("--at", type=int, help="Unix timestamp (default: now)")
    code_parser.add_argument("--remaining", action="store_true", help="Also print seconds remaining")
    add_config_arguments(code_parser)

    # uri command
    uri_parser = subparsers.add_parser("uri", help="Inspect an otpauth:// URI")
    uri_parser.add_argument("uri", help="otpauth://totp/ URI")

    # watch command
    watch_parser = subparsers.add_parser("watch", help="Live code with countdown")
    watch_parser.add_argument("secret", help="Base32 secret or otpauth://totp/ URI")
    watch_parser.add_argument("--count", type=int, help="Stop after N polls")
    watch_parser.add_argument("--interval", type=float, default=1.0, help="Seconds between polls")
    add_config_arguments(watch_parser)

    # setup command
    setup_parser = subparsers.add_parser("setup", help="Generate a new secret")
    setup_parser.add_argument("--label", help="Account name")
    setup_parser.add_argument("--issuer", help="Service name")
    setup_parser.add_argument("--length", type=int, default=20, help="Secret length in bytes")
    add_config_arguments(setup_parser)

    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "code": cmd_code,
        "uri": cmd_uri,
        "watch": cmd_watch,
        "setup": cmd_setup,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
