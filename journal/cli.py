"""Admin commands for the trade journal.

Usage:
    journal-cli create-user [--username NAME]
    journal-cli update-crypto-list [--url URL]
"""

import argparse
import getpass
import sys

from sqlmodel import Session

from journal.config import settings
from journal.database import engine, create_db_and_tables
from journal.errors import CryptoListError, RegistrationError
from journal.services.auth import get_totp_uri, register_user
from journal.services.crypto_list import update_crypto_list
from journal.utils.logging import setup_logging


def create_user(args: argparse.Namespace) -> int:
    create_db_and_tables()

    username = args.username or input("Username: ")
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match.", file=sys.stderr)
        return 1

    with Session(engine) as session:
        try:
            user = register_user(session, username, password)
        except RegistrationError as e:
            print(f"{e}.", file=sys.stderr)
            return 1
        print(f"Journal user '{user.username}' created.")
        print(f"TOTP URI: {get_totp_uri(user.totp_secret, user.username)}")
    print("Scan the URI with an authenticator app; every login needs its current code.")
    return 0


def refresh_crypto_list(args: argparse.Namespace) -> int:
    url = args.url or settings.crypto_list_url
    print(f"Fetching crypto list from {url} ...")
    try:
        count = update_crypto_list(url=url)
    except CryptoListError as e:
        print(f"Error updating crypto list: {e}", file=sys.stderr)
        return 1
    print(f"Saved {count} cryptocurrencies to {settings.crypto_list_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="journal-cli", description="Crypto trade journal admin")
    commands = parser.add_subparsers(dest="command", required=True)

    user_cmd = commands.add_parser("create-user", help="Create a journal user with TOTP login")
    user_cmd.add_argument("--username", help="Skip the username prompt")
    user_cmd.set_defaults(handler=create_user)

    list_cmd = commands.add_parser("update-crypto-list", help="Refresh the crypto catalogue file")
    list_cmd.add_argument("--url", help="Override the CoinGecko coin list URL")
    list_cmd.set_defaults(handler=refresh_crypto_list)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
