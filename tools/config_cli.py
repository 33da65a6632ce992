#!/usr/bin/env python3
"""
GameMode Configuration CLI
==========================

Inspect the configuration the daemon would load.

Usage:
    gamemode-config show                      # Print effective config as JSON
    gamemode-config check /usr/bin/steam      # Would this client be accepted?
    gamemode-config --config ./my.ini show    # Use a specific file instead of the search paths
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from gamemode.config import GameModeConfig


class ConfigCLI:
    """CLI interface for the GameMode config store"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.store = None

    def get_store(self) -> GameModeConfig:
        """Build and load the store on first use"""
        if self.store is None:
            paths = [self.config_path] if self.config_path else None
            self.store = GameModeConfig(paths)
            self.store.init()
        return self.store

    def close(self) -> None:
        if self.store is not None:
            self.store.destroy()
            self.store = None

    def cmd_show(self) -> int:
        """Print the effective configuration"""
        snapshot = self.get_store().snapshot()
        print(json.dumps(snapshot.as_dict(), indent=2))
        return 0

    def cmd_check(self, client: str) -> int:
        """Report whitelist/blacklist status for a client; 1 when it would be refused"""
        store = self.get_store()
        whitelisted = store.is_client_whitelisted(client)
        blacklisted = store.is_client_blacklisted(client)

        print(f"Client:      {client}")
        print(f"Whitelisted: {'yes' if whitelisted else 'no'}")
        print(f"Blacklisted: {'yes' if blacklisted else 'no'}")

        if whitelisted and not blacklisted:
            print("✓ client accepted")
            return 0
        print("✗ client refused")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="GameMode Configuration CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", help="Config file to load instead of the default search paths")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show config loading log lines")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("show", help="Print the effective configuration as JSON")
    check_parser = subparsers.add_parser("check", help="Check a client against whitelist/blacklist")
    check_parser.add_argument("client", help="Client executable path or name")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 2

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cli = ConfigCLI(args.config)
    try:
        if args.command == "show":
            return cli.cmd_show()
        return cli.cmd_check(args.client)
    finally:
        cli.close()


if __name__ == "__main__":
    sys.exit(main())
