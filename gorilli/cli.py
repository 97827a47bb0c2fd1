import argparse
import json
import sys

from gorilli.actions import GORILLI_ACTIONS
from gorilli.tools import execute_tool
from gorilli.utils import get_logger
from gorilli.wallet_provider import create_wallet_provider

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gorilli", description="Gorilli agent actions CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("list", help="List available actions")

    run_parser = subparsers.add_parser("run", help="Run an action")
    run_parser.add_argument("name", help="Action name, e.g. vault_interaction")
    run_parser.add_argument("--args", default="{}", help="Action arguments as a JSON object")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        for action in GORILLI_ACTIONS:
            summary = action.description.strip().splitlines()[0]
            print(f"{action.name}: {summary}")
        return 0

    if args.command == "run":
        try:
            action_args = json.loads(args.args)
        except json.JSONDecodeError as e:
            print(f"Invalid --args JSON: {e}", file=sys.stderr)
            return 2
        if not isinstance(action_args, dict):
            print("--args must be a JSON object", file=sys.stderr)
            return 2

        wallet = None
        if any(action.name == args.name and action.needs_wallet for action in GORILLI_ACTIONS):
            try:
                wallet = create_wallet_provider()
            except (EnvironmentError, ValueError) as e:
                logger.error(f"Failed to initialize wallet: {e}")
                print(f"Wallet unavailable: {e}", file=sys.stderr)
                return 1

        print(execute_tool(args.name, action_args, wallet))
        return 0

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
