import argparse
import logging
import os
import sys
from pathlib import Path

from bookstore.api.books import BooksApi
from bookstore.api.client import ApiClient, ApiError
from bookstore.app_shell.config import missing_env
from bookstore.rules.loader import load_rules, rules_path_from_env
from bookstore.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def get_rules(path: Path | None = None) -> Rules:
    rules_path = path or rules_path_from_env()
    try:
        return load_rules(rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)


def handle_check(rules: Rules, client: ApiClient | None = None) -> int:
    """Validate configuration and ping the backend. Returns the exit code."""
    missing = missing_env(rules)
    if missing:
        print(f"Missing required environment variables: {', '.join(missing)}")
        return 1

    client = client or ApiClient(rules.api.base_url, timeout=rules.api.timeout_seconds)
    try:
        latest = BooksApi(client).latest(limit=1)
    except ApiError as e:
        print(f"Backend at {rules.api.base_url} is not healthy: {e}")
        return 1
    finally:
        client.close()

    print(f"Rules OK. Backend at {rules.api.base_url} answered ({len(latest)} book(s)).")
    return 0


def handle_run(args: argparse.Namespace) -> None:
    # Flet is imported lazily so `check` works on headless hosts
    from bookstore.ui.main import run

    run(web=args.web, port=args.port)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bookstore frontend")
    parser.add_argument("--rules", type=Path, help="Path to rules.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Launch the app")
    run_parser.add_argument("--web", action="store_true", help="Serve the app to a browser")
    run_parser.add_argument("--port", type=int, default=8550, help="Port for --web")

    subparsers.add_parser("check", help="Validate rules and ping the backend")

    args = parser.parse_args(argv)

    if args.command == "run":
        if args.rules:
            os.environ["BOOKSTORE_RULES_PATH"] = str(args.rules)
        handle_run(args)
    elif args.command == "check":
        sys.exit(handle_check(get_rules(args.rules)))


if __name__ == "__main__":
    main()
