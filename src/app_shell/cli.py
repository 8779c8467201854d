import argparse
import logging
import sys
from pathlib import Path

from src.api.deps import Settings
from src.app_shell.config import configure_logging, server_address
from src.rules.loader import load_rules, load_rules_or_default

logger = logging.getLogger("cli")


def handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from src.api.main import create_app

    settings = Settings()
    rules_path = Path(args.rules) if args.rules else settings.rules_path
    try:
        rules = load_rules_or_default(rules_path)
    except (ValueError, OSError) as e:
        logger.error(f"Rules load failed: {e}")
        sys.exit(1)

    host, port = server_address(settings, rules)
    host = args.host or host
    port = args.port or port
    settings.host_override = host
    settings.port_override = port

    app = create_app(rules=rules, settings=settings)
    uvicorn.run(app, host=host, port=port, log_config=None)


def handle_check_rules(args: argparse.Namespace) -> None:
    rules_path = Path(args.rules) if args.rules else Settings().rules_path
    try:
        rules = load_rules(rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    print(f"Rules OK: {rules_path}")
    print(f"Seed tasks: {len(rules.seed)}")
    print(f"Server: {rules.server.host}:{rules.server.port}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Task List CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the web server")
    serve_parser.add_argument("--host", help="Bind host (overrides rules.yaml)")
    serve_parser.add_argument("--port", type=int, help="Bind port (overrides rules.yaml)")
    serve_parser.add_argument("--rules", help="Path to rules.yaml")

    # check-rules
    check_parser = subparsers.add_parser("check-rules", help="Validate the rules file")
    check_parser.add_argument("--rules", help="Path to rules.yaml")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "serve":
        handle_serve(args)
    elif args.command == "check-rules":
        handle_check_rules(args)


if __name__ == "__main__":
    main()
