"""Projects Dashboard CLI entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from dashboard import __version__
from dashboard.auth.passwords import hash_password
from dashboard.config import get_settings
from dashboard.database import close_db, get_database, init_db, sanitize_mongodb_url
from dashboard.database.repositories import UserRepository
from dashboard.exceptions import DashboardError
from dashboard.observability import configure_logging
from dashboard.services import setup_service

logger = logging.getLogger(__name__)


def _mask(value: str) -> str:
    return "✓ Set" if value else "✗ Not set"


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server under uvicorn."""
    import uvicorn

    settings = get_settings()
    reload = settings.is_development if args.reload is None else args.reload

    uvicorn.run(
        "dashboard.api.server:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== Projects Dashboard Configuration ===\n")
        print(f"Environment: {settings.environment}")
        print(f"Debug: {settings.debug}")
        print(f"Log Level: {settings.log_level}\n")

        print("Server:")
        print(f"  Host: {settings.host}")
        print(f"  Port: {settings.port}\n")

        print("MongoDB:")
        print(f"  URL: {sanitize_mongodb_url(settings.mongodb.url)}")
        print(f"  Database: {settings.database_name}")
        print(f"  Server Selection Timeout: {settings.mongodb.server_selection_timeout_ms} ms\n")

        print("CORS:")
        print(f"  Allowed Origins: {', '.join(settings.cors.origins)}")
        print(f"  Allow Credentials: {settings.cors.allow_credentials}\n")

        print("Password Hashing (Argon2id):")
        print(f"  Time Cost: {settings.passwords.time_cost}")
        print(f"  Memory Cost: {settings.passwords.memory_cost} KiB")
        print(f"  Parallelism: {settings.passwords.parallelism}\n")

        print("Observability:")
        print(f"  Logfire: {_mask(settings.logfire_token)}\n")

        return 0

    except ValidationError as e:
        print(f"\nConfiguration error:\n{e}\n")
        return 1


async def _create_admin(args: argparse.Namespace) -> None:
    await init_db(get_settings())
    try:
        users = UserRepository(get_database())
        admin = await setup_service.create_first_admin(
            users,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        print(f"\n✓ Created admin {admin.email} (id {admin.id})\n")
    finally:
        await close_db()


def cmd_create_admin(args: argparse.Namespace) -> int:
    """Create the first admin user of an empty database."""
    try:
        asyncio.run(_create_admin(args))
        return 0
    except DashboardError as e:
        print(f"\n❌ {e.message}\n")
        return 1
    except Exception as e:
        logger.error(f"Failed to create admin: {e}", exc_info=True)
        print(f"\n❌ Failed to create admin: {e}\n")
        return 1


def cmd_hash_password(args: argparse.Namespace) -> int:
    """Print an Argon2id hash for a password."""
    try:
        print(hash_password(args.password))
        return 0
    except ValueError as e:
        print(f"\n❌ {e}\n")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Projects Dashboard: REST API for projects, tasks and comments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Projects Dashboard {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_serve = subparsers.add_parser(
        "serve",
        help="Run the API server",
    )
    parser_serve.add_argument("--host", help="Bind address (default from settings)")
    parser_serve.add_argument("--port", type=int, help="Port (default from settings)")
    parser_serve.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Auto-reload on code changes (default: on in development)",
    )
    parser_serve.set_defaults(func=cmd_serve)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_admin = subparsers.add_parser(
        "create-admin",
        help="Create the first admin user (fails when users exist)",
    )
    parser_admin.add_argument("--email", required=True, help="Admin email")
    parser_admin.add_argument("--password", required=True, help="Admin password")
    parser_admin.add_argument("--first-name", help="First name (default: Admin)")
    parser_admin.add_argument("--last-name", help="Last name (default: User)")
    parser_admin.set_defaults(func=cmd_create_admin)

    parser_hash = subparsers.add_parser(
        "hash-password",
        help="Print an Argon2id hash for a password",
    )
    parser_hash.add_argument("password", help="Password to hash")
    parser_hash.set_defaults(func=cmd_hash_password)

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
