"""CLI interface for Waitroom."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from waitroom.api.app import create_app
from waitroom.core.config import Config, load_config
from waitroom.core.errors import ConfigurationFatalError, StoreUnavailableError
from waitroom.core.logging import setup_logging
from waitroom.queue.manager import UserQueueManager
from waitroom.queue.tokens import TokenGenerator
from waitroom.runtime.scheduling import AdmissionScheduler
from waitroom.stores import create_store

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


def resolve_config(path: Path | None) -> Config:
    """Load the given config file, or config.yaml if present, or defaults.

    Raises:
        FileNotFoundError: If an explicitly given file does not exist.
    """
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return Config()


def build_manager(config: Config) -> UserQueueManager:
    """Create a queue manager backed by the configured store."""
    store = create_store(config.store)
    return UserQueueManager(store, TokenGenerator(config.token.algorithm))


async def run_api_server(args: argparse.Namespace, config: Config) -> None:
    """Serve the API with the admission scheduler attached."""
    app = create_app(config)

    uvicorn_config = uvicorn.Config(
        app,
        host=args.host or config.api.host,
        port=args.port or config.api.port,
        log_level="debug" if args.verbose else "info",
    )
    server = uvicorn.Server(uvicorn_config)
    await server.serve()


async def run_admit(args: argparse.Namespace, config: Config) -> None:
    """Admit one batch from a single queue."""
    manager = build_manager(config)
    try:
        admitted = await manager.admit_batch(args.queue, args.count)
        logger.info(f"Tried {args.count} and allowed {admitted} members of {args.queue} queue")
    finally:
        await manager.store.close()


async def run_tick(config: Config) -> None:
    """Run a single scheduler pass over every queue, even if scheduling is disabled."""
    manager = build_manager(config)
    scheduler = AdmissionScheduler(manager, config.scheduler)
    try:
        results = await scheduler.run_tick()
        logger.info(f"Tick complete: {sum(results.values())} users admitted across {len(results)} queue(s)")
    finally:
        await manager.store.close()


def _common_options(suppress_defaults: bool) -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand.

    The subcommand copies suppress their defaults so they never overwrite a
    value given before the subcommand.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-c",
        "--config",
        type=Path,
        default=argparse.SUPPRESS if suppress_defaults else None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_defaults else False,
        help="Enable verbose (DEBUG) logging",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Waitroom - virtual waiting room",
        parents=[_common_options(suppress_defaults=False)],
    )
    common = _common_options(suppress_defaults=True)

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Run the HTTP API and admission scheduler"
    )
    serve_parser.add_argument("--host", type=str, help="Bind address (default: from config)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default: from config)")

    admit_parser = subparsers.add_parser(
        "admit", parents=[common], help="Admit one batch of users from a queue"
    )
    admit_parser.add_argument("--queue", type=str, default="default", help="Queue name (default: default)")
    admit_parser.add_argument("--count", type=int, required=True, help="Maximum number of users to admit")

    subparsers.add_parser("tick", parents=[common], help="Run one admission pass over all queues")

    return parser


async def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    load_dotenv()

    try:
        config = resolve_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else config.logging.level,
        directory=config.logging.directory,
        max_size_mb=config.logging.max_size_mb,
        backup_count=config.logging.backup_count,
    )

    try:
        if args.command == "serve":
            await run_api_server(args, config)
        elif args.command == "admit":
            await run_admit(args, config)
        elif args.command == "tick":
            await run_tick(config)
    except ConfigurationFatalError as e:
        logger.error(f"Fatal configuration error: {e}")
        return 1
    except StoreUnavailableError as e:
        logger.error(f"Store unavailable: {e}")
        return 1

    return 0


def run() -> None:
    """Entry point for the waitroom console script."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
