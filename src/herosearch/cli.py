"""CLI entry point for HeroSearch index administration."""

from __future__ import annotations

import argparse
import asyncio
import importlib
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from herosearch.engines.base.exceptions import ConfigurationError
from herosearch.models.searchable import Searchable

if TYPE_CHECKING:
    from herosearch.config.settings import Settings
    from herosearch.engines.elasticsearch.engine import ElasticsearchEngine

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="herosearch",
        description="HeroSearch — Elasticsearch index management for searchable models",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"HeroSearch {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser("index:create", help="Create the index for a searchable model")
    create.add_argument("model", help="Model import path, e.g. 'app.models:Widget'")

    delete = commands.add_parser("index:delete", help="Delete the index of a searchable model")
    delete.add_argument("model", help="Model import path, e.g. 'app.models:Widget'")

    flush = commands.add_parser("flush", help="Drop and recreate the index of a searchable model")
    flush.add_argument("model", help="Model import path, e.g. 'app.models:Widget'")

    commands.add_parser("health", help="Report Elasticsearch cluster health")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    from herosearch.config.settings import Settings
    from herosearch.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)

    try:
        model = load_model(args.model) if hasattr(args, "model") else None
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    sys.exit(asyncio.run(run_command(args.command, settings, model)))


async def run_command(command: str, settings: Settings, model: type[Searchable] | None) -> int:
    """Run one administrative command and return the process exit code."""
    from herosearch.engines.elasticsearch.engine import ElasticsearchEngine

    engine = ElasticsearchEngine.from_settings(settings)
    try:
        return await _dispatch(engine, command, model)
    finally:
        await engine.close()


async def _dispatch(engine: ElasticsearchEngine, command: str, model: Any) -> int:
    if command == "health":
        health = await engine.health_check()
        logger.info("cluster_health", status=health.status, latency_ms=health.latency_ms, detail=health.message)
        return 0 if health.status != "unhealthy" else 1

    index = engine.index_name(model)
    if command == "index:create":
        await engine.create_model_index(model)
        logger.info("index_created", index=index, model=model.__name__)
    elif command == "index:delete":
        await engine.delete_index(index)
        logger.info("index_deleted", index=index, model=model.__name__)
    elif command == "flush":
        await engine.flush(model)
        logger.info("index_flushed", index=index, model=model.__name__)
    else:
        raise ConfigurationError(f"Unknown command: {command}")
    return 0


def load_model(path: str) -> type[Searchable]:
    """Import a searchable model class from ``'package.module:ClassName'``.

    Raises:
        ConfigurationError: If the path is malformed, cannot be imported, or
            does not name a ``Searchable`` subclass.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Model path must look like 'package.module:ClassName', got '{path}'")

    # Console scripts start with the scripts directory on sys.path, not the project root
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    model = getattr(module, attr, None)
    if not (isinstance(model, type) and issubclass(model, Searchable)):
        raise ConfigurationError(f"'{path}' is not a Searchable model")
    return model


def _get_version() -> str:
    """Get the package version."""
    try:
        from herosearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
