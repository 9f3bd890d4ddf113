from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from runfolia import __version__
from runfolia.api import run_pipeline
from runfolia.configuration import ConfigError, find_default_config, load_run_config
from runfolia.errors import DownloadError, LaunchError, ResolutionError
from runfolia.runtime.layout import clean_cache

EXIT_CONFIG = 2
EXIT_RESOLUTION = 3
EXIT_DOWNLOAD = 4
EXIT_LAUNCH = 5

logger = logging.getLogger("runfolia.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="run-folia",
        description="Download Folia, stage your plugin jar and start a local test server.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML run config (default: ./runfolia.yaml when present)",
    )
    parser.add_argument("--mc-version", dest="version", help="Minecraft version, e.g. 1.21.6")
    parser.add_argument("--run-dir", dest="run_directory", type=Path, help="Managed run directory")
    parser.add_argument("--plugin-jar", type=Path, help="Plugin jar to stage (default: detected)")
    parser.add_argument(
        "--plugin",
        dest="plugins",
        type=Path,
        action="append",
        help="Extra plugin jar to stage; repeatable",
    )
    parser.add_argument(
        "--jvm-arg",
        dest="extra_process_args",
        action="append",
        help="Extra JVM option; repeatable",
    )
    parser.add_argument(
        "--server-arg",
        dest="extra_server_args",
        action="append",
        help="Server argument; repeatable, replaces the default --nogui",
    )
    parser.add_argument(
        "--no-eula",
        dest="auto_accept_license",
        action="store_false",
        default=None,
        help="Do not pass the EULA acceptance flag",
    )
    parser.add_argument(
        "--no-link",
        dest="prefer_linking",
        action="store_false",
        default=None,
        help="Copy plugin jars instead of linking them",
    )
    parser.add_argument(
        "--force-refetch",
        action="store_true",
        default=None,
        help="Download the server jar even if it is cached",
    )
    parser.add_argument("--dry-run", action="store_true", help="Prepare everything but do not launch")
    parser.add_argument("--clean", action="store_true", help="Delete the cached server jar and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("-V", "--script-version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    keys = (
        "version",
        "run_directory",
        "plugin_jar",
        "plugins",
        "extra_process_args",
        "extra_server_args",
        "auto_accept_license",
        "prefer_linking",
        "force_refetch",
    )
    return {key: getattr(args, key) for key in keys if getattr(args, key) is not None}


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args)

    try:
        config_path = args.config if args.config is not None else find_default_config()
        config = load_run_config(config_path, overrides=_overrides_from_args(args))
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG

    if args.clean:
        for path in clean_cache(config):
            logger.info("Removed %s", path)
        return 0

    try:
        result = run_pipeline(config, launch=not args.dry_run)
    except ResolutionError as exc:
        logger.error("%s", exc)
        return EXIT_RESOLUTION
    except DownloadError as exc:
        logger.error("%s", exc)
        return EXIT_DOWNLOAD
    except LaunchError as exc:
        logger.error("%s", exc)
        return EXIT_LAUNCH

    if result.exit_code is None:
        logger.info("Dry run, would launch: %s", " ".join(result.plan.command))
        return 0
    return result.exit_code
