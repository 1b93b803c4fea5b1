#!/usr/bin/env python3
"""Main entrypoint for the shim logger argument resolver."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import cast

import yaml
from rich.console import Console
from rich.logging import RichHandler

from src import constants
from src.arguments import resolve_docker_config, resolve_global_arguments
from src.config_store import ConfigFileError, ConfigStore
from src.errors import ArgumentError


class Args(argparse.Namespace):
    config: Path | None
    container_id: str | None
    container_name: str | None
    log_driver: str | None
    mode: str | None
    max_buffer_size: str | None
    cleanup_time: str | None
    container_image_id: str | None
    container_image_name: str | None
    container_env: str | None
    container_labels: str | None
    log_level: str
    rich_logs: bool
    print_config_and_exit: bool


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve and validate arguments of a container shim logger",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )

    # Configuration overrides (optional when using config file or envvars)
    parser.add_argument(
        "--container-id",
        help="ID of the container whose logs are forwarded",
    )

    parser.add_argument(
        "--container-name",
        help="Name of the container whose logs are forwarded",
    )

    parser.add_argument(
        "--log-driver",
        help="Log driver type, e.g. awslogs, fluentd or splunk",
    )

    parser.add_argument(
        "--mode",
        help=f"'{constants.BLOCKING_MODE}' or '{constants.NON_BLOCKING_MODE}' "
        f"(default: {constants.DEFAULTS[constants.MODE_KEY]})",
    )

    parser.add_argument(
        "--max-buffer-size",
        help="Buffer size used in non-blocking mode, e.g. 1234, 4k or 2m "
        f"(default: {constants.DEFAULTS[constants.MAX_BUFFER_SIZE_KEY]})",
    )

    parser.add_argument(
        "--cleanup-time",
        help="Time to spend flushing logs before exit, e.g. 3s. Maximum is "
        f"{constants.MAX_CLEANUP_TIME.total_seconds():g}s "
        f"(default: {constants.DEFAULT_CLEANUP_TIME})",
    )

    parser.add_argument(
        "--container-image-id",
        help="ID of the container image",
    )

    parser.add_argument(
        "--container-image-name",
        help="Name of the container image",
    )

    parser.add_argument(
        "--container-env",
        help='Container environment as a JSON array, e.g. \'["KEY=value"]\'',
    )

    parser.add_argument(
        "--container-labels",
        help='Container labels as a JSON object, e.g. \'{"team": "core"}\'',
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    parser.add_argument(
        "--print-config-and-exit",
        action="store_true",
        help="Print the resolved arguments as JSON and exit",
    )

    return cast(Args, parser.parse_args(argv))


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=Console(stderr=True),
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
        )


def build_config_store(args: Args) -> ConfigStore:
    """Layer defaults, config file, environment and flags into one store."""
    store = ConfigStore(defaults=constants.DEFAULTS, environ=environ)

    if args.config:
        logger.info("Loading configuration from %s", args.config)
        store.load_file(args.config)

    store.bind_args(
        {key: getattr(args, key.replace("-", "_")) for key in constants.ALL_KEYS}
    )
    return store


def main(argv: list[str] | None = None) -> int:
    """Main function."""
    args = parse_args(argv)

    configure_logging(args.log_level, args.rich_logs)

    try:
        store = build_config_store(args)
        resolved = resolve_global_arguments(store)
        docker_config = resolve_docker_config(store)
    except ArgumentError as e:
        logger.error("Invalid arguments: %s", e)
        return 1
    except ConfigFileError as e:
        logger.error("Invalid config: %s", e)
        return 1
    except yaml.YAMLError as e:
        logger.error("YAML parsing error in %s: %s", args.config, e)
        return 1
    except FileNotFoundError as e:
        logger.error("Config file not found: %s", e)
        return 1
    except Exception as e:
        logger.error("Error resolving arguments: %s", e, exc_info=True)
        return 1

    if args.print_config_and_exit:
        logger.info("Printing resolved configuration")
        config_dict = resolved.model_dump(mode="json")
        config_dict["cleanup_time"] = (
            resolved.cleanup_time.total_seconds()
            if resolved.cleanup_time is not None
            else None
        )
        config_dict["docker_config"] = docker_config.model_dump(mode="json")
        print(json.dumps(config_dict, indent=2, sort_keys=True))
        return 0

    logger.info(
        "Resolved arguments for container %s (%s): driver %s, mode %s",
        resolved.container_name,
        resolved.container_id,
        resolved.log_driver,
        resolved.mode,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
