#!/usr/bin/env python3
"""
skywidget - command-line entry point
"""

import argparse
import logging
import os
import signal
import sys

from .config import ConfigLoader, ConfigValidator
from .controller import WidgetController
from .utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="skywidget - current weather widget")
    parser.add_argument("config", nargs="?", help="Path to YAML configuration file (optional)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--once", action="store_true", help="Render one update and exit")
    parser.add_argument("--check", action="store_true", help="Validate the configuration and exit")
    return parser


def check_config(config_path: str) -> int:
    """Print validation results for a configuration file; returns an exit code."""
    try:
        config = ConfigLoader().read(config_path)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"❌ {e}")
        return 1

    valid, errors, warnings = ConfigValidator(config).validate()

    if errors:
        print("❌ ERRORS:")
        for error in errors:
            print(f"  - {error}")
        print()

    if warnings:
        print("⚠️  WARNINGS:")
        for warning in warnings:
            print(f"  - {warning}")
        print()

    if valid:
        print("✅ Configuration is valid!")
        return 0

    print(f"❌ Configuration has {len(errors)} error{'s' if len(errors) != 1 else ''}")
    return 1


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config_path = os.path.expanduser(args.config) if args.config else None
    if config_path and not os.path.exists(config_path):
        logger.error(f"Configuration file not found: {config_path}")
        return 1

    if args.check:
        if not config_path:
            logger.error("--check requires a configuration file")
            return 1
        return check_config(config_path)

    try:
        config = ConfigLoader().load(config_path)
        controller = WidgetController.from_config(config)
    except ConfigurationError as e:
        logger.error(f"Cannot start: {e}")
        return 1

    if args.once or not controller.auto_refresh:
        controller.run()
        controller.surface.close()
        return 0

    def signal_handler(signum, frame):
        """Handle shutdown signals gracefully"""
        logger.info(f"Received signal {signum}, shutting down gracefully...")
        raise KeyboardInterrupt()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    try:
        controller.start()
        while not controller.wait(1.0):
            pass
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        controller.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
