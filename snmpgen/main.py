"""
SNMP Exporter Config Generator - Main Entry Point.

Reads the generator configuration, loads the MIB tree and writes
the exporter configuration for every configured module.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .core.config import GeneratorConfig, get_default_config_path, sample_config
from .core.errors import GeneratorError
from .core.models import Node
from .generator import generate_config
from .mibs.loader import build_mib_builder, load_mib_tree
from .mibs.tree_file import load_tree_file
from .output.writer import write_config


logger = logging.getLogger(__name__)


def load_tree(config: GeneratorConfig, tree_file: Optional[str] = None) -> Node:
    """Load the MIB tree from a tree file or from compiled MIB modules."""
    tree_file = tree_file or config.mibs.tree_file
    if tree_file:
        logger.info(f"Loading MIB tree from {tree_file}")
        return load_tree_file(tree_file)

    logger.info(f"Loading MIB modules {', '.join(config.mibs.modules) or '(none)'}")
    mib_builder = build_mib_builder(config.mibs.sources, config.mibs.modules)
    return load_mib_tree(mib_builder)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate SNMP exporter configuration from MIBs"
    )

    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to generator configuration file (YAML)"
    )

    parser.add_argument(
        "-o", "--output",
        default="snmp.yml",
        help="Where to write the exporter configuration (default: snmp.yml)"
    )

    parser.add_argument(
        "--tree",
        default=None,
        help="YAML/JSON node tree to use instead of compiled MIB modules"
    )

    parser.add_argument(
        "-m", "--module",
        action="append",
        dest="modules",
        help="Only generate this module (can be specified multiple times)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    parser.add_argument(
        "--generate-config",
        action="store_true",
        help="Generate a sample generator configuration file"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Generate sample config if requested
    if args.generate_config:
        config_path = args.config or "generator.yml"
        sample_config().to_yaml(config_path)
        print(f"Generated sample configuration: {config_path}")
        return 0

    config_path = args.config or get_default_config_path()

    try:
        config = GeneratorConfig.from_yaml(config_path)
    except GeneratorError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Failed to load configuration: {e}")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
    )
    if not Path(config_path).exists():
        logger.warning(f"Configuration file {config_path} not found, using defaults")
    else:
        logger.info(f"Loaded configuration from {config_path}")

    try:
        root = load_tree(config, args.tree)
        modules = generate_config(config, root, only=args.modules)
    except GeneratorError as e:
        logger.error(f"Generation failed: {e}")
        return 1

    try:
        write_config(modules, args.output)
    except OSError as e:
        logger.error(f"Failed to write {args.output}: {e}")
        return 1
    return 0


def run():
    """Entry point for the application."""
    sys.exit(main())


if __name__ == "__main__":
    run()
