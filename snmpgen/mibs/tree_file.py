"""
Node tree documents.

Reads and writes a MIB node tree dumped as YAML or JSON, for MIB
compilers that can't be driven through pysnmp.
"""

import logging
from pathlib import Path

import yaml

from ..core.errors import ConfigError
from ..core.models import Node


logger = logging.getLogger(__name__)


def load_tree_file(path: str) -> Node:
    """Load a node tree from a YAML or JSON file."""
    tree_path = Path(path)
    if not tree_path.exists():
        raise ConfigError(f"Tree file {path} does not exist")

    with open(tree_path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid tree file {path}: {e}") from e

    if not isinstance(data, dict) or "oid" not in data:
        raise ConfigError(f"Tree file {path} must hold a node mapping with an 'oid'")

    try:
        root = Node.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid node in tree file {path}: {e!r}") from e
    logger.info(f"Loaded MIB tree rooted at {root.label or root.oid} from {path}")
    return root


def dump_tree_file(root: Node, path: str):
    """Write a node tree to a YAML file."""
    with open(path, "w") as f:
        yaml.safe_dump(root.to_dict(), f, default_flow_style=False, sort_keys=False)
