"""
Exporter configuration writer.

Dumps generated modules to the exporter's YAML configuration format.
Order is preserved so identical input always gives identical files.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..core.models import Module


logger = logging.getLogger(__name__)


def render_config(modules: Dict[str, Module]) -> Dict[str, Any]:
    """Convert generated modules to plain data."""
    return {name: module.to_dict() for name, module in modules.items()}


def dump_config(modules: Dict[str, Module]) -> str:
    """Render generated modules as a YAML document."""
    return yaml.safe_dump(
        render_config(modules),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def write_config(modules: Dict[str, Module], path: str):
    """Write generated modules to a YAML file."""
    out_path = Path(path)
    if out_path.parent and not out_path.parent.exists():
        out_path.parent.mkdir(parents=True, exist_ok=True)

    with open(out_path, "w") as f:
        f.write("# Generated by snmpgen, do not edit by hand.\n")
        f.write(dump_config(modules))

    logger.info(f"Wrote {len(modules)} modules to {path}")
