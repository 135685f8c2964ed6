"""
Exporter configuration generation.

Pipeline:
    prepare_tree()            # normalize the MIB tree, build the label/OID index
    resolve_module()          # walk targets and lookups -> OIDs and nodes
    emit_metrics()            # walk subtrees -> metrics

Usage:
    from snmpgen.generator import prepare_tree, generate_config_module

    index = prepare_tree(root)
    module = generate_config_module(module_config, root, index)
"""

import logging
from typing import Dict, Optional

from ..core.config import GeneratorConfig
from ..core.errors import GeneratorError
from ..core.models import Module, ModuleConfig, Node
from .emitter import emit_metrics
from .resolver import resolve_module
from .tree import NodeIndex, prepare_tree, walk_node
from .types import metric_type, sanitize_label_name


logger = logging.getLogger(__name__)


def generate_config_module(
    cfg: ModuleConfig,
    root: Node,
    index: NodeIndex,
    name: str = "",
) -> Module:
    """
    Generate the exporter module for one module configuration.

    ``root`` must already have been through prepare_tree(), which
    returned ``index``.
    """
    resolved = resolve_module(cfg, index, name)
    metrics = emit_metrics(resolved, index, cfg.overrides)

    return Module(
        walk=resolved.walk,
        metrics=metrics,
        version=cfg.version,
        max_repetitions=cfg.max_repetitions,
        retries=cfg.retries,
        timeout=cfg.timeout,
        auth=dict(cfg.auth),
    )


def generate_config(
    config: GeneratorConfig,
    root: Node,
    only: Optional[list] = None,
) -> Dict[str, Module]:
    """
    Prepare the tree once and generate every configured module.

    Modules come out in configuration order. ``only`` restricts
    generation to the named modules.
    """
    if only:
        missing = [m for m in only if m not in config.modules]
        if missing:
            raise GeneratorError(f"Unknown modules requested: {', '.join(missing)}")

    index = prepare_tree(root)
    modules: Dict[str, Module] = {}

    for name, module_config in config.modules.items():
        if only and name not in only:
            continue
        module = generate_config_module(module_config, root, index, name)
        logger.info(
            f"Generated module {name}: {len(module.walk)} OIDs to walk, "
            f"{len(module.metrics)} metrics"
        )
        modules[name] = module

    return modules


__all__ = [
    "NodeIndex",
    "prepare_tree",
    "walk_node",
    "metric_type",
    "sanitize_label_name",
    "generate_config_module",
    "generate_config",
]
