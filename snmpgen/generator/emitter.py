"""
Metric emission.

Walks the subtrees of a resolved module and produces one metric per
readable column or scalar, with its indexes, lookups and overrides.
"""

import logging
from typing import Dict, List, Optional, Set

from ..core.models import Index, IndexLookup, Metric, MetricOverrides, Node
from .resolver import ResolvedLookup, ResolvedModule, find_walk_root
from .tree import NodeIndex, walk_node
from .types import ExporterTypes, is_readable, metric_type, sanitize_label_name


logger = logging.getLogger(__name__)


def index_type(index_node: Node) -> Optional[str]:
    """Exporter type of an index column."""
    typ = metric_type(index_node.type, index_node.hint)
    if typ is None and index_node.children and index_node.indexes == [index_node.label]:
        # Row entry standing in for an anonymous integer index
        return ExporterTypes.GAUGE
    return typ


def build_metric(
    node: Node,
    index: NodeIndex,
    lookups: List[ResolvedLookup],
    overrides: Dict[str, MetricOverrides],
) -> Optional[Metric]:
    """
    Build the metric for a node, or None if the node yields no metric.
    """
    typ = metric_type(node.type, node.hint)
    if typ is None:
        logger.debug(f"Skipping {node.label} ({node.oid}): unsupported type '{node.type}'")
        return None
    if not is_readable(node.access):
        logger.debug(f"Skipping {node.label} ({node.oid}): access '{node.access}'")
        return None

    metric = Metric(
        name=sanitize_label_name(node.label),
        oid=node.oid,
        type=typ,
        help=f"{node.description} - {node.oid}",
    )

    for label in node.indexes or []:
        index_node = index.by_label.get(label)
        if index_node is None:
            logger.warning(f"Could not find index '{label}' for '{node.label}', skipping")
            return None
        idx_type = index_type(index_node)
        if idx_type is None:
            logger.warning(
                f"Can't handle index type '{index_node.type}' of '{label}' "
                f"for '{node.label}', skipping"
            )
            return None

        entry = Index(labelname=sanitize_label_name(label), type=idx_type)
        for lookup in lookups:
            if lookup.old_label != label:
                continue
            new_label = sanitize_label_name(lookup.new_node.label)
            # The raw value is still the old index, only its label changes.
            entry.labelname = new_label
            metric.lookups.append(
                IndexLookup(
                    labels=[new_label],
                    labelname=new_label,
                    type=metric_type(lookup.new_node.type, lookup.new_node.hint),
                    oid=lookup.new_node.oid,
                )
            )
        metric.indexes.append(entry)

    override = overrides.get(node.label)
    if override is not None and override.regex_extracts:
        metric.regex_extracts = override.regex_extracts

    return metric


def emit_metrics(
    resolved: ResolvedModule,
    index: NodeIndex,
    overrides: Optional[Dict[str, MetricOverrides]] = None,
) -> List[Metric]:
    """
    Emit metrics for every walk root, in walk order then tree order.

    A node reachable from several walk roots is emitted once.
    """
    overrides = overrides or {}
    metrics: List[Metric] = []
    emitted: Set[str] = set()

    def visit(node: Node):
        if node.oid in emitted:
            return
        emitted.add(node.oid)
        metric = build_metric(node, index, resolved.lookups, overrides)
        if metric is not None:
            metrics.append(metric)

    for oid in resolved.walk_roots:
        root = find_walk_root(oid, index)
        if root is None:
            logger.debug(f"Walk root {oid} is not in the MIB tree, no metrics for it")
            continue
        walk_node(root, visit)

    return metrics
