"""
Walk and lookup resolution.

Turns the walk targets and index lookups of a module configuration
into concrete OIDs and nodes of a prepared tree.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.errors import LookupTypeError, UnresolvableReferenceError
from ..core.models import ModuleConfig, Node
from .tree import NodeIndex
from .types import is_oid, metric_type, oid_to_tuple


logger = logging.getLogger(__name__)


@dataclass
class ResolvedLookup:
    """A lookup bound to the tree: relabel ``old_label`` with ``new_node``."""

    old_label: str
    new_node: Node


@dataclass
class ResolvedModule:
    """Walk roots, lookups and final walk list of one module."""

    walk_roots: List[str] = field(default_factory=list)
    lookups: List[ResolvedLookup] = field(default_factory=list)
    walk: List[str] = field(default_factory=list)


def resolve_walk_target(target: str, index: NodeIndex, module: str = "") -> str:
    """Resolve a label to its OID; OIDs pass through unchanged."""
    if target in index.by_label:
        return index.get(target).oid
    if is_oid(target):
        return target
    raise UnresolvableReferenceError("walk target", target, module)


def resolve_old_index(reference: str, index: NodeIndex, module: str = "") -> str:
    """Resolve the index being replaced by a lookup to its label."""
    if reference in index.by_label or reference in index.index_labels:
        return reference
    if reference in index.by_oid:
        return index.by_oid[reference].label
    raise UnresolvableReferenceError("lookup old_index", reference, module)


def resolve_new_index(reference: str, index: NodeIndex, module: str = "") -> Node:
    """Resolve the replacement index of a lookup to its node."""
    node = index.get(reference)
    if node is None:
        raise UnresolvableReferenceError("lookup new_index", reference, module)
    if metric_type(node.type, node.hint) is None:
        raise LookupTypeError(
            f"Lookup index '{node.label}' ({node.oid}) has unsupported type '{node.type}'"
        )
    return node


def dedup_walk(oids: List[str]) -> List[str]:
    """
    Order OIDs numerically and drop the ones already walked.

    "1.2" and ".1.2" are the same OID; the first spelling is kept. An OID
    inside the subtree of another walked OID is dropped.
    """
    unique: Dict[Tuple[int, ...], str] = {}
    for oid in oids:
        unique.setdefault(oid_to_tuple(oid), oid)

    walk: List[str] = []
    last: Optional[Tuple[int, ...]] = None
    for key in sorted(unique):
        # Sorted order puts every OID right after the subtree root covering it
        if last is not None and key[:len(last)] == last:
            continue
        last = key
        walk.append(unique[key])
    return walk


def resolve_module(cfg: ModuleConfig, index: NodeIndex, module: str = "") -> ResolvedModule:
    """
    Resolve walk targets and lookups of a module configuration.

    Every lookup's replacement column is walked as well, unless a walk
    target already covers it.
    """
    resolved = ResolvedModule()

    for target in cfg.walk:
        oid = resolve_walk_target(target, index, module)
        if oid not in resolved.walk_roots:
            resolved.walk_roots.append(oid)

    lookup_oids: List[str] = []
    for lookup in cfg.lookups:
        old_label = resolve_old_index(lookup.old_index, index, module)
        new_node = resolve_new_index(lookup.new_index, index, module)
        resolved.lookups.append(ResolvedLookup(old_label=old_label, new_node=new_node))
        lookup_oids.append(new_node.oid)

    resolved.walk = dedup_walk(resolved.walk_roots + lookup_oids)

    logger.debug(
        f"Resolved {len(resolved.walk_roots)} walk roots and "
        f"{len(resolved.lookups)} lookups into {len(resolved.walk)} OIDs to walk"
    )
    return resolved


def find_walk_root(oid: str, index: NodeIndex) -> Optional[Node]:
    """The node a walk root OID points at, if it is part of the tree."""
    return index.by_oid.get(oid) or index.by_oid.get(oid.lstrip("."))
