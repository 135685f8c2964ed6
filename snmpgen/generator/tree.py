"""
MIB tree normalization.

Resolves table semantics on the raw node tree so every node carries
its effective row indexes, and builds the label/OID index used to
resolve references from the module configuration.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Set

from ..core.errors import AmbiguousReferenceError, AugmentationError
from ..core.models import Node
from .types import ExporterTypes, IMPLICIT_INTEGER_INDEX, is_mac_address_hint


logger = logging.getLogger(__name__)

_SENTENCE_END = re.compile(r"\.(?=\s|$)")


class NodeIndex:
    """
    Label and OID lookup over one prepared tree.

    Duplicate labels are tolerated until somebody asks for one of them.
    """

    def __init__(self):
        self.by_label: Dict[str, Node] = {}
        self.by_oid: Dict[str, Node] = {}
        self.index_labels: Set[str] = set()
        self._duplicates: Dict[str, List[str]] = {}

    def add(self, node: Node):
        """Record a node under its label and OID."""
        self.by_oid.setdefault(node.oid, node)
        if not node.label:
            return
        existing = self.by_label.get(node.label)
        if existing is None:
            self.by_label[node.label] = node
        elif existing is not node:
            oids = self._duplicates.setdefault(node.label, [existing.oid])
            oids.append(node.oid)

    def __contains__(self, reference: str) -> bool:
        return reference in self.by_label or reference in self.by_oid

    def __len__(self) -> int:
        return len(self.by_oid)

    def is_ambiguous(self, label: str) -> bool:
        return label in self._duplicates

    def get(self, reference: str) -> Optional[Node]:
        """
        Find a node by label, falling back to OID.

        Raises AmbiguousReferenceError if the label belongs to several nodes.
        """
        if reference in self.by_label:
            if reference in self._duplicates:
                raise AmbiguousReferenceError(reference, self._duplicates[reference])
            return self.by_label[reference]
        return self.by_oid.get(reference)


def walk_node(node: Node, fn: Callable[[Node], None]):
    """Call fn on node and all of its descendants, parents first."""
    stack = [node]
    while stack:
        current = stack.pop()
        fn(current)
        stack.extend(reversed(current.children))


def clean_description(description: str) -> str:
    """Collapse whitespace and keep only the first sentence."""
    text = " ".join((description or "").split())
    match = _SENTENCE_END.search(text)
    if match:
        text = text[:match.start()]
    return text.rstrip(". ")


def prepare_tree(root: Node) -> NodeIndex:
    """
    Normalize a MIB tree in place and return its label/OID index.

    After this every node has:
    - a one sentence description
    - its effective indexes, inherited from the enclosing row entry
      or copied from the entry it augments (never None)
    - type PhysAddress48 when its display hint is a MAC address

    Running it again on a prepared tree changes nothing.
    """
    index = NodeIndex()
    parents: Dict[int, Optional[Node]] = {id(root): None}
    explicit: Dict[int, List[str]] = {}

    # First pass: per node fixes, index building, remember declared indexes.
    def visit(node: Node):
        node.description = clean_description(node.description)

        if is_mac_address_hint(node.hint):
            node.type = ExporterTypes.PHYS_ADDRESS48

        indexes = list(node.indexes or [])
        # Some MIBs index a table with a bare INTEGER rather than a column.
        if indexes == [IMPLICIT_INTEGER_INDEX]:
            indexes = [node.label]
        explicit[id(node)] = indexes
        index.index_labels.update(indexes)

        for child in node.children:
            parents[id(child)] = node

        index.add(node)

    walk_node(root, visit)

    # Second pass: effective indexes, augmented entries resolved on demand.
    resolved: Dict[int, List[str]] = {}
    in_progress: Set[int] = set()

    def effective(node: Node) -> List[str]:
        key = id(node)
        if key in resolved:
            return resolved[key]
        if key in in_progress:
            raise AugmentationError(f"Augmentation cycle through '{node.label}' ({node.oid})")
        in_progress.add(key)

        if node.augments:
            target = index.by_label.get(node.augments)
            if target is None:
                raise AugmentationError(
                    f"'{node.label}' ({node.oid}) augments unknown entry '{node.augments}'"
                )
            if index.is_ambiguous(node.augments):
                raise AugmentationError(
                    f"'{node.label}' ({node.oid}) augments ambiguous entry '{node.augments}'"
                )
            indexes = effective(target)
        elif explicit[key]:
            indexes = explicit[key]
        elif parents[key] is not None:
            indexes = effective(parents[key])
        else:
            indexes = []

        in_progress.discard(key)
        resolved[key] = indexes
        return indexes

    def assign(node: Node):
        node.indexes = list(effective(node))

    # Compute everything before writing, so no node sees a half-updated tree.
    walk_node(root, effective)
    walk_node(root, assign)

    logger.debug(f"Prepared MIB tree with {len(index)} nodes")
    return index
