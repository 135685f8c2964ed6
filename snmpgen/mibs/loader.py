"""
MIB tree loader backed by pysnmp.

Builds the generator's node tree from MIB modules that pysmi has
already compiled into pysnmp Python modules. Only symbols that carry
an OID become nodes; textual conventions are reduced to their base
ASN.1 type so the generator sees plain type tags.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pysnmp.error import PySnmpError
from pysnmp.smi import builder

from ..core.errors import GeneratorError
from ..core.models import Node
from ..generator.types import tuple_to_oid


logger = logging.getLogger(__name__)


# pysnmp syntax class -> type tag. Searched along the MRO, most specific first.
SYNTAX_TYPES: Dict[str, str] = {
    "Integer32": "INTEGER32",
    "Integer": "INTEGER",
    "Unsigned32": "UNSIGNED32",
    "Gauge32": "GAUGE",
    "Counter32": "COUNTER",
    "Counter64": "COUNTER64",
    "TimeTicks": "TIMETICKS",
    "IpAddress": "IPADDR",
    "Bits": "BITSTRING",
    "Opaque": "OPAQUE",
    "OctetString": "OCTETSTR",
    "ObjectIdentifier": "OBJID",
    "ObjectName": "OBJID",
    "Null": "NULL",
}

# Symbol class -> type tag, for symbols without a syntax
SYMBOL_TYPES: Dict[str, str] = {
    "NotificationType": "NOTIFTYPE",
    "ObjectGroup": "OBJGROUP",
    "NotificationGroup": "NOTIFGROUP",
    "ModuleIdentity": "MODID",
    "AgentCapabilities": "AGENTCAP",
    "ModuleCompliance": "MODCOMP",
    "ObjectIdentity": "OBJIDENTITY",
}

# Normalized max-access -> access level
ACCESS_LEVELS: Dict[str, str] = {
    "readonly": "ACCESS_READONLY",
    "readwrite": "ACCESS_READWRITE",
    "readcreate": "ACCESS_CREATE",
    "writeonly": "ACCESS_WRITEONLY",
    "notaccessible": "ACCESS_NOACCESS",
    "noaccess": "ACCESS_NOACCESS",
    "accessiblefornotify": "ACCESS_NOTIFY",
    "notifyonly": "ACCESS_NOTIFY",
}

# Symbols that have an OID but are not part of the MIB tree
SKIPPED_SYMBOLS = {"MibScalarInstance"}


def _call(obj: Any, *names: str, default: Any = None) -> Any:
    """Call the first zero-argument method found; pysnmp renamed them in 7.x."""
    for name in names:
        method = getattr(obj, name, None)
        if callable(method):
            return method()
    return default


def build_mib_builder(sources: List[str], modules: List[str]) -> Any:
    """
    Create a pysnmp MibBuilder and load the given compiled MIB modules.

    Args:
        sources: Directories holding pysmi-compiled MIB modules
        modules: MIB module names to load
    """
    mib_builder = builder.MibBuilder()
    # Descriptions are only kept when texts are loaded
    mib_builder.loadTexts = True
    mib_builder.load_texts = True

    try:
        dir_sources = [builder.DirMibSource(s) for s in sources]
    except PySnmpError as e:
        raise GeneratorError(f"Bad MIB source in {', '.join(sources)}: {e}") from e
    if dir_sources:
        if hasattr(mib_builder, "add_mib_sources"):
            mib_builder.add_mib_sources(*dir_sources)
        else:
            mib_builder.addMibSources(*dir_sources)

    if modules:
        try:
            if hasattr(mib_builder, "load_modules"):
                mib_builder.load_modules(*modules)
            else:
                mib_builder.loadModules(*modules)
        except PySnmpError as e:
            raise GeneratorError(f"Failed to load MIB modules {', '.join(modules)}: {e}") from e
        logger.info(f"Loaded {len(modules)} MIB modules from {', '.join(sources)}")

    return mib_builder


def syntax_type(syntax: Any) -> str:
    """Type tag of a syntax object, looking through textual conventions."""
    if syntax is None:
        return ""
    for klass in type(syntax).__mro__:
        tag = SYNTAX_TYPES.get(klass.__name__)
        if tag:
            return tag
    return ""


def display_hint(syntax: Any) -> str:
    """Display hint of a textual convention, empty if it has none."""
    if syntax is None:
        return ""
    hint = _call(syntax, "getDisplayHint", "get_display_hint")
    if hint is None:
        hint = getattr(syntax, "displayHint", None) or getattr(syntax, "display_hint", None)
    return str(hint).strip() if isinstance(hint, str) else ""


def access_level(max_access: Optional[str]) -> str:
    """Map a pysnmp max-access string to an access level."""
    if not max_access:
        return ""
    key = str(max_access).lower().replace("-", "").replace("_", "")
    return ACCESS_LEVELS.get(key, "")


def symbol_to_node(label: str, symbol: Any) -> Optional[Node]:
    """Convert one MIB symbol to a node, None if it is not a tree node."""
    if isinstance(symbol, type) or type(symbol).__name__ in SKIPPED_SYMBOLS:
        return None
    oid = _call(symbol, "getName", "get_name")
    if oid is None:
        oid = getattr(symbol, "name", None)
    if not isinstance(oid, tuple) or not oid:
        return None

    syntax = _call(symbol, "getSyntax", "get_syntax")
    type_tag = syntax_type(syntax) if syntax is not None else SYMBOL_TYPES.get(type(symbol).__name__, "")

    indexes = [
        str(entry[-1]) if isinstance(entry, tuple) else str(entry)
        for entry in _call(symbol, "getIndexNames", "get_index_names", default=()) or ()
    ]

    return Node(
        oid=tuple_to_oid(oid),
        label=label,
        description=str(_call(symbol, "getDescription", "get_description", default="") or ""),
        type=type_tag,
        access=access_level(_call(symbol, "getMaxAccess", "get_max_access")),
        hint=display_hint(syntax),
        indexes=indexes,
    )


def load_mib_tree(mib_builder: Any) -> Node:
    """
    Build the node tree from every symbol loaded into a MibBuilder.

    Nodes hang off their nearest loaded ancestor under a single iso (1)
    root. Augmentations registered on base rows are copied onto the
    augmenting rows.
    """
    nodes: Dict[Tuple[int, ...], Node] = {}
    by_symbol: Dict[Tuple[str, str], Node] = {}
    augmenting: List[Tuple[Node, Any]] = []

    for module_name in sorted(mib_builder.mibSymbols):
        symbols = mib_builder.mibSymbols[module_name]
        for label in sorted(symbols):
            symbol = symbols[label]
            node = symbol_to_node(label, symbol)
            if node is None:
                continue
            key = tuple(int(x) for x in node.oid.split("."))
            if key in nodes:
                continue
            nodes[key] = node
            by_symbol[(module_name, label)] = node

            rows = getattr(symbol, "augmentingRows", None) or getattr(symbol, "augmenting_rows", None)
            if rows:
                augmenting.append((node, rows))

    for base, rows in augmenting:
        for name in rows:
            augmented = by_symbol.get(tuple(name)) if isinstance(name, tuple) else None
            if augmented is not None:
                augmented.augments = base.label

    root = nodes.get((1,)) or Node(oid="1", label="iso")
    skipped = 0
    for key in sorted(nodes):
        if key == (1,):
            continue
        if key[0] != 1:
            skipped += 1
            continue
        parent = root
        for end in range(len(key) - 1, 1, -1):
            if key[:end] in nodes:
                parent = nodes[key[:end]]
                break
        parent.children.append(nodes[key])

    if skipped:
        logger.debug(f"Skipped {skipped} symbols outside the iso subtree")
    logger.info(f"Built MIB tree with {len(nodes)} nodes")
    return root
