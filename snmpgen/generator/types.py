"""
Type and name mapping for exporter metrics.

Maps the type tags of the MIB compiler onto the value types the
exporter understands, and turns MIB labels into valid metric and
label names.
"""

import re
from typing import Dict, Optional


class ExporterTypes:
    """Value types understood by the exporter."""

    GAUGE = "gauge"
    COUNTER = "counter"
    OCTET_STRING = "OctetString"
    IP_ADDR = "IpAddr"
    INET_ADDRESS = "InetAddress"
    PHYS_ADDRESS48 = "PhysAddress48"


# Display hint used by MacAddress and PhysAddress textual conventions
MAC_ADDRESS_HINT = "1x:"

# Row entries indexed by an anonymous running integer declare this index
IMPLICIT_INTEGER_INDEX = "INTEGER"

# Declared type tag -> exporter type. Tags not listed are not supported.
METRIC_TYPES: Dict[str, str] = {
    "INTEGER": ExporterTypes.GAUGE,
    "INTEGER32": ExporterTypes.GAUGE,
    "UINTEGER": ExporterTypes.GAUGE,
    "UNSIGNED32": ExporterTypes.GAUGE,
    "TIMETICKS": ExporterTypes.GAUGE,
    "GAUGE": ExporterTypes.GAUGE,
    "COUNTER": ExporterTypes.COUNTER,
    "COUNTER64": ExporterTypes.COUNTER,
    "OCTETSTR": ExporterTypes.OCTET_STRING,
    "BITSTRING": ExporterTypes.OCTET_STRING,
    "IPADDR": ExporterTypes.IP_ADDR,
    "NETADDR": ExporterTypes.INET_ADDRESS,
    ExporterTypes.PHYS_ADDRESS48: ExporterTypes.PHYS_ADDRESS48,
}

READABLE_ACCESS = frozenset({
    "ACCESS_READONLY",
    "ACCESS_READWRITE",
    "ACCESS_CREATE",
})

_INVALID_LABEL_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_OID_PATTERN = re.compile(r"^\.?\d+(\.\d+)*$")


def is_mac_address_hint(hint: Optional[str]) -> bool:
    """Whether a display hint formats a value as a hardware address."""
    return hint == MAC_ADDRESS_HINT


def metric_type(type_tag: Optional[str], hint: Optional[str] = None) -> Optional[str]:
    """
    Map a declared type tag, and optional display hint, to an exporter type.

    Returns None for types the exporter can't represent.
    """
    if is_mac_address_hint(hint):
        return ExporterTypes.PHYS_ADDRESS48
    return METRIC_TYPES.get(type_tag or "")


def is_readable(access: Optional[str]) -> bool:
    """Whether an access level lets the exporter read the value."""
    return access in READABLE_ACCESS


def sanitize_label_name(name: str) -> str:
    """Replace everything but letters, digits and underscores with underscores."""
    return _INVALID_LABEL_CHARS.sub("_", name)


def is_oid(text: str) -> bool:
    """Whether a string looks like a dotted-decimal OID."""
    return bool(_OID_PATTERN.match(text))


def oid_to_tuple(oid_string: str) -> tuple:
    """Convert OID string to tuple of integers."""
    return tuple(int(x) for x in oid_string.split(".") if x)


def tuple_to_oid(oid_tuple: tuple) -> str:
    """Convert OID tuple to string."""
    return ".".join(str(x) for x in oid_tuple)
