"""
Data models for the configuration generator.

These dataclasses represent the MIB node tree handed over by the
MIB compiler, the user's module settings, and the exporter
configuration produced from them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ConfigError


def _reference(value: Any, what: str) -> str:
    """A label or OID read from YAML, which turns unquoted OIDs into numbers."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        raise ConfigError(f"{what} {value!r} must be quoted, YAML reads it as a number")
    raise ConfigError(f"{what} must be a label or OID string, got {value!r}")


@dataclass
class Node:
    """A single node of the MIB tree."""

    oid: str
    label: str = ""
    description: str = ""
    type: str = ""
    access: str = ""
    hint: str = ""
    augments: str = ""  # Label of the row entry this entry extends
    children: List["Node"] = field(default_factory=list)
    indexes: Optional[List[str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """Create a node, and its children, from a dictionary."""
        return cls(
            oid=_reference(data["oid"], "OID"),
            label=data.get("label", ""),
            description=data.get("description", "") or "",
            type=data.get("type", "") or "",
            access=data.get("access", "") or "",
            hint=data.get("hint", "") or "",
            augments=data.get("augments", "") or "",
            children=[cls.from_dict(c) for c in data.get("children") or []],
            indexes=list(data.get("indexes") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for serialization."""
        data: Dict[str, Any] = {"oid": self.oid, "label": self.label}
        for key in ("description", "type", "access", "hint", "augments"):
            value = getattr(self, key)
            if value:
                data[key] = value
        if self.indexes:
            data["indexes"] = list(self.indexes)
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data


@dataclass
class Lookup:
    """Replace the ``old_index`` label with the values of ``new_index``."""

    old_index: str
    new_index: str


@dataclass
class MetricOverrides:
    """Per-metric overrides, passed through to the exporter untouched."""

    regex_extracts: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)


@dataclass
class ModuleConfig:
    """Generator settings for one exporter module."""

    walk: List[str] = field(default_factory=list)
    lookups: List[Lookup] = field(default_factory=list)
    overrides: Dict[str, MetricOverrides] = field(default_factory=dict)
    # Exporter walk parameters, copied to the output as-is
    version: Optional[int] = None
    max_repetitions: Optional[int] = None
    retries: Optional[int] = None
    timeout: Optional[str] = None
    auth: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModuleConfig":
        """Create module config from a ``generator.yml`` module section."""
        lookups = [
            Lookup(
                old_index=_reference(l["old_index"], "Lookup old_index"),
                new_index=_reference(l["new_index"], "Lookup new_index"),
            )
            for l in data.get("lookups") or []
        ]
        overrides = {
            label: MetricOverrides(regex_extracts=(o or {}).get("regex_extracts") or {})
            for label, o in (data.get("overrides") or {}).items()
        }
        timeout = data.get("timeout")
        return cls(
            walk=[_reference(w, "Walk target") for w in data.get("walk") or []],
            lookups=lookups,
            overrides=overrides,
            version=data.get("version"),
            max_repetitions=data.get("max_repetitions"),
            retries=data.get("retries"),
            timeout=str(timeout) if timeout is not None else None,
            auth=dict(data.get("auth") or {}),
        )


@dataclass
class Index:
    """An index label attached to a metric."""

    labelname: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"labelname": self.labelname, "type": self.type}


@dataclass
class IndexLookup:
    """How the exporter fetches the value that replaces an index."""

    labels: List[str]
    labelname: str
    type: str
    oid: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "labelname": self.labelname,
            "oid": self.oid,
            "type": self.type,
        }


@dataclass
class Metric:
    """A single metric the exporter will produce."""

    name: str
    oid: str
    type: str
    help: str
    indexes: List[Index] = field(default_factory=list)
    lookups: List[IndexLookup] = field(default_factory=list)
    regex_extracts: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert metric to dictionary, leaving out empty sections."""
        data: Dict[str, Any] = {
            "name": self.name,
            "oid": self.oid,
            "type": self.type,
            "help": self.help,
        }
        if self.indexes:
            data["indexes"] = [i.to_dict() for i in self.indexes]
        if self.lookups:
            data["lookups"] = [l.to_dict() for l in self.lookups]
        if self.regex_extracts:
            data["regex_extracts"] = self.regex_extracts
        return data


@dataclass
class Module:
    """Exporter configuration for one module."""

    walk: List[str] = field(default_factory=list)
    metrics: List[Metric] = field(default_factory=list)
    version: Optional[int] = None
    max_repetitions: Optional[int] = None
    retries: Optional[int] = None
    timeout: Optional[str] = None
    auth: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert module to dictionary for serialization."""
        data: Dict[str, Any] = {"walk": list(self.walk)}
        for key in ("version", "max_repetitions", "retries", "timeout"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.auth:
            data["auth"] = dict(self.auth)
        data["metrics"] = [m.to_dict() for m in self.metrics]
        return data
