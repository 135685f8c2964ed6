"""Core module containing data models, errors and configuration."""

from .models import (
    Node,
    Lookup,
    MetricOverrides,
    ModuleConfig,
    Index,
    IndexLookup,
    Metric,
    Module,
)
from .errors import (
    GeneratorError,
    ConfigError,
    UnresolvableReferenceError,
    AmbiguousReferenceError,
    AugmentationError,
    LookupTypeError,
)
from .config import GeneratorConfig

__all__ = [
    "Node",
    "Lookup",
    "MetricOverrides",
    "ModuleConfig",
    "Index",
    "IndexLookup",
    "Metric",
    "Module",
    "GeneratorError",
    "ConfigError",
    "UnresolvableReferenceError",
    "AmbiguousReferenceError",
    "AugmentationError",
    "LookupTypeError",
    "GeneratorConfig",
]
