"""Errors raised while generating exporter configuration."""


class GeneratorError(Exception):
    """Base class for all generation failures."""


class ConfigError(GeneratorError):
    """The generator configuration file is malformed."""


class UnresolvableReferenceError(GeneratorError):
    """A walk target or lookup names neither a known label nor an OID."""

    def __init__(self, kind: str, reference: str, module: str = ""):
        self.kind = kind
        self.reference = reference
        self.module = module
        where = f" in module '{module}'" if module else ""
        super().__init__(f"Cannot resolve {kind} '{reference}'{where}")


class AmbiguousReferenceError(GeneratorError):
    """A label that has to be resolved is used by more than one node."""

    def __init__(self, label: str, oids):
        self.label = label
        self.oids = list(oids)
        super().__init__(f"Label '{label}' is ambiguous, used by OIDs {', '.join(self.oids)}")


class AugmentationError(GeneratorError):
    """A row entry augments a missing entry, or augmentation loops."""


class LookupTypeError(GeneratorError):
    """The replacement index of a lookup has a type the exporter can't handle."""
