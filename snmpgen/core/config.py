"""
Configuration management for the SNMP exporter config generator.

Loads the generator configuration from YAML files and environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .models import ModuleConfig


MODULE_KEYS = {
    "walk",
    "lookups",
    "overrides",
    "version",
    "max_repetitions",
    "retries",
    "timeout",
    "auth",
}


@dataclass
class MibConfig:
    """Where the MIB tree comes from."""

    sources: List[str] = field(default_factory=lambda: ["mibs"])  # Compiled pysnmp MIB dirs
    modules: List[str] = field(default_factory=list)
    tree_file: Optional[str] = None  # YAML/JSON node tree dump, wins over sources


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class GeneratorConfig:
    """Main configuration container."""

    mibs: MibConfig = field(default_factory=MibConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    modules: Dict[str, ModuleConfig] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str) -> "GeneratorConfig":
        """Load configuration from YAML file."""
        config_path = Path(path)
        if not config_path.exists():
            config = cls()
            config._apply_env_overrides()
            return config

        with open(config_path, "r") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Top level of {path} must be a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "GeneratorConfig":
        """Create config from dictionary."""
        config = cls()

        try:
            if "mibs" in data:
                config.mibs = MibConfig(**(data["mibs"] or {}))

            if "logging" in data:
                config.logging = LoggingConfig(**(data["logging"] or {}))
        except TypeError as e:
            raise ConfigError(f"Invalid configuration section: {e}") from e

        modules = data.get("modules") or {}
        if not isinstance(modules, dict):
            raise ConfigError("'modules' must be a mapping of module name to settings")
        for name, section in modules.items():
            config.modules[str(name)] = _module_from_dict(str(name), section)

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        if os.getenv("SNMPGEN_MIB_SOURCES"):
            self.mibs.sources = [
                s.strip() for s in os.getenv("SNMPGEN_MIB_SOURCES").split(",") if s.strip()
            ]
        if os.getenv("SNMPGEN_TREE_FILE"):
            self.mibs.tree_file = os.getenv("SNMPGEN_TREE_FILE")

        # Logging
        if os.getenv("SNMPGEN_LOG_LEVEL"):
            self.logging.level = os.getenv("SNMPGEN_LOG_LEVEL")

    def to_yaml(self, path: str):
        """Save a sample configuration to YAML file."""
        data = {
            "mibs": {
                "sources": self.mibs.sources,
                "modules": self.mibs.modules,
                "tree_file": self.mibs.tree_file,
            },
            "logging": {
                "level": self.logging.level,
            },
            "modules": {
                name: _module_to_dict(module) for name, module in self.modules.items()
            },
        }

        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def _module_from_dict(name: str, section: Any) -> ModuleConfig:
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise ConfigError(f"Module '{name}' must be a mapping")

    unknown = set(section) - MODULE_KEYS
    if unknown:
        raise ConfigError(f"Unknown keys in module '{name}': {', '.join(sorted(unknown))}")

    try:
        return ModuleConfig.from_dict(section)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid module '{name}': {e!r}") from e


def _module_to_dict(module: ModuleConfig) -> Dict[str, Any]:
    data: Dict[str, Any] = {"walk": list(module.walk)}
    if module.lookups:
        data["lookups"] = [
            {"old_index": l.old_index, "new_index": l.new_index} for l in module.lookups
        ]
    if module.overrides:
        data["overrides"] = {
            label: {"regex_extracts": o.regex_extracts} for label, o in module.overrides.items()
        }
    for key in ("version", "max_repetitions", "retries", "timeout"):
        value = getattr(module, key)
        if value is not None:
            data[key] = value
    if module.auth:
        data["auth"] = dict(module.auth)
    return data


def sample_config() -> GeneratorConfig:
    """A small configuration walking the interfaces table of IF-MIB."""
    config = GeneratorConfig()
    config.mibs.modules = ["IF-MIB"]
    config.modules["if_mib"] = ModuleConfig.from_dict(
        {
            "walk": ["sysUpTime", "interfaces", "ifXTable"],
            "lookups": [{"old_index": "ifIndex", "new_index": "ifDescr"}],
            "version": 2,
            "auth": {"community": "public"},
        }
    )
    return config


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    # Check common locations
    candidates = [
        Path("generator.yml"),
        Path("config/generator.yml"),
        Path.home() / ".snmpgen" / "generator.yml",
    ]

    for path in candidates:
        if path.exists():
            return str(path)

    # Return the first candidate as default
    return str(candidates[0])
