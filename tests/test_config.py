"""Tests for generator configuration loading."""

import pytest
import yaml

from snmpgen.core.config import GeneratorConfig, sample_config
from snmpgen.core.errors import ConfigError
from snmpgen.core.models import Lookup


CONFIG = """
mibs:
  sources: [compiled]
  modules: [IF-MIB]
logging:
  level: DEBUG
modules:
  if_mib:
    walk: [interfaces, 1.3.6.1.2.1.31.1.1]
    lookups:
      - old_index: ifIndex
        new_index: ifDescr
    overrides:
      ifType:
        regex_extracts:
          "":
            - regex: "(.*)"
              value: "$1"
    version: 2
    max_repetitions: 25
    retries: 3
    timeout: 5s
    auth:
      community: public
  empty:
"""


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("SNMPGEN_LOG_LEVEL", "SNMPGEN_MIB_SOURCES", "SNMPGEN_TREE_FILE"):
        monkeypatch.delenv(name, raising=False)


def write(tmp_path, text):
    path = tmp_path / "generator.yml"
    path.write_text(text)
    return str(path)


def test_load_config(tmp_path):
    config = GeneratorConfig.from_yaml(write(tmp_path, CONFIG))

    assert config.mibs.sources == ["compiled"]
    assert config.mibs.modules == ["IF-MIB"]
    assert config.logging.level == "DEBUG"
    assert list(config.modules) == ["if_mib", "empty"]

    module = config.modules["if_mib"]
    assert module.walk == ["interfaces", "1.3.6.1.2.1.31.1.1"]
    assert module.lookups == [Lookup(old_index="ifIndex", new_index="ifDescr")]
    assert module.overrides["ifType"].regex_extracts == {"": [{"regex": "(.*)", "value": "$1"}]}
    assert module.version == 2
    assert module.max_repetitions == 25
    assert module.retries == 3
    assert module.timeout == "5s"
    assert module.auth == {"community": "public"}

    assert config.modules["empty"].walk == []


def test_missing_file_gives_defaults(tmp_path):
    config = GeneratorConfig.from_yaml(str(tmp_path / "missing.yml"))
    assert config.mibs.sources == ["mibs"]
    assert config.logging.level == "INFO"
    assert config.modules == {}


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("SNMPGEN_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SNMPGEN_MIB_SOURCES", "a, b,")
    monkeypatch.setenv("SNMPGEN_TREE_FILE", "tree.yml")

    config = GeneratorConfig.from_yaml(write(tmp_path, CONFIG))
    assert config.logging.level == "WARNING"
    assert config.mibs.sources == ["a", "b"]
    assert config.mibs.tree_file == "tree.yml"

    defaults = GeneratorConfig.from_yaml(str(tmp_path / "missing.yml"))
    assert defaults.logging.level == "WARNING"


@pytest.mark.parametrize("text", [
    "modules: [\n",
    "- just\n- a list\n",
    "modules: [a, b]\n",
    "modules:\n  m: [walk]\n",
    "modules:\n  m:\n    walks: [a]\n",
    "modules:\n  m:\n    lookups:\n      - old_index: a\n",
    "mibs:\n  source: [a]\n",
    "modules:\n  m:\n    walk: [1.10]\n",
    "modules:\n  m:\n    walk: [interfaces]\n    lookups:\n      - old_index: ifIndex\n        new_index: 1.3\n",
    "modules:\n  m:\n    walk: [null]\n",
])
def test_invalid_config(tmp_path, text):
    with pytest.raises(ConfigError):
        GeneratorConfig.from_yaml(write(tmp_path, text))


def test_sample_config_survives_save_and_load(tmp_path):
    path = str(tmp_path / "sample.yml")
    sample = sample_config()
    sample.to_yaml(path)

    with open(path) as f:
        data = yaml.safe_load(f)
    assert data["modules"]["if_mib"]["lookups"] == [{"old_index": "ifIndex", "new_index": "ifDescr"}]

    loaded = GeneratorConfig.from_yaml(path)
    assert loaded.modules == sample.modules
    assert loaded.mibs.modules == ["IF-MIB"]


def test_unquoted_oid_rejected_with_hint(tmp_path):
    with pytest.raises(ConfigError, match="must be quoted"):
        GeneratorConfig.from_yaml(write(tmp_path, "modules:\n  m:\n    walk: [1.3.6, 1.10]\n"))


def test_integer_walk_target_accepted(tmp_path):
    config = GeneratorConfig.from_yaml(write(tmp_path, "modules:\n  m:\n    walk: [1, '1.10']\n"))
    assert config.modules["m"].walk == ["1", "1.10"]
