"""Tests for the exporter configuration writer."""

import yaml

from snmpgen.core.models import Index, IndexLookup, Metric, Module
from snmpgen.output import dump_config, render_config, write_config


def sample_modules():
    return {
        "if_mib": Module(
            walk=["1.3.6.1.2.1.2.2.1.2", "1.3.6.1.2.1.31.1.1"],
            metrics=[
                Metric(
                    name="ifHCInOctets",
                    oid="1.3.6.1.2.1.31.1.1.1.6",
                    type="counter",
                    help="The total number of octets received - 1.3.6.1.2.1.31.1.1.1.6",
                    indexes=[Index(labelname="ifDescr", type="gauge")],
                    lookups=[IndexLookup(labels=["ifDescr"], labelname="ifDescr",
                                         type="OctetString", oid="1.3.6.1.2.1.2.2.1.2")],
                ),
            ],
            version=2,
            auth={"community": "public"},
        ),
        "scalar": Module(
            walk=["1"],
            metrics=[
                Metric(name="root", oid="1", type="gauge", help=" - 1",
                       regex_extracts={"Temp": [{"regex": "(.*)", "value": "$1"}]}),
            ],
        ),
    }


def test_render_config():
    data = render_config(sample_modules())
    assert list(data) == ["if_mib", "scalar"]

    if_mib = data["if_mib"]
    assert list(if_mib) == ["walk", "version", "auth", "metrics"]
    assert if_mib["metrics"][0] == {
        "name": "ifHCInOctets",
        "oid": "1.3.6.1.2.1.31.1.1.1.6",
        "type": "counter",
        "help": "The total number of octets received - 1.3.6.1.2.1.31.1.1.1.6",
        "indexes": [{"labelname": "ifDescr", "type": "gauge"}],
        "lookups": [{
            "labels": ["ifDescr"],
            "labelname": "ifDescr",
            "oid": "1.3.6.1.2.1.2.2.1.2",
            "type": "OctetString",
        }],
    }

    scalar = data["scalar"]
    assert scalar == {
        "walk": ["1"],
        "metrics": [{
            "name": "root",
            "oid": "1",
            "type": "gauge",
            "help": " - 1",
            "regex_extracts": {"Temp": [{"regex": "(.*)", "value": "$1"}]},
        }],
    }


def test_dump_config_is_stable():
    first = dump_config(sample_modules())
    assert first == dump_config(sample_modules())
    assert yaml.safe_load(first) == render_config(sample_modules())


def test_write_config(tmp_path):
    path = tmp_path / "out" / "snmp.yml"
    write_config(sample_modules(), str(path))

    text = path.read_text()
    assert text.startswith("# Generated by snmpgen")
    assert yaml.safe_load(text) == render_config(sample_modules())
