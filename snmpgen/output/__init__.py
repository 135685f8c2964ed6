"""Serialization of generated exporter configuration."""

from .writer import render_config, dump_config, write_config

__all__ = ["render_config", "dump_config", "write_config"]
