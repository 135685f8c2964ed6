"""MIB tree loaders: pysnmp compiled modules and tree documents."""

from .loader import build_mib_builder, load_mib_tree
from .tree_file import load_tree_file, dump_tree_file

__all__ = [
    "build_mib_builder",
    "load_mib_tree",
    "load_tree_file",
    "dump_tree_file",
]
