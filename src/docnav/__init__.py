"""Docnav - documentation navigation engine."""

from docnav.core.errors import ErrorKind, InvariantViolation, ValidationError
from docnav.core.index import FlatEntry, NavigationIndex, flatten
from docnav.core.loader import load, load_file
from docnav.core.navigator import Navigator
from docnav.core.store import NavigationStore
from docnav.core.tree import NavNode, NavTree, NodeKind, is_group, is_navigable

__all__ = [
    "ErrorKind",
    "FlatEntry",
    "InvariantViolation",
    "NavNode",
    "NavTree",
    "NavigationIndex",
    "NavigationStore",
    "Navigator",
    "NodeKind",
    "ValidationError",
    "flatten",
    "is_group",
    "is_navigable",
    "load",
    "load_file",
]
