"""Depth-first tree walking with a pluggable visitor.

This package provides the walker, the four-callback visitor contract,
and the recursive deletion visitor built on top of it.
"""

from pathwalk.walker.deleter import RecursiveDeleter, delete_tree
from pathwalk.walker.models import FailureKind, VisitFailure, VisitOutcome, WalkResult
from pathwalk.walker.visitor import CallbackVisitor, PathVisitor, SimpleVisitor
from pathwalk.walker.walker import MAX_DEPTH, TreeWalker, find_files, walk

__all__ = [
    "MAX_DEPTH",
    "CallbackVisitor",
    "FailureKind",
    "PathVisitor",
    "RecursiveDeleter",
    "SimpleVisitor",
    "TreeWalker",
    "VisitFailure",
    "VisitOutcome",
    "WalkResult",
    "delete_tree",
    "find_files",
    "walk",
]
