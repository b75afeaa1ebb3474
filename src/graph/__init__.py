"""Dependency graph model and algorithms."""

from graph.algos import (
    canonical_cycle,
    find_cycles,
    find_strongly_connected,
    shortest_cycle,
)
from graph.model import DependencyEdge, DependencyModel, Module

__all__ = [
    "DependencyEdge",
    "DependencyModel",
    "Module",
    "canonical_cycle",
    "find_cycles",
    "find_strongly_connected",
    "shortest_cycle",
]
