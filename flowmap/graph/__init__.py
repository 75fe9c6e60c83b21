"""Graph package — models, graph construction and entry point selection.

Public re-exports so callers can write::

    from flowmap.graph import build_graph, select_entry_points
"""

from flowmap.graph.builder import FlowGraph, GraphNode, build_graph, build_graph_from_pages
from flowmap.graph.entry_points import select_entry_points
from flowmap.graph.models import (
    ClassifiedPage,
    FlowCandidate,
    FlowType,
    LinkClass,
    LinkEdge,
    PageMetadata,
    PageNode,
    PageType,
)

__all__ = [
    "FlowGraph",
    "GraphNode",
    "build_graph",
    "build_graph_from_pages",
    "select_entry_points",
    "ClassifiedPage",
    "FlowCandidate",
    "FlowType",
    "LinkClass",
    "LinkEdge",
    "PageMetadata",
    "PageNode",
    "PageType",
]
