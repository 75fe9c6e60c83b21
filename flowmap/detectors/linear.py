"""Linear-chain matcher: unbranched runs of contextual links."""

from __future__ import annotations

from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType

MIN_LINEAR_LENGTH = 3


def walk_linear_chain(graph: FlowGraph, start_url: str) -> list[str]:
    """Follow single outgoing contextual edges from *start_url*.

    The walk stops at the first node whose contextual out-degree is not
    exactly one, or when the next node is already on the path.
    """
    if start_url not in graph:
        return []

    path = [start_url]
    seen = {start_url}
    node = graph.get(start_url)
    while node is not None:
        edges = node.contextual_edges
        if len(edges) != 1:
            break
        target = edges[0].target
        if target in seen:
            break
        path.append(target)
        seen.add(target)
        node = graph.get(target)
    return path


def detect_content_flows(
    graph: FlowGraph,
    entry_points: Sequence[str],
    min_length: int = MIN_LINEAR_LENGTH,
) -> list[FlowCandidate]:
    flows: list[FlowCandidate] = []
    for entry in entry_points:
        path = walk_linear_chain(graph, entry)
        if len(path) >= min_length:
            flows.append(
                FlowCandidate(
                    flow_type=FlowType.CONTENT,
                    name="Content Exploration Flow",
                    path=path,
                )
            )
    return flows
