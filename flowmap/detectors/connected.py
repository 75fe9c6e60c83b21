"""Connected-path scanner: paths linking two pages of the same type.

Supplementary detector.  Pages that take part in navigation (linked to, or
linking out to more than one page) are grouped by type; for every group
with more than one member a bounded breadth-first search from each member
reports any path that ends in a direct link to another member.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType, LinkClass, PageType

MAX_PATH_LENGTH = 5
CONNECTED_CONFIDENCE = 0.7


def _group_by_type(graph: FlowGraph) -> dict[PageType, list[str]]:
    groups: dict[PageType, list[str]] = {}
    for node in graph:
        if node.in_degree > 0 or node.out_degree > 1:
            groups.setdefault(node.page.page_type, []).append(node.page.url)
    return groups


def find_connected_paths(
    graph: FlowGraph,
    urls: Sequence[str],
    max_path_length: int = MAX_PATH_LENGTH,
) -> list[tuple[str, ...]]:
    """Return every BFS path from a member of *urls* that links directly to another member."""
    paths: list[tuple[str, ...]] = []
    for start in urls:
        visited = {start}
        queue: deque[tuple[str, tuple[str, ...]]] = deque([(start, (start,))])

        while queue:
            url, path = queue.popleft()
            node = graph.get(url)
            if node is None:
                continue

            if len(path) < max_path_length:
                for target in urls:
                    if target != url and node.has_edge_to(target, LinkClass.CONTEXTUAL):
                        paths.append(path + (target,))

                for edge in node.contextual_edges:
                    if edge.target not in visited:
                        visited.add(edge.target)
                        queue.append((edge.target, path + (edge.target,)))
    return paths


def detect_connected_flows(graph: FlowGraph, entry_points: Sequence[str]) -> list[FlowCandidate]:
    # Entry points are not used: the scan covers every same-typed group.
    flows: list[FlowCandidate] = []
    for page_type, urls in _group_by_type(graph).items():
        if len(urls) < 2:
            continue
        for path in find_connected_paths(graph, urls):
            flows.append(
                FlowCandidate(
                    flow_type=FlowType.CONNECTED,
                    name=f"Connected {page_type.value} Flow",
                    path=path,
                    confidence=CONNECTED_CONFIDENCE,
                )
            )
    return flows
