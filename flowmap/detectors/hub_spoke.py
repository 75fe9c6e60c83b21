"""Hub-and-spoke matcher: entry page → major section (→ one more hop)."""

from __future__ import annotations

from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType, LinkEdge, PageNode, PageType

TITLE_MIN_LENGTH = 10
LINK_TEXT_MIN_LENGTH = 5


def is_major_section(page: PageNode, edge: LinkEdge) -> bool:
    """A spoke is a major section if it is typed, well titled, or well labelled."""
    return (
        page.page_type is not PageType.CONTENT
        or len(page.title) > TITLE_MIN_LENGTH
        or len(edge.text) > LINK_TEXT_MIN_LENGTH
    )


def detect_navigation_flows(graph: FlowGraph, entry_points: Sequence[str]) -> list[FlowCandidate]:
    """Emit one navigation flow per major section linked from each entry point.

    Both contextual and global links are inspected.  When the spoke has
    outgoing edges the flow is extended by its first edge, in insertion
    order; no ranking is attempted among the alternatives.
    """
    flows: list[FlowCandidate] = []
    for entry in entry_points:
        hub = graph.get(entry)
        if hub is None:
            continue

        for edge in hub.edges:
            spoke = graph.get(edge.target)
            if spoke is None or not is_major_section(spoke.page, edge):
                continue

            path = [entry, edge.target]
            if spoke.edges:
                path.append(spoke.edges[0].target)

            flows.append(
                FlowCandidate(
                    flow_type=FlowType.NAVIGATION,
                    name=f"{edge.text or spoke.page.page_type.value} Flow",
                    path=path,
                )
            )
    return flows
