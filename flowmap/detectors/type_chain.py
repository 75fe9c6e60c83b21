"""Type-chain matcher: find a path that visits page types in a given order.

Used for the e-commerce (product list → product detail → checkout) and
support (support → contact) patterns.  The search is a depth-first walk over
contextual edges that returns the *first* complete match for each entry
point; it does not look for shorter or better alternatives.
"""

from __future__ import annotations

from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType, PageType

ECOMMERCE_SEQUENCE = (PageType.PRODUCT_LIST, PageType.PRODUCT_DETAIL, PageType.CHECKOUT)
SUPPORT_SEQUENCE = (PageType.SUPPORT, PageType.CONTACT)


def find_type_chain(
    graph: FlowGraph,
    start_url: str,
    target_types: Sequence[PageType],
) -> list[str] | None:
    """Return the first path from *start_url* that matches *target_types* in order.

    Each stack entry holds ``(url, remaining_types, path_so_far)``.  A node
    already on ``path_so_far`` is never pushed again, which keeps sibling
    branches independent without copying a visited set per call.  Children
    are pushed in reverse so they are explored in edge insertion order.
    """
    if start_url not in graph or not target_types:
        return None

    stack: list[tuple[str, tuple[PageType, ...], tuple[str, ...]]] = [
        (start_url, tuple(target_types), (start_url,))
    ]
    while stack:
        url, remaining, path = stack.pop()
        node = graph.get(url)
        if node is None:
            continue

        if remaining and node.page.page_type is remaining[0]:
            remaining = remaining[1:]
            if not remaining:
                return list(path)

        children = [e.target for e in node.contextual_edges if e.target not in path]
        for target in reversed(children):
            stack.append((target, remaining, path + (target,)))

    return None


def _detect(
    graph: FlowGraph,
    entry_points: Sequence[str],
    sequence: Sequence[PageType],
    flow_type: FlowType,
    name: str,
) -> list[FlowCandidate]:
    flows: list[FlowCandidate] = []
    for entry in entry_points:
        path = find_type_chain(graph, entry, sequence)
        if path and len(path) >= 2:
            flows.append(FlowCandidate(flow_type=flow_type, name=name, path=path))
    return flows


def detect_ecommerce_flows(graph: FlowGraph, entry_points: Sequence[str]) -> list[FlowCandidate]:
    return _detect(graph, entry_points, ECOMMERCE_SEQUENCE, FlowType.ECOMMERCE, "Product Purchase Flow")


def detect_support_flows(graph: FlowGraph, entry_points: Sequence[str]) -> list[FlowCandidate]:
    return _detect(graph, entry_points, SUPPORT_SEQUENCE, FlowType.SUPPORT, "Support Flow")
