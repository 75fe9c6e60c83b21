"""Noise reduction for raw flow candidates.

A fixed pipeline of pure filters, each taking and returning a new list:

    exact-path dedup → subset removal → circularity removal → generic-content filter

Running :func:`reduce_noise` on its own output returns the same flows.
"""

from __future__ import annotations

import logging
from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, PageType

logger = logging.getLogger(__name__)

# Share of ``content`` pages at or above which a flow is rejected.
SHORT_FLOW_CONTENT_LIMIT = 0.9
LONG_FLOW_CONTENT_LIMIT = 0.7


def remove_duplicate_flows(flows: Sequence[FlowCandidate]) -> list[FlowCandidate]:
    """Keep the first flow for each distinct path signature."""
    seen: set[str] = set()
    unique: list[FlowCandidate] = []
    for flow in flows:
        if flow.signature not in seen:
            seen.add(flow.signature)
            unique.append(flow)
    return unique


def _is_strict_prefix(shorter: tuple[str, ...], longer: tuple[str, ...]) -> bool:
    return len(shorter) < len(longer) and longer[: len(shorter)] == shorter


def remove_subset_flows(flows: Sequence[FlowCandidate]) -> list[FlowCandidate]:
    """Drop flows whose path is a strict prefix of another flow's path.

    Example: ``[A, B]`` is removed when ``[A, B, C]`` is present.
    """
    return [
        flow
        for flow in flows
        if not any(
            other is not flow and _is_strict_prefix(flow.path, other.path)
            for other in flows
        )
    ]


def remove_circular_flows(flows: Sequence[FlowCandidate]) -> list[FlowCandidate]:
    """Drop flows that visit the same URL twice."""
    return [flow for flow in flows if len(set(flow.path)) == len(flow.path)]


def content_ratio(flow: FlowCandidate, graph: FlowGraph) -> float:
    """Fraction of the flow's pages classified as ``content``."""
    types = [graph.page_type(url) for url in flow.path]
    return types.count(PageType.CONTENT) / len(types)


def remove_generic_flows(flows: Sequence[FlowCandidate], graph: FlowGraph) -> list[FlowCandidate]:
    """Drop flows dominated by generic ``content`` pages.

    Two-step flows are judged leniently: hub-and-spoke patterns often end on
    a thematic page that is still classified as plain content.
    """
    kept: list[FlowCandidate] = []
    for flow in flows:
        limit = SHORT_FLOW_CONTENT_LIMIT if len(flow.path) <= 2 else LONG_FLOW_CONTENT_LIMIT
        if content_ratio(flow, graph) < limit:
            kept.append(flow)
    return kept


def reduce_noise(flows: Sequence[FlowCandidate], graph: FlowGraph) -> list[FlowCandidate]:
    """Apply every filter in order and return the surviving flows."""
    result = remove_duplicate_flows(flows)
    after_dedup = len(result)
    result = remove_subset_flows(result)
    after_subset = len(result)
    result = remove_circular_flows(result)
    after_circular = len(result)
    result = remove_generic_flows(result, graph)

    logger.debug(
        "[NOISE] %s → dedup %s → subset %s → circular %s → generic %s",
        len(flows), after_dedup, after_subset, after_circular, len(result),
    )
    return result
