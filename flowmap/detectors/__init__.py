"""Pattern detectors and the candidate aggregator.

Each detector is a pure function ``(graph, entry_points) -> [FlowCandidate]``.
:func:`collect_candidates` runs them in a fixed order and concatenates the
results unchanged; deduplication belongs to :mod:`flowmap.noise`.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from flowmap.detectors.adjacency import detect_auth_flows
from flowmap.detectors.connected import detect_connected_flows
from flowmap.detectors.hub_spoke import detect_navigation_flows
from flowmap.detectors.linear import detect_content_flows
from flowmap.detectors.type_chain import detect_ecommerce_flows, detect_support_flows
from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate

logger = logging.getLogger(__name__)

Detector = Callable[[FlowGraph, Sequence[str]], list[FlowCandidate]]

DETECTORS: tuple[Detector, ...] = (
    detect_ecommerce_flows,
    detect_auth_flows,
    detect_support_flows,
    detect_content_flows,
    detect_navigation_flows,
    detect_connected_flows,
)


def collect_candidates(
    graph: FlowGraph,
    entry_points: Sequence[str],
    detectors: Sequence[Detector] = DETECTORS,
) -> list[FlowCandidate]:
    """Run every detector and concatenate their outputs in detector order."""
    candidates: list[FlowCandidate] = []
    for detector in detectors:
        found = detector(graph, entry_points)
        logger.debug("[EXTRACT] %s: %s candidate(s)", detector.__name__, len(found))
        candidates.extend(found)
    return candidates


__all__ = [
    "DETECTORS",
    "collect_candidates",
    "detect_auth_flows",
    "detect_connected_flows",
    "detect_content_flows",
    "detect_ecommerce_flows",
    "detect_navigation_flows",
    "detect_support_flows",
]
