"""Flow extraction engine.

``extract_flows`` is the single entry point of the core:

    classified pages → graph → entry points → detectors → noise reduction → ranking

It performs no I/O, reads no settings and keeps no state between calls, so
independent runs can execute concurrently as long as each receives its own
input.
"""

from __future__ import annotations

import logging
from typing import Sequence

from flowmap.detectors import collect_candidates
from flowmap.graph.builder import FlowGraph, build_graph_from_pages
from flowmap.graph.entry_points import select_entry_points
from flowmap.graph.models import ClassifiedPage, FlowCandidate
from flowmap.noise import reduce_noise
from flowmap.scoring import rank_flows

logger = logging.getLogger(__name__)


def extract_flows_from_graph(graph: FlowGraph, start_url: str | None = None) -> list[FlowCandidate]:
    """Run detection, noise reduction and ranking over an already built graph."""
    if not len(graph):
        return []

    entry_points = select_entry_points(graph, start_url)
    candidates = collect_candidates(graph, entry_points)
    logger.info(
        "[EXTRACT] %s raw flow(s) from %s entry point(s)", len(candidates), len(entry_points)
    )

    cleaned = reduce_noise(candidates, graph)
    logger.info("[EXTRACT] Cleaned to %s meaningful flow(s)", len(cleaned))
    return rank_flows(cleaned, graph)


def extract_flows(
    pages: Sequence[ClassifiedPage],
    start_url: str | None = None,
) -> list[FlowCandidate]:
    """Return the ranked flows for one snapshot of classified pages.

    An empty page set yields an empty list.
    """
    if not pages:
        return []
    graph = build_graph_from_pages(pages)
    return extract_flows_from_graph(graph, start_url)
