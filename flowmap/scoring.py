"""Flow scoring and ranking.

Score components:

- length:    25 for two-step flows, otherwise ``min(len * 10, 50)``
- diversity: 5 per distinct page type on the path
- goal:      20 when the path reaches checkout, contact, login or signup
- type:      priority of the flow type (ecommerce > authentication > ...)
- text:      flat 5 for any flow with more than one page
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType, PageType

GOAL_PAGE_TYPES = frozenset(
    (PageType.CHECKOUT, PageType.CONTACT, PageType.LOGIN, PageType.SIGNUP)
)

TYPE_PRIORITY: dict[FlowType, int] = {
    FlowType.ECOMMERCE: 30,
    FlowType.AUTHENTICATION: 25,
    FlowType.SUPPORT: 20,
    FlowType.NAVIGATION: 15,
    FlowType.CONTENT: 10,
    FlowType.CONNECTED: 0,
}

GOAL_BONUS = 20
TEXT_BONUS = 5


def length_score(path_length: int) -> int:
    if path_length == 2:
        return 25
    return min(path_length * 10, 50)


def score_flow(flow: FlowCandidate, graph: FlowGraph) -> int:
    """Return the score of *flow*; a pure function of its type and page types."""
    page_types = [graph.page_type(url) for url in flow.path]

    score = length_score(len(flow.path))
    score += len(set(page_types)) * 5
    if any(t in GOAL_PAGE_TYPES for t in page_types):
        score += GOAL_BONUS
    score += TYPE_PRIORITY.get(flow.flow_type, 0)
    if len(flow.path) > 1:
        score += TEXT_BONUS
    return score


def rank_flows(flows: Sequence[FlowCandidate], graph: FlowGraph) -> list[FlowCandidate]:
    """Score every flow and sort by score, highest first.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    scored = [replace(flow, score=score_flow(flow, graph)) for flow in flows]
    return sorted(scored, key=lambda f: f.score, reverse=True)
