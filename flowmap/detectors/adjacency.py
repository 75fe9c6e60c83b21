"""Direct-adjacency matcher for authentication flows (entry → login/signup)."""

from __future__ import annotations

from typing import Sequence

from flowmap.graph.builder import FlowGraph
from flowmap.graph.models import FlowCandidate, FlowType, PageType

_AUTH_TARGETS = (
    (PageType.LOGIN, "Login Flow"),
    (PageType.SIGNUP, "Signup Flow"),
)


def detect_auth_flows(graph: FlowGraph, entry_points: Sequence[str]) -> list[FlowCandidate]:
    """Emit ``[entry, page]`` for every login/signup page the entry links to directly.

    Any link class counts here, since sign-in links usually live in the header.
    """
    flows: list[FlowCandidate] = []
    for entry in entry_points:
        node = graph.get(entry)
        if node is None:
            continue
        for page_type, name in _AUTH_TARGETS:
            for page in graph.pages_of_type(page_type):
                if node.has_edge_to(page.url):
                    flows.append(
                        FlowCandidate(
                            flow_type=FlowType.AUTHENTICATION,
                            name=name,
                            path=(entry, page.url),
                        )
                    )
    return flows
