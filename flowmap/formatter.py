"""Formats ranked flows into visualisation-friendly JSON.

Output structure:
- ``nodes``: pages that appear in at least one flow
- ``edges``: directed page-to-page steps, tagged with the flow types using them
- ``flows``: ranked flows with numbered steps

The shape is meant for graph front-ends (React Flow, D3, ...).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence
from urllib.parse import urlparse

from flowmap.graph.models import ClassifiedPage, FlowCandidate, PageNode

_TYPE_LABELS = {
    "home": "Home Page",
    "login": "Login",
    "signup": "Sign Up",
    "checkout": "Checkout",
    "product-list": "Product Listing",
    "product-detail": "Product Details",
    "contact": "Contact",
    "support": "Support",
    "about": "About",
    "content": "Content Page",
}

_MAX_FLOW_ID_LENGTH = 100


def node_id(url: str) -> str:
    """Return a short id from the URL path; ``home`` for the site root."""
    try:
        path = urlparse(url).path.strip("/")
    except ValueError:
        return "unknown"
    return path or "home"


def node_label(page: PageNode) -> str:
    """Page-type label, replaced by the title when it is short and adds information."""
    label = _TYPE_LABELS.get(page.page_type.value, page.page_type.value)
    if page.title and len(page.title) < 30 and label not in page.title:
        label = page.title
    return label


def flow_id(flow: FlowCandidate) -> str:
    signature = "-".join(node_id(url) for url in flow.path)
    return f"{flow.flow_type.value}-{signature}"[:_MAX_FLOW_ID_LENGTH]


def _build_nodes(flows: Sequence[FlowCandidate], pages: Dict[str, PageNode]) -> List[Dict[str, Any]]:
    nodes: Dict[str, Dict[str, Any]] = {}
    for flow in flows:
        for url in flow.path:
            page = pages.get(url)
            if url in nodes or page is None:
                continue
            nodes[url] = {
                "id": node_id(url),
                "url": url,
                "label": node_label(page),
                "pageType": page.page_type.value,
                "title": page.title,
                "metadata": {
                    "hasForm": page.metadata.has_form,
                    "hasLogin": page.metadata.has_login,
                    "hasCheckout": page.metadata.has_checkout,
                },
            }
    return list(nodes.values())


def _build_edges(flows: Sequence[FlowCandidate]) -> List[Dict[str, Any]]:
    edges: Dict[str, Dict[str, Any]] = {}
    for flow in flows:
        for source, target in zip(flow.path, flow.path[1:]):
            edge_id = f"{node_id(source)}->{node_id(target)}"
            edge = edges.get(edge_id)
            if edge is None:
                edges[edge_id] = {
                    "id": edge_id,
                    "source": node_id(source),
                    "target": node_id(target),
                    "sourceUrl": source,
                    "targetUrl": target,
                    "flowTypes": [flow.flow_type.value],
                }
            elif flow.flow_type.value not in edge["flowTypes"]:
                edge["flowTypes"].append(flow.flow_type.value)
    return list(edges.values())


def _format_flow(flow: FlowCandidate, pages: Dict[str, PageNode]) -> Dict[str, Any]:
    steps = []
    for index, url in enumerate(flow.path, start=1):
        page = pages.get(url)
        steps.append({
            "stepNumber": index,
            "nodeId": node_id(url),
            "url": url,
            "label": node_label(page) if page else "Unknown Page",
            "pageType": page.page_type.value if page else "unknown",
            "title": page.title if page else "Unknown",
        })
    return {
        "id": flow_id(flow),
        "type": flow.flow_type.value,
        "name": flow.name,
        "score": flow.score,
        "steps": steps,
        "stepCount": len(steps),
    }


def format_output(
    flows: Sequence[FlowCandidate],
    pages: Sequence[ClassifiedPage],
    start_url: str,
) -> Dict[str, Any]:
    """Return the JSON-ready view-model for *flows*."""
    page_map = {p.node.url: p.node for p in pages}
    return {
        "metadata": {
            "startUrl": start_url,
            "totalPages": len(pages),
            "totalFlows": len(flows),
            "generatedAt": datetime.now(timezone.utc).isoformat(),
        },
        "nodes": _build_nodes(flows, page_map),
        "edges": _build_edges(flows),
        "flows": [_format_flow(flow, page_map) for flow in flows],
    }
