"""Typed navigation graph built once per extraction run.

The graph is keyed by canonical URL (fragment stripped) and keeps, per node,
its :class:`~flowmap.graph.models.PageNode`, its outgoing edges in insertion
order (also partitioned by link class) and in/out degree counts.  Edge order
is what makes the "first match" detectors reproducible, so it is never
re-sorted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence
from urllib.parse import urldefrag

from flowmap.graph.models import ClassifiedPage, LinkClass, LinkEdge, PageNode, PageType

logger = logging.getLogger(__name__)


def canonical_url(url: str) -> str:
    """Return *url* without its fragment."""
    return urldefrag(url.strip())[0]


@dataclass
class GraphNode:
    page: PageNode
    edges: list[LinkEdge] = field(default_factory=list)
    in_degree: int = 0
    out_degree: int = 0

    @property
    def contextual_edges(self) -> list[LinkEdge]:
        return [e for e in self.edges if e.link_class is LinkClass.CONTEXTUAL]

    @property
    def global_edges(self) -> list[LinkEdge]:
        return [e for e in self.edges if e.link_class is LinkClass.GLOBAL]

    def has_edge_to(self, url: str, link_class: LinkClass | None = None) -> bool:
        return any(
            e.target == url and (link_class is None or e.link_class is link_class)
            for e in self.edges
        )


class FlowGraph:
    """Node-keyed adjacency structure with O(1) lookup by URL."""

    def __init__(self, nodes: dict[str, GraphNode] | None = None) -> None:
        self._nodes: dict[str, GraphNode] = nodes or {}

    def __contains__(self, url: object) -> bool:
        return url in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    def get(self, url: str) -> GraphNode | None:
        return self._nodes.get(url)

    def page(self, url: str) -> PageNode | None:
        node = self._nodes.get(url)
        return node.page if node else None

    def page_type(self, url: str) -> PageType | None:
        """Return the page type of *url*, or ``None`` when it is not in the graph."""
        node = self._nodes.get(url)
        return node.page.page_type if node else None

    def pages_of_type(self, *page_types: PageType) -> list[PageNode]:
        return [n.page for n in self._nodes.values() if n.page.page_type in page_types]

    @property
    def urls(self) -> list[str]:
        return list(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(n.edges) for n in self._nodes.values())


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def build_graph(nodes: Iterable[PageNode], edges: Iterable[LinkEdge]) -> FlowGraph:
    """Build a :class:`FlowGraph` from page nodes and link edges.

    - Duplicate page URLs keep the first node seen.
    - Edges whose source or target is not a known node are dropped silently.
    - Self-loops are dropped.
    - Duplicate ``(source, target)`` pairs collapse into one edge carrying the
      ordered union of observed texts; the collapsed edge is contextual if any
      occurrence was.
    """
    graph_nodes: dict[str, GraphNode] = {}
    for page in nodes:
        url = canonical_url(page.url)
        if url in graph_nodes:
            logger.debug("[GRAPH] Ignoring duplicate page %s", url)
            continue
        if url != page.url:
            page = PageNode(
                url=url,
                page_type=page.page_type,
                title=page.title,
                depth=page.depth,
                metadata=page.metadata,
            )
        graph_nodes[url] = GraphNode(page=page)

    # Position of each collapsed edge inside its source node's edge list.
    index: dict[tuple[str, str], int] = {}
    dropped = 0

    for edge in edges:
        source = canonical_url(edge.source)
        target = canonical_url(edge.target)
        src_node = graph_nodes.get(source)
        if src_node is None or target not in graph_nodes or source == target:
            dropped += 1
            continue

        key = (source, target)
        text = (edge.text or "").strip()
        if key not in index:
            index[key] = len(src_node.edges)
            src_node.edges.append(
                LinkEdge(
                    source=source,
                    target=target,
                    text=text,
                    link_class=edge.link_class,
                    texts=(text,) if text else (),
                )
            )
            src_node.out_degree += 1
            graph_nodes[target].in_degree += 1
            continue

        pos = index[key]
        existing = src_node.edges[pos]
        texts = existing.texts
        if text and text not in texts:
            texts = (*texts, text)
        link_class = existing.link_class
        if edge.link_class is LinkClass.CONTEXTUAL:
            link_class = LinkClass.CONTEXTUAL
        src_node.edges[pos] = LinkEdge(
            source=source,
            target=target,
            text=existing.text or text,
            link_class=link_class,
            texts=texts,
        )

    graph = FlowGraph(graph_nodes)
    logger.debug(
        "[GRAPH] Built graph: %s nodes, %s edges (%s links dropped)",
        len(graph), graph.edge_count, dropped,
    )
    return graph


def build_graph_from_pages(pages: Sequence[ClassifiedPage]) -> FlowGraph:
    """Build a graph from classified pages (contextual links before global ones)."""
    nodes = [p.node for p in pages]
    edges = [edge for p in pages for edge in p.edges()]
    return build_graph(nodes, edges)
