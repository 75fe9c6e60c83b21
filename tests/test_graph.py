"""Tests for the graph model and entry point selection.

Graphs are built in memory from hand-written pages and links; nothing here
touches the network.
"""

from __future__ import annotations

from flowmap.graph.builder import build_graph, build_graph_from_pages
from flowmap.graph.entry_points import select_entry_points
from flowmap.graph.models import ClassifiedPage, LinkClass, LinkEdge, PageNode, PageType

SITE = "https://shop.test"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _page(path: str, page_type: PageType = PageType.CONTENT, depth: int = 1, title: str = "") -> PageNode:
    return PageNode(url=f"{SITE}{path}", page_type=page_type, title=title, depth=depth)


def _link(src: str, tgt: str, text: str = "", link_class: LinkClass = LinkClass.CONTEXTUAL) -> LinkEdge:
    return LinkEdge(source=f"{SITE}{src}", target=f"{SITE}{tgt}", text=text, link_class=link_class)


# ---------------------------------------------------------------------------
# build_graph
# ---------------------------------------------------------------------------

class TestBuildGraph:
    def test_nodes_are_keyed_by_url(self) -> None:
        graph = build_graph([_page("/", PageType.HOME, 0), _page("/about", PageType.ABOUT)], [])
        assert len(graph) == 2
        assert f"{SITE}/about" in graph
        assert graph.page(f"{SITE}/about").page_type is PageType.ABOUT
        assert graph.page_type(f"{SITE}/about") is PageType.ABOUT

    def test_unknown_url_has_no_type(self) -> None:
        graph = build_graph([_page("/")], [])
        assert graph.page_type(f"{SITE}/missing") is None
        assert graph.get(f"{SITE}/missing") is None

    def test_edges_to_unknown_targets_are_dropped(self) -> None:
        graph = build_graph(
            [_page("/"), _page("/a")],
            [_link("/", "/a"), _link("/", "/external"), _link("/ghost", "/a")],
        )
        home = graph.get(f"{SITE}/")
        assert [e.target for e in home.edges] == [f"{SITE}/a"]
        assert home.out_degree == 1
        assert graph.get(f"{SITE}/a").in_degree == 1

    def test_duplicate_pairs_collapse_with_text_union(self) -> None:
        graph = build_graph(
            [_page("/"), _page("/shop")],
            [_link("/", "/shop", "Shop"), _link("/", "/shop", "Products"), _link("/", "/shop", "Shop")],
        )
        home = graph.get(f"{SITE}/")
        assert len(home.edges) == 1
        edge = home.edges[0]
        assert edge.text == "Shop"
        assert edge.texts == ("Shop", "Products")
        assert home.out_degree == 1
        assert graph.get(f"{SITE}/shop").in_degree == 1

    def test_collapsed_edge_is_contextual_if_any_occurrence_is(self) -> None:
        graph = build_graph(
            [_page("/"), _page("/shop")],
            [
                _link("/", "/shop", "", LinkClass.GLOBAL),
                _link("/", "/shop", "Browse the shop", LinkClass.CONTEXTUAL),
            ],
        )
        edge = graph.get(f"{SITE}/").edges[0]
        assert edge.link_class is LinkClass.CONTEXTUAL
        assert edge.text == "Browse the shop"

    def test_self_loops_are_dropped(self) -> None:
        graph = build_graph([_page("/")], [_link("/", "/")])
        assert graph.get(f"{SITE}/").edges == []
        assert graph.edge_count == 0

    def test_fragments_are_stripped(self) -> None:
        graph = build_graph(
            [_page("/"), _page("/faq")],
            [_link("/", "/faq#shipping")],
        )
        assert graph.get(f"{SITE}/").has_edge_to(f"{SITE}/faq")

    def test_duplicate_pages_keep_first(self) -> None:
        graph = build_graph(
            [_page("/a", PageType.SUPPORT), _page("/a", PageType.CONTACT)],
            [],
        )
        assert len(graph) == 1
        assert graph.page(f"{SITE}/a").page_type is PageType.SUPPORT

    def test_edges_partitioned_by_class_in_insertion_order(self) -> None:
        graph = build_graph(
            [_page("/"), _page("/a"), _page("/b"), _page("/c")],
            [
                _link("/", "/b"),
                _link("/", "/c", link_class=LinkClass.GLOBAL),
                _link("/", "/a"),
            ],
        )
        home = graph.get(f"{SITE}/")
        assert [e.target for e in home.edges] == [f"{SITE}/b", f"{SITE}/c", f"{SITE}/a"]
        assert [e.target for e in home.contextual_edges] == [f"{SITE}/b", f"{SITE}/a"]
        assert [e.target for e in home.global_edges] == [f"{SITE}/c"]

    def test_empty_input_gives_empty_graph(self) -> None:
        graph = build_graph([], [])
        assert len(graph) == 0
        assert graph.urls == []


class TestBuildGraphFromPages:
    def test_contextual_links_come_before_global(self) -> None:
        home = ClassifiedPage(
            node=_page("/", PageType.HOME, 0),
            contextual_links=(_link("/", "/a"),),
            global_links=(_link("/", "/login", "Sign in", LinkClass.GLOBAL),),
        )
        pages = [home, ClassifiedPage(node=_page("/a")), ClassifiedPage(node=_page("/login", PageType.LOGIN))]
        graph = build_graph_from_pages(pages)
        edges = graph.get(f"{SITE}/").edges
        assert [e.target for e in edges] == [f"{SITE}/a", f"{SITE}/login"]
        assert edges[1].link_class is LinkClass.GLOBAL


# ---------------------------------------------------------------------------
# select_entry_points
# ---------------------------------------------------------------------------

class TestSelectEntryPoints:
    def test_union_of_rules_in_order(self) -> None:
        graph = build_graph(
            [
                _page("/landing", PageType.CONTENT, depth=0),
                _page("/home", PageType.HOME, depth=2),
                _page("/blog/", PageType.CONTENT, depth=1),
                _page("/deep/", PageType.CONTENT, depth=2),
                _page("/about", PageType.ABOUT, depth=1),
            ],
            [],
        )
        entries = select_entry_points(graph, f"{SITE}/start")
        assert entries == [
            f"{SITE}/start",
            f"{SITE}/landing",
            f"{SITE}/home",
            f"{SITE}/blog/",
        ]

    def test_start_url_is_deduplicated(self) -> None:
        graph = build_graph([_page("/", PageType.HOME, 0)], [])
        assert select_entry_points(graph, f"{SITE}/") == [f"{SITE}/"]

    def test_start_url_fragment_is_stripped(self) -> None:
        graph = build_graph([_page("/", PageType.HOME, 0)], [])
        assert select_entry_points(graph, f"{SITE}/#top") == [f"{SITE}/"]

    def test_no_start_url_and_no_candidates(self) -> None:
        graph = build_graph([_page("/a", depth=3)], [])
        assert select_entry_points(graph) == []

    def test_start_url_only_when_graph_empty(self) -> None:
        graph = build_graph([], [])
        assert select_entry_points(graph, f"{SITE}/") == [f"{SITE}/"]
