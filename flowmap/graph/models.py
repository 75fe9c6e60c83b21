"""Dataclass models shared by every stage of flow extraction.

These are plain, immutable Python objects.  Stages never mutate an instance
they received; when a value has to change (e.g. a score) a new instance is
built with :func:`dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PageType(str, Enum):
    HOME = "home"
    LOGIN = "login"
    SIGNUP = "signup"
    CHECKOUT = "checkout"
    PRODUCT_LIST = "product-list"
    PRODUCT_DETAIL = "product-detail"
    CONTACT = "contact"
    SUPPORT = "support"
    ABOUT = "about"
    CONTENT = "content"


class LinkClass(str, Enum):
    CONTEXTUAL = "contextual"
    GLOBAL = "global"


class FlowType(str, Enum):
    ECOMMERCE = "ecommerce"
    AUTHENTICATION = "authentication"
    SUPPORT = "support"
    CONTENT = "content"
    NAVIGATION = "navigation"
    CONNECTED = "connected"


@dataclass(frozen=True)
class PageMetadata:
    """Structural flags detected on a page."""

    has_form: bool = False
    has_login: bool = False
    has_checkout: bool = False
    has_product_list: bool = False
    has_product_detail: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {
            "hasForm": self.has_form,
            "hasLogin": self.has_login,
            "hasCheckout": self.has_checkout,
            "hasProductList": self.has_product_list,
            "hasProductDetail": self.has_product_detail,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> PageMetadata:
        data = data or {}
        return cls(
            has_form=bool(data.get("hasForm", False)),
            has_login=bool(data.get("hasLogin", False)),
            has_checkout=bool(data.get("hasCheckout", False)),
            has_product_list=bool(data.get("hasProductList", False)),
            has_product_detail=bool(data.get("hasProductDetail", False)),
        )


@dataclass(frozen=True)
class PageNode:
    """One crawled, classified page."""

    url: str
    page_type: PageType
    title: str = ""
    depth: int = 0
    metadata: PageMetadata = field(default_factory=PageMetadata)


@dataclass(frozen=True)
class LinkEdge:
    """A directed navigation relationship between two pages.

    ``texts`` holds every anchor text observed for the ``(source, target)``
    pair once duplicates have been collapsed by the graph builder.
    """

    source: str
    target: str
    text: str = ""
    link_class: LinkClass = LinkClass.CONTEXTUAL
    texts: tuple[str, ...] = ()


@dataclass(frozen=True)
class FlowCandidate:
    """A flow proposed by a detector; ``score`` is set only by the scorer."""

    flow_type: FlowType
    name: str
    path: tuple[str, ...]
    score: int = 0
    confidence: float | None = None

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple.
        object.__setattr__(self, "path", tuple(self.path))
        if len(self.path) < 2:
            raise ValueError(f"A flow needs at least two pages, got {list(self.path)!r}")

    @property
    def signature(self) -> str:
        """Canonical string form of the path, used for exact-path dedup."""
        return "→".join(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.flow_type.value,
            "name": self.name,
            "path": list(self.path),
            "score": self.score,
        }


@dataclass(frozen=True)
class ClassifiedPage:
    """Input contract from the classification stage.

    One :class:`PageNode` plus its outbound links split by class.
    """

    node: PageNode
    contextual_links: tuple[LinkEdge, ...] = ()
    global_links: tuple[LinkEdge, ...] = ()

    @property
    def url(self) -> str:
        return self.node.url

    def edges(self) -> list[LinkEdge]:
        """Return all outbound links, contextual first, then global."""
        return [*self.contextual_links, *self.global_links]

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.node.url,
            "pageType": self.node.page_type.value,
            "title": self.node.title,
            "depth": self.node.depth,
            "metadata": self.node.metadata.to_dict(),
            "links": {
                "contextual": [{"href": link.target, "text": link.text} for link in self.contextual_links],
                "global": [{"href": link.target, "text": link.text} for link in self.global_links],
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassifiedPage:
        """Build a page from the camelCase JSON shape produced by :meth:`to_dict`.

        Unknown page types fall back to ``content`` and a missing or
        non-numeric depth to 0.
        """
        url = data["url"]
        try:
            page_type = PageType(data.get("pageType", PageType.CONTENT.value))
        except ValueError:
            page_type = PageType.CONTENT
        try:
            depth = int(data.get("depth") or 0)
        except (TypeError, ValueError):
            depth = 0

        node = PageNode(
            url=url,
            page_type=page_type,
            title=data.get("title") or "",
            depth=depth,
            metadata=PageMetadata.from_dict(data.get("metadata")),
        )
        links = data.get("links") or {}

        def _edges(raw: list[dict[str, Any]] | None, link_class: LinkClass) -> tuple[LinkEdge, ...]:
            return tuple(
                LinkEdge(
                    source=url,
                    target=item["href"],
                    text=item.get("text") or "",
                    link_class=link_class,
                )
                for item in raw or []
                if item and item.get("href")
            )

        return cls(
            node=node,
            contextual_links=_edges(links.get("contextual"), LinkClass.CONTEXTUAL),
            global_links=_edges(links.get("global"), LinkClass.GLOBAL),
        )
