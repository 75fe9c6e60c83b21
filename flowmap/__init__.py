"""flowmap — turns a crawled site into ranked, goal-oriented navigation flows."""

from flowmap.engine import extract_flows
from flowmap.graph.models import ClassifiedPage, FlowCandidate, FlowType, PageType

__all__ = ["extract_flows", "ClassifiedPage", "FlowCandidate", "FlowType", "PageType"]
