"""Utilities for rendering ranked flows in the CLI."""

from __future__ import annotations

from typing import Any, Dict, List


def _get_icon(page_type: str) -> str:
    icons = {
        "home": "🏠",
        "login": "🔑",
        "signup": "📝",
        "checkout": "🛒",
        "product-list": "🗂️",
        "product-detail": "🏷️",
        "contact": "✉️",
        "support": "🛟",
        "about": "ℹ️",
        "content": "📄",
    }
    return icons.get(page_type, "📦")


def render_flow_tree(output: Dict[str, Any]) -> str:
    """Render formatted flows as an ASCII tree, one branch per flow.

    Args:
        output: The dict produced by :func:`flowmap.formatter.format_output`.

    Returns:
        String representation of the tree.
    """
    flows: List[Dict[str, Any]] = output.get("flows", [])
    start_url = output.get("metadata", {}).get("startUrl", "")
    lines = [f"🌐 {start_url}  ({len(flows)} flow(s))"]

    for i, flow in enumerate(flows):
        is_last_flow = i == len(flows) - 1
        connector = "└── " if is_last_flow else "├── "
        lines.append(f"{connector}[{flow['score']}] {flow['name']}  ({flow['type']})")

        child_prefix = "    " if is_last_flow else "│   "
        steps = flow.get("steps", [])
        for j, step in enumerate(steps):
            step_connector = "└── " if j == len(steps) - 1 else "├── "
            icon = _get_icon(step.get("pageType", ""))
            lines.append(f"{child_prefix}{step_connector}{step['stepNumber']}. {icon} {step['label']}  {step['url']}")

    return "\n".join(lines)


def render_flow_list(output: Dict[str, Any]) -> str:
    """Render formatted flows as a flat list: ``score  type  name: a → b → c``."""
    lines = []
    for flow in output.get("flows", []):
        path = " → ".join(step["nodeId"] for step in flow.get("steps", []))
        lines.append(f"  {flow['score']:>3}  [{flow['type']}]  {flow['name']}: {path}")
    return "\n".join(lines)
