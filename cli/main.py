"""Flow Mapper CLI — entry-point for crawling sites and extracting user flows.

Usage:
    python cli/main.py --help

Commands:
    crawl    → crawl a live site and print its ranked flows
    extract  → run flow extraction on a JSON file of classified pages
    serve    → start the HTTP API
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from flowmap.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from typing import Any, Dict, Optional

import typer

from flowmap.config import settings
from flowmap.engine import extract_flows
from flowmap.exceptions import FlowMapError
from flowmap.formatter import format_output
from flowmap.graph.models import ClassifiedPage

from cli.rendering import render_flow_list, render_flow_tree

app = typer.Typer(
    name="flowmap",
    help="Turn a website into ranked, goal-oriented user flows.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _emit(output: Dict[str, Any], format: str, out_file: Optional[Path]) -> None:
    if out_file is not None:
        out_file.write_text(json.dumps(output, indent=2), encoding="utf-8")
        typer.echo(f"[flowmap] Wrote {output['metadata']['totalFlows']} flow(s) to {out_file}", err=True)

    if format == "json":
        typer.echo(json.dumps(output, indent=2))
    elif format == "list":
        typer.echo(render_flow_list(output) or "[flowmap] No flows found.")
    else:
        typer.echo(render_flow_tree(output))


# ---------------------------------------------------------------------------
# crawl
# ---------------------------------------------------------------------------
@app.command("crawl")
def crawl(
    url: str = typer.Option(..., help="Start URL to crawl."),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum link depth."),
    max_pages: Optional[int] = typer.Option(None, "--max-pages", help="Maximum pages to fetch."),
    format: str = typer.Option("tree", "--format", help="Output format: tree | list | json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write JSON to this file."),
) -> None:
    """Crawl a site and print its ranked user flows."""
    from flowmap.pipeline import map_site_flows

    typer.echo(f"[crawl] Mapping flows for {url!r} …", err=True)
    try:
        result = map_site_flows(url, max_depth=max_depth, max_pages=max_pages)
    except FlowMapError as exc:
        typer.echo(f"[crawl] ❌ {exc}", err=True)
        raise typer.Exit(code=1)

    _emit(result, format, output)


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------
@app.command("extract")
def extract(
    pages: Path = typer.Option(..., "--pages", exists=True, dir_okay=False, help="JSON list of classified pages."),
    start_url: Optional[str] = typer.Option(None, "--start-url", help="Start URL used as an entry point."),
    format: str = typer.Option("tree", "--format", help="Output format: tree | list | json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write JSON to this file."),
) -> None:
    """Extract ranked flows from already classified pages (no network access)."""
    try:
        raw = json.loads(pages.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[extract] ❌ Invalid JSON in {pages}: {exc}", err=True)
        raise typer.Exit(code=1)

    if isinstance(raw, dict):
        raw = raw.get("pages", [])
    classified = [ClassifiedPage.from_dict(item) for item in raw if isinstance(item, dict) and item.get("url")]

    flows = extract_flows(classified, start_url)
    _emit(format_output(flows, classified, start_url or ""), format, output)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(3000, help="Port to listen on."),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    typer.echo(f"[serve] Flow Mapper API on http://{host}:{port}  (POST /api/extract-flows)")
    uvicorn.run("flowmap.api.app:app", host=host, port=port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
