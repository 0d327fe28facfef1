"""Entry point for `python -m compgraph`.

Usage:
    python -m compgraph discover --root <component-id>
    python -m compgraph inspect public/data/graph.json
"""

from __future__ import annotations

from compgraph.cli import cli

cli(prog_name="compgraph")
