"""compgraph command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``compgraph`` script).
"""

from compgraph.cli.main import cli

__all__ = ["cli"]
