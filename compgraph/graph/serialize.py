"""Graph document I/O.

The document shape is the contract with the browser renderer::

    {"nodes": [{"id", "name", "type"}], "edges": [{"source", "target"}]}
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any

from compgraph.errors import OutputError
from compgraph.models.graph import Edge, Graph, Node


def _document_mode(target: Path) -> int:
    """Mode for the new document: the replaced file's, else the umask default."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_document(graph: Graph, path: str | Path) -> Path:
    """Write *graph* to *path*, replacing any previous document.

    The file is written to a sibling temp file first and then renamed, so a
    reader never sees a half-written document.
    """
    target = Path(path)
    payload = json.dumps(graph.to_document(), indent=2, ensure_ascii=False) + "\n"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            # mkstemp creates 0600; the renderer must be able to read the document
            os.chmod(tmp_name, _document_mode(target))
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise OutputError(f"Failed to write graph document to {target}: {exc}") from exc
    return target


def graph_from_document(document: Any) -> Graph:
    """Rebuild a Graph from a parsed document dict."""
    if not isinstance(document, dict):
        raise OutputError("Graph document must be a JSON object")
    try:
        nodes = [
            Node(id=str(item["id"]), display_name=str(item["name"]), category=str(item["type"]))
            for item in document.get("nodes", [])
        ]
        edges = [
            Edge(source_id=str(item["source"]), target_id=str(item["target"]))
            for item in document.get("edges", [])
        ]
    except (KeyError, TypeError) as exc:
        raise OutputError(f"Malformed graph document: {exc!r}") from exc
    return Graph(nodes={node.id: node for node in nodes}, edges=edges)


def load_document(path: str | Path) -> Graph:
    """Read a graph document written by write_document()."""
    try:
        document = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise OutputError(f"Failed to read graph document {path}: {exc}") from exc
    return graph_from_document(document)
