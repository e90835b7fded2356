"""
CSV serialization for assembled graphs.

CSVWriter writes rows to any text stream. export_graph_csv() writes a graph
from assemble_graph() as two files:

    nodes.csv   id,<other node keys sorted>
    edges.csv   source,target,<other edge keys sorted>

Multi-valued cells (e.g. merged property lists) are joined with the array
delimiter, so ["x", "y"] becomes "x;y".
"""

import csv
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Tuple, Union

from graphexport.config import load_config, validate_config, validate_delimiters

logger = logging.getLogger(__name__)


class CSVWriter:
    """
    Row writer over a text stream.

    Usage:
        with open("out.csv", "w", newline="", encoding="utf-8") as f:
            writer = CSVWriter(f)
            writer.write_row(["id", "tags"])
            writer.write_row(["n1", ["a", "b"]])   # n1,a;b
    """

    def __init__(self, stream: TextIO, delimiter: str = ",", array_delimiter: str = ";"):
        validate_delimiters(delimiter, array_delimiter)
        self.array_delimiter = array_delimiter
        self._writer = csv.writer(stream, delimiter=delimiter)

    def _cell(self, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (list, tuple, set, frozenset)):
            return self.array_delimiter.join("" if v is None else str(v) for v in value)
        return value

    def write_row(self, values: Iterable[Any]) -> None:
        self._writer.writerow([self._cell(v) for v in values])

    def write_rows(self, rows: Iterable[Iterable[Any]]) -> int:
        """Write every row; returns how many were written."""
        count = 0
        for row in rows:
            self.write_row(row)
            count += 1
        return count


def _headers(records: Sequence[Mapping], leading: List[str]) -> List[str]:
    """Leading columns first, then every other key seen, sorted."""
    seen = set()
    for record in records:
        seen.update(record.keys())
    return list(leading) + sorted((k for k in seen if k not in leading), key=str)


def _write_records(
    path: Path,
    records: Sequence[Mapping],
    leading: List[str],
    config: Dict[str, Any],
) -> None:
    headers = _headers(records, leading)
    with open(path, "w", newline="", encoding=config["encoding"]) as f:
        writer = CSVWriter(f, delimiter=config["delimiter"], array_delimiter=config["array_delimiter"])
        writer.write_row(headers)
        writer.write_rows([record.get(h) for h in headers] for record in records)
    logger.info(f"Written {len(records)} records to {path}")


def export_graph_csv(
    graph: Dict[str, Any],
    out_dir: Union[str, Path],
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[Path, Path]:
    """
    Write an assembled graph to nodes/edges CSV files under out_dir.

    Node values and edges must be mappings. Returns (nodes_path, edges_path).
    """
    if config is None:
        config = load_config()
    else:
        validate_config(config)

    nodes = list(graph.get("nodes", []))
    edges = list(graph.get("edges") or [])
    for kind, records in (("node", nodes), ("edge", edges)):
        for record in records:
            if not isinstance(record, Mapping):
                raise TypeError(f"Each {kind} must be a mapping to export as CSV, got {type(record).__name__}")

    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    nodes_path = out_dir / config["nodes_filename"]
    edges_path = out_dir / config["edges_filename"]

    _write_records(nodes_path, nodes, ["id"], config)
    _write_records(edges_path, edges, ["source", "target"], config)
    return nodes_path, edges_path
