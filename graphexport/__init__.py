"""
Helpers for exporting property graphs.

- IDMap: stable enumerated labels for arbitrary identifiers
- assemble_graph / to_networkx: deterministic graph assembly
- add_properties / PropertyAccumulator: deduplicated property merging
- CSVWriter / export_graph_csv: CSV serialization
"""

__version__ = "0.1.0"

from graphexport.id_map import IDMap
from graphexport.graph import assemble_graph, to_networkx
from graphexport.properties import (
    OrderedValueSet,
    PropertyAccumulator,
    add_properties,
    new_properties,
)
from graphexport.csv_writer import CSVWriter, export_graph_csv
from graphexport.config import load_config, save_config

__all__ = [
    'IDMap',
    'assemble_graph',
    'to_networkx',
    'OrderedValueSet',
    'PropertyAccumulator',
    'add_properties',
    'new_properties',
    'CSVWriter',
    'export_graph_csv',
    'load_config',
    'save_config',
]
