"""
Enumerated aliases for arbitrary identifier strings.

Long or unsafe identifiers (URIs, UUIDs, paths) are replaced by compact labels
like "n1", "n2", ... assigned in order of first appearance.
"""

import logging
from typing import Dict, Iterator, Tuple

logger = logging.getLogger(__name__)


class IDMap:
    """
    Maps identifiers to enumerated labels.

    Usage:
        nodes = IDMap("n")
        nodes.resolve("http://example.org/a")  # "n1"
        nodes.resolve("http://example.org/b")  # "n2"
        nodes.resolve("http://example.org/a")  # "n1" again
    """

    def __init__(self, base: str = ""):
        self.base = base
        # identifier -> label, in assignment order
        self._labels: Dict[str, str] = {}

    def resolve(self, identifier: str) -> str:
        """Return the label for identifier, assigning the next one on first sight."""
        label = self._labels.get(identifier)
        if label is not None:
            return label

        label = f"{self.base}{len(self._labels) + 1}"
        self._labels[identifier] = label
        logger.debug(f"Assigned label {label!r} to identifier {identifier!r}")
        return label

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate (identifier, label) pairs in assignment order."""
        return iter(list(self._labels.items()))

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._labels

    def __repr__(self) -> str:
        return f"IDMap(base={self.base!r}, size={len(self._labels)})"
