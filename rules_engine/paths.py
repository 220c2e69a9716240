"""
Dot-path lookup into nested records.
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Tuple


def split_path(path: str) -> List[str]:
    """Split a dot-separated field path into its segments."""
    return path.split(".")


def resolve(record: Optional[Mapping], path: str) -> Tuple[Any, bool]:
    """Resolve ``path`` against ``record``.

    Each segment must name an existing key of a mapping; there is no list
    indexing. Returns ``(value, True)`` on success and ``(None, False)`` when
    the record is missing, a key is absent or an intermediate value is not
    a mapping.
    """
    if record is None:
        return None, False

    current: Any = record
    for part in split_path(path):
        if not isinstance(current, Mapping) or part not in current:
            return None, False
        current = current[part]

    return current, True
