"""
Operator registry.

Maps operator names to comparator functions. Each Engine owns one registry;
registrations are visible to the next condition evaluated on that engine.
"""

import threading
from typing import Any, Dict, List, Optional

from shared.logging import get_logger
from .comparators import BUILTIN_OPERATORS, OperatorFunc
from .models import operator_name


class OperatorRegistry:
    """Thread-safe mapping from operator name to comparator."""

    def __init__(self, with_builtins: bool = True):
        self.logger = get_logger("rules.registry")
        self._operators: Dict[str, OperatorFunc] = {}
        self._lock = threading.RLock()
        if with_builtins:
            self._operators.update(BUILTIN_OPERATORS)

    def register(self, name: Any, fn: OperatorFunc) -> bool:
        """Register ``fn`` under ``name``, replacing any existing operator.

        Returns True if an existing operator was replaced.
        """
        if not callable(fn):
            raise TypeError(f"operator '{operator_name(name)}' must be callable")

        key = operator_name(name)
        with self._lock:
            replaced = key in self._operators
            self._operators[key] = fn

        if replaced:
            self.logger.info("Operator replaced", operator=key, builtin=key in BUILTIN_OPERATORS)
        else:
            self.logger.info("Operator registered", operator=key)
        return replaced

    def lookup(self, name: Any) -> Optional[OperatorFunc]:
        """Get the comparator for ``name``, or None if unregistered."""
        with self._lock:
            return self._operators.get(operator_name(name))

    def names(self) -> List[str]:
        """Sorted names of all registered operators."""
        with self._lock:
            return sorted(self._operators)

    def copy(self) -> "OperatorRegistry":
        """Independent registry with the same operators."""
        clone = OperatorRegistry(with_builtins=False)
        with self._lock:
            clone._operators.update(self._operators)
        return clone

    def __contains__(self, name: Any) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._operators)
