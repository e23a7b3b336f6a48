"""
Unique Value Generator
======================

Track values handed out per model field and redraw on collision, so fields
marked @unique or @id never repeat within a generator's lifetime.
"""

from typing import Any, Callable, Dict, Hashable, Optional, Set
import json

from prisma_zod_mock.config.logging import get_logger
from prisma_zod_mock.config.settings import get_settings

logger = get_logger(__name__)


class UniqueValueError(Exception):
    """Exception raised when no unused value could be drawn."""

    pass


def _fingerprint(value: Any) -> Hashable:
    """Stable hashable stand-in for a value."""
    try:
        hash(value)
        return value
    except TypeError:
        return ("__unhashable__", json.dumps(value, sort_keys=True, default=str))


class UniqueValueGenerator:
    """Draw values per "<model>.<field>" key without repeats."""

    def __init__(self, max_attempts: Optional[int] = None) -> None:
        self.logger: Any = logger.bind(component="unique_values")
        if max_attempts is None:
            max_attempts = get_settings().unique_max_attempts
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self._used: Dict[str, Set[Hashable]] = {}

    @staticmethod
    def _key(model_name: str, field: str) -> str:
        return f"{model_name}.{field}"

    def generate_unique(self, field: str, model_name: str, generator: Callable[[], Any]) -> Any:
        """
        Return a value from generator that was not returned before for this field.

        Args:
            field: Field name
            model_name: Model name
            generator: Zero-argument callable producing candidate values

        Returns:
            A value not previously returned for the same key

        Raises:
            UniqueValueError: If max_attempts draws all collided
        """
        key = self._key(model_name, field)
        used = self._used.setdefault(key, set())

        for _ in range(self.max_attempts):
            value = generator()
            marker = _fingerprint(value)
            if marker not in used:
                used.add(marker)
                return value

        self.logger.warning("Unique value space exhausted", key=key, attempts=self.max_attempts)
        raise UniqueValueError(
            f"Failed to generate unique value for {key} after {self.max_attempts} attempts"
        )

    def reset(self) -> None:
        """Forget every tracked value."""
        self._used.clear()

    def reset_field(self, model_name: str, field: str) -> None:
        """Forget tracked values for one field."""
        self._used.pop(self._key(model_name, field), None)

    def get_used_values(self, model_name: str, field: str) -> Set[Hashable]:
        """Copy of the values tracked for one field."""
        return set(self._used.get(self._key(model_name, field), set()))
