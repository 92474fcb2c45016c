"""
Descriptor sources for the built-in catalog.

Provides a uniform interface for reading the raw descriptor array either
from the JSON file bundled with this package, from a file on disk, or
from an in-memory list.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import Any

BUNDLED_RESOURCE = 'simple_components.json'


class DescriptorSource(ABC):
    """Abstract source of raw built-in descriptors."""

    @abstractmethod
    def load(self) -> list[dict[str, Any]]:
        """Return the raw descriptor array. Raises OSError/ValueError on failure."""

    @staticmethod
    def _require_array(data: Any, origin: str) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise ValueError(f"Descriptor source {origin} must be a JSON array, got {type(data).__name__}")
        return data


class BundledDescriptorSource(DescriptorSource):
    """Reads the descriptor file shipped inside ``aia_inspector.catalog``."""

    def __init__(self, resource: str = BUNDLED_RESOURCE):
        self._resource = resource

    def load(self) -> list[dict[str, Any]]:
        text = resources.files('aia_inspector.catalog').joinpath(self._resource).read_text(encoding='utf-8')
        return self._require_array(json.loads(text), self._resource)


class FileDescriptorSource(DescriptorSource):
    """Reads a descriptor array from a JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        with open(self._path, encoding='utf-8') as f:
            return self._require_array(json.load(f), str(self._path))


class InMemoryDescriptorSource(DescriptorSource):
    """Wraps an already-decoded descriptor array."""

    def __init__(self, descriptors: list[dict[str, Any]]):
        self._descriptors = descriptors

    def load(self) -> list[dict[str, Any]]:
        return self._require_array(self._descriptors, 'in-memory')
