"""
Built-in descriptor catalog.

The catalog maps fully-qualified built-in type identifiers to their
TypeDescriptor. It is built once from a DescriptorSource by a
CatalogBuilder and never mutated afterwards, so it can be shared freely
between resolution workers.
"""

import threading
from types import MappingProxyType
from typing import Any, Iterable, Iterator

from aia_inspector.catalog.loader import BundledDescriptorSource, DescriptorSource
from aia_inspector.domain.constants import BUILTIN_NAMESPACE
from aia_inspector.domain.descriptors import TypeDescriptor
from aia_inspector.errors import CatalogUnavailableError
from aia_inspector.logging_config import get_logger

logger = get_logger(__name__)


class DescriptorCatalog:
    """Read-only mapping of built-in type identifier → TypeDescriptor."""

    def __init__(self, descriptors: Iterable[TypeDescriptor] = ()):
        by_type: dict[str, TypeDescriptor] = {}
        for desc in descriptors:
            by_type.setdefault(desc.type, desc)
        self._by_type = MappingProxyType(by_type)

    @classmethod
    def from_json(cls, entries: list[dict[str, Any]]) -> 'DescriptorCatalog':
        """Parse a raw descriptor array. Any malformed entry fails the whole catalog."""
        descriptors = []
        for i, raw in enumerate(entries):
            try:
                descriptors.append(TypeDescriptor.from_json(raw))
            except ValueError as e:
                raise ValueError(f"Descriptor #{i}: {e}") from e
        return cls(descriptors)

    @classmethod
    def empty(cls) -> 'DescriptorCatalog':
        return cls()

    @staticmethod
    def qualify(short_type: str) -> str:
        """Form the built-in type identifier for a short type name."""
        return f'{BUILTIN_NAMESPACE}.{short_type}'

    def lookup(self, type_name: str) -> TypeDescriptor | None:
        return self._by_type.get(type_name)

    def lookup_short(self, short_type: str) -> TypeDescriptor | None:
        return self._by_type.get(self.qualify(short_type))

    def types(self) -> list[str]:
        return list(self._by_type.keys())

    def short_names(self) -> list[str]:
        return [desc.short_name for desc in self._by_type.values()]

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._by_type

    def __iter__(self) -> Iterator[TypeDescriptor]:
        return iter(self._by_type.values())

    def __len__(self) -> int:
        return len(self._by_type)


class CatalogBuilder:
    """Builds a DescriptorCatalog exactly once.

    ``build()`` is idempotent and safe to call from several threads: the
    first caller loads the source, later callers get the same instance.
    A failed build is remembered and reported again without re-reading
    the source.

    Args:
        source: Where raw descriptors come from (bundled file by default).
    """

    def __init__(self, source: DescriptorSource | None = None) -> None:
        self._source = source or BundledDescriptorSource()
        self._lock = threading.Lock()
        self._catalog: DescriptorCatalog | None = None
        self._failure: str | None = None

    @property
    def is_built(self) -> bool:
        return self._catalog is not None

    def build(self) -> DescriptorCatalog:
        """Return the catalog, building it on first use.

        Raises:
            CatalogUnavailableError: If the source cannot be read or parsed.
        """
        catalog = self._catalog
        if catalog is not None:
            return catalog

        with self._lock:
            if self._catalog is not None:
                return self._catalog
            if self._failure is not None:
                raise CatalogUnavailableError(self._failure)
            try:
                entries = self._source.load()
                catalog = DescriptorCatalog.from_json(entries)
            except (OSError, ValueError, TypeError) as e:
                self._failure = f"Failed to build descriptor catalog: {e}"
                raise CatalogUnavailableError(self._failure) from e
            logger.debug("catalog_built", types=len(catalog))
            self._catalog = catalog
            return catalog

    def reset(self) -> None:
        """Forget the built catalog (or failure) so the next build reloads."""
        with self._lock:
            self._catalog = None
            self._failure = None


_default_builder = CatalogBuilder()


def default_catalog_builder() -> CatalogBuilder:
    """The process-wide builder over the bundled descriptor file."""
    return _default_builder


def build_catalog() -> DescriptorCatalog:
    """Build (once per process) and return the bundled built-in catalog."""
    return _default_builder.build()
