"""Origin classifier: built-in vs extension component types.

A component's ``$Type`` is a short name ('Button', 'MyWidget'). Extension
types are matched against the trailing dot-segment of each loaded
extension's qualifying name; anything else is looked up in the built-in
catalog under the fixed runtime namespace.
"""

from dataclasses import dataclass
from typing import Iterable

from aia_inspector.catalog.descriptor_catalog import DescriptorCatalog
from aia_inspector.domain.descriptors import TypeDescriptor
from aia_inspector.domain.enums import Origin
from aia_inspector.domain.models import Extension


@dataclass(frozen=True)
class Classification:
    """Result of classifying one short type name."""
    origin: Origin
    descriptor: TypeDescriptor | None = None
    extension: Extension | None = None


class OriginClassifier:
    """Decides where a component type comes from and which descriptor applies.

    Args:
        catalog: Built-in descriptors. Pass ``DescriptorCatalog.empty()``
            when the catalog could not be built.
    """

    def __init__(self, catalog: DescriptorCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> DescriptorCatalog:
        return self._catalog

    def classify(self, short_type: str | None,
                 extensions: Iterable[Extension] = ()) -> Classification:
        """Classify ``short_type`` against the loaded extensions, then the catalog.

        Extension matching is an exact, case-sensitive comparison with the
        last segment of the qualifying name; the first matching extension
        in list order wins. Unknown types yield ``BUILT_IN`` with no
        descriptor.
        """
        if not short_type:
            return Classification(Origin.BUILT_IN)

        for ext in extensions:
            if ext.short_name == short_type:
                return Classification(Origin.EXTENSION, ext.descriptor, ext)

        return Classification(Origin.BUILT_IN, self._catalog.lookup_short(short_type))
