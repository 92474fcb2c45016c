"""
Built-in descriptor catalog.

Example:
    >>> from aia_inspector.catalog import build_catalog
    >>> catalog = build_catalog()
    >>> catalog.lookup_short('Button').short_name
    'Button'

Module Contents:
    DescriptorCatalog: Immutable type identifier → TypeDescriptor mapping
    CatalogBuilder: Init-once builder over a DescriptorSource
    build_catalog: Process-wide build of the bundled catalog
    default_catalog_builder: The process-wide CatalogBuilder
    DescriptorSource and its bundled/file/in-memory implementations
"""

from aia_inspector.catalog.descriptor_catalog import (
    CatalogBuilder,
    DescriptorCatalog,
    build_catalog,
    default_catalog_builder,
)
from aia_inspector.catalog.loader import (
    BundledDescriptorSource,
    DescriptorSource,
    FileDescriptorSource,
    InMemoryDescriptorSource,
)

__all__ = [
    'CatalogBuilder',
    'DescriptorCatalog',
    'build_catalog',
    'default_catalog_builder',
    'DescriptorSource',
    'BundledDescriptorSource',
    'FileDescriptorSource',
    'InMemoryDescriptorSource',
]
