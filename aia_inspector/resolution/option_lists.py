"""Index of the option lists (helper enums) known to a project."""

from typing import Iterable

from aia_inspector.catalog.descriptor_catalog import DescriptorCatalog
from aia_inspector.domain.descriptors import HelperSpec
from aia_inspector.domain.models import Extension


def collect_option_lists(catalog: DescriptorCatalog,
                         extensions: Iterable[Extension] = ()) -> dict[str, HelperSpec]:
    """Gather every keyed helper from built-in and extension descriptors.

    Keys are the helper's ``key`` (or ``tag`` when it has no key). Extension
    helpers are collected after the built-ins, so an extension redefining a
    built-in key wins.
    """
    index: dict[str, HelperSpec] = {}
    for descriptor in catalog:
        for helper in descriptor.option_helpers():
            index[helper.lookup_key] = helper
    for ext in extensions:
        for helper in ext.descriptor.option_helpers():
            index[helper.lookup_key] = helper
    return index
