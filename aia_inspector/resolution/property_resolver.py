"""Property resolver: raw property bag → ResolvedProperty list.

Raw properties are matched to the descriptor's designer properties by
exact name. A matched value is parsed according to the property's editor
type (and checked against its option list, when it has one); anything
that cannot be matched or parsed is kept as an UNRESOLVED pass-through
so no raw property is ever lost.
"""

import json
from typing import Any, Mapping

from aia_inspector.domain.constants import NON_PROPERTY_KEYS
from aia_inspector.domain.descriptors import TypeDescriptor
from aia_inspector.domain.enums import HelperKind
from aia_inspector.domain.models import ResolvedProperty
from aia_inspector.logging_config import get_logger
from aia_inspector.resolution.value_parsers import ValueParserRegistry

logger = get_logger(__name__)


def extract_raw_properties(node: Mapping[str, Any]) -> dict[str, str]:
    """Return the property bag of a raw component node.

    Every key that does not start with ``$`` and is not ``Uuid`` is a
    property. Values are stringified the way the designer stores them.
    """
    return {
        key: stringify(value) for key, value in node.items()
        if isinstance(key, str) and not key.startswith('$') and key not in NON_PROPERTY_KEYS
    }


def stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'True' if value else 'False'
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, default=str)


class PropertyResolver:
    """Resolves raw property bags against type descriptors.

    Stateless apart from the parser registry, so one instance can be
    shared between worker threads.

    Args:
        parsers: Editor type → value parser registry.
    """

    def __init__(self, parsers: ValueParserRegistry | None = None) -> None:
        self._parsers = parsers or ValueParserRegistry()

    def resolve(self, raw_properties: Any,
                descriptor: TypeDescriptor | None) -> list[ResolvedProperty]:
        """Resolve every raw property, in bag order.

        Args:
            raw_properties: Property name → raw value mapping.
            descriptor: Schema to match against, or None for an unknown type.

        Returns:
            One ResolvedProperty per raw property. An empty list when
            ``raw_properties`` is not a mapping at all.
        """
        if not isinstance(raw_properties, Mapping):
            return []

        resolved: list[ResolvedProperty] = []
        for name, raw in raw_properties.items():
            raw_value = stringify(raw)
            try:
                resolved.append(self._resolve_one(str(name), raw_value, descriptor))
            except Exception as e:
                logger.debug("property_unresolved", property=name, error=str(e))
                resolved.append(ResolvedProperty.passthrough(str(name), raw_value))
        return resolved

    def _resolve_one(self, name: str, raw_value: str,
                     descriptor: TypeDescriptor | None) -> ResolvedProperty:
        spec = descriptor.get_property(name) if descriptor is not None else None
        if spec is None:
            return ResolvedProperty.passthrough(name, raw_value)

        parser = self._parsers.get_parser(spec.editor_type)
        helper = spec.helper
        if helper is not None and helper.kind is HelperKind.OPTION_LIST and helper.options:
            option = helper.find_option(raw_value)
            if option is None:
                return ResolvedProperty.passthrough(name, raw_value)
            try:
                value = parser(option.value)
            except ValueError:
                return ResolvedProperty.passthrough(name, raw_value)
            return ResolvedProperty.resolved(name, value, raw_value, spec, option)

        try:
            value = parser(raw_value)
        except ValueError:
            return ResolvedProperty.passthrough(name, raw_value)
        return ResolvedProperty.resolved(name, value, raw_value, spec)
