"""
Type descriptors for built-in and extension component types.

A descriptor is the schema of one component type: its designer
properties, block properties, events and methods. Built-in descriptors
come from the catalog; extension descriptors ship inside the extension
bundle. Both use the same JSON shape and are parsed by
``TypeDescriptor.from_json``.

Example:
    >>> desc = TypeDescriptor.from_json({
    ...     'type': 'com.google.appinventor.components.runtime.Button',
    ...     'properties': [{'name': 'Text', 'editorType': 'string'}],
    ... })
    >>> desc.short_name
    'Button'
    >>> desc.get_property('Text').editor_type
    'string'
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from aia_inspector.domain.enums import AccessMode, HelperKind


def _as_bool(value: Any) -> bool:
    """Descriptor flags are serialized as 'true'/'false' strings."""
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _has_name(raw: Mapping[str, Any]) -> bool:
    name = raw.get('name')
    return isinstance(name, str) and bool(name)


@dataclass(frozen=True)
class OptionSpec:
    """One entry of a bounded option set."""
    name: str
    value: str
    description: str = ''
    deprecated: bool = False

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> 'OptionSpec':
        return cls(
            name=str(raw.get('name', '')),
            value=str(raw.get('value', '')),
            description=raw.get('description') or '',
            deprecated=_as_bool(raw.get('deprecated', False)),
        )


@dataclass(frozen=True)
class HelperSpec:
    """
    Helper metadata attached to a property, parameter or return value.

    Attributes:
        kind: Helper kind (option list, asset, screen name, ...)
        key: Option-list key (e.g. 'HorizontalAlignment')
        tag: Option-list tag shown in blocks
        default_option: Name of the default option
        underlying_type: Java type of the option values
        options: The bounded option set, empty for non option-list helpers
    """
    kind: HelperKind
    key: str | None = None
    tag: str | None = None
    default_option: str | None = None
    underlying_type: str | None = None
    options: tuple[OptionSpec, ...] = ()

    @property
    def lookup_key(self) -> str | None:
        return self.key or self.tag

    def find_option(self, raw_value: str) -> OptionSpec | None:
        """Return the option whose value (or name) equals ``raw_value``."""
        for option in self.options:
            if option.value == raw_value:
                return option
        for option in self.options:
            if option.name == raw_value:
                return option
        return None

    @classmethod
    def from_json(cls, raw: Any) -> 'HelperSpec | None':
        if not isinstance(raw, Mapping):
            return None
        data = raw.get('data')
        data = data if isinstance(data, Mapping) else {}
        return cls(
            kind=HelperKind.from_raw(raw.get('type')),
            key=data.get('key'),
            tag=data.get('tag'),
            default_option=data.get('defaultOpt'),
            underlying_type=data.get('underlyingType'),
            options=tuple(
                OptionSpec.from_json(opt) for opt in _as_list(data.get('options'))
                if isinstance(opt, Mapping)
            ),
        )


@dataclass(frozen=True)
class PropertySpec:
    """
    Schema of one property of a component type.

    A designer property (the values stored in the screen's form) merged
    with the block property of the same name, when the descriptor has one.
    """
    name: str
    editor_type: str | None = None
    value_type: str | None = None
    access: AccessMode = AccessMode.UNKNOWN
    default_value: str | None = None
    editor_args: tuple[str, ...] = ()
    description: str = ''
    deprecated: bool = False
    helper: HelperSpec | None = None

    @classmethod
    def from_json(cls, designer: Mapping[str, Any] | None,
                  block: Mapping[str, Any] | None = None) -> 'PropertySpec':
        designer = designer or {}
        block = block or {}
        return cls(
            name=str(designer.get('name') or block.get('name')),
            editor_type=designer.get('editorType'),
            value_type=block.get('type'),
            access=AccessMode.from_raw(block.get('rw')),
            default_value=designer.get('defaultValue'),
            editor_args=tuple(str(a) for a in _as_list(designer.get('editorArgs'))),
            description=block.get('description') or designer.get('description') or '',
            deprecated=_as_bool(block.get('deprecated', designer.get('deprecated', False))),
            helper=HelperSpec.from_json(block.get('helper') or designer.get('helper')),
        )


@dataclass(frozen=True)
class ParamSpec:
    """A named, typed event or method parameter."""
    name: str
    type: str | None = None
    helper: HelperSpec | None = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> 'ParamSpec':
        return cls(
            name=str(raw.get('name', '')),
            type=raw.get('type'),
            helper=HelperSpec.from_json(raw.get('helper')),
        )


def _params(raw: Mapping[str, Any]) -> tuple[ParamSpec, ...]:
    # Older descriptors call the list 'parameters'
    items = raw.get('params')
    if items is None:
        items = raw.get('parameters')
    return tuple(ParamSpec.from_json(p) for p in _as_list(items) if isinstance(p, Mapping))


@dataclass(frozen=True)
class EventSpec:
    name: str
    description: str = ''
    deprecated: bool = False
    params: tuple[ParamSpec, ...] = ()

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> 'EventSpec':
        return cls(
            name=str(raw.get('name', '')),
            description=raw.get('description') or '',
            deprecated=_as_bool(raw.get('deprecated', False)),
            params=_params(raw),
        )


@dataclass(frozen=True)
class MethodSpec:
    name: str
    description: str = ''
    deprecated: bool = False
    params: tuple[ParamSpec, ...] = ()
    return_type: str | None = None
    helper: HelperSpec | None = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> 'MethodSpec':
        return cls(
            name=str(raw.get('name', '')),
            description=raw.get('description') or '',
            deprecated=_as_bool(raw.get('deprecated', False)),
            params=_params(raw),
            return_type=raw.get('returnType'),
            helper=HelperSpec.from_json(raw.get('helper')),
        )


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Immutable schema of one component type.

    Attributes:
        type: Fully-qualified type identifier
        name: Short human name ('Button')
        properties: Designer properties in declaration order
        block_properties: Block properties in declaration order
        events: Event specs
        methods: Method specs
        metadata: Remaining top-level descriptor fields (version, helpString, ...)
    """
    type: str
    name: str
    properties: tuple[PropertySpec, ...] = ()
    block_properties: tuple[PropertySpec, ...] = ()
    events: tuple[EventSpec, ...] = ()
    methods: tuple[MethodSpec, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
    _index: Mapping[str, PropertySpec] = field(
        default_factory=dict, init=False, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        index = {spec.name: spec for spec in reversed(self.properties)}
        object.__setattr__(self, '_index', MappingProxyType(index))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    @property
    def short_name(self) -> str:
        return self.type.split('.')[-1]

    def get_property(self, name: str) -> PropertySpec | None:
        """Look up a designer property by exact name."""
        return self._index.get(name)

    def setter_names(self) -> list[str]:
        return [p.name for p in self.block_properties
                if p.access in (AccessMode.READ_WRITE, AccessMode.WRITE_ONLY)]

    def getter_names(self) -> list[str]:
        return [p.name for p in self.block_properties
                if p.access in (AccessMode.READ_WRITE, AccessMode.READ_ONLY)]

    def option_helpers(self) -> list[HelperSpec]:
        """Every keyed helper declared in this descriptor, in declaration order."""
        found: list[HelperSpec | None] = []
        for spec in (*self.properties, *self.block_properties):
            found.append(spec.helper)
        for method in self.methods:
            found.append(method.helper)
            found.extend(p.helper for p in method.params)
        return [h for h in found if h is not None and h.lookup_key]

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> 'TypeDescriptor':
        """
        Build a descriptor from its JSON object.

        Args:
            raw: Descriptor object with at least a ``type`` field

        Returns:
            TypeDescriptor

        Raises:
            ValueError: If ``raw`` is not an object or has no ``type``
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"Descriptor must be an object, got {type(raw).__name__}")
        type_name = raw.get('type')
        if not isinstance(type_name, str) or not type_name:
            raise ValueError("Descriptor has no 'type'")

        block_raw = [
            b for b in _as_list(raw.get('blockProperties'))
            if isinstance(b, Mapping) and _has_name(b)
        ]
        blocks_by_name = {b['name']: b for b in block_raw}

        properties = tuple(
            PropertySpec.from_json(p, blocks_by_name.get(p.get('name')))
            for p in _as_list(raw.get('properties'))
            if isinstance(p, Mapping) and _has_name(p)
        )
        block_properties = tuple(PropertySpec.from_json(None, b) for b in block_raw)

        skip = {'type', 'name', 'properties', 'blockProperties', 'events', 'methods'}
        return cls(
            type=type_name,
            name=str(raw.get('name') or type_name.split('.')[-1]),
            properties=properties,
            block_properties=block_properties,
            events=tuple(EventSpec.from_json(e) for e in _as_list(raw.get('events'))
                         if isinstance(e, Mapping)),
            methods=tuple(MethodSpec.from_json(m) for m in _as_list(raw.get('methods'))
                          if isinstance(m, Mapping)),
            metadata={k: v for k, v in raw.items() if k not in skip},
        )
