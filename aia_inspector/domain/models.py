"""Shared data models for projects, screens and components."""

import weakref
from dataclasses import dataclass, field
from typing import Any

from aia_inspector.domain.block_xml import parse_blocks, top_level_blocks
from aia_inspector.domain.constants import MISSING_UID, VALID_BLOCK_TYPES
from aia_inspector.domain.descriptors import OptionSpec, PropertySpec, TypeDescriptor
from aia_inspector.domain.enums import Origin, ResolutionStatus
from aia_inspector.errors import InvalidInputError


@dataclass(frozen=True)
class ResolvedProperty:
    """A raw property matched (or not) against its PropertySpec.

    ``spec`` is None exactly when ``status`` is UNRESOLVED; the value is
    then the raw string.
    """

    name: str
    value: Any
    raw_value: str
    status: ResolutionStatus
    spec: PropertySpec | None = None
    option: OptionSpec | None = None

    @property
    def is_resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED

    @classmethod
    def resolved(cls, name: str, value: Any, raw_value: str, spec: PropertySpec,
                 option: OptionSpec | None = None) -> 'ResolvedProperty':
        return cls(name, value, raw_value, ResolutionStatus.RESOLVED, spec, option)

    @classmethod
    def passthrough(cls, name: str, raw_value: str) -> 'ResolvedProperty':
        return cls(name, raw_value, raw_value, ResolutionStatus.UNRESOLVED)


@dataclass
class Component:
    """One node of a screen's component tree."""

    name: str | None
    type: str | None
    uid: str | int = MISSING_UID
    origin: Origin = Origin.BUILT_IN
    properties: list[ResolvedProperty] = field(default_factory=list)
    children: list['Component'] = field(default_factory=list)
    faulty: bool = False
    error: str | None = None
    descriptor: TypeDescriptor | None = field(default=None, repr=False, compare=False)

    def add_child(self, child: 'Component') -> None:
        if not isinstance(child, Component):
            raise InvalidInputError(
                f"Attempt to add {type(child).__name__} to Component", field='children'
            )
        self.children.append(child)

    def get_property(self, name: str) -> ResolvedProperty | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class Extension:
    """A loaded extension: its qualifying name and embedded descriptor."""

    name: str
    descriptor: TypeDescriptor
    build_info: dict[str, Any] = field(default_factory=dict)
    file_size: int = 0
    package_name: str = ''

    @property
    def short_name(self) -> str:
        """Trailing dot-segment of the qualifying name."""
        return self.name.split('.')[-1]

    @property
    def display_name(self) -> str:
        return self.descriptor.name


@dataclass
class Asset:
    """Metadata of a project asset file."""

    name: str
    type: str
    size: int = 0


@dataclass(eq=False)
class Screen:
    """A screen: its form tree plus the raw block XML."""

    name: str
    form: Component
    blocks: str = ''
    _project_ref: Any = field(default=None, init=False, repr=False)

    @property
    def project(self) -> 'Project | None':
        return self._project_ref() if self._project_ref is not None else None

    def attach(self, project: 'Project') -> None:
        self._project_ref = weakref.ref(project)

    def top_level_block_types(self) -> list[str]:
        """Types of the top-level <block> elements of the block XML."""
        return [b.get('type', '') for b in top_level_blocks(parse_blocks(self.blocks))]

    def invalid_top_level_blocks(self) -> list[str]:
        return [t for t in self.top_level_block_types() if t not in VALID_BLOCK_TYPES]


@dataclass(eq=False)
class Project:
    """A project: screens, extensions and assets."""

    name: str
    screens: list[Screen] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)

    def add_screen(self, screen: Screen) -> None:
        if not isinstance(screen, Screen):
            raise InvalidInputError(
                f"Attempt to add {type(screen).__name__} to Project", field='screens'
            )
        screen.attach(self)
        self.screens.append(screen)

    def add_extension(self, extension: Extension) -> None:
        if not isinstance(extension, Extension):
            raise InvalidInputError(
                f"Attempt to add {type(extension).__name__} to Project", field='extensions'
            )
        self.extensions.append(extension)

    def add_asset(self, asset: Asset) -> None:
        if not isinstance(asset, Asset):
            raise InvalidInputError(
                f"Attempt to add {type(asset).__name__} to Project", field='assets'
            )
        self.assets.append(asset)

    def get_screen(self, name: str) -> Screen | None:
        for screen in self.screens:
            if screen.name == name:
                return screen
        return None

    def screen_names(self) -> list[str]:
        return [s.name for s in self.screens]

    def asset_names(self) -> list[str]:
        return [a.name for a in self.assets]


@dataclass
class InspectOptions:
    """Options controlling how a project is assembled."""

    max_workers: int | None = None
    resolution_timeout: float | None = None
    catalog_path: str | None = None
    most_used_limit: int = 8
    parallel_screens: bool = False

