"""
Screen and project assembly.

ProjectAssembler owns the one-time catalog initialization: the catalog is
built (or found unavailable) before the first tree build starts, so no
resolution worker ever races its construction. A catalog that fails to
build is replaced by an empty one, and every component then resolves
with no built-in descriptor.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, Sequence

from aia_inspector.catalog.descriptor_catalog import (
    CatalogBuilder,
    DescriptorCatalog,
    default_catalog_builder,
)
from aia_inspector.catalog.loader import FileDescriptorSource
from aia_inspector.domain.descriptors import TypeDescriptor
from aia_inspector.domain.models import Asset, Component, Extension, InspectOptions, Project, Screen
from aia_inspector.errors import CatalogUnavailableError, InvalidInputError
from aia_inspector.logging_config import get_logger
from aia_inspector.tree_builder import ComponentTreeBuilder

logger = get_logger(__name__)

# (name, raw form, raw blocks)
RawScreen = tuple[str, Any, Any]


class ProjectAssembler:
    """Assembles screens and projects from raw component trees.

    Args:
        catalog_builder: Source of the built-in catalog. Defaults to a
            file-backed builder when ``options.catalog_path`` is set,
            else the process-wide bundled builder.
        options: Worker pool, timeout and screen parallelism settings.
    """

    def __init__(self, catalog_builder: CatalogBuilder | None = None,
                 options: InspectOptions | None = None) -> None:
        self.options = options or InspectOptions()
        if catalog_builder is None:
            if self.options.catalog_path:
                catalog_builder = CatalogBuilder(FileDescriptorSource(self.options.catalog_path))
            else:
                catalog_builder = default_catalog_builder()
        self._catalog_builder = catalog_builder
        self._lock = threading.Lock()
        self._catalog: DescriptorCatalog | None = None
        self._tree_builder: ComponentTreeBuilder | None = None

    @property
    def catalog(self) -> DescriptorCatalog:
        """The built-in catalog, or an empty one if it could not be built."""
        self._ensure_ready()
        return self._catalog

    @property
    def tree_builder(self) -> ComponentTreeBuilder:
        self._ensure_ready()
        return self._tree_builder

    def assemble_screen(self, name: str, raw_form: Any, raw_blocks: Any,
                        project: Project) -> Screen:
        """
        Build one screen's component tree.

        Args:
            name: Screen name (must be non-empty)
            raw_form: Root form object of the screen
            raw_blocks: Block XML, stored as-is
            project: Owning project; its extensions classify component types

        Returns:
            Screen attached to ``project`` (not yet added to it)

        Raises:
            InvalidInputError: On an empty name, a missing project or a form
                root without ``$Name``
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("Screen name must be a non-empty string", field='name')
        if not isinstance(project, Project):
            raise InvalidInputError("Screen requires an owning Project", field='project')

        form = self.tree_builder.build(raw_form, project)
        screen = Screen(name=name, form=form, blocks=raw_blocks if isinstance(raw_blocks, str) else '')
        screen.attach(project)
        return screen

    def assemble_screens(self, project: Project, raw_screens: Iterable[RawScreen]) -> list[Screen]:
        """Build several screens of ``project`` and add them in the given order."""
        raw_screens = list(raw_screens)
        self._ensure_ready()

        if self.options.parallel_screens and len(raw_screens) > 1:
            with ThreadPoolExecutor(max_workers=self.options.max_workers or None,
                                    thread_name_prefix='screen') as executor:
                screens = list(executor.map(
                    lambda item: self.assemble_screen(item[0], item[1], item[2], project),
                    raw_screens,
                ))
        else:
            screens = [self.assemble_screen(n, form, blocks, project) for n, form, blocks in raw_screens]

        for screen in screens:
            project.add_screen(screen)
        return screens

    def assemble_project(self, name: str, screens: Sequence[Screen] = (),
                         extensions: Sequence[Extension] = (),
                         assets: Sequence[Asset] = ()) -> Project:
        """
        Aggregate already-built parts into a Project.

        Every item is validated before it is accepted; the first invalid item
        raises InvalidInputError carrying the list name and item index.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidInputError("Project name must be a non-empty string", field='name')

        project = Project(name=name)
        for i, ext in enumerate(extensions):
            if not isinstance(ext, Extension) or not ext.name or not isinstance(ext.descriptor, TypeDescriptor):
                raise InvalidInputError(
                    f"Extension #{i} must have a name and a descriptor", field='extensions', index=i
                )
            project.add_extension(ext)
        for i, screen in enumerate(screens):
            if not isinstance(screen, Screen) or not isinstance(screen.form, Component):
                raise InvalidInputError(
                    f"Screen #{i} must be a Screen with a root Component", field='screens', index=i
                )
            project.add_screen(screen)
        for i, asset in enumerate(assets):
            if not isinstance(asset, Asset) or not asset.name:
                raise InvalidInputError(f"Asset #{i} must be a named Asset", field='assets', index=i)
            project.add_asset(asset)
        return project

    # ── Private Methods ──────────────────────────────────────────────────

    def _ensure_ready(self) -> None:
        if self._tree_builder is not None:
            return
        with self._lock:
            if self._tree_builder is not None:
                return
            try:
                catalog = self._catalog_builder.build()
            except CatalogUnavailableError as e:
                logger.warning("catalog_unavailable", error=str(e))
                catalog = DescriptorCatalog.empty()
            self._catalog = catalog
            self._tree_builder = ComponentTreeBuilder(
                catalog,
                max_workers=self.options.max_workers,
                timeout=self.options.resolution_timeout,
            )
