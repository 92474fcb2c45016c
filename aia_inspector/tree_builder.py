"""
Component tree builder.

Turns a screen's raw form (nested ``$Components`` objects) into a tree of
resolved Component records. The build runs in three passes:

1. Collect: walk the raw tree in source order, read each node's identity
   fields, classify its origin and extract its property bag.
2. Resolve: run the property resolver for every node, either inline or on
   a thread pool. Results are keyed by node, so completion order does not
   matter.
3. Materialize: rebuild the Component tree from the collected nodes, which
   restores the source order exactly.

Failures are node-local: a node whose fields are malformed, whose
classification raises, or whose resolution fails or times out is kept in
the tree with ``faulty=True`` and no properties. Its children are still
built. Only a root without ``$Name`` aborts the build.
"""

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError, as_completed
from dataclasses import dataclass, field
from typing import Any, Mapping

from aia_inspector.catalog.descriptor_catalog import DescriptorCatalog
from aia_inspector.domain.constants import COMPONENTS_KEY, MISSING_UID, NAME_KEY, TYPE_KEY, UUID_KEY
from aia_inspector.domain.enums import Origin
from aia_inspector.domain.models import Component, Extension, Project, ResolvedProperty
from aia_inspector.errors import InvalidInputError
from aia_inspector.logging_config import get_logger
from aia_inspector.resolution.origin_classifier import Classification, OriginClassifier
from aia_inspector.resolution.property_resolver import PropertyResolver, extract_raw_properties

logger = get_logger(__name__)


@dataclass
class _PendingNode:
    """A collected raw node waiting for property resolution."""
    key: int
    name: str | None
    type: str | None
    uid: str | int = MISSING_UID
    classification: Classification | None = None
    raw_properties: dict[str, str] = field(default_factory=dict)
    properties: list[ResolvedProperty] = field(default_factory=list)
    children: list['_PendingNode'] = field(default_factory=list)
    faulty: bool = False
    error: str | None = None


class ComponentTreeBuilder:
    """Builds resolved component trees from raw form JSON.

    Args:
        catalog: Built-in descriptors, fully built before any build starts.
        max_workers: Thread pool size for property resolution. ``None``,
            0 or 1 resolve inline.
        timeout: Seconds to wait for pooled resolution before the
            remaining nodes are marked faulty. ``None`` waits forever.
        resolver: Property resolver (a default one when omitted).
    """

    def __init__(self, catalog: DescriptorCatalog, max_workers: int | None = None,
                 timeout: float | None = None, resolver: PropertyResolver | None = None) -> None:
        self._classifier = OriginClassifier(catalog)
        self._resolver = resolver or PropertyResolver()
        self._max_workers = max_workers
        self._timeout = timeout

    @property
    def parallel(self) -> bool:
        return bool(self._max_workers and self._max_workers > 1)

    def build(self, raw_node: Any, project: Project | None = None) -> Component:
        """Build the component tree rooted at ``raw_node``.

        Args:
            raw_node: Root form object (``$Name``, ``$Type``, ``$Components``, ...).
            project: Owning project; its extensions drive origin classification.

        Returns:
            Root Component with the same shape as ``raw_node``.

        Raises:
            InvalidInputError: If the root is not an object or has no ``$Name``.
        """
        if not isinstance(raw_node, Mapping):
            raise InvalidInputError(
                f"Component tree root must be an object, got {type(raw_node).__name__}",
                field=NAME_KEY,
            )
        if raw_node.get(NAME_KEY) is None:
            raise InvalidInputError("Component tree root has no $Name", field=NAME_KEY)

        extensions = list(project.extensions) if project is not None else []
        nodes: list[_PendingNode] = []
        root = self._collect(raw_node, extensions, nodes)

        pending = [node for node in nodes if not node.faulty]
        if self.parallel and len(pending) > 1:
            self._resolve_pooled(pending)
        else:
            self._resolve_inline(pending)

        return self._materialize(root)

    # ── Collect ──────────────────────────────────────────────────────────

    def _collect(self, raw: Any, extensions: list[Extension], nodes: list[_PendingNode]) -> _PendingNode:
        key = len(nodes)
        if not isinstance(raw, Mapping):
            node = _PendingNode(key, None, None)
            nodes.append(node)
            self._mark_faulty(node, f"Component node is {type(raw).__name__}, not an object")
            return node

        name = raw.get(NAME_KEY)
        type_name = raw.get(TYPE_KEY)
        node = _PendingNode(
            key,
            str(name) if name is not None else None,
            str(type_name) if type_name is not None else None,
            _uid(raw.get(UUID_KEY)),
        )
        nodes.append(node)

        if node.name is None:
            self._mark_faulty(node, "Component has no $Name")
        elif node.type is None:
            self._mark_faulty(node, "Component has no $Type")
        else:
            try:
                node.classification = self._classifier.classify(node.type, extensions)
                node.raw_properties = extract_raw_properties(raw)
            except Exception as e:
                self._mark_faulty(node, f"Classification failed: {e}")

        children = raw.get(COMPONENTS_KEY)
        if children is None:
            return node
        if not isinstance(children, list):
            self._mark_faulty(node, "$Components is not a list")
            return node
        for child in children:
            node.children.append(self._collect(child, extensions, nodes))
        return node

    # ── Resolve ──────────────────────────────────────────────────────────

    def _resolve_one(self, node: _PendingNode) -> list[ResolvedProperty]:
        descriptor = node.classification.descriptor if node.classification else None
        return self._resolver.resolve(node.raw_properties, descriptor)

    def _resolve_inline(self, nodes: list[_PendingNode]) -> None:
        for node in nodes:
            try:
                node.properties = self._resolve_one(node)
            except Exception as e:
                self._mark_faulty(node, f"Property resolution failed: {e}")

    def _resolve_pooled(self, nodes: list[_PendingNode]) -> None:
        executor = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix='resolve')
        try:
            futures = {executor.submit(self._resolve_one, node): node for node in nodes}
            collected: set[int] = set()
            try:
                for future in as_completed(futures, timeout=self._timeout):
                    node = futures[future]
                    collected.add(node.key)
                    self._store_result(node, future)
            except FuturesTimeoutError:
                late = [(f, n) for f, n in futures.items() if n.key not in collected]
                logger.warning("resolution_timeout", pending=len(late), timeout=self._timeout)
                for future, node in late:
                    if future.done():
                        self._store_result(node, future)
                    else:
                        future.cancel()
                        self._mark_faulty(node, "Property resolution timed out")
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _store_result(self, node: _PendingNode, future) -> None:
        try:
            node.properties = future.result()
        except Exception as e:
            self._mark_faulty(node, f"Property resolution failed: {e}")

    # ── Materialize ──────────────────────────────────────────────────────

    def _materialize(self, node: _PendingNode) -> Component:
        classification = node.classification
        component = Component(
            name=node.name,
            type=node.type,
            uid=node.uid,
            origin=classification.origin if classification else Origin.BUILT_IN,
            properties=[] if node.faulty else list(node.properties),
            faulty=node.faulty,
            error=node.error,
            descriptor=classification.descriptor if classification else None,
        )
        for child in node.children:
            component.add_child(self._materialize(child))
        return component

    @staticmethod
    def _mark_faulty(node: _PendingNode, reason: str) -> None:
        node.faulty = True
        node.error = reason
        node.properties = []
        logger.warning("component_faulty", component=node.name, type=node.type, error=reason)


def _uid(value: Any) -> str | int:
    if isinstance(value, bool) or not isinstance(value, (str, int)) or value == '':
        return MISSING_UID
    return value
