"""Pre-order traversal helpers over a resolved component tree.

Paths are slash-joined component names from the root, e.g.
``Screen1/HorizontalArrangement1/Button1``. Nodes without a name
contribute ``?`` followed by their child index.
"""

from typing import Callable, Iterator

from aia_inspector.domain.models import Component


def iter_components(root: Component | None) -> Iterator[tuple[str, Component]]:
    """Yield ``(path, component)`` for every node, parents before children."""
    if root is None:
        return
    yield from _walk(root, _segment(root, 0))


def count_components(root: Component | None) -> int:
    return sum(1 for _ in iter_components(root))


def find_components(root: Component | None,
                    predicate: Callable[[Component], bool]) -> list[tuple[str, Component]]:
    return [(path, comp) for path, comp in iter_components(root) if predicate(comp)]


def find_faulty(root: Component | None) -> list[tuple[str, Component]]:
    """All nodes whose property resolution failed."""
    return find_components(root, lambda comp: comp.faulty)


def _segment(component: Component, index: int) -> str:
    return component.name if component.name else f'?{index}'


def _walk(node: Component, path: str) -> Iterator[tuple[str, Component]]:
    yield path, node
    for i, child in enumerate(node.children):
        yield from _walk(child, f'{path}/{_segment(child, i)}')
