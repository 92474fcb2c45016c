"""Helpers for the raw block XML stored on a screen."""

import xml.etree.ElementTree as ET
from typing import Iterator


def local_tag(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree adds to tags."""
    return tag.split('}')[1] if '}' in tag else tag


def parse_blocks(blocks: str | None) -> ET.Element | None:
    """Parse block XML, returning None for empty or malformed text."""
    if not blocks or not blocks.strip():
        return None
    try:
        return ET.fromstring(blocks)
    except ET.ParseError:
        return None


def iter_blocks(root: ET.Element | None) -> Iterator[ET.Element]:
    """Yield every <block> element, nested ones included."""
    if root is None:
        return
    for elem in root.iter():
        if local_tag(elem.tag) == 'block':
            yield elem


def top_level_blocks(root: ET.Element | None) -> list[ET.Element]:
    if root is None:
        return []
    if local_tag(root.tag) == 'block':
        return [root]
    return [child for child in root if local_tag(child.tag) == 'block']
