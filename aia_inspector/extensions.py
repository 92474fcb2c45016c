"""
Extension construction and display metadata.

An extension bundle carries one component descriptor (the same JSON shape
as the built-in catalog entries) plus optional build information written
by the tool that compiled it.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

from aia_inspector.domain.descriptors import TypeDescriptor
from aia_inspector.domain.models import Extension
from aia_inspector.errors import InvalidInputError

NO_DESCRIPTION = 'No description available'
DEFAULT_MIN_SDK = '21'

_TAG_RE = re.compile(r'<[^>]*>')
_API_PREFIX_RE = re.compile(r'^API\s+', re.IGNORECASE)
_SIZE_UNITS = ('B', 'KB', 'MB', 'GB')


@dataclass(frozen=True)
class ExtensionInfo:
    """Display metadata derived from an extension's descriptor and build info."""
    name: str
    package: str
    version: str
    version_name: str
    description: str
    date_built: str | None
    file_size: int
    author: str | None
    compiler: str | None
    compiler_version: str | None
    min_sdk: str
    event_count: int = 0
    method_count: int = 0
    property_count: int = 0
    block_property_count: int = 0

    @property
    def readable_size(self) -> str:
        return format_file_size(self.file_size)


def build_extension(raw_descriptor: Any, build_info: Mapping[str, Any] | None = None,
                    file_size: Any = 0, package_name: str = '') -> Extension:
    """
    Create an Extension from its raw descriptor.

    The qualifying name is the descriptor's ``type``; components match the
    extension by its last dot-segment.

    Args:
        raw_descriptor: Decoded component descriptor object
        build_info: Decoded build information, if the bundle has one
        file_size: Bundle size in bytes
        package_name: Name of the bundle's package folder

    Returns:
        Extension

    Raises:
        InvalidInputError: If the descriptor or build info has the wrong shape
    """
    try:
        descriptor = TypeDescriptor.from_json(raw_descriptor)
    except (ValueError, TypeError) as e:
        raise InvalidInputError(f"Invalid extension descriptor: {e}", field='descriptor') from e

    if build_info is not None and not isinstance(build_info, Mapping):
        raise InvalidInputError(
            f"Extension build info must be an object, got {type(build_info).__name__}",
            field='build_info',
        )
    try:
        size = int(file_size or 0)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid extension file size: {file_size!r}", field='file_size') from e

    return Extension(
        name=descriptor.type,
        descriptor=descriptor,
        build_info=dict(build_info or {}),
        file_size=max(size, 0),
        package_name=str(package_name or ''),
    )


def describe_extension(ext: Extension) -> ExtensionInfo:
    """Derive the display metadata shown for an extension."""
    meta = ext.descriptor.metadata
    build_info = ext.build_info or {}

    version = meta.get('version') or 1
    compiler, compiler_version = _split_compiler(build_info.get('compiledBy'))

    return ExtensionInfo(
        name=ext.descriptor.name or 'Unknown Extension',
        package=ext.package_name or ext.name,
        version=str(version),
        version_name=str(meta.get('versionName') or version),
        description=clean_description(meta.get('helpString') or meta.get('helpUrl')),
        date_built=meta.get('dateBuilt'),
        file_size=ext.file_size,
        author=_author(build_info, meta),
        compiler=compiler,
        compiler_version=compiler_version,
        min_sdk=_min_sdk(build_info, meta),
        event_count=len(ext.descriptor.events),
        method_count=len(ext.descriptor.methods),
        property_count=len(ext.descriptor.properties),
        block_property_count=len(ext.descriptor.block_properties),
    )


def clean_description(text: Any) -> str:
    """Strip HTML tags and non-breaking spaces from a help string."""
    if not text:
        return NO_DESCRIPTION
    cleaned = _TAG_RE.sub('', str(text)).replace('&nbsp;', ' ').strip()
    return cleaned or NO_DESCRIPTION


def format_file_size(size: int | None) -> str:
    """Format a byte count in 1024 steps, e.g. ``1536`` → ``'1.5 KB'``."""
    if not size or size <= 0:
        return '0 B'
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f'{value:.2f}'.rstrip('0').rstrip('.')
    return f'{text} {_SIZE_UNITS[index]}'


# ── Private Helpers ──────────────────────────────────────────────────────

def _author(build_info: Mapping[str, Any], meta: Mapping[str, Any]) -> str | None:
    author = str(build_info.get('author') or meta.get('author') or 'Unknown')
    return None if author.lower() == 'unknown' else author


def _min_sdk(build_info: Mapping[str, Any], meta: Mapping[str, Any]) -> str:
    min_sdk = build_info.get('androidMinSdk')
    if isinstance(min_sdk, list):
        min_sdk = min_sdk[0] if min_sdk else None
    if not min_sdk:
        min_sdk = meta.get('androidMinSdk') or DEFAULT_MIN_SDK
    return _API_PREFIX_RE.sub('', str(min_sdk))


def _split_compiler(compiled_by: Any) -> tuple[str | None, str | None]:
    # "FAST v2.8.4" → ("Fast", "v2.8.4")
    if not compiled_by:
        return None, None
    parts = str(compiled_by).split(' v')
    if len(parts) != 2:
        return str(compiled_by), None
    name = parts[0]
    return name[:1] + name[1:].lower(), 'v' + parts[1]
