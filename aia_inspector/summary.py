"""Project summary statistics."""

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any

from aia_inspector.domain.block_xml import iter_blocks, parse_blocks
from aia_inspector.domain.constants import BLOCK_KIND_MAP
from aia_inspector.domain.enums import Origin
from aia_inspector.domain.models import Project, Screen
from aia_inspector.domain.tree_walker import iter_components
from aia_inspector.logging_config import get_logger

logger = get_logger(__name__)

_SIZE_UNITS = ('B', 'kB', 'MB', 'GB', 'TB', 'PB')
_BLOCK_KINDS = ('events', 'methods', 'properties', 'variables', 'procedures')


@dataclass
class ProjectSummary:
    """Counts and shares describing one project."""
    name: str
    screen_count: int = 0
    extension_count: int = 0
    asset_count: int = 0
    total_asset_size: int = 0
    total_asset_size_readable: str = '0B'
    total_blocks: int = 0
    blocks_per_screen: dict[str, int] = field(default_factory=dict)
    assets_by_type: dict[str, int] = field(default_factory=dict)
    most_used: list[tuple[str, int]] = field(default_factory=list)
    origin_share: dict[str, int] = field(default_factory=dict)
    block_kinds: dict[str, int] = field(default_factory=dict)
    faulty_components: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['most_used'] = [{'type': t, 'count': c} for t, c in self.most_used]
        return data


def format_size(size: int) -> str:
    """Format a byte count in 1000 steps, truncated: ``2500`` → ``'2kB'``."""
    value = float(size or 0)
    index = 0
    while value > 1000 and index < len(_SIZE_UNITS) - 1:
        value /= 1000
        index += 1
    return f'{int(value)}{_SIZE_UNITS[index]}'


def summarize(project: Project, most_used_limit: int = 8) -> ProjectSummary:
    """Compute the summary statistics of an assembled project."""
    summary = ProjectSummary(
        name=project.name,
        screen_count=len(project.screens),
        extension_count=len(project.extensions),
        asset_count=len(project.assets),
    )

    summary.total_asset_size = sum(asset.size for asset in project.assets)
    summary.total_asset_size_readable = format_size(summary.total_asset_size)
    for asset in project.assets:
        key = asset.type.lower()
        summary.assets_by_type[key] = summary.assets_by_type.get(key, 0) + 1

    block_kinds = dict.fromkeys(_BLOCK_KINDS, 0)
    for screen in project.screens:
        types = _block_types(screen)
        summary.blocks_per_screen[screen.name] = len(types)
        for block_type in types:
            kind = BLOCK_KIND_MAP.get(block_type)
            if kind:
                block_kinds[kind] += 1
    summary.total_blocks = sum(summary.blocks_per_screen.values())
    summary.block_kinds = block_kinds

    usage: Counter[str] = Counter()
    origins = {'built_in': 0, 'extension': 0}
    for screen in project.screens:
        for path, comp in iter_components(screen.form):
            if comp.type:
                usage[comp.type] += 1
            origins['extension' if comp.origin is Origin.EXTENSION else 'built_in'] += 1
            if comp.faulty:
                summary.faulty_components.append(path)

    # Counter preserves first-seen order and sorted() is stable
    ranked = sorted(usage.items(), key=lambda item: item[1], reverse=True)
    summary.most_used = ranked[:max(most_used_limit, 0)]
    summary.origin_share = origins
    return summary


def _block_types(screen: Screen) -> list[str]:
    """Type of every <block> element (nested ones included) of a screen."""
    root = parse_blocks(screen.blocks)
    if root is None:
        if screen.blocks and screen.blocks.strip():
            logger.debug("unparsable_blocks", screen=screen.name)
        return []
    return [block.get('type', '') for block in iter_blocks(root)]
