"""Value parsers keyed by designer editor type.

Each parser turns the raw string stored in a screen's form into a typed
value, raising ValueError when the string does not fit the editor type.
"""

import re
from typing import Any, Callable

from aia_inspector.domain.constants import (
    ALIGNMENT_EDITOR_SUFFIX,
    BOOLEAN_EDITORS,
    COLOR_EDITORS,
    FLOAT_EDITORS,
    INTEGER_EDITORS,
    NON_NEGATIVE_EDITORS,
)

ValueParser = Callable[[str], Any]

_COLOR_RE = re.compile(r'&H([0-9A-Fa-f]{1,8})', re.IGNORECASE)


def parse_string(raw: str) -> str:
    return raw


def parse_boolean(raw: str) -> bool:
    text = raw.strip().lower()
    if text == 'true':
        return True
    if text == 'false':
        return False
    raise ValueError(f"Not a boolean: {raw!r}")


def parse_color(raw: str) -> int:
    """Parse an ``&HAARRGGBB`` color literal into its ARGB integer."""
    match = _COLOR_RE.fullmatch(raw.strip())
    if match is None:
        raise ValueError(f"Not a color literal: {raw!r}")
    return int(match.group(1), 16)


def parse_integer(raw: str) -> int:
    return int(raw.strip())


def parse_float(raw: str) -> float:
    return float(raw.strip())


def non_negative(parser: ValueParser) -> ValueParser:
    """Wrap a numeric parser so negative values are rejected."""
    def parse(raw: str) -> Any:
        value = parser(raw)
        if value < 0:
            raise ValueError(f"Negative value not allowed: {raw!r}")
        return value
    return parse


class ValueParserRegistry:
    """Registry mapping editor types to value parsers.

    Editor types without a registered parser, and properties without an
    editor type, keep the raw string.
    """

    def __init__(self):
        self._parsers: dict[str, ValueParser] = {}
        self._default_parser: ValueParser = parse_string
        self._register_default_parsers()

    def _register_default_parsers(self) -> None:
        for editor in BOOLEAN_EDITORS:
            self.register_parser(editor, parse_boolean)
        for editor in COLOR_EDITORS:
            self.register_parser(editor, parse_color)
        for editor in INTEGER_EDITORS:
            parser = non_negative(parse_integer) if editor in NON_NEGATIVE_EDITORS else parse_integer
            self.register_parser(editor, parser)
        for editor in FLOAT_EDITORS:
            parser = non_negative(parse_float) if editor in NON_NEGATIVE_EDITORS else parse_float
            self.register_parser(editor, parser)

    def get_parser(self, editor_type: str | None) -> ValueParser:
        if not editor_type:
            return self._default_parser
        parser = self._parsers.get(editor_type)
        if parser is not None:
            return parser
        # horizontal_alignment, vertical_alignment, textalignment, ...
        if editor_type.lower().endswith(ALIGNMENT_EDITOR_SUFFIX):
            return parse_integer
        return self._default_parser

    def register_parser(self, editor_type: str, parser: ValueParser) -> None:
        self._parsers[editor_type] = parser

    def get_supported_types(self) -> list[str]:
        return list(self._parsers.keys())
