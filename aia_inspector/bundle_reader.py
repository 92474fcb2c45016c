"""Reader for decoded project bundle documents.

Zip extraction and scheme-text unwrapping happen upstream; this module
takes the resulting JSON document::

    {
      "name": "MyApp",
      "screens": [{"name": "Screen1", "form": {...}, "blocks": "<xml>...</xml>"}],
      "extensions": [{"descriptor": {...}, "build_info": {...},
                      "file_size": 1234, "package_name": "com.acme.widget"}],
      "assets": [{"name": "logo.png", "type": "png", "size": 2048}]
    }
"""

import json
from typing import Any, Mapping

from aia_inspector.assembler import ProjectAssembler
from aia_inspector.domain.constants import NAME_KEY
from aia_inspector.domain.models import Asset, Extension, Project
from aia_inspector.errors import BundleReadError, InvalidInputError
from aia_inspector.extensions import build_extension


def read_bundle(path: str) -> dict[str, Any]:
    """Load a decoded bundle document from a JSON file."""
    try:
        with open(path, encoding='utf-8') as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        raise BundleReadError(f"Failed to read bundle: {e}") from e
    if not isinstance(document, dict):
        raise BundleReadError(f"Bundle must be a JSON object, got {type(document).__name__}")
    return document


def load_project(document: Mapping[str, Any], assembler: ProjectAssembler | None = None) -> Project:
    """
    Assemble a Project from a decoded bundle document.

    Extensions are loaded first so every screen is classified against
    them; screens are then added in document order.

    Raises:
        InvalidInputError: If a list item has the wrong shape (``field``
            and ``index`` identify it) or a screen has no name
    """
    if not isinstance(document, Mapping):
        raise InvalidInputError("Bundle document must be an object", field='document')
    assembler = assembler or ProjectAssembler()

    extensions = [_load_extension(entry, i) for i, entry in enumerate(_list(document, 'extensions'))]
    assets = [_load_asset(entry, i) for i, entry in enumerate(_list(document, 'assets'))]
    project = assembler.assemble_project(document.get('name'), (), extensions, assets)

    raw_screens = []
    for i, entry in enumerate(_list(document, 'screens')):
        if not isinstance(entry, Mapping):
            raise InvalidInputError(f"Screen #{i} must be an object", field='screens', index=i)
        raw_screens.append((entry.get('name'), _form_of(entry), entry.get('blocks') or ''))
    assembler.assemble_screens(project, raw_screens)
    return project


# ── Private Helpers ──────────────────────────────────────────────────────

def _list(document: Mapping[str, Any], key: str) -> list:
    items = document.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidInputError(f"Bundle '{key}' must be a list", field=key)
    return items


def _form_of(entry: Mapping[str, Any]) -> Any:
    form = entry.get('form')
    if form is None:
        form = entry.get('Properties')
    # A whole .scm document: {"Source": "Form", "Properties": {...}}
    if isinstance(form, Mapping) and NAME_KEY not in form and 'Properties' in form:
        form = form['Properties']
    return form


def _load_extension(entry: Any, index: int) -> Extension:
    if not isinstance(entry, Mapping):
        raise InvalidInputError(f"Extension #{index} must be an object", field='extensions', index=index)
    try:
        return build_extension(
            entry.get('descriptor'),
            build_info=entry.get('build_info'),
            file_size=entry.get('file_size', 0),
            package_name=entry.get('package_name', ''),
        )
    except InvalidInputError as e:
        raise InvalidInputError(f"Extension #{index}: {e}", field='extensions', index=index) from e


def _load_asset(entry: Any, index: int) -> Asset:
    if not isinstance(entry, Mapping) or not entry.get('name'):
        raise InvalidInputError(f"Asset #{index} must be an object with a name", field='assets', index=index)
    name = str(entry['name'])
    asset_type = entry.get('type') or (name.rsplit('.', 1)[-1] if '.' in name else '')
    try:
        size = int(entry.get('size') or 0)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Asset #{index} has an invalid size", field='assets', index=index) from e
    return Asset(name=name, type=str(asset_type), size=size)
