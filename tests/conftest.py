"""Shared test fixtures."""

import copy
import json

import pytest

from aia_inspector.catalog.descriptor_catalog import CatalogBuilder, DescriptorCatalog
from aia_inspector.catalog.loader import InMemoryDescriptorSource
from aia_inspector.domain.models import Project
from aia_inspector.extensions import build_extension


# ── Sample Descriptors ───────────────────────────────────────────────────

NS = 'com.google.appinventor.components.runtime'

ALIGN_HELPER = {
    'type': 'OPTION_LIST',
    'data': {
        'className': 'com.google.appinventor.components.common.HorizontalAlignment',
        'key': 'HorizontalAlignment',
        'tag': 'HorizontalAlignment',
        'defaultOpt': 'Left',
        'underlyingType': 'java.lang.Integer',
        'options': [
            {'name': 'Left', 'value': '1', 'description': 'Aligns to the left.', 'deprecated': 'false'},
            {'name': 'Right', 'value': '2', 'description': 'Aligns to the right.', 'deprecated': 'false'},
            {'name': 'Center', 'value': '3', 'description': 'Aligns to the center.', 'deprecated': 'false'},
        ],
    },
}

FORM_DESCRIPTOR = {
    'type': f'{NS}.Form',
    'name': 'Form',
    'version': '31',
    'properties': [
        {'name': 'AppName', 'editorType': 'string', 'defaultValue': ''},
        {'name': 'Title', 'editorType': 'string', 'defaultValue': ''},
        {'name': 'Scrollable', 'editorType': 'boolean', 'defaultValue': 'False'},
        {'name': 'BackgroundColor', 'editorType': 'color', 'defaultValue': '&HFFFFFFFF'},
        {'name': 'AlignHorizontal', 'editorType': 'horizontal_alignment', 'defaultValue': '1'},
        {'name': 'VersionCode', 'editorType': 'non_negative_integer', 'defaultValue': '1'},
    ],
    'blockProperties': [
        {'name': 'Title', 'description': 'Screen title.', 'type': 'text', 'rw': 'read-write'},
        {'name': 'AlignHorizontal', 'description': 'Horizontal alignment.', 'type': 'number',
         'rw': 'read-write', 'helper': ALIGN_HELPER},
        {'name': 'Width', 'description': 'Screen width.', 'type': 'number', 'rw': 'read-only'},
    ],
    'events': [{'name': 'Initialize', 'description': 'Screen started.', 'params': []}],
    'methods': [],
}

BUTTON_DESCRIPTOR = {
    'type': f'{NS}.Button',
    'name': 'Button',
    'version': '7',
    'properties': [
        {'name': 'Text', 'editorType': 'string', 'defaultValue': 'Text for Button'},
        {'name': 'Enabled', 'editorType': 'boolean', 'defaultValue': 'True'},
        {'name': 'FontSize', 'editorType': 'non_negative_float', 'defaultValue': '14.0'},
        {'name': 'Visible', 'editorType': 'visibility', 'defaultValue': 'True'},
    ],
    'blockProperties': [
        {'name': 'Text', 'description': 'Button text.', 'type': 'text', 'rw': 'read-write'},
        {'name': 'Enabled', 'description': 'Enabled.', 'type': 'boolean', 'rw': 'read-write'},
    ],
    'events': [{'name': 'Click', 'description': 'User tapped the button.', 'params': []}],
    'methods': [],
}

ARRANGEMENT_DESCRIPTOR = {
    'type': f'{NS}.HorizontalArrangement',
    'name': 'HorizontalArrangement',
    'properties': [
        {'name': 'AlignHorizontal', 'editorType': 'horizontal_alignment', 'defaultValue': '1'},
        {'name': 'Width', 'editorType': 'length', 'defaultValue': '-1'},
    ],
    'blockProperties': [
        {'name': 'AlignHorizontal', 'type': 'number', 'rw': 'read-write', 'helper': ALIGN_HELPER},
    ],
    'events': [],
    'methods': [],
}

WIDGET_DESCRIPTOR = {
    'type': 'com.acme.Widget',
    'name': 'Widget',
    'version': '3',
    'versionName': '1.2',
    'external': 'true',
    'helpString': '<p>A <b>fancy</b>&nbsp;widget.</p>',
    'dateBuilt': '2024-05-01T10:00:00+0000',
    'androidMinSdk': 19,
    'properties': [
        {'name': 'Speed', 'editorType': 'non_negative_integer', 'defaultValue': '5'},
        {'name': 'Mode', 'editorType': 'choices', 'defaultValue': 'fast'},
    ],
    'blockProperties': [
        {'name': 'Speed', 'description': 'Spin speed.', 'type': 'number', 'rw': 'read-write'},
        {'name': 'Mode', 'description': 'Spin mode.', 'type': 'text', 'rw': 'read-write',
         'helper': {'type': 'OPTION_LIST', 'data': {
             'key': 'SpinMode', 'tag': 'SpinMode', 'defaultOpt': 'Fast',
             'underlyingType': 'java.lang.String',
             'options': [
                 {'name': 'Fast', 'value': 'fast'},
                 {'name': 'Slow', 'value': 'slow'},
             ],
         }}},
    ],
    'events': [{'name': 'Spun', 'description': 'Spin done.', 'params': [{'name': 'turns', 'type': 'number'}]}],
    'methods': [{'name': 'Spin', 'description': 'Start spinning.', 'params': [], 'returnType': 'boolean'}],
}

BUILTIN_DESCRIPTORS = [FORM_DESCRIPTOR, BUTTON_DESCRIPTOR, ARRANGEMENT_DESCRIPTOR]

WIDGET_BUILD_INFO = {
    'author': 'Acme Labs',
    'compiledBy': 'FAST v2.8.4',
    'androidMinSdk': ['API 21'],
}


# ── Sample Forms and Blocks ──────────────────────────────────────────────

SAMPLE_FORM = {
    '$Name': 'Screen1',
    '$Type': 'Form',
    '$Version': '31',
    'Uuid': '0',
    'AppName': 'Demo',
    'Title': 'Screen1',
    '$Components': [
        {
            '$Name': 'HorizontalArrangement1',
            '$Type': 'HorizontalArrangement',
            '$Version': '4',
            'Uuid': '-1001',
            'AlignHorizontal': '3',
            '$Components': [
                {'$Name': 'Button1', '$Type': 'Button', '$Version': '7', 'Uuid': '-1002', 'Text': 'Go'},
                {'$Name': 'Button2', '$Type': 'Button', '$Version': '7', 'Uuid': '-1003', 'Enabled': 'False'},
            ],
        },
        {'$Name': 'Widget1', '$Type': 'Widget', '$Version': '3', 'Uuid': '-1004', 'Speed': '7'},
    ],
}

SAMPLE_BLOCKS = """\
<xml xmlns="https://developers.google.com/blockly/xml">
  <block type="component_event" id="e1" x="10" y="10">
    <mutation component_type="Button" instance_name="Button1" event_name="Click"></mutation>
    <statement name="DO">
      <block type="component_set_get" id="s1">
        <mutation component_type="Button" set_or_get="set" property_name="Text"></mutation>
        <value name="VALUE"><block type="text" id="t1"><field name="TEXT">Hi</field></block></value>
      </block>
    </statement>
  </block>
  <block type="global_declaration" id="g1" x="10" y="200">
    <field name="NAME">count</field>
    <value name="VALUE"><block type="math_number" id="n1"><field name="NUM">0</field></block></value>
  </block>
  <block type="procedures_defnoreturn" id="p1" x="10" y="300"><field name="NAME">reset</field></block>
  <block type="text" id="stray" x="10" y="400"><field name="TEXT">loose</field></block>
</xml>
"""

SAMPLE_BUNDLE = {
    'name': 'DemoApp',
    'extensions': [
        {
            'descriptor': WIDGET_DESCRIPTOR,
            'build_info': WIDGET_BUILD_INFO,
            'file_size': 20480,
            'package_name': 'com.acme.widget',
        },
    ],
    'screens': [
        {'name': 'Screen1', 'form': SAMPLE_FORM, 'blocks': SAMPLE_BLOCKS},
        {
            'name': 'Screen2',
            'Properties': {
                '$Name': 'Screen2',
                '$Type': 'Form',
                'Uuid': '0',
                '$Components': [{'$Name': 'Button3', '$Type': 'Button', 'Uuid': '-2001', 'Text': 'Back'}],
            },
            'blocks': '',
        },
    ],
    'assets': [
        {'name': 'logo.png', 'type': 'png', 'size': 1500},
        {'name': 'icon.PNG', 'type': 'PNG', 'size': 700},
        {'name': 'click.mp3', 'size': 800},
    ],
}


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def catalog():
    """Small built-in catalog: Form, Button, HorizontalArrangement."""
    return DescriptorCatalog.from_json(copy.deepcopy(BUILTIN_DESCRIPTORS))


@pytest.fixture
def catalog_builder():
    return CatalogBuilder(InMemoryDescriptorSource(copy.deepcopy(BUILTIN_DESCRIPTORS)))


@pytest.fixture
def widget_extension():
    return build_extension(
        copy.deepcopy(WIDGET_DESCRIPTOR),
        build_info=dict(WIDGET_BUILD_INFO),
        file_size=20480,
        package_name='com.acme.widget',
    )


@pytest.fixture
def project(widget_extension):
    """Empty project with the Widget extension loaded."""
    proj = Project(name='DemoApp')
    proj.add_extension(widget_extension)
    return proj


@pytest.fixture
def sample_form():
    return copy.deepcopy(SAMPLE_FORM)


@pytest.fixture
def bundle_file(tmp_path):
    """Write SAMPLE_BUNDLE to disk and return its path."""
    path = tmp_path / 'demo_bundle.json'
    path.write_text(json.dumps(SAMPLE_BUNDLE), encoding='utf-8')
    return str(path)


@pytest.fixture
def catalog_file(tmp_path):
    """Write the sample built-in descriptors to disk and return the path."""
    path = tmp_path / 'descriptors.json'
    path.write_text(json.dumps(BUILTIN_DESCRIPTORS), encoding='utf-8')
    return str(path)
