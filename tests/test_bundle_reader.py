"""Tests for the bundle document reader."""

import copy
import json

import pytest

from aia_inspector.assembler import ProjectAssembler
from aia_inspector.bundle_reader import load_project, read_bundle
from aia_inspector.domain.enums import Origin
from aia_inspector.errors import BundleReadError, InvalidInputError
from tests.conftest import SAMPLE_BUNDLE, WIDGET_DESCRIPTOR


class TestReadBundle:
    """Tests for read_bundle."""

    def test_reads_document(self, bundle_file):
        document = read_bundle(bundle_file)
        assert document['name'] == 'DemoApp'
        assert len(document['screens']) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(BundleReadError):
            read_bundle(str(tmp_path / 'nope.json'))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{"name": ', encoding='utf-8')
        with pytest.raises(BundleReadError):
            read_bundle(str(path))

    def test_non_object_document(self, tmp_path):
        path = tmp_path / 'list.json'
        path.write_text(json.dumps([1, 2]), encoding='utf-8')
        with pytest.raises(BundleReadError, match='JSON object'):
            read_bundle(str(path))


class TestLoadProject:
    """Tests for load_project."""

    @pytest.fixture(autouse=True)
    def _assembler(self, catalog_builder):
        self.assembler = ProjectAssembler(catalog_builder)
        self.document = copy.deepcopy(SAMPLE_BUNDLE)

    def test_loads_sample(self):
        project = load_project(self.document, self.assembler)
        assert project.name == 'DemoApp'
        assert project.screen_names() == ['Screen1', 'Screen2']
        assert [e.name for e in project.extensions] == ['com.acme.Widget']
        assert [(a.name, a.type, a.size) for a in project.assets] == [
            ('logo.png', 'png', 1500), ('icon.PNG', 'PNG', 700), ('click.mp3', 'mp3', 800),
        ]

    def test_extensions_loaded_before_screens(self):
        project = load_project(self.document, self.assembler)
        widget = project.get_screen('Screen1').form.children[1]
        assert widget.name == 'Widget1'
        assert widget.origin is Origin.EXTENSION

    def test_properties_key_accepted(self):
        project = load_project(self.document, self.assembler)
        screen2 = project.get_screen('Screen2')
        assert [c.name for c in screen2.form.children] == ['Button3']
        assert screen2.project is project

    def test_scm_wrapper_unwrapped(self):
        self.document['screens'] = [{
            'name': 'Screen1',
            'form': {'authURL': ['localhost'], 'YaVersion': '208', 'Source': 'Form',
                     'Properties': {'$Name': 'Screen1', '$Type': 'Form', 'Title': 'Hello'}},
        }]
        project = load_project(self.document, self.assembler)
        assert project.screens[0].form.get_property('Title').value == 'Hello'

    def test_missing_sections_default_empty(self):
        project = load_project({'name': 'Bare'}, self.assembler)
        assert project.screens == []
        assert project.extensions == []
        assert project.assets == []

    def test_invalid_extension_reports_index(self):
        self.document['extensions'].append({'descriptor': {'name': 'NoType'}})
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.field == 'extensions'
        assert exc_info.value.index == 1

    def test_extension_with_malformed_property_names(self):
        descriptor = copy.deepcopy(WIDGET_DESCRIPTOR)
        descriptor['properties'].append({'name': ['Speed'], 'editorType': 'integer'})
        descriptor['blockProperties'].append({'name': {'Mode': 1}, 'type': 'text'})
        self.document['extensions'][0]['descriptor'] = descriptor

        project = load_project(self.document, self.assembler)
        widget = project.extensions[0].descriptor
        assert [p.name for p in widget.properties] == ['Speed', 'Mode']

    def test_non_object_extension(self):
        self.document['extensions'] = [copy.deepcopy(WIDGET_DESCRIPTOR)['type']]
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.index == 0

    def test_invalid_screen_entry(self):
        self.document['screens'].append('Screen3')
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.field == 'screens'
        assert exc_info.value.index == 2

    def test_unnamed_screen_rejected(self):
        self.document['screens'][0]['name'] = ''
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.field == 'name'

    def test_section_must_be_list(self):
        self.document['assets'] = {'logo.png': 1500}
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.field == 'assets'

    def test_unnamed_asset_rejected(self):
        self.document['assets'].append({'type': 'png', 'size': 1})
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.index == 3

    def test_project_name_required(self):
        del self.document['name']
        with pytest.raises(InvalidInputError) as exc_info:
            load_project(self.document, self.assembler)
        assert exc_info.value.field == 'name'
