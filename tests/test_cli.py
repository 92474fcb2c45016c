"""Integration tests for the command line."""

import json
import sys

import pytest
import structlog

from aia_inspector import cli
from aia_inspector.cli import inspect_bundle, main
from aia_inspector.domain.models import InspectOptions


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    # Logging setup is covered by test_logging_config; keep handlers off captured streams here
    monkeypatch.setattr(
        cli, 'configure_logging',
        lambda *args, **kwargs: structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr)),
    )
    yield
    structlog.reset_defaults()


class TestInspectBundle:
    """End-to-end tests for the inspect pipeline."""

    def test_inspect_bundle(self, bundle_file, catalog_file):
        project = inspect_bundle(bundle_file, InspectOptions(catalog_path=catalog_file))
        assert project.screen_names() == ['Screen1', 'Screen2']
        assert project.extensions[0].short_name == 'Widget'

    def test_inspect_bundle_with_workers(self, bundle_file, catalog_file):
        options = InspectOptions(catalog_path=catalog_file, max_workers=4, parallel_screens=True)
        pooled = inspect_bundle(bundle_file, options)
        plain = inspect_bundle(bundle_file, InspectOptions(catalog_path=catalog_file))
        assert [s.form for s in pooled.screens] == [s.form for s in plain.screens]


class TestMain:
    """Tests for the aia-inspector entry point."""

    def test_summary(self, bundle_file, catalog_file, capsys):
        main(['--catalog', catalog_file, 'summary', bundle_file])
        out = capsys.readouterr().out
        assert 'Project: DemoApp' in out
        assert 'Button: 3' in out
        assert 'Extension: Widget 1.2 (com.acme.widget, 20 KB)' in out

    def test_summary_json(self, bundle_file, catalog_file, capsys):
        main(['--catalog', catalog_file, 'summary', bundle_file, '--json', '--most-used', '1'])
        data = json.loads(capsys.readouterr().out)
        assert data['screen_count'] == 2
        assert data['most_used'] == [{'type': 'Button', 'count': 3}]
        assert data['extensions'][0]['compiler'] == 'Fast'

    def test_tree_single_screen(self, bundle_file, catalog_file, capsys):
        main(['--catalog', catalog_file, 'tree', bundle_file, '--screen', 'Screen2'])
        out = capsys.readouterr().out
        assert '== Screen2 ==' in out
        assert '  Button3 (Button) [BUILT_IN] 1 properties' in out
        assert 'Screen1' not in out

    def test_tree_marks_extensions(self, bundle_file, catalog_file, capsys):
        main(['--catalog', catalog_file, '--workers', '2', 'tree', bundle_file])
        out = capsys.readouterr().out
        assert 'Widget1 (Widget) [EXTENSION]' in out

    def test_types_from_catalog_file(self, catalog_file, capsys):
        main(['types', '--catalog', catalog_file])
        lines = capsys.readouterr().out.split()
        assert lines == ['Button', 'Form', 'HorizontalArrangement']

    def test_types_bundled(self, capsys):
        main(['types'])
        assert 'Button' in capsys.readouterr().out.split()

    def test_missing_bundle_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['summary', str(tmp_path / 'missing.json')])
        assert exc_info.value.code == 1
        assert 'not found' in capsys.readouterr().err

    def test_unknown_screen_exits(self, bundle_file, catalog_file):
        with pytest.raises(SystemExit) as exc_info:
            main(['--catalog', catalog_file, 'tree', bundle_file, '--screen', 'Screen9'])
        assert exc_info.value.code == 1

    def test_invalid_bundle_exits(self, tmp_path, capsys):
        path = tmp_path / 'broken.json'
        path.write_text('[]', encoding='utf-8')
        with pytest.raises(SystemExit) as exc_info:
            main(['summary', str(path)])
        assert exc_info.value.code == 1
        assert capsys.readouterr().err.startswith('Error:')

    def test_no_command_prints_help(self, capsys):
        main([])
        assert 'usage: aia-inspector' in capsys.readouterr().out
