"""Tests for the recursive folder builder and its index heuristic."""

import logging
from pathlib import Path

import pytest

from archive import DocCArchive
from exporters import FileSystemExportTarget, FolderBuilder

from conftest import RecordingRenderer, make_page, write_archive


@pytest.fixture
def site(tmp_path):
    return tmp_path / 'site'


def build(archive_root, site, renderer, build_index=True, **kwargs):
    folder = DocCArchive(archive_root).documentation_folder()
    builder = FolderBuilder(FileSystemExportTarget(site), renderer)
    return builder.build_folder(folder, 'documentation', build_index, **kwargs)


class TestSlothScenario:
    """Index pages, Foo with subfolder Foo/ holding Bar."""

    def test_expected_outputs(self, sloth_archive, site, recording_renderer):
        report = build(sloth_archive, site, recording_renderer)

        assert sorted(report.pages_written) == [
            'documentation/Foo.html',
            'documentation/Foo/Bar.html',
            'documentation/Index.html',
        ]
        assert report.index_pages_written == ['documentation/Foo/index.html']
        assert report.failures == []

        for relative_path in report.pages_written + report.index_pages_written:
            assert (site / relative_path).is_file()
        assert not (site / 'documentation' / 'Bar').exists()
        assert not (site / 'documentation' / 'Foo' / 'Bar' / 'index.html').exists()
        assert not (site / 'documentation' / 'Index' / 'index.html').exists()

    def test_path_to_root_matches_folder_depth(self, sloth_archive, site, recording_renderer):
        build(sloth_archive, site, recording_renderer)

        assert [c.path_to_root for c in recording_renderer.contexts_for('Index')] == ['../']
        assert [c.path_to_root for c in recording_renderer.contexts_for('Bar')] == ['../../']

        foo_contexts = recording_renderer.contexts_for('Foo')
        assert [(c.path_to_root, c.is_index) for c in foo_contexts] == [
            ('../', False),
            ('../../', True),
        ]

    def test_index_variant_context_flags(self, sloth_archive, site, recording_renderer):
        build(sloth_archive, site, recording_renderer)

        normal, index = recording_renderer.contexts_for('Foo')
        assert normal.is_index is False
        assert normal.index_links is True
        assert index.is_index is True
        assert index.index_links is True

        html = (site / 'documentation' / 'Foo' / 'index.html').read_text()
        assert html == '<html>Foo|../../|True|True</html>\n'

    def test_subfolders_are_built_before_pages(self, sloth_archive, site, recording_renderer):
        build(sloth_archive, site, recording_renderer)

        titles = [title for title, _ in recording_renderer.calls]
        assert titles.index('Bar') < titles.index('Foo')
        assert titles.index('Bar') < titles.index('Index')

    def test_references_are_passed_to_the_renderer(self, tmp_path, site, recording_renderer):
        references = {'doc://com.example.Sloth/documentation/sloth/foo': {'title': 'Foo'}}
        root = write_archive(tmp_path, documentation={
            'Index.json': make_page('Index', references=references)
        })

        build(root, site, recording_renderer)

        (context,) = recording_renderer.contexts_for('Index')
        assert context.references == references


class TestIndexHeuristic:
    """Index variants only for pages named like a sibling subfolder."""

    def test_no_index_variants_when_disabled(self, sloth_archive, site, recording_renderer):
        report = build(sloth_archive, site, recording_renderer, build_index=False)

        assert report.index_pages_written == []
        assert not (site / 'documentation' / 'Foo' / 'index.html').exists()
        assert all(not c.is_index and not c.index_links
                   for _, c in recording_renderer.calls)

    def test_match_is_exact(self, tmp_path, site, recording_renderer):
        root = write_archive(tmp_path, documentation={
            'foo.json': make_page('lower'),
            'Foobar.json': make_page('Foobar'),
            'Foo': {'Bar.json': make_page('Bar')},
        })

        report = build(root, site, recording_renderer)

        assert report.index_pages_written == []

    def test_nested_landing_pages(self, tmp_path, site, recording_renderer):
        root = write_archive(tmp_path, documentation={
            'Sloth.json': make_page('Sloth'),
            'Sloth': {
                'Habitat.json': make_page('Habitat'),
                'Habitat': {'Trees.json': make_page('Trees')},
            },
        })

        report = build(root, site, recording_renderer)

        assert sorted(report.index_pages_written) == [
            'documentation/Sloth/Habitat/index.html',
            'documentation/Sloth/index.html',
        ]
        assert [c.path_to_root for c in recording_renderer.contexts_for('Habitat')] == [
            '../../', '../../../'
        ]
        assert [c.path_to_root for c in recording_renderer.contexts_for('Trees')] == ['../../../']


class TestExplicitLevel:
    """The nesting level can be passed explicitly."""

    def test_level_override(self, sloth_archive, site, recording_renderer):
        build(sloth_archive, site, recording_renderer, level=0)

        assert [c.path_to_root for c in recording_renderer.contexts_for('Index')] == ['']
        assert [c.path_to_root for c in recording_renderer.contexts_for('Bar')] == ['../']


class TestPartialFailure:
    """A failing page is logged and skipped."""

    def test_one_failing_page_of_ten(self, tmp_path, site, caplog):
        pages = {f'Page{i}.json': make_page(f'Page{i}') for i in range(10)}
        root = write_archive(tmp_path, documentation=pages)
        renderer = RecordingRenderer(fail_on=['Page3'])

        with caplog.at_level(logging.ERROR):
            report = build(root, site, renderer)

        assert len(report.pages_written) == 9
        assert report.failed_pages == [str(root / 'data' / 'documentation' / 'Page3.json')]
        assert report.failures[0].output == 'documentation/Page3.html'
        assert 'cannot render Page3' in report.failures[0].error
        assert not (site / 'documentation' / 'Page3.html').exists()
        assert (site / 'documentation' / 'Page4.html').exists()
        assert 'Page3.json' in caplog.text

    def test_unparseable_page_does_not_stop_subfolders(self, tmp_path, site, recording_renderer):
        root = write_archive(tmp_path, documentation={
            'Broken.json': '{not json',
            'Good.json': make_page('Good'),
            'Sub': {'Child.json': make_page('Child')},
        })

        report = build(root, site, recording_renderer)

        assert Path(report.failed_pages[0]).name == 'Broken.json'
        assert sorted(report.pages_written) == [
            'documentation/Good.html',
            'documentation/Sub/Child.html',
        ]

    def test_failed_index_variant_keeps_normal_page(self, sloth_archive, site):
        class IndexFailingRenderer(RecordingRenderer):
            def render(self, document, context):
                if context.is_index:
                    raise RuntimeError('index template broken')
                return super().render(document, context)

        report = build(sloth_archive, site, IndexFailingRenderer())

        assert 'documentation/Foo.html' in report.pages_written
        assert report.index_pages_written == []
        assert report.failures[0].output == 'documentation/Foo/index.html'
