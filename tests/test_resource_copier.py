"""Tests for static resource copying."""

import logging

from archive import DocCArchive
from exporters import FileSystemExportTarget, ResourceCopier
from models import ExportOptions

from conftest import write_archive


def copy(archive_root, site, **option_values):
    options = ExportOptions(**option_values)
    copier = ResourceCopier(FileSystemExportTarget(site), options, show_progress=False)
    return copier.copy_resources(DocCArchive(archive_root))


class TestResourceLayout:
    """Test where each asset group lands."""

    def test_layout_with_hashes_stripped(self, sloth_archive, tmp_path):
        site = tmp_path / 'site'

        result = copy(sloth_archive, site, keep_hash=False)

        assert sorted(result.copied) == [
            'css/documentation-topic~topic.css',
            'css/index.css',
            'downloads/Sample.zip',
            'favicon.ico',
            'favicon.svg',
            'images/sloth.png',
            'img/added-icon.svg',
            'img/deprecated-icon.svg',
            'videos/intro.mov',
        ]
        assert result.failed == []
        assert (site / 'images' / 'sloth.png').read_bytes() == b'sloth-image'
        assert (site / 'img' / 'added-icon.svg').read_bytes() == b'<svg>added</svg>'

    def test_layout_with_hashes_kept(self, sloth_archive, tmp_path):
        site = tmp_path / 'site'

        result = copy(sloth_archive, site, keep_hash=True)

        assert 'img/added-icon.d6f7e47d.svg' in result.copied
        assert 'img/deprecated-icon-0a3c1e57.svg' in result.copied
        assert 'css/index.12345678.css' in result.copied

    def test_user_assets_always_keep_their_names(self, tmp_path):
        root = write_archive(tmp_path / 'archives', assets={
            'images/photo-1234abcd.png': b'photo',
            'img/icon-1234abcd.svg': b'icon',
        })
        site = tmp_path / 'site'

        result = copy(root, site, keep_hash=False)

        assert sorted(result.copied) == ['images/photo-1234abcd.png', 'img/icon.svg']

    def test_system_css_can_be_skipped(self, sloth_archive, tmp_path):
        site = tmp_path / 'site'

        result = copy(sloth_archive, site, copy_system_css=False)

        assert not any(path.startswith('css/') for path in result.copied)
        assert not (site / 'css').exists()


class TestSiteStylesheet:
    """Test the fixed site stylesheet."""

    def test_stylesheet_is_written(self, tmp_path):
        site = tmp_path / 'site'
        copier = ResourceCopier(
            FileSystemExportTarget(site), ExportOptions(), stylesheet='body {}', show_progress=False
        )

        error = copier.write_site_stylesheet()

        assert error is None
        assert (site / 'css' / 'site.css').read_text() == 'body {}'

    def test_stylesheet_failure_is_reported_not_raised(self, tmp_path, caplog):
        site = tmp_path / 'site'
        site.mkdir()
        (site / 'css').write_text('a file where the css directory should be')
        copier = ResourceCopier(FileSystemExportTarget(site), ExportOptions(), show_progress=False)

        with caplog.at_level(logging.ERROR):
            error = copier.write_site_stylesheet()

        assert error is not None
        assert 'Failed to write custom stylesheet' in caplog.text
