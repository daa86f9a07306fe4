"""Tests for the filesystem export target."""

import pytest

from exporters.export_target import FileSystemExportTarget


class TestTargetDirectories:
    """Test existence checks and directory creation."""

    def test_target_exists_has_no_side_effects(self, tmp_path):
        target = FileSystemExportTarget(tmp_path / 'site')

        assert target.target_exists() is False
        assert not (tmp_path / 'site').exists()

    def test_ensure_dir_creates_parents_and_is_idempotent(self, tmp_path):
        target = FileSystemExportTarget(tmp_path / 'site')

        target.ensure_dir('documentation/sloth/foo')
        target.ensure_dir('documentation/sloth/foo')

        assert (tmp_path / 'site' / 'documentation' / 'sloth' / 'foo').is_dir()
        assert target.target_exists() is True

    def test_ensure_dir_fails_when_a_file_is_in_the_way(self, tmp_path):
        (tmp_path / 'site').write_text('not a directory')
        target = FileSystemExportTarget(tmp_path / 'site')

        with pytest.raises(OSError):
            target.ensure_dir('css')


class TestWrite:
    """Test text file writes."""

    def test_write_creates_parent_directories(self, tmp_path):
        target = FileSystemExportTarget(tmp_path / 'site')

        target.write('<html></html>', 'documentation/foo/index.html')

        path = tmp_path / 'site' / 'documentation' / 'foo' / 'index.html'
        assert path.read_text(encoding='utf-8') == '<html></html>'

    def test_write_overwrites_silently(self, tmp_path):
        target = FileSystemExportTarget(tmp_path / 'site')

        target.write('first', 'page.html')
        target.write('second', 'page.html')

        assert (tmp_path / 'site' / 'page.html').read_text(encoding='utf-8') == 'second'


class TestCopy:
    """Test raw and stylesheet copies."""

    @pytest.fixture
    def sources(self, tmp_path):
        source_dir = tmp_path / 'src'
        source_dir.mkdir()
        files = {
            'hero-5a4a0f37.svg': b'<svg>hero</svg>',
            'added-icon.d6f7e47d.svg': b'<svg>added</svg>',
            'sloth.png': b'png',
        }
        for name, content in files.items():
            (source_dir / name).write_bytes(content)
        return [source_dir / name for name in files]

    def test_copy_keeps_names_by_default(self, tmp_path, sources):
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_raw(sources, to='img')

        assert sorted(result.copied) == [
            'img/added-icon.d6f7e47d.svg',
            'img/hero-5a4a0f37.svg',
            'img/sloth.png',
        ]
        assert result.failed == []
        assert (tmp_path / 'site' / 'img' / 'hero-5a4a0f37.svg').read_bytes() == b'<svg>hero</svg>'

    def test_copy_strips_hashes_when_requested(self, tmp_path, sources):
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_raw(sources, to='img', keep_hash=False)

        assert sorted(result.copied) == ['img/added-icon.svg', 'img/hero.svg', 'img/sloth.png']
        assert (tmp_path / 'site' / 'img' / 'hero.svg').read_bytes() == b'<svg>hero</svg>'
        assert not (tmp_path / 'site' / 'img' / 'hero-5a4a0f37.svg').exists()

    def test_copy_to_root(self, tmp_path, sources):
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_raw(sources[2:], to='')

        assert result.copied == ['sloth.png']
        assert (tmp_path / 'site' / 'sloth.png').is_file()

    def test_missing_source_is_not_fatal(self, tmp_path, sources):
        target = FileSystemExportTarget(tmp_path / 'site')
        missing = tmp_path / 'src' / 'missing.png'

        result = target.copy_raw([missing] + sources, to='images')

        assert len(result.copied) == 3
        assert len(result.failed) == 1
        assert result.failed[0].source == str(missing)
        assert result.failed[0].destination == 'images/missing.png'

    def test_colliding_stripped_names_keep_the_first_file(self, tmp_path):
        source_dir = tmp_path / 'colliding'
        source_dir.mkdir()
        first = source_dir / 'icon-12345678.svg'
        second = source_dir / 'icon.abcdef01.svg'
        first.write_bytes(b'<svg>first</svg>')
        second.write_bytes(b'<svg>second</svg>')
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_raw([first, second], to='img', keep_hash=False)

        assert result.copied == ['img/icon.svg']
        assert len(result.failed) == 1
        assert result.failed[0].source == str(second)
        assert result.failed[0].destination == 'img/icon.svg'
        assert (tmp_path / 'site' / 'img' / 'icon.svg').read_bytes() == b'<svg>first</svg>'

    def test_empty_source_list_creates_nothing(self, tmp_path):
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_raw([], to='videos')

        assert result.copied == []
        assert not (tmp_path / 'site' / 'videos').exists()

    def test_copy_css_writes_into_css_directory(self, tmp_path):
        source = tmp_path / 'index.12345678.css'
        source.write_text('body {}')
        target = FileSystemExportTarget(tmp_path / 'site')

        result = target.copy_css([source], keep_hash=False)

        assert result.copied == ['css/index.css']
        assert (tmp_path / 'site' / 'css' / 'index.css').read_text() == 'body {}'
