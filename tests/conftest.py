"""Shared fixtures building synthetic .doccarchive bundles."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from models import Document, RenderingContext
from renderers.base_renderer import Renderer


def make_page(title: str, url: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Minimal DocC render JSON for a page."""
    url = url or f"/documentation/sloth/{title.lower()}"
    page = {
        'identifier': {'url': f"doc://com.example.Sloth{url}", 'interfaceLanguage': 'swift'},
        'kind': 'article',
        'metadata': {'title': title, 'role': 'article'},
        'abstract': [{'type': 'text', 'text': f"About {title}."}],
        'references': {},
        'hierarchy': {'paths': [[]]},
    }
    page.update(extra)
    return page


def write_tree(directory: Path, tree: Dict[str, Any]) -> None:
    """Write ``name.json`` keys as pages and other keys as subdirectories."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in tree.items():
        if isinstance(content, dict) and not name.endswith('.json'):
            write_tree(directory / name, content)
        elif isinstance(content, str):
            (directory / name).write_text(content, encoding='utf-8')
        else:
            (directory / name).write_text(json.dumps(content), encoding='utf-8')


def write_archive(
    base: Path,
    name: str = 'Sloth.doccarchive',
    documentation: Optional[Dict[str, Any]] = None,
    tutorials: Optional[Dict[str, Any]] = None,
    assets: Optional[Dict[str, bytes]] = None
) -> Path:
    """
    Create an archive bundle on disk.

    Args:
        base: Parent directory
        name: Bundle directory name
        documentation: Tree for data/documentation (omitted if None)
        tutorials: Tree for data/tutorials (omitted if None)
        assets: Relative file path -> content for static resources

    Returns:
        Path to the bundle
    """
    root = base / name
    (root / 'data').mkdir(parents=True, exist_ok=True)

    if documentation is not None:
        write_tree(root / 'data' / 'documentation', documentation)
    if tutorials is not None:
        write_tree(root / 'data' / 'tutorials', tutorials)

    for relative_path, content in (assets or {}).items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    return root


def sloth_documentation() -> Dict[str, Any]:
    """Pages Index and Foo, plus subfolder Foo/ holding page Bar."""
    return {
        'Index.json': make_page('Index'),
        'Foo.json': make_page('Foo'),
        'Foo': {
            'Bar.json': make_page('Bar', url='/documentation/sloth/foo/bar'),
        },
    }


SLOTH_ASSETS = {
    'images/sloth.png': b'sloth-image',
    'videos/intro.mov': b'sloth-video',
    'downloads/Sample.zip': b'sloth-download',
    'favicon.ico': b'icon',
    'favicon.svg': b'<svg/>',
    'img/added-icon.d6f7e47d.svg': b'<svg>added</svg>',
    'img/deprecated-icon-0a3c1e57.svg': b'<svg>deprecated</svg>',
    'css/index.12345678.css': b'body {}',
    'css/documentation-topic~topic.a9b3c2d1.css': b'.topic {}',
}


class RecordingRenderer(Renderer):
    """Renderer recording every call; raises for titles listed in ``fail_on``."""

    def __init__(self, fail_on: Optional[List[str]] = None):
        self.fail_on = set(fail_on or [])
        self.calls: List[tuple] = []

    def render(self, document: Document, context: RenderingContext) -> str:
        self.calls.append((document.title, context))
        if document.title in self.fail_on:
            raise ValueError(f"cannot render {document.title}")
        return (
            f"<html>{document.title}|{context.path_to_root}|"
            f"{context.is_index}|{context.index_links}</html>\n"
        )

    def contexts_for(self, title: str) -> List[RenderingContext]:
        return [context for called_title, context in self.calls if called_title == title]


@pytest.fixture
def sloth_archive(tmp_path):
    """The Sloth archive with documentation pages and static resources."""
    return write_archive(
        tmp_path / 'archives',
        documentation=sloth_documentation(),
        assets=SLOTH_ASSETS
    )


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()


def read_tree(root: Path) -> Dict[str, bytes]:
    """Relative path -> content for every file below ``root``."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob('*'))
        if path.is_file()
    }
