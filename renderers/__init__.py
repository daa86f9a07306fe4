"""Renderers turning parsed DocC documents into HTML.

- base_renderer: Renderer capability interface
- html_renderer: default BeautifulSoup based renderer
- stylesheet: fixed site stylesheet written to css/site.css
"""

from .base_renderer import Renderer
from .html_renderer import HtmlRenderer
from .stylesheet import DEFAULT_STYLESHEET

__all__ = [
    'Renderer',
    'HtmlRenderer',
    'DEFAULT_STYLESHEET'
]
