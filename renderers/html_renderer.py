"""Default renderer turning DocC render JSON into static HTML pages."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from models import Document, RenderingContext, strip_hash
from .base_renderer import Renderer

PAGE_TEMPLATE = (
    '<!DOCTYPE html>'
    '<html lang="en"><head><meta charset="utf-8"/>'
    '<meta name="viewport" content="width=device-width, initial-scale=1"/>'
    '</head><body></body></html>'
)

EXTERNAL_SCHEMES = {'http', 'https', 'mailto', 'ftp'}
HASHED_ASSET_DIRECTORIES = ('img/', 'css/')
PAGE_DIRECTORIES = ('documentation/', 'tutorials/')


class HtmlRenderer(Renderer):
    """
    Builds HTML pages from DocC documents with BeautifulSoup.

    Internal links are made relative using the context's path-to-root
    prefix, so the same document renders correctly at any depth.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('docc2html.renderers.html_renderer')

        self.block_renderers = {
            'heading': self._render_heading,
            'paragraph': self._render_paragraph,
            'codeListing': self._render_code_listing,
            'unorderedList': self._render_list,
            'orderedList': self._render_list,
            'aside': self._render_aside,
        }

        self.inline_renderers = {
            'text': self._render_text,
            'codeVoice': self._render_code_voice,
            'emphasis': self._render_styled,
            'strong': self._render_styled,
            'newTerm': self._render_styled,
            'strikethrough': self._render_styled,
            'superscript': self._render_styled,
            'subscript': self._render_styled,
            'reference': self._render_reference,
            'link': self._render_link,
            'image': self._render_image,
        }

        self.styled_tags = {
            'emphasis': 'em',
            'strong': 'strong',
            'newTerm': 'em',
            'strikethrough': 's',
            'superscript': 'sup',
            'subscript': 'sub',
        }

    def render(self, document: Document, context: RenderingContext) -> str:
        soup = BeautifulSoup(PAGE_TEMPLATE, 'lxml')

        title = soup.new_tag('title')
        title.string = document.title
        soup.head.append(title)
        soup.head.append(soup.new_tag(
            'link', attrs={'rel': 'stylesheet', 'href': context.path_to_root + context.stylesheet}
        ))

        if context.is_index:
            soup.body['class'] = 'index'
            if document.url:
                soup.head.append(soup.new_tag(
                    'link', attrs={'rel': 'canonical', 'href': self._page_href(document.url, context)}
                ))

        navigation = self._render_hierarchy(soup, document, context)
        if navigation is not None:
            soup.body.append(navigation)

        main = soup.new_tag('main')
        soup.body.append(main)

        self._render_header(soup, main, document, context)

        raw = document.raw
        for section in raw.get('primaryContentSections', []) or []:
            self._render_primary_section(soup, main, section, context)

        # Tutorial pages use plain "sections" instead
        for section in raw.get('sections', []) or []:
            self._render_tutorial_section(soup, main, section, context)

        for key, heading in (('topicSections', 'Topics'),
                             ('relationshipsSections', 'Relationships'),
                             ('seeAlsoSections', 'See Also')):
            sections = raw.get(key) or []
            if sections:
                main.append(self._render_topic_sections(soup, heading, sections, context))

        return str(soup) + "\n"

    # Page structure

    def _render_hierarchy(self, soup: BeautifulSoup, document: Document,
                          context: RenderingContext) -> Optional[Tag]:
        """Breadcrumbs to the ancestors of the page."""
        ancestors = [context.references.get(identifier) for identifier in document.hierarchy]
        ancestors = [reference for reference in ancestors if reference and reference.get('url')]
        if not ancestors:
            return None

        nav = soup.new_tag('nav', attrs={'class': 'hierarchy'})
        crumbs = soup.new_tag('ol')
        nav.append(crumbs)

        for reference in ancestors:
            item = soup.new_tag('li')
            if context.index_links:
                href = self._index_href(reference['url'], context)
            else:
                href = self._page_href(reference['url'], context)
            link = soup.new_tag('a', attrs={'href': href})
            link.string = reference.get('title') or reference['url']
            item.append(link)
            crumbs.append(item)

        current = soup.new_tag('li')
        current.string = document.title
        crumbs.append(current)

        return nav

    def _render_header(self, soup: BeautifulSoup, parent: Tag, document: Document,
                       context: RenderingContext) -> None:
        role_heading = (document.raw.get('metadata') or {}).get('roleHeading')
        if role_heading:
            eyebrow = soup.new_tag('p', attrs={'class': 'eyebrow'})
            eyebrow.string = role_heading
            parent.append(eyebrow)

        heading = soup.new_tag('h1', attrs={'class': 'title'})
        heading.string = document.title
        parent.append(heading)

        if document.abstract:
            abstract = soup.new_tag('p', attrs={'class': 'abstract'})
            self._append_inline(soup, abstract, document.abstract, context)
            parent.append(abstract)

    def _render_primary_section(self, soup: BeautifulSoup, parent: Tag,
                                section: Dict[str, Any], context: RenderingContext) -> None:
        kind = section.get('kind')

        if kind == 'declarations':
            for declaration in section.get('declarations', []) or []:
                wrapper = soup.new_tag('div', attrs={'class': 'declaration'})
                pre = soup.new_tag('pre')
                code = soup.new_tag('code')
                for token in declaration.get('tokens', []) or []:
                    self._append_token(soup, code, token, context)
                pre.append(code)
                wrapper.append(pre)
                parent.append(wrapper)

        elif kind == 'parameters':
            wrapper = soup.new_tag('section', attrs={'class': 'parameters'})
            heading = soup.new_tag('h2')
            heading.string = 'Parameters'
            wrapper.append(heading)
            terms = soup.new_tag('dl')
            for parameter in section.get('parameters', []) or []:
                term = soup.new_tag('dt')
                name = soup.new_tag('code')
                name.string = parameter.get('name', '')
                term.append(name)
                terms.append(term)
                definition = soup.new_tag('dd')
                self._append_blocks(soup, definition, parameter.get('content', []), context)
                terms.append(definition)
            wrapper.append(terms)
            parent.append(wrapper)

        elif kind == 'content':
            wrapper = soup.new_tag('section', attrs={'class': 'content'})
            self._append_blocks(soup, wrapper, section.get('content', []), context)
            parent.append(wrapper)

        else:
            self.logger.debug(f"Skipping unsupported content section kind: {kind}")

    def _render_tutorial_section(self, soup: BeautifulSoup, parent: Tag,
                                 section: Dict[str, Any], context: RenderingContext) -> None:
        kind = section.get('kind')
        wrapper = soup.new_tag('section', attrs={'class': kind or 'section'})

        if kind == 'hero':
            self._append_blocks(soup, wrapper, section.get('content', []), context)

        elif kind == 'tasks':
            for task in section.get('tasks', []) or []:
                heading = soup.new_tag('h2', attrs={'id': task.get('anchor', '')})
                heading.string = task.get('title', '')
                wrapper.append(heading)
                for content_section in task.get('contentSection', []) or []:
                    self._append_blocks(soup, wrapper, content_section.get('content', []), context)

                steps = [step for step in task.get('stepsSection', []) or []
                         if step.get('type') == 'step']
                if steps:
                    step_list = soup.new_tag('ol', attrs={'class': 'steps'})
                    for step in steps:
                        item = soup.new_tag('li')
                        self._append_blocks(soup, item, step.get('content', []), context)
                        self._append_blocks(soup, item, step.get('caption', []), context)
                        step_list.append(item)
                    wrapper.append(step_list)

        elif kind == 'volume':
            for chapter in section.get('chapters', []) or []:
                heading = soup.new_tag('h2')
                heading.string = chapter.get('name', '')
                wrapper.append(heading)
                self._append_blocks(soup, wrapper, chapter.get('content', []), context)
                wrapper.append(self._render_reference_list(
                    soup, chapter.get('tutorials', []) or [], context))

        elif section.get('content'):
            self._append_blocks(soup, wrapper, section['content'], context)

        else:
            self.logger.debug(f"Skipping unsupported tutorial section kind: {kind}")
            return

        parent.append(wrapper)

    def _render_topic_sections(self, soup: BeautifulSoup, heading_text: str,
                               sections: List[Dict[str, Any]], context: RenderingContext) -> Tag:
        wrapper = soup.new_tag('section', attrs={'class': 'topics'})
        heading = soup.new_tag('h2')
        heading.string = heading_text
        wrapper.append(heading)

        for section in sections:
            if section.get('title'):
                title = soup.new_tag('h3')
                title.string = section['title']
                wrapper.append(title)
            wrapper.append(self._render_reference_list(
                soup, section.get('identifiers', []) or [], context))

        return wrapper

    def _render_reference_list(self, soup: BeautifulSoup, identifiers: List[str],
                               context: RenderingContext) -> Tag:
        items = soup.new_tag('ul')
        for identifier in identifiers:
            reference = context.references.get(identifier)
            if not reference:
                self.logger.debug(f"Unresolved reference: {identifier}")
                continue

            item = soup.new_tag('li')
            link = soup.new_tag('a', attrs={'href': self._resolve_url(reference.get('url', ''), context)})
            link.string = reference.get('title') or identifier
            item.append(link)

            if reference.get('abstract'):
                abstract = soup.new_tag('p')
                self._append_inline(soup, abstract, reference['abstract'], context)
                item.append(abstract)

            items.append(item)
        return items

    # Block content

    def _append_blocks(self, soup: BeautifulSoup, parent: Tag,
                       blocks: List[Dict[str, Any]], context: RenderingContext) -> None:
        for block in blocks or []:
            renderer = self.block_renderers.get(block.get('type'))
            if renderer is None:
                self.logger.debug(f"Skipping unsupported block type: {block.get('type')}")
                continue
            parent.append(renderer(soup, block, context))

    def _render_heading(self, soup, block, context) -> Tag:
        level = min(max(int(block.get('level', 2)), 1), 6)
        attrs = {'id': block['anchor']} if block.get('anchor') else {}
        heading = soup.new_tag(f'h{level}', attrs=attrs)
        heading.string = block.get('text', '')
        return heading

    def _render_paragraph(self, soup, block, context) -> Tag:
        paragraph = soup.new_tag('p')
        self._append_inline(soup, paragraph, block.get('inlineContent', []), context)
        return paragraph

    def _render_code_listing(self, soup, block, context) -> Tag:
        attrs = {'class': 'code-listing'}
        if block.get('syntax'):
            attrs['data-syntax'] = block['syntax']
        pre = soup.new_tag('pre', attrs=attrs)
        code = soup.new_tag('code')
        code.string = "\n".join(block.get('code', []) or [])
        pre.append(code)
        return pre

    def _render_list(self, soup, block, context) -> Tag:
        tag_name = 'ol' if block.get('type') == 'orderedList' else 'ul'
        items = soup.new_tag(tag_name)
        for entry in block.get('items', []) or []:
            item = soup.new_tag('li')
            self._append_blocks(soup, item, entry.get('content', []), context)
            items.append(item)
        return items

    def _render_aside(self, soup, block, context) -> Tag:
        style = (block.get('style') or 'note').lower()
        aside = soup.new_tag('aside', attrs={'class': style})
        label = soup.new_tag('p', attrs={'class': 'label'})
        label.string = block.get('name') or style.capitalize()
        aside.append(label)
        self._append_blocks(soup, aside, block.get('content', []), context)
        return aside

    # Inline content

    def _append_inline(self, soup: BeautifulSoup, parent: Tag,
                       inlines: List[Dict[str, Any]], context: RenderingContext) -> None:
        for inline in inlines or []:
            renderer = self.inline_renderers.get(inline.get('type'))
            if renderer is None:
                self.logger.debug(f"Skipping unsupported inline type: {inline.get('type')}")
                continue
            element = renderer(soup, inline, context)
            if element is not None:
                parent.append(element)

    def _render_text(self, soup, inline, context):
        return inline.get('text', '')

    def _render_code_voice(self, soup, inline, context) -> Tag:
        code = soup.new_tag('code')
        code.string = inline.get('code', '')
        return code

    def _render_styled(self, soup, inline, context) -> Tag:
        tag = soup.new_tag(self.styled_tags[inline['type']])
        self._append_inline(soup, tag, inline.get('inlineContent', []), context)
        return tag

    def _render_reference(self, soup, inline, context):
        identifier = inline.get('identifier', '')
        reference = context.references.get(identifier)
        if not reference:
            self.logger.debug(f"Unresolved reference: {identifier}")
            return identifier

        title = inline.get('overridingTitle') or reference.get('title') or identifier
        url = reference.get('url')
        if not url or not inline.get('isActive', True):
            return title

        link = soup.new_tag('a', attrs={'href': self._resolve_url(url, context)})
        if reference.get('kind') == 'symbol':
            code = soup.new_tag('code')
            code.string = title
            link.append(code)
        else:
            link.string = title
        return link

    def _render_link(self, soup, inline, context) -> Tag:
        destination = inline.get('destination', '')
        link = soup.new_tag('a', attrs={'href': self._resolve_url(destination, context)})
        link.string = inline.get('title') or destination
        return link

    def _render_image(self, soup, inline, context):
        reference = context.references.get(inline.get('identifier', ''))
        variants = (reference or {}).get('variants') or []
        if not variants:
            self.logger.debug(f"Image without variants: {inline.get('identifier')}")
            return None

        return soup.new_tag('img', attrs={
            'src': self._resolve_url(variants[0].get('url', ''), context),
            'alt': reference.get('alt') or ''
        })

    def _append_token(self, soup: BeautifulSoup, parent: Tag, token: Dict[str, Any],
                      context: RenderingContext) -> None:
        text = token.get('text', '')
        reference = context.references.get(token.get('identifier', ''))
        if token.get('kind') == 'typeIdentifier' and reference and reference.get('url'):
            link = soup.new_tag('a', attrs={'href': self._resolve_url(reference['url'], context)})
            link.string = text
            parent.append(link)
        else:
            parent.append(text)

    # URLs

    def _resolve_url(self, url: str, context: RenderingContext) -> str:
        """Make an archive URL relative to the page being rendered."""
        if not url:
            return ''
        if urlparse(url).scheme in EXTERNAL_SCHEMES or url.startswith('#'):
            return url

        path, _, fragment = url.partition('#')
        relative = path.lstrip('/')
        last_segment = relative.rsplit('/', 1)[-1]

        if not relative.startswith(PAGE_DIRECTORIES) and '.' in last_segment:
            # Static asset
            if not context.keep_hash and relative.startswith(HASHED_ASSET_DIRECTORIES):
                directory, _, filename = relative.rpartition('/')
                relative = f"{directory}/{strip_hash(filename)}"
            href = context.path_to_root + relative
        else:
            href = context.path_to_root + relative + '.html'

        return f"{href}#{fragment}" if fragment else href

    def _page_href(self, url: str, context: RenderingContext) -> str:
        return context.path_to_root + url.strip('/') + '.html'

    def _index_href(self, url: str, context: RenderingContext) -> str:
        return context.path_to_root + url.strip('/') + '/index.html'


__all__ = ['HtmlRenderer', 'PAGE_TEMPLATE']
