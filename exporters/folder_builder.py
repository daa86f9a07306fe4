"""Recursive folder-to-HTML builder."""

import logging
from pathlib import Path
from typing import Optional

from archive import DocumentFolder
from errors import PageRenderError
from models import (
    PATH_TO_ROOT_SEGMENT,
    FolderBuildReport,
    PageFailure,
    RenderingContext,
    path_to_root
)
from renderers.base_renderer import Renderer
from .export_target import ExportTarget


class FolderBuilder:
    """
    Renders every page of a document folder tree into an export target.

    Subfolders are built before the pages of their parent. A page whose base
    name equals the name of a sibling subfolder is that subfolder's landing
    page; with index building enabled it is rendered a second time as
    ``<name>/index.html`` so the directory itself can be browsed.
    """

    def __init__(self, target: ExportTarget, renderer: Renderer,
                 keep_hash: bool = True, logger: Optional[logging.Logger] = None):
        self.target = target
        self.renderer = renderer
        self.keep_hash = keep_hash
        self.logger = logger or logging.getLogger('docc2html.exporters.folder_builder')

    def build_folder(self, folder: DocumentFolder, relative_path: str,
                     build_index: bool, level: Optional[int] = None) -> FolderBuildReport:
        """
        Build a folder and all of its subfolders.

        Args:
            folder: Folder to render
            relative_path: Output directory relative to the target root
            build_index: Emit index variants for landing pages
            level: Depth below the site root, defaults to ``folder.level``

        Returns:
            Pages written and pages that failed in this subtree
        """
        if level is None:
            level = folder.level

        report = FolderBuildReport()

        # Failing to create an output directory is fatal
        self.target.ensure_dir(relative_path)

        subfolders = folder.subfolders()
        for subfolder in subfolders:
            destination = f"{relative_path}/{subfolder.name}"
            report.extend(self.build_folder(subfolder, destination, build_index, level=level + 1))

        subfolder_names = {subfolder.name for subfolder in subfolders}
        page_prefix = path_to_root(level)

        for page_url in folder.page_urls():
            base_name = Path(page_url).stem
            html_path = f"{relative_path}/{base_name}.html"
            index_path = f"{relative_path}/{base_name}/index.html"
            current_output = html_path

            try:
                document = folder.document(page_url)

                self.logger.debug(f"Build: {document} to: {html_path}")
                self._render_page(document, html_path, RenderingContext(
                    path_to_root=page_prefix,
                    references=document.references,
                    is_index=False,
                    index_links=build_index,
                    keep_hash=self.keep_hash
                ))
                report.pages_written.append(html_path)

                if build_index and base_name in subfolder_names:
                    current_output = index_path
                    self.logger.debug(f"Index: {document} to: {index_path}")
                    self._render_page(document, index_path, RenderingContext(
                        path_to_root=page_prefix + PATH_TO_ROOT_SEGMENT,
                        references=document.references,
                        is_index=True,
                        index_links=True,
                        keep_hash=self.keep_hash
                    ))
                    report.index_pages_written.append(index_path)

            except Exception as e:
                error = PageRenderError(f"Could not process document at: {page_url}: {e}")
                self.logger.error(str(error))
                report.failures.append(PageFailure(
                    page=str(page_url),
                    output=current_output,
                    error=str(e)
                ))

        return report

    def _render_page(self, document, relative_path: str, context: RenderingContext) -> None:
        html = self.renderer.render(document, context)
        self.target.write(html, relative_path)


__all__ = ['FolderBuilder']
