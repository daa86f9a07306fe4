"""Copies static resources of archives into an export target."""

import logging
import sys
from typing import Optional

from tqdm import tqdm

from archive import Archive
from errors import StylesheetWriteError
from models import SITE_STYLESHEET_PATH, CopyResult, ExportOptions
from renderers.stylesheet import DEFAULT_STYLESHEET
from .export_target import CSS_DIRECTORY, ExportTarget


class ResourceCopier:
    """
    Copies archive assets into the target layout.

    Layout:
    - css/       system stylesheets (optional, hash strippable)
    - images/    user images
    - videos/    user videos
    - downloads/ user downloads
    - <root>     favicons
    - img/       system images (hash strippable)
    """

    def __init__(self, target: ExportTarget, options: ExportOptions,
                 logger: Optional[logging.Logger] = None,
                 stylesheet: str = DEFAULT_STYLESHEET,
                 show_progress: bool = True):
        self.target = target
        self.options = options
        self.logger = logger or logging.getLogger('docc2html.exporters.resource_copier')
        self.stylesheet = stylesheet
        self.show_progress = show_progress

    def copy_resources(self, archive: Archive) -> CopyResult:
        """
        Copy all static resources of one archive.

        Args:
            archive: Loaded archive

        Returns:
            Aggregated copy result for the archive
        """
        self.logger.info(f"Copy static resources of: {archive.name}")
        result = CopyResult()
        keep_hash = self.options.keep_hash

        if self.options.copy_system_css:
            stylesheets = archive.stylesheet_urls()
            if stylesheets:
                result.extend(self.target.copy_css(stylesheets, keep_hash=keep_hash))

        # User assets are not content hashed, system images are
        groups = [
            (archive.user_image_urls(), 'images', True),
            (archive.user_video_urls(), 'videos', True),
            (archive.user_download_urls(), 'downloads', True),
            (archive.favicon_urls(), '', True),
            (archive.system_image_urls(), 'img', keep_hash),
        ]

        if self._should_show_progress():
            groups = tqdm(groups, desc=f"Resources: {archive.name[:30]}", leave=False)

        for sources, destination, group_keep_hash in groups:
            result.extend(self.target.copy_raw(sources, to=destination, keep_hash=group_keep_hash))

        if result.failed:
            self.logger.warning(
                f"{len(result.failed)} resource(s) of {archive.name} could not be copied"
            )
        self.logger.debug(f"Copied {len(result.copied)} resource(s) of {archive.name}")

        return result

    def write_site_stylesheet(self) -> Optional[StylesheetWriteError]:
        """
        Write the fixed site stylesheet.

        Returns:
            None on success, the error otherwise (never raised)
        """
        try:
            self.target.ensure_dir(CSS_DIRECTORY)
            self.target.write(self.stylesheet, SITE_STYLESHEET_PATH)
        except OSError as e:
            error = StylesheetWriteError(f"Failed to write custom stylesheet: {e}")
            self.logger.error(str(error))
            return error

        return None

    def _should_show_progress(self) -> bool:
        """Check if progress bars should be displayed."""
        if not self.show_progress:
            return False
        return sys.stdout.isatty()


__all__ = ['ResourceCopier']
