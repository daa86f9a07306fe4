"""
Export orchestrator coordinating the complete export pipeline.

Phases run in a fixed order: Prepare Target → Load Archives → Copy Resources
→ Generate Pages. Fatal errors abort the remaining phases; per-resource and
per-page failures are collected in the report.
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence, Union

from archive import Archive, ArchiveLoader
from errors import Docc2HtmlError, TargetExistsError, UnexpectedError
from exporters import ExportTarget, FolderBuilder, ResourceCopier
from logger import ProgressTracker, log_section
from models import ExportOptions, ExportReport, ExportState
from renderers import HtmlRenderer, Renderer

DOCUMENTATION_DIRECTORY = 'documentation'
TUTORIALS_DIRECTORY = 'tutorials'


class ExportOrchestrator:
    """Central coordinator sequencing all export phases."""

    def __init__(
        self,
        target: ExportTarget,
        archive_paths: Sequence[Union[str, Path]],
        options: ExportOptions,
        renderer: Optional[Renderer] = None,
        logger: Optional[logging.Logger] = None,
        show_progress: bool = True
    ):
        """
        Initialize export orchestrator.

        Args:
            target: Output location
            archive_paths: Archive bundles to export
            options: Export flags
            renderer: Page renderer (defaults to HtmlRenderer)
            logger: Optional logger instance
            show_progress: Show progress bars on interactive terminals
        """
        self.target = target
        self.archive_paths = [Path(path) for path in archive_paths]
        self.options = options
        self.logger = logger or logging.getLogger('docc2html.orchestrator.export_orchestrator')
        self.renderer = renderer or HtmlRenderer()

        self.archive_loader = ArchiveLoader(logger=self.logger)
        self.resource_copier = ResourceCopier(
            target, options, logger=self.logger, show_progress=show_progress
        )
        self.folder_builder = FolderBuilder(
            target, self.renderer, keep_hash=options.keep_hash, logger=self.logger
        )

        self.state = ExportState.NOT_STARTED
        self.report = ExportReport(target=str(target), options=options)

    def export(self) -> ExportReport:
        """
        Run all export phases.

        Returns:
            Aggregated report

        Raises:
            TargetExistsError: Target exists and force was not requested
            ArchiveFormatError: An archive path is not a DocC bundle
            UnexpectedError: Any other failure aborting the run
        """
        start_time = time.time()

        try:
            self._prepare_target()
            archives = self.archive_loader.load(self.archive_paths)
            self.report.archives = [archive.name for archive in archives]
            self._copy_static_resources(archives)
            self._generate_pages(archives)
        except Docc2HtmlError:
            self._set_state(ExportState.ABORTED)
            raise
        except Exception as e:
            self._set_state(ExportState.ABORTED)
            self.logger.error(f"Unexpected error: {e}", exc_info=True)
            raise UnexpectedError(f"Unexpected error: {e}") from e
        finally:
            self.report.duration = time.time() - start_time

        self._set_state(ExportState.DONE)
        return self.report

    def _prepare_target(self) -> None:
        log_section("Prepare Target")

        if not self.target.target_exists():
            self.target.ensure_dir('')
        elif not self.options.force:
            error = TargetExistsError(str(self.target))
            self.logger.error(str(error))
            raise error
        else:
            self.logger.info(f"Existing output dir: {self.target}")

        self._set_state(ExportState.TARGET_PREPARED)

    def _copy_static_resources(self, archives: List[Archive]) -> None:
        log_section("Copy Static Resources")

        for archive in archives:
            self.report.resources.extend(self.resource_copier.copy_resources(archive))

        error = self.resource_copier.write_site_stylesheet()
        self.report.stylesheet_written = error is None
        self.report.stylesheet_error = str(error) if error else None

        self._set_state(ExportState.RESOURCES_COPIED)

    def _generate_pages(self, archives: List[Archive]) -> None:
        log_section("Generate Pages")
        build_index = self.options.build_index

        with ProgressTracker(total_items=len(archives), item_type='archives') as tracker:
            for archive in archives:
                self.logger.info(f"Generate archive: {archive.name}")
                failures_before = len(self.report.pages.failures)

                folders = []
                if self.options.build_api_docs:
                    folders.append((archive.documentation_folder(), DOCUMENTATION_DIRECTORY))
                if self.options.build_tutorials:
                    folders.append((archive.tutorials_folder(), TUTORIALS_DIRECTORY))

                for folder, relative_path in folders:
                    if folder is None:
                        self.logger.debug(f"Archive {archive.name} has no {relative_path} folder")
                        continue
                    self.report.pages.extend(
                        self.folder_builder.build_folder(folder, relative_path, build_index)
                    )

                tracker.increment(success=len(self.report.pages.failures) == failures_before)

        self._set_state(ExportState.PAGES_GENERATED)

    def _set_state(self, state: ExportState) -> None:
        self.logger.debug(f"Export state: {self.state.value} -> {state.value}")
        self.state = state
        self.report.state = state


__all__ = ['ExportOrchestrator', 'DOCUMENTATION_DIRECTORY', 'TUTORIALS_DIRECTORY']
