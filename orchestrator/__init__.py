"""
Orchestration package for coordinating export pipeline phases.

Phases run in a fixed order: Prepare Target → Load Archives → Copy Resources
→ Generate Pages, followed by reporting.
"""

from .export_orchestrator import ExportOrchestrator
from .export_report import ExportReportFormatter

__all__ = [
    'ExportOrchestrator',
    'ExportReportFormatter'
]
