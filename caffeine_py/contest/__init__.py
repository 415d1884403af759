"""Contest lifecycle: selection, file materialization and submission watching."""

from .materialize import MaterializationEngine, build_filename
from .quit import QuitController
from .runner import ContestRunner
from .selector import Catalog, ContestSelector
from .submit import list_code_files, submit_solution
from .watcher import (
    NewSubmission,
    SubmissionState,
    SubmissionWatcher,
    VerdictChanged,
    WatchEvent,
)

__all__ = [
    "Catalog",
    "ContestRunner",
    "ContestSelector",
    "MaterializationEngine",
    "NewSubmission",
    "QuitController",
    "SubmissionState",
    "SubmissionWatcher",
    "VerdictChanged",
    "WatchEvent",
    "build_filename",
    "list_code_files",
    "submit_solution",
]
