"""Process pipeline that lists, hashes, and classifies directory entries."""

from .errors import FatalPipelineError, ListingFailedError, PipelineError
from .matcher import matches_prefix, prefix_difference
from .models import FileRecord, ScanRequest, Stage, StageOutcome, StageResult
from .orchestrator import PipelineOrchestrator
from .reader import ChunkedPipeReader
from .runner import Pipe, StageRunner

__all__ = [
    "ChunkedPipeReader",
    "FatalPipelineError",
    "FileRecord",
    "ListingFailedError",
    "Pipe",
    "PipelineError",
    "PipelineOrchestrator",
    "ScanRequest",
    "Stage",
    "StageOutcome",
    "StageResult",
    "StageRunner",
    "matches_prefix",
    "prefix_difference",
]
