"""Data models shared by the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Stage(str, Enum):
    """Kinds of external tool invocations."""

    LIST = "list"
    HASH = "hash"
    CLASSIFY = "classify"


class StageOutcome(str, Enum):
    """Classified termination of one stage invocation."""

    SUCCESS = "success"
    NON_ZERO_EXIT = "non_zero_exit"
    SPAWN_FAILURE = "spawn_failure"
    WAIT_FAILURE = "wait_failure"


@dataclass(frozen=True, slots=True)
class StageResult:
    """Outcome of running one stage.

    Attributes:
        stage: Stage kind that was executed.
        outcome: Classified termination.
        returncode: Child exit status when the child was waited on.
        error: Operating system error for spawn and wait failures.
    """

    stage: Stage
    outcome: StageOutcome
    returncode: Optional[int] = None
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.outcome is StageOutcome.SUCCESS


@dataclass(frozen=True, slots=True)
class ScanRequest:
    """What to scan.

    Attributes:
        directory: Directory whose entries are enumerated.
        ignore_prefix: Entries starting with this prefix (case-insensitive) are skipped.
    """

    directory: str
    ignore_prefix: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Hash and type information collected for one directory entry."""

    name: str
    path: str
    hash: str
    file_type: str

    @property
    def line(self) -> str:
        """Return the output line; the type description keeps its own trailing newline."""
        return f"{self.name} {self.hash} {self.file_type}"


__all__ = ["Stage", "StageOutcome", "StageResult", "ScanRequest", "FileRecord"]
