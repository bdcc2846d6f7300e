"""Sequence the list, hash, and classify stages over a directory."""

from __future__ import annotations

import logging
import os
from typing import Callable, Dict, Iterator, List

from hashsum.config.models import HashsumConfig

from .errors import FatalPipelineError, ListingFailedError
from .matcher import prefix_difference
from .models import FileRecord, ScanRequest, Stage, StageOutcome, StageResult
from .reader import ChunkedPipeReader
from .runner import Pipe, StageRunner

LOGGER = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Drive the external tools for every entry of one directory.

    The listing stage runs once. Each listed name that survives the ignore
    prefix is hashed and, when hashing succeeds, classified. A non-zero exit
    of either per-file stage drops that entry silently; spawn or wait failures
    abort the whole run.
    """

    def __init__(
        self,
        request: ScanRequest,
        config: HashsumConfig | None = None,
        *,
        runner: StageRunner | None = None,
        reader: ChunkedPipeReader | None = None,
    ) -> None:
        self.request = request
        self.config = config or HashsumConfig()
        self.runner = runner or StageRunner()
        self.reader = reader or ChunkedPipeReader(self.config.pipeline.chunk_size)

    def run(self, emit: Callable[[str], None]) -> int:
        """Process the directory, passing each output line to ``emit``.

        Args:
            emit: Callback receiving one formatted line per processed file.

        Returns:
            int: Number of lines emitted.

        Raises:
            ListingFailedError: If the listing stage exits non-zero.
            FatalPipelineError: If a pipe, spawn, wait, or read operation fails.
        """
        count = 0
        for record in self.iter_records():
            emit(record.line)
            count += 1
        return count

    def iter_records(self) -> Iterator[FileRecord]:
        """Yield a record for every entry that made it through both per-file stages."""
        pipes = self._open_pipes()
        try:
            for name in self._list_entries(pipes[Stage.LIST]):
                if prefix_difference(name, self.request.ignore_prefix) == 0:
                    LOGGER.debug("Skipping %r: matches ignore prefix", name)
                    continue
                record = self._process_entry(name, pipes)
                if record is not None:
                    yield record
        finally:
            for pipe in pipes.values():
                pipe.close()

    # Internal helpers -------------------------------------------------

    def _open_pipes(self) -> Dict[Stage, Pipe]:
        size = self.config.pipeline.pipe_size_bytes
        pipes: Dict[Stage, Pipe] = {}
        try:
            for stage in Stage:
                pipes[stage] = Pipe.create(size)
        except FatalPipelineError:
            for pipe in pipes.values():
                pipe.close()
            raise
        return pipes

    def _list_entries(self, pipe: Pipe) -> List[str]:
        directory = self.request.directory
        argv = [*self.config.tools.list_command, directory]
        result = self._run_stage(Stage.LIST, argv, pipe)
        if not result.ok:
            raise ListingFailedError(directory, result.returncode)

        listing = self.reader.drain(pipe.read_fd, label=argv[0])
        names = listing.split(b"\n")
        if names and not names[-1]:
            names.pop()
        LOGGER.debug("Listing of %s returned %d entries", directory, len(names))
        return [os.fsdecode(name) for name in names]

    def _process_entry(self, name: str, pipes: Dict[Stage, Pipe]) -> FileRecord | None:
        tools = self.config.tools
        path = f"{self.request.directory}/{name}"

        hash_pipe = pipes[Stage.HASH]
        hash_argv = [*tools.hash_command, path]
        result = self._run_stage(
            Stage.HASH, hash_argv, hash_pipe, suppress_stderr=tools.suppress_hash_stderr
        )
        if not result.ok:
            self.reader.discard(hash_pipe.read_fd, label=hash_argv[0])
            LOGGER.debug("Skipping %r: hashing exited with status %s", name, result.returncode)
            return None
        digest = self.reader.read_token(hash_pipe.read_fd, label=hash_argv[0])
        self.reader.discard(hash_pipe.read_fd, label=hash_argv[0])

        type_pipe = pipes[Stage.CLASSIFY]
        type_argv = [*tools.classify_command, path]
        result = self._run_stage(Stage.CLASSIFY, type_argv, type_pipe)
        if not result.ok:
            self.reader.discard(type_pipe.read_fd, label=type_argv[0])
            LOGGER.debug(
                "Skipping %r: classification exited with status %s", name, result.returncode
            )
            return None
        description = self.reader.read_chunk(type_pipe.read_fd, label=type_argv[0])
        self.reader.discard(type_pipe.read_fd, label=type_argv[0])

        return FileRecord(
            name=name,
            path=path,
            hash=os.fsdecode(digest),
            file_type=os.fsdecode(description),
        )

    def _run_stage(
        self,
        stage: Stage,
        argv: List[str],
        pipe: Pipe,
        *,
        suppress_stderr: bool = False,
    ) -> StageResult:
        result = self.runner.run(stage, argv, pipe, suppress_stderr=suppress_stderr)
        if result.outcome is StageOutcome.SPAWN_FAILURE:
            raise FatalPipelineError(f"Failed to create child process ({argv[0]})", result.error)
        if result.outcome is StageOutcome.WAIT_FAILURE:
            raise FatalPipelineError(f"Child ({argv[0]}) could not be terminated", result.error)
        return result


__all__ = ["PipelineOrchestrator"]
