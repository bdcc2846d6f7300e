"""Configuration models describing hashsum settings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HashsumBaseModel(BaseModel):
    """Shared configuration for hashsum Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ToolSettings(HashsumBaseModel):
    """External programs invoked for each pipeline stage.

    Each command is an argument vector; the directory or file path is appended
    as the final argument at invocation time.

    Attributes:
        list_command: Program listing one entry name per line, dotfiles included.
        hash_command: Program printing ``<hexhash>  <path>`` for a file.
        classify_command: Program printing a brief type description for a file.
        suppress_hash_stderr: Whether diagnostics of the hashing tool are discarded.
    """

    list_command: List[str] = Field(default_factory=lambda: ["ls", "-1a"], min_length=1)
    hash_command: List[str] = Field(default_factory=lambda: ["md5sum"], min_length=1)
    classify_command: List[str] = Field(default_factory=lambda: ["file", "-b"], min_length=1)
    suppress_hash_stderr: bool = True


class PipelineSettings(HashsumBaseModel):
    """Options governing how stage output is collected.

    Attributes:
        chunk_size: Number of bytes requested per pipe read.
        pipe_size_bytes: Requested kernel pipe capacity, or None to keep the default.
    """

    chunk_size: int = Field(default=200, gt=0)
    pipe_size_bytes: Optional[int] = Field(default=1024 * 1024, gt=0)


class LoggingSettings(HashsumBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class HashsumConfig(HashsumBaseModel):
    """Top-level configuration struct for hashsum.

    Attributes:
        tools: External stage programs.
        pipeline: Pipe and reader settings.
        logging: Logging configuration.
    """

    tools: ToolSettings = Field(default_factory=ToolSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "HashsumBaseModel",
    "ToolSettings",
    "PipelineSettings",
    "LoggingSettings",
    "HashsumConfig",
]
