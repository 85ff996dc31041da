# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Run configuration for pbgen."""

import shlex

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PBJS_COMMAND,
    DEFAULT_PBTS_COMMAND,
    DEFAULT_TARGET,
    DEFAULT_WRAPPER,
)


class GeneratorConfig(BaseModel):
    """Everything a single generation run needs to know."""

    input_dir: str = Field(DEFAULT_INPUT_DIR, description="Directory holding the schema files")
    output_dir: str = Field(DEFAULT_OUTPUT_DIR, description="Directory receiving generated artifacts")
    pattern: str | None = Field(None, description="Optional glob restricting which entries are schemas")
    max_workers: int = Field(DEFAULT_MAX_WORKERS, ge=1, description="Schema files processed concurrently")
    target: str = Field(DEFAULT_TARGET, min_length=1, description="pbjs output target")
    wrapper: str = Field(DEFAULT_WRAPPER, min_length=1, description="pbjs module wrapper")
    es6: bool = Field(False, description="Emit ES6 syntax in module mode")
    pbjs_command: str = Field(DEFAULT_PBJS_COMMAND, description="Command used to run pbjs")
    pbts_command: str = Field(DEFAULT_PBTS_COMMAND, description="Command used to run pbts")
    timeout: float | None = Field(None, gt=0, description="Per-invocation timeout in seconds")

    @field_validator("pbjs_command", "pbts_command")
    @classmethod
    def _command_not_empty(cls, value: str) -> str:
        if not shlex.split(value):
            raise ValueError("compiler command must not be empty")
        return value

    def command_argv(self, command: str) -> list[str]:
        """Split a configured command string into an argv prefix."""
        return shlex.split(command)
