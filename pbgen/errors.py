# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Exception types raised by pbgen."""

from .constants import Mode


class PbgenError(Exception):
    """Base class for every error raised by pbgen."""


class ConfigError(PbgenError, ValueError):
    """Invalid run configuration."""


class DirectoryReadError(PbgenError, OSError):
    """The schema directory is missing or cannot be listed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read schema directory {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidModuleNameError(PbgenError, ValueError):
    """A schema filename derives an empty module name."""

    def __init__(self, filename: str):
        super().__init__(f"Schema file {filename!r} derives an empty module name")
        self.filename = filename


class ModuleNameCollisionError(PbgenError, ValueError):
    """Two or more schema files derive the same module name."""

    def __init__(self, module_name: str, filenames: list[str]):
        joined = ", ".join(filenames)
        super().__init__(f"Module name {module_name!r} is derived by more than one schema file: {joined}")
        self.module_name = module_name
        self.filenames = filenames


class CompilerError(PbgenError):
    """The schema compiler failed for one schema file.

    Attributes:
        stage: Which generation pass failed
        schema: Schema filename the failing request belongs to
        returncode: Compiler exit status, or None if it never ran to completion
        stderr: Captured compiler diagnostics
    """

    def __init__(
        self,
        stage: Mode,
        schema: str,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(f"{stage.value} generation failed for {schema}: {message}")
        self.stage = stage
        self.schema = schema
        self.returncode = returncode
        self.stderr = stderr


class CompilerNotFoundError(CompilerError):
    """The compiler executable could not be started."""


class OutputDirectoryError(PbgenError, OSError):
    """The output directory cannot be created or is not a directory."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot use output directory {path}: {reason}")
        self.path = path
        self.reason = reason
