# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
r"""pbgen - protobuf.js code generation for a directory of .proto schemas.

For every schema file in an input directory pbgen runs two compiler passes:
- pbjs in static-module mode, writing ``<name>.js`` with ``<name>`` as root namespace
- pbts on that module, writing ``<name>.d.ts``

``<name>`` is the schema filename up to its first dot. Schema files are
processed by a bounded worker pool; within one file the declaration pass only
starts after the module pass has written its output.
"""

# Import public API from modules
from .artifacts import (
    Artifact,
    RunReport,
    file_crc32c,
)
from .compilers import (
    Compiler,
    PbjsCompiler,
    PbtsCompiler,
    get_compiler,
    list_compilers,
    register_compiler,
)
from .config import GeneratorConfig
from .constants import (
    DECLARATIONS_EXT,
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TARGET,
    DEFAULT_WRAPPER,
    MODULE_EXT,
    ExitCode,
    Mode,
)
from .driver import Driver
from .errors import (
    CompilerError,
    CompilerNotFoundError,
    ConfigError,
    DirectoryReadError,
    InvalidModuleNameError,
    ModuleNameCollisionError,
    OutputDirectoryError,
    PbgenError,
)
from .request import (
    GenerationRequest,
    SchemaFile,
)
from .schema import (
    derive_module_name,
    list_schema_files,
    plan_schemas,
)


def run(input_dir: str | None = None, out_dir: str | None = None, **config) -> RunReport:
    """Generate modules and declarations for every schema in ``input_dir``."""
    return Driver(GeneratorConfig(**config)).run(input_dir, out_dir)


# Public API exports
__all__ = [
    # Core classes
    "Driver",
    "GeneratorConfig",
    "SchemaFile",
    "GenerationRequest",
    "Artifact",
    "RunReport",
    "Compiler",
    "PbjsCompiler",
    "PbtsCompiler",
    # Constants and enums
    "Mode",
    "ExitCode",
    "MODULE_EXT",
    "DECLARATIONS_EXT",
    "DEFAULT_TARGET",
    "DEFAULT_WRAPPER",
    "DEFAULT_INPUT_DIR",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_MAX_WORKERS",
    # Errors
    "PbgenError",
    "ConfigError",
    "DirectoryReadError",
    "InvalidModuleNameError",
    "ModuleNameCollisionError",
    "OutputDirectoryError",
    "CompilerError",
    "CompilerNotFoundError",
    # Schema utilities
    "list_schema_files",
    "derive_module_name",
    "plan_schemas",
    "file_crc32c",
    # Compiler registry
    "register_compiler",
    "get_compiler",
    "list_compilers",
    "run",
]
