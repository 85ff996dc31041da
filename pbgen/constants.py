# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""pbgen constants and enums."""

from enum import Enum, IntEnum

# ----------------------------------------------------------------------------
# Generation modes
# ----------------------------------------------------------------------------


class Mode(str, Enum):
    """Compiler invocation modes, one request of each per schema file."""

    MODULE = "module"  # runtime message classes (pbjs)
    DECLARATIONS = "declarations"  # type declarations (pbts)


# ----------------------------------------------------------------------------
# Compiler defaults
# ----------------------------------------------------------------------------

DEFAULT_TARGET = "static-module"
DEFAULT_WRAPPER = "default"

DEFAULT_PBJS_COMMAND = "pbjs"
DEFAULT_PBTS_COMMAND = "pbts"

MODULE_EXT = ".js"
DECLARATIONS_EXT = ".d.ts"

EXTENSIONS = {
    Mode.MODULE: MODULE_EXT,
    Mode.DECLARATIONS: DECLARATIONS_EXT,
}

# ----------------------------------------------------------------------------
# Run defaults
# ----------------------------------------------------------------------------

DEFAULT_INPUT_DIR = "../proto"
DEFAULT_OUTPUT_DIR = "./generated"
DEFAULT_MAX_WORKERS = 4

# ----------------------------------------------------------------------------
# CLI exit codes
# ----------------------------------------------------------------------------


class ExitCode(IntEnum):
    """Process exit codes returned by the command line entry point."""

    OK = 0
    GENERATION_FAILED = 1
    USAGE = 2
