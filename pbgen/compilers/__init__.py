# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Schema compiler back-ends."""

from ..config import GeneratorConfig
from ..constants import Mode
from .base import Compiler
from .pbjs import PbjsCompiler
from .pbts import PbtsCompiler

__all__ = [
    "Compiler",
    "PbjsCompiler",
    "PbtsCompiler",
    "register_compiler",
    "get_compiler",
    "list_compilers",
]


# Compiler registry
_COMPILERS: dict[Mode, type[Compiler]] = {}


def register_compiler(mode: Mode, compiler_class: type[Compiler]) -> type[Compiler] | None:
    """Register the compiler used for a mode, returning the one it replaces."""
    previous = _COMPILERS.get(mode)
    _COMPILERS[mode] = compiler_class
    return previous


def get_compiler(mode: Mode, config: GeneratorConfig) -> Compiler:
    """Get a compiler instance for a mode."""
    if mode not in _COMPILERS:
        raise ValueError(f"No compiler registered for mode: {mode}")
    return _COMPILERS[mode](config)


def list_compilers() -> dict[Mode, type[Compiler]]:
    """List the registered compiler for each mode."""
    return dict(_COMPILERS)


# Register default compilers
register_compiler(Mode.MODULE, PbjsCompiler)
register_compiler(Mode.DECLARATIONS, PbtsCompiler)
