# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""protobuf.js TypeScript declaration compiler."""

from ..request import GenerationRequest
from .base import Compiler


class PbtsCompiler(Compiler):
    """Emit .d.ts declarations for a module generated by pbjs."""

    @property
    def command(self) -> list[str]:
        return self.config.command_argv(self.config.pbts_command)

    def build_args(self, request: GenerationRequest) -> list[str]:
        return ["-o", request.output] + request.inputs
