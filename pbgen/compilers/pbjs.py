# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""protobuf.js static module compiler."""

from ..request import GenerationRequest
from .base import Compiler


class PbjsCompiler(Compiler):
    """Emit runtime message classes from .proto files with pbjs."""

    @property
    def command(self) -> list[str]:
        return self.config.command_argv(self.config.pbjs_command)

    def build_args(self, request: GenerationRequest) -> list[str]:
        """Build pbjs arguments.

        Args:
            request: Module-mode request

        Returns:
            ``-t <target> -w <wrapper> [--root <name>] [--es6] -o <out> <schemas...>``
        """
        args = ["-t", request.target, "-w", request.wrapper]
        if request.root is not None:
            args += ["--root", request.root]
        if request.es6:
            args.append("--es6")
        args += ["-o", request.output]
        return args + request.inputs
