# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Base compiler interface for pbgen."""

import contextlib
import logging
import os
import subprocess
from abc import ABC, abstractmethod

from ..config import GeneratorConfig
from ..errors import CompilerError, CompilerNotFoundError
from ..request import GenerationRequest


class Compiler(ABC):
    """Base interface for schema compiler back-ends."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    @property
    @abstractmethod
    def command(self) -> list[str]:
        """Argv prefix that starts the compiler."""
        pass

    @abstractmethod
    def build_args(self, request: GenerationRequest) -> list[str]:
        """Translate a request into compiler arguments."""
        pass

    def argv(self, request: GenerationRequest) -> list[str]:
        return self.command + self.build_args(request)

    def invoke(self, request: GenerationRequest) -> None:
        """Run the compiler for one request and wait for it to exit.

        Args:
            request: The request to execute

        Raises:
            CompilerNotFoundError: If the compiler executable cannot be started
            CompilerError: If the compiler fails, times out or does not write the output
        """
        argv = self.argv(request)
        logging.debug("Running %s", " ".join(argv))

        # Output left by an earlier run must not pass for this one
        with contextlib.suppress(FileNotFoundError):
            os.unlink(request.output)

        try:
            result = subprocess.run(argv, capture_output=True, text=True, timeout=self.config.timeout)
        except FileNotFoundError as exc:
            raise CompilerNotFoundError(
                request.mode, request.schema_name, f"compiler executable {argv[0]!r} not found"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CompilerError(
                request.mode, request.schema_name, f"{argv[0]} timed out after {self.config.timeout}s"
            ) from exc

        if result.returncode != 0:
            stderr = result.stderr.strip()
            logging.error("%s failed for %s:\n%s", argv[0], request.schema_name, stderr)
            raise CompilerError(
                request.mode,
                request.schema_name,
                f"{argv[0]} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=stderr,
            )

        if not os.path.exists(request.output):
            raise CompilerError(request.mode, request.schema_name, f"{argv[0]} did not write {request.output}")
