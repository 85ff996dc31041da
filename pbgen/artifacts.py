# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Generated artifact records and run reports."""

import os
import threading
from dataclasses import dataclass, field

from google_crc32c import Checksum

from .constants import Mode

# ----------------------------------------------------------------------------
# Checksums
# ----------------------------------------------------------------------------

_CHUNK_SIZE = 64 << 10


def file_crc32c(path: str) -> str:
    """Compute the CRC32C of a file as a hex string.

    Args:
        path: File to checksum

    Returns:
        8-character lowercase hex digest
    """
    crc = Checksum()
    with open(path, "rb") as fh:
        while chunk := fh.read(_CHUNK_SIZE):
            crc.update(chunk)
    return crc.digest().hex()


# ----------------------------------------------------------------------------
# Records
# ----------------------------------------------------------------------------


@dataclass
class Artifact:
    """A file written by the schema compiler."""

    module_name: str
    mode: Mode
    path: str
    size: int = 0
    crc32c: str = ""

    @classmethod
    def from_path(cls, module_name: str, mode: Mode, path: str) -> "Artifact":
        """Record an artifact that already exists on disk."""
        return cls(
            module_name=module_name,
            mode=mode,
            path=path,
            size=os.path.getsize(path),
            crc32c=file_crc32c(path),
        )


@dataclass
class RunReport:
    """Outcome of a successful run."""

    artifacts: list[Artifact] = field(default_factory=list)
    invocations: dict[Mode, int] = field(default_factory=lambda: {mode: 0 for mode in Mode})
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_invocation(self, mode: Mode) -> None:
        with self._lock:
            self.invocations[mode] += 1

    def add(self, artifact: Artifact) -> None:
        with self._lock:
            self.artifacts.append(artifact)

    @property
    def total_invocations(self) -> int:
        with self._lock:
            return sum(self.invocations.values())

    def checksums(self) -> dict[str, str]:
        """Map artifact filename to CRC32C, for comparing runs."""
        with self._lock:
            return {os.path.basename(a.path): a.crc32c for a in self.artifacts}

    def for_module(self, module_name: str) -> list[Artifact]:
        with self._lock:
            return [a for a in self.artifacts if a.module_name == module_name]
