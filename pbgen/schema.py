# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Schema directory enumeration and module naming."""

import fnmatch
import logging
import os

from .errors import DirectoryReadError, InvalidModuleNameError, ModuleNameCollisionError
from .request import SchemaFile


def list_schema_files(input_dir: str, pattern: str | None = None) -> list[str]:
    """List schema filenames in ``input_dir``.

    Entries come back in the order the filesystem returns them; they are not
    sorted. Subdirectories are skipped.

    Args:
        input_dir: Directory to enumerate
        pattern: Optional glob (e.g. ``"*.proto"``) an entry must match

    Returns:
        Filenames, without the directory part

    Raises:
        DirectoryReadError: If the directory is missing or unreadable
    """
    try:
        entries = os.listdir(input_dir)
    except OSError as exc:
        raise DirectoryReadError(input_dir, exc.strerror or str(exc)) from exc

    filenames = []
    for entry in entries:
        if os.path.isdir(os.path.join(input_dir, entry)):
            logging.debug("Skipping directory %s", entry)
            continue
        if pattern is not None and not fnmatch.fnmatch(entry, pattern):
            logging.debug("Skipping %s (does not match %s)", entry, pattern)
            continue
        filenames.append(entry)
    return filenames


def derive_module_name(filename: str) -> str:
    """Return the text before the first ``.`` in ``filename``.

    ``"v1.order.proto"`` gives ``"v1"``, a name without a dot is returned
    whole and a dotfile gives ``""``.
    """
    return filename.split(".")[0]


def plan_schemas(input_dir: str, filenames: list[str]) -> list[SchemaFile]:
    """Build the schema list for a run, rejecting ambiguous module names.

    Args:
        input_dir: Directory the filenames were listed from
        filenames: Filenames in listing order

    Returns:
        One SchemaFile per filename, in the same order

    Raises:
        InvalidModuleNameError: If a filename derives an empty module name
        ModuleNameCollisionError: If two filenames derive the same module name
    """
    schemas = []
    owners: dict[str, list[str]] = {}
    for filename in filenames:
        module_name = derive_module_name(filename)
        if not module_name:
            raise InvalidModuleNameError(filename)
        owners.setdefault(module_name, []).append(filename)
        schemas.append(
            SchemaFile(name=filename, path=os.path.join(input_dir, filename), module_name=module_name)
        )

    for module_name, owned in owners.items():
        if len(owned) > 1:
            raise ModuleNameCollisionError(module_name, sorted(owned))

    return schemas
