# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Schema file and generation request models."""

import os
from typing import Any

from pydantic import BaseModel, Field

from .constants import DEFAULT_TARGET, DEFAULT_WRAPPER, EXTENSIONS, Mode


class SchemaFile(BaseModel):
    """A schema file found in the input directory."""

    name: str = Field(..., description="Filename as listed in the input directory")
    path: str = Field(..., description="Path to the schema file")
    module_name: str = Field(..., description="Root namespace and output stem")

    def output_path(self, out_dir: str, mode: Mode) -> str:
        """Path of the artifact this schema produces for ``mode``."""
        return os.path.join(out_dir, f"{self.module_name}{EXTENSIONS[mode]}")


class GenerationRequest(BaseModel):
    """One compiler invocation."""

    mode: Mode = Field(..., description="Which generation pass this is")
    schema_name: str = Field(..., description="Schema filename the request belongs to")
    inputs: list[str] = Field(..., min_length=1, description="Input paths handed to the compiler")
    output: str = Field(..., description="Artifact path the compiler writes")
    root: str | None = Field(None, description="Root namespace (module mode only)")
    target: str = Field(DEFAULT_TARGET, description="Output target (module mode only)")
    wrapper: str = Field(DEFAULT_WRAPPER, description="Module wrapper (module mode only)")
    es6: bool = Field(False, description="Emit ES6 syntax (module mode only)")

    @classmethod
    def create_module(cls, schema: SchemaFile, out_dir: str, **kwargs: Any) -> "GenerationRequest":
        """Create a module-mode request reading the schema file."""
        return cls(
            mode=Mode.MODULE,
            schema_name=schema.name,
            inputs=[schema.path],
            output=schema.output_path(out_dir, Mode.MODULE),
            root=schema.module_name,
            **kwargs,
        )

    @classmethod
    def create_declarations(
        cls, module_path: str, module_name: str, out_dir: str, schema_name: str | None = None
    ) -> "GenerationRequest":
        """Create a declaration-mode request reading a generated module."""
        return cls(
            mode=Mode.DECLARATIONS,
            schema_name=schema_name or os.path.basename(module_path),
            inputs=[module_path],
            output=os.path.join(out_dir, f"{module_name}{EXTENSIONS[Mode.DECLARATIONS]}"),
        )
