# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Schema code-generation driver."""
import logging
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from .artifacts import Artifact, RunReport
from .compilers import get_compiler
from .config import GeneratorConfig
from .constants import Mode
from .errors import CompilerError, OutputDirectoryError
from .request import GenerationRequest, SchemaFile
from .schema import list_schema_files, plan_schemas


class Driver:
    """Generate a runtime module and its declarations for every schema file.

    Each schema file is handled by one worker task that runs module generation
    to completion before declaration generation starts, so declarations always
    read a module that is already on disk. Up to ``config.max_workers`` schema
    files are processed at once.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        on_artifact: Callable[[Artifact], None] | None = None,
        on_schema_done: Callable[[SchemaFile], None] | None = None,
        on_schemas_planned: Callable[[list[SchemaFile]], None] | None = None,
    ):
        """Initialize driver.

        Args:
            config: Run configuration, defaults to GeneratorConfig()
            on_artifact: Called with every artifact as soon as it is written
            on_schema_done: Called once both artifacts of a schema exist
            on_schemas_planned: Called with the schema list before generation starts
        """
        self.config = config or GeneratorConfig()
        self.on_artifact = on_artifact
        self.on_schema_done = on_schema_done
        self.on_schemas_planned = on_schemas_planned

    def generate_module(self, schema: SchemaFile, out_dir: str, report: RunReport | None = None) -> Artifact:
        """Generate ``<out_dir>/<module_name>.js`` from a schema file.

        Raises:
            CompilerError: If the compiler fails on the schema
        """
        request = GenerationRequest.create_module(
            schema,
            out_dir,
            target=self.config.target,
            wrapper=self.config.wrapper,
            es6=self.config.es6,
        )
        return self._execute(request, schema.module_name, report)

    def generate_declarations(
        self,
        module_path: str,
        module_name: str,
        out_dir: str,
        schema_name: str | None = None,
        report: RunReport | None = None,
    ) -> Artifact:
        """Generate ``<out_dir>/<module_name>.d.ts`` from a generated module.

        Raises:
            CompilerError: If the module is missing or the compiler fails
        """
        request = GenerationRequest.create_declarations(module_path, module_name, out_dir, schema_name)
        if not os.path.exists(module_path):
            raise CompilerError(Mode.DECLARATIONS, request.schema_name, f"module {module_path} does not exist")
        return self._execute(request, module_name, report)

    def run(self, input_dir: str | None = None, out_dir: str | None = None) -> RunReport:
        """Generate artifacts for every schema file in ``input_dir``.

        The first failure cancels schema files that have not started yet and
        is re-raised once running tasks finish. Files already written are kept.

        Args:
            input_dir: Schema directory, defaults to config.input_dir
            out_dir: Output directory, defaults to config.output_dir

        Returns:
            Report of the artifacts written

        Raises:
            DirectoryReadError: If the schema directory cannot be listed
            ModuleNameCollisionError: If two schema files share a module name
            InvalidModuleNameError: If a schema file derives an empty module name
            OutputDirectoryError: If the output directory cannot be created
            CompilerError: If any compiler invocation fails
        """
        input_dir = input_dir or self.config.input_dir
        out_dir = out_dir or self.config.output_dir

        filenames = list_schema_files(input_dir, self.config.pattern)
        logging.info("Found %d schema files in %s", len(filenames), input_dir)
        schemas = plan_schemas(input_dir, filenames)
        if self.on_schemas_planned:
            self.on_schemas_planned(schemas)

        report = RunReport()
        if not schemas:
            return report

        try:
            os.makedirs(out_dir, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(out_dir, exc.strerror or str(exc)) from exc

        workers = min(self.config.max_workers, len(schemas))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pbgen") as pool:
            futures = [pool.submit(self._process, schema, out_dir, report) for schema in schemas]
            try:
                for future in as_completed(futures):
                    future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

        # Report artifacts in listing order, module before declarations
        order = {schema.module_name: index for index, schema in enumerate(schemas)}
        report.artifacts.sort(key=lambda a: (order[a.module_name], a.mode is Mode.DECLARATIONS))

        logging.info("Generated %d artifacts in %s", len(report.artifacts), out_dir)
        return report

    def _process(self, schema: SchemaFile, out_dir: str, report: RunReport) -> None:
        """Run both generation passes for one schema file."""
        logging.info("Generating %s from %s", schema.module_name, schema.name)
        module = self.generate_module(schema, out_dir, report)
        self.generate_declarations(module.path, schema.module_name, out_dir, schema.name, report)
        if self.on_schema_done:
            self.on_schema_done(schema)

    def _execute(self, request: GenerationRequest, module_name: str, report: RunReport | None) -> Artifact:
        """Invoke the compiler for a request and record what it wrote."""
        compiler = get_compiler(request.mode, self.config)
        if report is not None:
            report.record_invocation(request.mode)
        compiler.invoke(request)

        artifact = Artifact.from_path(module_name, request.mode, request.output)
        logging.info("Wrote %s (%d bytes)", request.output, artifact.size)
        if report is not None:
            report.add(artifact)
        if self.on_artifact:
            self.on_artifact(artifact)
        return artifact
