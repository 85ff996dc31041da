"""Shared fixtures: in-process fake compilers and schema directories."""

import os
import shlex
import sys
import textwrap
import threading
import time

import pytest

from pbgen import CompilerError, GenerationRequest, Mode, PbjsCompiler, PbtsCompiler, register_compiler

VALID_SCHEMA = 'syntax = "proto3";\n\nmessage {name} {{\n  string id = 1;\n}}\n'
MALFORMED_SCHEMA = 'syntax = "proto3";\n\nmessage {name} {{ syntax error\n'

# Stand-in for pbjs/pbts: copies the last argument to the -o path
STUB_COMPILER = textwrap.dedent(
    """
    import sys, time

    args = sys.argv[1:]
    output = args[args.index("-o") + 1]
    source = open(args[-1]).read()
    if "syntax error" in source:
        print("illegal token 'error'", file=sys.stderr)
        sys.exit(3)
    if "sleep" in source:
        time.sleep(5)
    if "silent" in source:
        sys.exit(0)
    with open(output, "w") as fh:
        fh.write("// " + " ".join(args) + "\\n" + source)
    """
)


class FakeModuleCompiler(PbjsCompiler):
    """Writes a deterministic module instead of running pbjs."""

    requests: list[GenerationRequest] = []
    delay = 0.005

    def invoke(self, request: GenerationRequest) -> None:
        type(self).requests.append(request)
        with open(request.inputs[0]) as fh:
            source = fh.read()
        if "syntax error" in source:
            raise CompilerError(request.mode, request.schema_name, "illegal token", returncode=1, stderr="illegal token")

        # Leave room for a declaration pass to overtake us if it could
        time.sleep(self.delay)
        with open(request.output, "w") as fh:
            fh.write(f"// root: {request.root}\n")
            for line in source.splitlines():
                fh.write(f"// {line}\n")


class FakeDeclarationCompiler(PbtsCompiler):
    """Writes declarations derived from the generated module."""

    requests: list[GenerationRequest] = []
    saw_module: list[bool] = []
    _lock = threading.Lock()

    def invoke(self, request: GenerationRequest) -> None:
        module_path = request.inputs[0]
        with self._lock:
            type(self).requests.append(request)
            type(self).saw_module.append(os.path.exists(module_path) and os.path.getsize(module_path) > 0)
        with open(module_path) as fh:
            module = fh.read()
        with open(request.output, "w") as fh:
            fh.write(f"// {len(module)} bytes of module\nexport {{}};\n")


@pytest.fixture
def fake_compilers():
    """Swap the registered compilers for the fakes above."""
    FakeModuleCompiler.requests = []
    FakeDeclarationCompiler.requests = []
    FakeDeclarationCompiler.saw_module = []
    previous = {
        Mode.MODULE: register_compiler(Mode.MODULE, FakeModuleCompiler),
        Mode.DECLARATIONS: register_compiler(Mode.DECLARATIONS, FakeDeclarationCompiler),
    }
    yield FakeModuleCompiler, FakeDeclarationCompiler
    for mode, compiler_class in previous.items():
        register_compiler(mode, compiler_class)


def write_schema(directory, filename: str, malformed: bool = False):
    """Write a small .proto file and return its path."""
    name = filename.split(".")[0].capitalize() or "Hidden"
    template = MALFORMED_SCHEMA if malformed else VALID_SCHEMA
    path = directory / filename
    path.write_text(template.format(name=name))
    return path


@pytest.fixture
def stub_command(tmp_path):
    """Command line running STUB_COMPILER with the current interpreter."""
    script = tmp_path / "stub_compiler.py"
    script.write_text(STUB_COMPILER)
    return shlex.join([sys.executable, str(script)])


@pytest.fixture
def proto_dir(tmp_path):
    """An input directory holding two valid schema files."""
    directory = tmp_path / "proto"
    directory.mkdir()
    write_schema(directory, "order.proto")
    write_schema(directory, "user.proto")
    return directory


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "generated"
