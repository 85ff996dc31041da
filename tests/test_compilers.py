"""Tests for compiler argument building, invocation and the registry."""

import os

import pytest
from pydantic import ValidationError

from pbgen import (
    Compiler,
    CompilerError,
    CompilerNotFoundError,
    GenerationRequest,
    GeneratorConfig,
    Mode,
    PbjsCompiler,
    PbtsCompiler,
    SchemaFile,
    get_compiler,
    list_compilers,
    register_compiler,
)


@pytest.fixture
def order_schema(tmp_path):
    path = tmp_path / "order.proto"
    path.write_text('syntax = "proto3";\nmessage Order { string id = 1; }\n')
    return SchemaFile(name="order.proto", path=str(path), module_name="order")


def test_pbjs_arguments(order_schema) -> None:
    """Test pbjs gets static-module, default wrapper and the root namespace."""
    print("Testing pbjs arguments...")
    request = GenerationRequest.create_module(order_schema, "generated")

    argv = PbjsCompiler(GeneratorConfig()).argv(request)

    assert argv == [
        "pbjs",
        "-t",
        "static-module",
        "-w",
        "default",
        "--root",
        "order",
        "-o",
        os.path.join("generated", "order.js"),
        order_schema.path,
    ]
    print("✓ pbjs arguments test passed")


def test_pbjs_es6_and_custom_command(order_schema) -> None:
    """Test --es6 and a multi-word compiler command."""
    config = GeneratorConfig(pbjs_command="npx --no-install pbjs", es6=True)
    request = GenerationRequest.create_module(order_schema, "out", es6=config.es6)

    argv = PbjsCompiler(config).argv(request)

    assert argv[:3] == ["npx", "--no-install", "pbjs"]
    assert "--es6" in argv
    assert argv[-1] == order_schema.path


def test_pbts_arguments() -> None:
    """Test pbts reads the generated module and writes the .d.ts."""
    request = GenerationRequest.create_declarations(os.path.join("generated", "order.js"), "order", "generated")

    argv = PbtsCompiler(GeneratorConfig()).argv(request)

    assert argv == ["pbts", "-o", os.path.join("generated", "order.d.ts"), os.path.join("generated", "order.js")]
    assert request.mode is Mode.DECLARATIONS
    assert request.schema_name == "order.js"
    assert request.root is None


def test_invoke_writes_output(tmp_path, order_schema, stub_command) -> None:
    """Test a successful subprocess invocation."""
    request = GenerationRequest.create_module(order_schema, str(tmp_path))

    PbjsCompiler(GeneratorConfig(pbjs_command=stub_command)).invoke(request)

    written = (tmp_path / "order.js").read_text()
    assert "--root order" in written
    assert "message Order" in written


def test_invoke_failure_carries_stderr(tmp_path, stub_command) -> None:
    """Test a non-zero exit becomes a CompilerError naming the schema."""
    print("Testing compiler failure...")
    path = tmp_path / "broken.proto"
    path.write_text("message Broken { syntax error\n")
    schema = SchemaFile(name="broken.proto", path=str(path), module_name="broken")
    request = GenerationRequest.create_module(schema, str(tmp_path))

    with pytest.raises(CompilerError) as excinfo:
        PbjsCompiler(GeneratorConfig(pbjs_command=stub_command)).invoke(request)

    assert excinfo.value.stage is Mode.MODULE
    assert excinfo.value.schema == "broken.proto"
    assert excinfo.value.returncode == 3
    assert "illegal token" in excinfo.value.stderr
    assert not (tmp_path / "broken.js").exists()
    print("✓ Compiler failure test passed")


def test_invoke_missing_output(tmp_path, stub_command) -> None:
    """Test a compiler that exits cleanly without writing is an error."""
    path = tmp_path / "quiet.proto"
    path.write_text("// silent\n")
    schema = SchemaFile(name="quiet.proto", path=str(path), module_name="quiet")
    request = GenerationRequest.create_module(schema, str(tmp_path))

    with pytest.raises(CompilerError, match="did not write"):
        PbjsCompiler(GeneratorConfig(pbjs_command=stub_command)).invoke(request)


def test_invoke_ignores_output_from_earlier_run(tmp_path, stub_command) -> None:
    """Test an old artifact at the output path does not count as written."""
    print("Testing stale output handling...")
    path = tmp_path / "quiet.proto"
    path.write_text("// silent\n")
    stale = tmp_path / "quiet.js"
    stale.write_text("// generated by an earlier run\n")
    schema = SchemaFile(name="quiet.proto", path=str(path), module_name="quiet")
    request = GenerationRequest.create_module(schema, str(tmp_path))

    with pytest.raises(CompilerError, match="did not write") as excinfo:
        PbjsCompiler(GeneratorConfig(pbjs_command=stub_command)).invoke(request)

    assert excinfo.value.stage is Mode.MODULE
    assert not stale.exists()
    print("✓ Stale output test passed")


def test_invoke_timeout(tmp_path, stub_command) -> None:
    """Test the configured timeout stops a hung compiler."""
    path = tmp_path / "slow.proto"
    path.write_text("// sleep\n")
    schema = SchemaFile(name="slow.proto", path=str(path), module_name="slow")
    request = GenerationRequest.create_module(schema, str(tmp_path))

    with pytest.raises(CompilerError, match="timed out"):
        PbjsCompiler(GeneratorConfig(pbjs_command=stub_command, timeout=0.5)).invoke(request)


def test_invoke_compiler_not_found(tmp_path, order_schema) -> None:
    """Test a missing executable raises CompilerNotFoundError."""
    config = GeneratorConfig(pbts_command="pbgen-no-such-pbts")
    request = GenerationRequest.create_declarations(str(tmp_path / "order.js"), "order", str(tmp_path))

    with pytest.raises(CompilerNotFoundError) as excinfo:
        PbtsCompiler(config).invoke(request)

    assert excinfo.value.stage is Mode.DECLARATIONS
    assert isinstance(excinfo.value, CompilerError)


def test_compiler_registry() -> None:
    """Test compiler registry functionality."""
    print("Testing compiler registry...")

    compilers = list_compilers()
    assert compilers[Mode.MODULE] is PbjsCompiler
    assert compilers[Mode.DECLARATIONS] is PbtsCompiler
    assert isinstance(get_compiler(Mode.MODULE, GeneratorConfig()), PbjsCompiler)

    class EchoCompiler(Compiler):
        @property
        def command(self) -> list[str]:
            return ["echo"]

        def build_args(self, request: GenerationRequest) -> list[str]:
            return [request.output]

    previous = register_compiler(Mode.DECLARATIONS, EchoCompiler)
    try:
        assert previous is PbtsCompiler
        assert isinstance(get_compiler(Mode.DECLARATIONS, GeneratorConfig()), EchoCompiler)
    finally:
        register_compiler(Mode.DECLARATIONS, previous)

    assert list_compilers()[Mode.DECLARATIONS] is PbtsCompiler
    print("✓ Compiler registry test passed")


def test_config_validation() -> None:
    """Test invalid configurations are rejected."""
    with pytest.raises(ValidationError):
        GeneratorConfig(max_workers=0)
    with pytest.raises(ValidationError):
        GeneratorConfig(timeout=0)
    with pytest.raises(ValidationError):
        GeneratorConfig(pbjs_command="   ")

    config = GeneratorConfig()
    assert config.input_dir == "../proto"
    assert config.output_dir == "./generated"
    assert config.target == "static-module"
    assert config.wrapper == "default"
