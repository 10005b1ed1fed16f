"""Tests for the Python code emitter."""

from __future__ import annotations

import ast

import pytest
from conftest import make_enum
from google.protobuf import descriptor_pb2

from errgen.core.config import GeneratorConfig, JoinOrder
from errgen.core.extractor import extract_enum
from errgen.core.naming import ResolvedEnum, resolve_constructor, resolve_enum
from errgen.emitter import ErrorsEmitter, py_str


def _resolve(
    enum: descriptor_pb2.EnumDescriptorProto,
    config: GeneratorConfig,
    parents: tuple[str, ...] = (),
) -> ResolvedEnum:
    model = extract_enum(enum, file="test/errors.proto", package="errgen.test", parents=parents)
    return resolve_enum(model, resolve_constructor(config.new_errors_func))


def _render(enums: list[ResolvedEnum], config: GeneratorConfig, compiler_version: str | None = None) -> str:
    emitter = ErrorsEmitter(config, version="1.2.3")
    constructor = resolve_constructor(config.new_errors_func)
    return emitter.render_file("test/errors.proto", enums, constructor, compiler_version)


@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture
def rendered(test_error_enum: descriptor_pb2.EnumDescriptorProto, config: GeneratorConfig) -> str:
    return _render([_resolve(test_error_enum, config)], config)


class TestFileLayout:
    """Tests for the generated module as a whole."""

    def test_is_valid_python(self, rendered: str) -> None:
        ast.parse(rendered)

    def test_header(self, rendered: str) -> None:
        lines = rendered.splitlines()
        assert lines[0] == "# Code generated by protoc-gen-errors. DO NOT EDIT."
        assert "#   protoc-gen-errors 1.2.3" in lines
        assert "# source: test/errors.proto" in lines
        assert not any(line.startswith("#   protoc ") for line in lines)

    def test_compiler_version_in_header(
        self, test_error_enum: descriptor_pb2.EnumDescriptorProto, config: GeneratorConfig
    ) -> None:
        text = _render([_resolve(test_error_enum, config)], config, compiler_version="v5.27.1")
        assert "#   protoc            v5.27.1" in text.splitlines()

    def test_imports(self, rendered: str) -> None:
        assert "from errgen.runtime import join_errors as _join_errors" in rendered
        assert "from errgen.runtime import new_error as _new_error" in rendered

    def test_custom_constructor_import(self, test_error_enum: descriptor_pb2.EnumDescriptorProto) -> None:
        config = GeneratorConfig(new_errors_func="myapp.errors;make_error")
        text = _render([_resolve(test_error_enum, config)], config)
        assert "from myapp.errors import make_error as _new_error" in text
        assert "import new_error" not in text

    def test_all_lists_classes_in_order(self, config: GeneratorConfig) -> None:
        first = _resolve(make_enum("B", [("B_X", 1, None)]), config)
        second = _resolve(make_enum("A", [("A_X", 1, None)]), config)
        module = ast.parse(_render([first, second], config))

        assign = next(
            node
            for node in module.body
            if isinstance(node, ast.Assign) and node.targets[0].id == "__all__"  # type: ignore[attr-defined]
        )
        assert ast.literal_eval(assign.value) == ["B", "A"]
        classes = [node.name for node in module.body if isinstance(node, ast.ClassDef)]
        assert classes == ["B", "A"]

    def test_idempotent(self, test_error_enum: descriptor_pb2.EnumDescriptorProto, config: GeneratorConfig) -> None:
        first = _render([_resolve(test_error_enum, config)], config)
        second = _render([_resolve(test_error_enum, config)], config)
        assert first == second


class TestEnumClass:
    """Tests for the rendered class body."""

    def test_members_in_declaration_order(self, rendered: str) -> None:
        assert rendered.index("TEST_ERROR_UNSPECIFIED = 0") < rendered.index(
            "TEST_ERROR_INVALID_FIELD_TEST1 = 1000"
        ) < rendered.index("TEST_ERROR_INVALID_PATH_TEST2 = 1001")

    def test_one_default_branch_per_accessor(self, rendered: str) -> None:
        assert rendered.count("case _:") == 4

    def test_default_branch_is_last(self, rendered: str) -> None:
        tree = ast.parse(rendered)
        cls = next(node for node in tree.body if isinstance(node, ast.ClassDef))
        for method in cls.body:
            if not isinstance(method, ast.FunctionDef) or method.name not in {
                "error",
                "get_code",
                "get_status",
                "get_message",
            }:
                continue
            match_stmt = method.body[0]
            assert isinstance(match_stmt, ast.Match)
            assert len(match_stmt.cases) == 5
            assert isinstance(match_stmt.cases[-1].pattern, ast.MatchAs)
            assert match_stmt.cases[-1].pattern.pattern is None

    def test_branch_values(self, rendered: str) -> None:
        assert 'return "INVALID_ARGUMENT"' in rendered
        assert 'return "TestError_TEST_ERROR_INVALID_PATH_TEST2"' in rendered
        assert 'return "TestError:UNKNOWN_ERROR"' in rendered
        assert 'return "Invalid field_test1 value"' in rendered
        assert "return 400" in rendered
        assert "return 500" in rendered

    def test_join_prepends_receiver_by_default(self, rendered: str) -> None:
        assert "_join_errors(self, *errors)" in rendered

    def test_join_append(self, test_error_enum: descriptor_pb2.EnumDescriptorProto) -> None:
        config = GeneratorConfig(join_order=JoinOrder.APPEND)
        text = _render([_resolve(test_error_enum, config)], config)
        assert "_join_errors(*errors, self)" in text
        assert "_join_errors(self, *errors)" not in text

    def test_alias_gets_no_branch(self, config: GeneratorConfig) -> None:
        enum = make_enum("E", [("E_A", 1, {"reason": "A"}), ("E_A_ALIAS", 1, {"reason": "ALIAS"})])
        text = _render([_resolve(enum, config)], config)
        assert "E_A_ALIAS = 1" in text
        assert "case E.E_A_ALIAS:" not in text
        assert '"ALIAS"' not in text

    def test_nested_enum_class_name(self, config: GeneratorConfig) -> None:
        enum = make_enum("Failure", [("FAILURE_X", 1, None)])
        text = _render([_resolve(enum, config, parents=("Order",))], config)
        assert "class Order_Failure(enum.IntEnum):" in text
        assert "case Order_Failure.FAILURE_X:" in text
        assert '"""Error codes of errgen.test.Order.Failure."""' in text


class TestPyStr:
    """Tests for string literal rendering."""

    @pytest.mark.parametrize(
        "value",
        ['plain', 'with "quotes"', "back\\slash", "new\nline", "tab\tand unicode é ✓", ""],
    )
    def test_literal_round_trips(self, value: str) -> None:
        assert ast.literal_eval(py_str(value)) == value

    def test_double_quoted(self) -> None:
        assert py_str("x") == '"x"'
