from textwrap import dedent

import pytest

from jsanalyzer.ast_parse import load_source, parse_file, parse_source
from jsanalyzer.errors import ParseError
from jsanalyzer.syntax import CallNode, FunctionForm, FunctionNode, ImportNode, ReExportNode, walk


def _nodes(tree, cls):
	return [n for n in walk(tree) if isinstance(n, cls)]


def test_parse_simple_module(tmp_path):
	code = dedent(
		"""
		import fs from "fs";
		const path = require("path");

		function add(a, b) {
			return a + b;
		}

		const g = function named() {
			return 1;
		};

		const f = () => 1;

		class A {
			m() {
				return 2;
			}
		}

		export { helper } from "./helper";
		"""
	)
	p = tmp_path / "m.js"
	p.write_text(code)
	tree = parse_file(str(p))
	assert tree.kind == "program"

	functions = _nodes(tree, FunctionNode)
	by_kind = {fn.kind: fn for fn in functions}
	assert by_kind["function_declaration"].name == "add"
	assert by_kind["function_declaration"].form is FunctionForm.DECLARATION
	assert by_kind["function_declaration"].end_line - by_kind["function_declaration"].start_line == 2
	assert by_kind["arrow_function"].name is None
	assert by_kind["arrow_function"].start_line == by_kind["arrow_function"].end_line
	assert by_kind["method_definition"].name is None
	assert by_kind["method_definition"].form is FunctionForm.EXPRESSION
	assert "named" in [fn.name for fn in functions]
	assert len(functions) == 4

	assert [n.source for n in _nodes(tree, ImportNode)] == ["fs"]
	assert [n.source for n in _nodes(tree, ReExportNode)] == ["./helper"]
	calls = [n for n in _nodes(tree, CallNode) if n.callee == "require"]
	assert [c.literal_argument for c in calls] == ["path"]


def test_lines_are_one_based():
	tree = parse_source("\n\nfunction f() {}\n", "x.js")
	(fn,) = _nodes(tree, FunctionNode)
	assert fn.start_line == 3
	assert fn.end_line == 3


def test_computed_require_has_no_literal_argument():
	tree = parse_source("const m = require(name);\nrequire(`./t`);\n", "x.js")
	calls = _nodes(tree, CallNode)
	assert [c.callee for c in calls] == ["require", "require"]
	assert all(c.literal_argument is None for c in calls)


def test_dynamic_import_callee():
	tree = parse_source('import("./lazy.js").then(() => 1);\n', "x.js")
	calls = [c for c in _nodes(tree, CallNode) if c.callee == "import"]
	assert [c.literal_argument for c in calls] == ["./lazy.js"]


def test_typescript_sources_parse():
	code = dedent(
		"""
		import type { User } from "./types";
		import x = require("./legacy");

		export function greet(user: User): string {
			return `hi ${user.name}`;
		}
		"""
	)
	tree = parse_source(code, "greet.ts")
	assert sorted(n.source for n in _nodes(tree, ImportNode)) == ["./legacy", "./types"]
	assert [fn.name for fn in _nodes(tree, FunctionNode)] == ["greet"]


def test_syntax_error_raises_parse_error():
	with pytest.raises(ParseError) as excinfo:
		parse_source("function broken( {\n  return ;;; )))\n", "bad.js")
	assert excinfo.value.path == "bad.js"
	assert "line" in excinfo.value.reason


def test_unsupported_extension():
	with pytest.raises(ParseError, match="unsupported file type"):
		parse_source("x = 1", "notes.txt")


def test_load_source_counts(tmp_path):
	p = tmp_path / "a.js"
	p.write_text("const a = 1;\nconst b = 2;\n")
	source = load_source(str(p))
	assert source.line_count == 2
	assert source.size == len("const a = 1;\nconst b = 2;\n")


def test_load_source_rejects_binary(tmp_path):
	p = tmp_path / "blob.js"
	p.write_bytes(b"\xff\xfe\x00garbage")
	with pytest.raises(ParseError, match="UTF-8"):
		load_source(str(p))


def test_missing_file_is_parse_error(tmp_path):
	with pytest.raises(ParseError):
		parse_file(str(tmp_path / "gone.js"))
