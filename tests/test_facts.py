from textwrap import dedent

from jsanalyzer.ast_parse import parse_source
from jsanalyzer.errors import ParseError
from jsanalyzer.facts import FactAccumulator, extract
from jsanalyzer.model import ANONYMOUS, FileFacts, FunctionSizeRecord
from jsanalyzer.syntax import CallNode, FunctionForm, FunctionNode, ImportNode, OpaqueNode


def _fn(kind, form, start, end, name=None, children=None):
	return FunctionNode(kind=kind, form=form, name=name, start_line=start, end_line=end, children=children or [])


def test_extract_from_hand_built_tree():
	inner = _fn("arrow_function", FunctionForm.ARROW, 3, 3)
	outer = _fn("function_declaration", FunctionForm.DECLARATION, 2, 9, name="outer", children=[inner])
	tree = OpaqueNode(
		kind="program",
		start_line=1,
		end_line=10,
		children=[
			ImportNode(kind="import_statement", source="./a", start_line=1, end_line=1),
			outer,
			CallNode(kind="call_expression", callee="require", literal_argument="./a", start_line=10, end_line=10),
			CallNode(kind="call_expression", callee="require", literal_argument=None, start_line=10, end_line=10),
			CallNode(kind="call_expression", callee="load", literal_argument="./c", start_line=10, end_line=10),
		],
	)
	facts = extract(tree, "/p/x.js")
	assert facts.function_sizes == [
		FunctionSizeRecord(name="outer", size=7, file="/p/x.js"),
		FunctionSizeRecord(name=ANONYMOUS, size=0, file="/p/x.js"),
	]
	assert facts.imports == {"./a": 2}


def test_counts_every_function_kind():
	code = dedent(
		"""
		function one() {}
		function two() {
		}
		const three = function () {};
		const four = function named() {};
		const five = () => {};
		const six = x => x * 2;
		[1, 2].map(function (n) { return n; });
		"""
	)
	facts = extract(parse_source(code, "k.js"), "k.js")
	# 2 declarations, 3 function expressions, 2 arrows
	assert len(facts.function_sizes) == 7
	assert [r.name for r in facts.function_sizes].count(ANONYMOUS) == 4


def test_size_is_line_span():
	code = "function a() { return 1; }\nfunction b() {\n\n\n  return 2;\n}\n"
	facts = extract(parse_source(code, "s.js"), "s.js")
	sizes = {r.name: r.size for r in facts.function_sizes}
	assert sizes == {"a": 0, "b": 4}


def test_variable_binding_does_not_name_function():
	facts = extract(parse_source("const handler = () => {\n};\n", "v.js"), "v.js")
	assert [r.name for r in facts.function_sizes] == [ANONYMOUS]


def test_import_tally_sums_per_specifier():
	code = dedent(
		"""
		import a from "./a";
		import { x } from "./a";
		import "./b";
		const lodash = require("lodash");
		const again = require("lodash");
		const dyn = require(name);
		export * from "./c";
		"""
	)
	facts = extract(parse_source(code, "i.js"), "i.js")
	assert facts.imports == {"./a": 2, "./b": 1, "lodash": 2}


def test_nested_functions_in_visit_order():
	code = dedent(
		"""
		function outer() {
			function inner() {
			}
			return () => inner;
		}
		function after() {}
		"""
	)
	facts = extract(parse_source(code, "n.js"), "n.js")
	assert [r.name for r in facts.function_sizes] == ["outer", "inner", ANONYMOUS, "after"]


def test_accumulator_folds_files():
	acc = FactAccumulator()
	acc.add(FileFacts(function_sizes=[FunctionSizeRecord(name="f", size=3, file="a.js")], imports={"x": 1}))
	acc.skip(ParseError("bad.js", "syntax error at line 1, column 1"))
	acc.add(FileFacts(function_sizes=[FunctionSizeRecord(name="g", size=1, file="b.js")], imports={"x": 2, "y": 1}))

	assert [r.name for r in acc.function_sizes] == ["f", "g"]
	assert acc.imports == {"x": 3, "y": 1}
	assert acc.files_analyzed == 2
	assert len(acc.warnings) == 1
	assert acc.warnings[0].path == "bad.js"
	assert acc.warnings[0].kind == "parse"
