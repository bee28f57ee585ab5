from __future__ import annotations

import functools
from typing import Callable, Dict, List, Optional, Tuple

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .errors import ParseError
from .fs_scan import detect_language
from .model import SourceFile
from .syntax import (
	CallNode,
	FunctionForm,
	FunctionNode,
	ImportNode,
	OpaqueNode,
	ReExportNode,
	SyntaxNode,
)


_GRAMMARS: Dict[str, Callable[[], object]] = {
	"javascript": tree_sitter_javascript.language,
	"typescript": tree_sitter_typescript.language_typescript,
	"tsx": tree_sitter_typescript.language_tsx,
}

FUNCTION_FORMS: Dict[str, FunctionForm] = {
	"function_declaration": FunctionForm.DECLARATION,
	"generator_function_declaration": FunctionForm.DECLARATION,
	"function_expression": FunctionForm.EXPRESSION,
	# Older tree-sitter-javascript releases name function expressions "function"
	"function": FunctionForm.EXPRESSION,
	"generator_function": FunctionForm.EXPRESSION,
	"method_definition": FunctionForm.EXPRESSION,
	"arrow_function": FunctionForm.ARROW,
}


@functools.lru_cache(maxsize=None)
def get_parser(language: str) -> Parser:
	return Parser(Language(_GRAMMARS[language]()))


def _text(node: Node) -> str:
	return node.text.decode("utf-8", errors="replace") if node.text is not None else ""


def _string_value(node: Node) -> Optional[str]:
	if node.type != "string":
		return None
	# Quotes stripped, escapes kept as written
	return _text(node)[1:-1]


def _callee_name(node: Node) -> Optional[str]:
	callee = node.child_by_field_name("function")
	if callee is not None and callee.type in ("identifier", "import"):
		return _text(callee)
	return None


def _first_literal_argument(node: Node) -> Optional[str]:
	arguments = node.child_by_field_name("arguments")
	if arguments is None or arguments.type != "arguments":
		return None
	for child in arguments.named_children:
		if child.type == "comment":
			continue
		return _string_value(child)
	return None


def _import_source(node: Node) -> Optional[str]:
	source = node.child_by_field_name("source")
	if source is not None:
		return _string_value(source)
	# TypeScript: import x = require("y")
	for child in node.named_children:
		if child.type == "import_require_clause":
			strings = [c for c in child.named_children if c.type == "string"]
			source = child.child_by_field_name("source") or (strings[0] if strings else None)
			return _string_value(source) if source is not None else None
	return None


def _classify(node: Node) -> SyntaxNode:
	kind = node.type
	lines = {"start_line": node.start_point[0] + 1, "end_line": node.end_point[0] + 1}

	form = FUNCTION_FORMS.get(kind)
	if form is not None:
		name = None
		# Methods carry their key, not an identifier of the function itself
		if kind != "method_definition":
			name_node = node.child_by_field_name("name")
			if name_node is not None:
				name = _text(name_node)
		return FunctionNode(kind=kind, form=form, name=name, **lines)

	if kind == "import_statement":
		source = _import_source(node)
		if source is not None:
			return ImportNode(kind=kind, source=source, **lines)
	elif kind == "export_statement":
		source_node = node.child_by_field_name("source")
		source = _string_value(source_node) if source_node is not None else None
		if source is not None:
			return ReExportNode(kind=kind, source=source, **lines)
	elif kind == "call_expression":
		return CallNode(
			kind=kind,
			callee=_callee_name(node),
			literal_argument=_first_literal_argument(node),
			**lines,
		)

	return OpaqueNode(kind=kind, **lines)


def _convert(root: Node) -> SyntaxNode:
	converted = _classify(root)
	stack: List[Tuple[Node, SyntaxNode]] = [(root, converted)]
	while stack:
		ts_node, node = stack.pop()
		for child in ts_node.named_children:
			sub = _classify(child)
			node.children.append(sub)
			stack.append((child, sub))
	return converted


def _describe_error(root: Node) -> str:
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			line, column = node.start_point[0] + 1, node.start_point[1] + 1
			if node.is_missing:
				return f"missing '{node.type}' at line {line}, column {column}"
			return f"syntax error at line {line}, column {column}"
		stack.extend(
			reversed([child for child in node.children if child.has_error or child.is_missing])
		)
	return "syntax error"


def load_source(path: str) -> SourceFile:
	try:
		with open(path, "rb") as fh:
			raw = fh.read()
	except OSError as e:
		raise ParseError(path, e.strerror or str(e)) from e
	try:
		text = raw.decode("utf-8-sig")
	except UnicodeDecodeError as e:
		raise ParseError(path, f"not valid UTF-8: {e.reason}") from e
	line_count = text.count("\n") + (1 if text and not text.endswith("\n") else 0)
	return SourceFile(path=path, text=text, size=len(raw), line_count=line_count)


def parse_source(text: str, path: str, language: Optional[str] = None) -> SyntaxNode:
	"""Parse source text into a syntax tree rooted at the program node.

	The language is taken from the file extension unless given. Raises
	ParseError for unsupported file types and for any syntax error.
	"""
	language = language or detect_language(path)
	if language not in _GRAMMARS:
		raise ParseError(path, "unsupported file type")
	tree = get_parser(language).parse(text.encode("utf-8"))
	root = tree.root_node
	if root.has_error:
		raise ParseError(path, _describe_error(root))
	return _convert(root)


def parse_file(path: str) -> SyntaxNode:
	return parse_source(load_source(path).text, path)
