"""Typed syntax tree consumed by the fact extractor and the module resolver.

The parser converts its concrete tree into a small tagged union. Only the
node shapes the analysis consults get their own variant; everything else is
an OpaqueNode whose children are still walked, so every reachable node is
visited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional


class FunctionForm(str, Enum):
    DECLARATION = "declaration"
    EXPRESSION = "expression"
    ARROW = "arrow"


@dataclass(kw_only=True)
class SyntaxNode:
    kind: str
    start_line: int
    end_line: int
    children: List[SyntaxNode] = field(default_factory=list)

    def iter_children(self) -> Iterator[SyntaxNode]:
        return iter(self.children)


@dataclass(kw_only=True)
class FunctionNode(SyntaxNode):
    """Function declaration, function expression, method or arrow function."""

    form: FunctionForm
    name: Optional[str] = None


@dataclass(kw_only=True)
class ImportNode(SyntaxNode):
    """Static import declaration with its module specifier as written."""

    source: str


@dataclass(kw_only=True)
class ReExportNode(SyntaxNode):
    """``export ... from "x"``."""

    source: str


@dataclass(kw_only=True)
class CallNode(SyntaxNode):
    """Call expression.

    ``callee`` is set only for a bare identifier callee (or the ``import``
    keyword of a dynamic import); ``literal_argument`` only when the first
    argument is a string literal.
    """

    callee: Optional[str] = None
    literal_argument: Optional[str] = None


@dataclass(kw_only=True)
class OpaqueNode(SyntaxNode):
    pass


def walk(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield root and all of its descendants, depth-first pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.iter_children())))
