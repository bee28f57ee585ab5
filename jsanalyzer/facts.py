"""Function-size and import facts extracted from a syntax tree."""

from __future__ import annotations

from typing import Dict, List

from .errors import ParseError
from .model import ANONYMOUS, AnalysisWarning, FileFacts, FunctionSizeRecord
from .syntax import CallNode, FunctionNode, ImportNode, SyntaxNode, walk

REQUIRE = "require"


def extract(tree: SyntaxNode, file_id: str) -> FileFacts:
    """Walk ``tree`` and collect function sizes and the import tally.

    Functions keep only their own identifier: an anonymous function bound
    to a variable is still reported as anonymous.
    """
    function_sizes: List[FunctionSizeRecord] = []
    imports: Dict[str, int] = {}

    for node in walk(tree):
        if isinstance(node, FunctionNode):
            function_sizes.append(
                FunctionSizeRecord(
                    name=node.name or ANONYMOUS,
                    size=node.end_line - node.start_line,
                    file=file_id,
                )
            )
        elif isinstance(node, ImportNode):
            imports[node.source] = imports.get(node.source, 0) + 1
        elif (
            isinstance(node, CallNode)
            and node.callee == REQUIRE
            and node.literal_argument is not None
        ):
            imports[node.literal_argument] = imports.get(node.literal_argument, 0) + 1

    return FileFacts(function_sizes=function_sizes, imports=imports)


class FactAccumulator:
    """Running totals across the files of one analysis run."""

    def __init__(self) -> None:
        self.function_sizes: List[FunctionSizeRecord] = []
        self.imports: Dict[str, int] = {}
        self.warnings: List[AnalysisWarning] = []
        self.files_analyzed = 0

    def add(self, facts: FileFacts) -> None:
        self.function_sizes.extend(facts.function_sizes)
        for module, count in facts.imports.items():
            self.imports[module] = self.imports.get(module, 0) + count
        self.files_analyzed += 1

    def skip(self, error: ParseError) -> None:
        self.warnings.append(
            AnalysisWarning(kind="parse", path=error.path, message=error.reason)
        )
