"""Structural analysis of JavaScript/TypeScript projects.

Modules:
- fs_scan.py: Source file discovery and project structure.
- ast_parse.py: tree-sitter parsing into the syntax tree of syntax.py.
- facts.py: Function sizes and import tallies from a syntax tree.
- resolver.py: Module resolution into a file dependency edge map.
- depgraph.py: Circular dependency and unused file detection.
- summarize.py: Derived diagnostics and a one-line overview.
- pipeline.py: End-to-end analysis of a project directory.
- report.py: Console rendering of analysis results.
"""

__all__ = [
	"fs_scan",
	"ast_parse",
	"syntax",
	"facts",
	"resolver",
	"depgraph",
	"summarize",
	"pipeline",
	"report",
	"model",
	"config",
	"errors",
]

__version__ = "1.0.0"
