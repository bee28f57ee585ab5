from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

ANONYMOUS = "(anonymous)"

# Resolved file -> files it depends on, in discovery order without duplicates
DependencyEdgeMap = Dict[str, List[str]]
Cycle = List[str]


class SourceFile(BaseModel):
	path: str
	text: str
	size: int
	line_count: int


class FunctionSizeRecord(BaseModel):
	name: str = ANONYMOUS
	size: int
	file: str


class FileFacts(BaseModel):
	function_sizes: List[FunctionSizeRecord] = []
	imports: Dict[str, int] = {}


class ImportCount(BaseModel):
	module: str
	count: int


class AnalysisWarning(BaseModel):
	kind: Literal["parse", "resolution"]
	path: str
	message: str


class DirectoryNode(BaseModel):
	name: str
	files: List[str] = []
	directories: List[DirectoryNode] = []


class AnalysisReport(BaseModel):
	root: str
	threshold: int
	files: List[str] = []
	structure: Optional[DirectoryNode] = None
	function_sizes: List[FunctionSizeRecord] = []
	imports: Dict[str, int] = {}
	large_functions: List[FunctionSizeRecord] = []
	top_imports: List[ImportCount] = []
	cycles: List[Cycle] = []
	unused_files: List[str] = []
	warnings: List[AnalysisWarning] = []
	graph_available: bool = True
