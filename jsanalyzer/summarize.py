from __future__ import annotations

from typing import Dict, Iterable, List

from .model import AnalysisReport, FunctionSizeRecord, ImportCount


def large_functions(records: Iterable[FunctionSizeRecord], threshold: int) -> List[FunctionSizeRecord]:
	return [r for r in records if r.size > threshold]


def most_used_imports(tally: Dict[str, int], limit: int) -> List[ImportCount]:
	# sorted() is stable: equal counts keep first-seen order
	ranked = sorted(tally.items(), key=lambda item: item[1], reverse=True)
	return [ImportCount(module=module, count=count) for module, count in ranked[:limit]]


def summarize_report(report: AnalysisReport) -> str:
	parts: List[str] = [
		f"{len(report.files)} files",
		f"{len(report.function_sizes)} functions",
		f"{len(report.large_functions)} over {report.threshold} lines",
		f"{len(report.imports)} distinct imports",
	]
	if report.graph_available:
		parts.append(f"{len(report.cycles)} circular dependencies")
		parts.append(f"{len(report.unused_files)} unused files")
	else:
		parts.append("dependency graph unavailable")
	skipped = sum(1 for w in report.warnings if w.kind == "parse")
	if skipped:
		parts.append(f"{skipped} files skipped")
	return f"Project at {report.root}: " + ", ".join(parts)
