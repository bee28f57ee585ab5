"""End-to-end analysis of one project directory."""

from __future__ import annotations

import os
from typing import List, Optional

from .ast_parse import load_source, parse_source
from .config import AnalyzerConfig
from .depgraph import find_cycles, find_unused
from .errors import ParseError, ResolutionError
from .facts import FactAccumulator, extract
from .fs_scan import list_files, project_structure
from .logging_config import get_logger
from .model import AnalysisReport, AnalysisWarning, Cycle
from .resolver import ModuleResolver
from .summarize import large_functions, most_used_imports

logger = get_logger(__name__)


def collect_facts(files: List[str]) -> FactAccumulator:
    """Parse and extract facts file by file; unparsable files are skipped."""
    acc = FactAccumulator()
    for path in files:
        try:
            source = load_source(path)
            tree = parse_source(source.text, path)
        except ParseError as e:
            logger.warning("Skipping file due to parsing error: %s (%s)", path, e.reason)
            acc.skip(e)
            continue
        logger.debug("Parsed %s (%d lines)", path, source.line_count)
        acc.add(extract(tree, path))
    return acc


def analyze_project(
    root: str,
    config: Optional[AnalyzerConfig] = None,
    resolver: Optional[ModuleResolver] = None,
    include_structure: bool = True,
) -> AnalysisReport:
    """Run the full analysis of root.

    Raises ProjectAccessError if root cannot be listed. Parse and resolution
    failures are logged and recorded as report warnings.
    """
    config = config or AnalyzerConfig()
    resolver = resolver or ModuleResolver(config)
    root = os.path.abspath(root)

    files = list_files(root, config.ignored_directories, config.extensions)
    logger.debug("Found %d source files under %s", len(files), root)
    structure = project_structure(root, config.ignored_directories) if include_structure else None

    acc = collect_facts(files)
    warnings = list(acc.warnings)

    cycles: List[Cycle] = []
    unused: List[str] = []
    graph_available = True
    try:
        edge_map = resolver.resolve(root, files)
    except ResolutionError as e:
        logger.warning("Dependency graph unavailable: %s", e)
        warnings.append(AnalysisWarning(kind="resolution", path=root, message=e.reason))
        graph_available = False
    else:
        cycles = find_cycles(edge_map)
        unused = find_unused(edge_map, files)

    return AnalysisReport(
        root=root,
        threshold=config.large_function_threshold,
        files=files,
        structure=structure,
        function_sizes=acc.function_sizes,
        imports=acc.imports,
        large_functions=large_functions(acc.function_sizes, config.large_function_threshold),
        top_imports=most_used_imports(acc.imports, config.top_imports),
        cycles=cycles,
        unused_files=unused,
        warnings=warnings,
        graph_available=graph_available,
    )
