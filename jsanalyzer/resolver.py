"""Module resolver: builds the file-to-file dependency edge map of a project.

Only specifiers that point into the project (``./x``, ``../x``, ``/abs/x``)
become edges. Bare package names are external and ignored.
"""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence, Set

from .ast_parse import parse_file
from .config import AnalyzerConfig
from .errors import ParseError, ProjectAccessError, ResolutionError
from .fs_scan import list_files
from .logging_config import get_logger
from .model import DependencyEdgeMap
from .syntax import CallNode, ImportNode, ReExportNode, SyntaxNode, walk

logger = get_logger(__name__)

JS_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs")
TS_EXTENSIONS = (".ts", ".tsx")
LOADER_CALLEES = ("require", "import")


def module_specifiers(tree: SyntaxNode) -> List[str]:
    """Literal specifiers of imports, re-exports, requires and dynamic imports."""
    specifiers: List[str] = []
    for node in walk(tree):
        if isinstance(node, (ImportNode, ReExportNode)):
            specifiers.append(node.source)
        elif (
            isinstance(node, CallNode)
            and node.callee in LOADER_CALLEES
            and node.literal_argument is not None
        ):
            specifiers.append(node.literal_argument)
    return specifiers


class ModuleResolver:
    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()

    def _candidates(self, base: str) -> List[str]:
        candidates = [base]
        candidates.extend(base + ext for ext in self.config.extensions)
        stem, ext = os.path.splitext(base)
        # TypeScript sources import each other with the emitted .js name
        if ext in JS_EXTENSIONS:
            candidates.extend(stem + ts_ext for ts_ext in TS_EXTENSIONS)
        candidates.extend(os.path.join(base, "index" + ext) for ext in self.config.extensions)
        return candidates

    def resolve_specifier(self, importer: str, specifier: str, known: Set[str]) -> Optional[str]:
        """Resolve one specifier written in importer to an inventory file, if any."""
        if specifier.startswith("/"):
            base = os.path.normpath(specifier)
        elif specifier.startswith("."):
            base = os.path.normpath(os.path.join(os.path.dirname(importer), specifier))
        else:
            return None
        for candidate in self._candidates(base):
            if candidate in known:
                return candidate
        return None

    def resolve(self, root: str, files: Optional[Sequence[str]] = None) -> DependencyEdgeMap:
        """Map every project file to the project files it depends on.

        Raises ResolutionError when no map can be built for root.
        """
        root = os.path.abspath(root)
        if not os.path.isdir(root):
            raise ResolutionError(root, "not a directory")

        if files is None:
            try:
                files = list_files(root, self.config.ignored_directories, self.config.extensions)
            except ProjectAccessError as e:
                raise ResolutionError(root, e.reason) from e

        inventory = [os.path.abspath(path) for path in files]
        known = set(inventory)
        edges: DependencyEdgeMap = {}

        for path in inventory:
            try:
                tree = parse_file(path)
            except ParseError as e:
                logger.debug("No dependencies for %s: %s", path, e.reason)
                edges[path] = []
                continue

            deps: List[str] = []
            for specifier in module_specifiers(tree):
                target = self.resolve_specifier(path, specifier, known)
                if target is not None and target not in deps:
                    deps.append(target)
            edges[path] = deps

        logger.debug(
            "Resolved %d edges across %d files",
            sum(len(deps) for deps in edges.values()),
            len(edges),
        )
        return edges


def resolve(root: str, files: Optional[Iterable[str]] = None, config: Optional[AnalyzerConfig] = None) -> DependencyEdgeMap:
    return ModuleResolver(config).resolve(root, list(files) if files is not None else None)
