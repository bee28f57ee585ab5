from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

from .errors import ProjectAccessError
from .model import DirectoryNode


EXTENSION_LANGUAGE: Dict[str, str] = {
	".js": "javascript",
	".jsx": "javascript",
	".mjs": "javascript",
	".cjs": "javascript",
	".ts": "typescript",
	".tsx": "tsx",
}

DEFAULT_IGNORED_DIRS = (".git", "node_modules", "dist")
DEFAULT_EXTENSIONS = tuple(EXTENSION_LANGUAGE)


def detect_language(filename: str) -> Optional[str]:
	_, ext = os.path.splitext(filename)
	return EXTENSION_LANGUAGE.get(ext.lower())


def _list_dir(path: str) -> List[os.DirEntry]:
	with os.scandir(path) as it:
		return sorted(it, key=lambda entry: entry.name)


def _is_dir(entry: os.DirEntry) -> bool:
	try:
		return entry.is_dir(follow_symlinks=False)
	except OSError:
		return False


def list_files(
	root: str,
	ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
	extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> List[str]:
	"""Return absolute paths of source files under root, depth-first in name order.

	Raises ProjectAccessError when root itself cannot be listed. Subdirectories
	that cannot be read are skipped.
	"""
	root = os.path.abspath(root)
	ignored = set(ignored_dirs)
	suffixes = tuple(extensions)
	try:
		entries = _list_dir(root)
	except FileNotFoundError as e:
		raise ProjectAccessError(root, "directory does not exist") from e
	except NotADirectoryError as e:
		raise ProjectAccessError(root, "not a directory") from e
	except PermissionError as e:
		raise ProjectAccessError(root, "permission denied") from e
	except OSError as e:
		raise ProjectAccessError(root, e.strerror or str(e)) from e

	files: List[str] = []
	stack = [iter(entries)]
	while stack:
		entry = next(stack[-1], None)
		if entry is None:
			stack.pop()
			continue
		if _is_dir(entry):
			if entry.name in ignored:
				continue
			try:
				stack.append(iter(_list_dir(entry.path)))
			except OSError:
				continue
		elif entry.name.endswith(suffixes):
			files.append(entry.path)
	return files


def project_structure(root: str, ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS) -> DirectoryNode:
	"""Build the directory tree of root, listing every file and skipping ignored directories."""
	root = os.path.abspath(root)
	ignored = set(ignored_dirs)

	def build(path: str, name: str) -> DirectoryNode:
		node = DirectoryNode(name=name)
		try:
			entries = _list_dir(path)
		except OSError:
			return node
		for entry in entries:
			if _is_dir(entry):
				if entry.name not in ignored:
					node.directories.append(build(entry.path, entry.name))
			else:
				node.files.append(entry.name)
		return node

	return build(root, os.path.basename(root) or root)
