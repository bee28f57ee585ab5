from textwrap import dedent

import pytest


@pytest.fixture
def make_project(tmp_path):
	"""Write {relative path: source} into a fresh project directory."""

	def make(files):
		root = tmp_path / "project"
		root.mkdir(exist_ok=True)
		for rel, text in files.items():
			path = root / rel
			path.parent.mkdir(parents=True, exist_ok=True)
			path.write_text(dedent(text).lstrip("\n"))
		return root

	return make


@pytest.fixture
def long_function():
	"""Source of a named function spanning `size` lines from opening to closing brace."""

	def make(name, size):
		body = "".join(f"\tconst v{i} = {i};\n" for i in range(size - 1))
		return f"function {name}() {{\n{body}}}\n"

	return make
