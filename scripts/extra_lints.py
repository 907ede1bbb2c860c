#!/usr/bin/env python3
"""Project-specific lint rules for weighted-integer-sampler.

Rules:
1. No class-based tests in test files (use module-level functions)
2. No imports inside library functions
3. No mutable default arguments
4. No print() statements in library code (use logging)
5. No TODO/FIXME comments without issue references
6. No calls to the global ``random`` module functions in library code;
   randomness comes from an injected random source

Usage: python scripts/extra_lints.py [PATH ...]
"""

import ast
import re
import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DIRECTORIES = ("src", "tests")

# Constructing a generator is fine; drawing from the shared one is not.
ALLOWED_RANDOM_ATTRIBUTES = frozenset({"Random", "SystemRandom"})


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


def is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name == "conftest.py"


class LintVisitor(ast.NodeVisitor):
    """AST visitor that checks for lint violations."""

    def __init__(self, file: Path, source: str) -> None:
        self.file = file
        self.source = source
        self.errors: list[LintError] = []
        self._is_test_file = is_test_file(file)
        self._function_depth = 0

    def _add_error(self, node: ast.AST, rule: str, message: str) -> None:
        lineno = getattr(node, "lineno", 0)
        col_offset = getattr(node, "col_offset", 0)
        self.errors.append(LintError(self.file, lineno, col_offset, rule, message))

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        # Rule 1: No class-based tests. Hypothesis stateful tests are bound
        # with an assignment (TestX = Machine.TestCase), which is not a ClassDef.
        if self._is_test_file and node.name.startswith("Test"):
            msg = f"Class-based test '{node.name}' found. Use functions."
            self._add_error(node, "no-class-tests", msg)
        self.generic_visit(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        self._function_depth += 1

        # Rule 3: No mutable default arguments
        for default in node.args.defaults + node.args.kw_defaults:
            if default is not None and self._is_mutable_default(default):
                msg = "Mutable default argument. Use None instead."
                self._add_error(default, "mutable-default", msg)

        self.generic_visit(node)
        self._function_depth -= 1

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_function(node)

    def _is_mutable_default(self, node: ast.expr) -> bool:
        """Check if a default value is a mutable type."""
        if isinstance(node, (ast.List, ast.Dict, ast.Set)):
            return True
        return (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in ("list", "dict", "set", "Counter")
        )

    def _check_import(self, node: ast.Import | ast.ImportFrom) -> None:
        # Rule 2: Tests import the package lazily, library code never does
        if self._function_depth > 0 and not self._is_test_file:
            self._add_error(
                node,
                "import-in-function",
                "Import inside function. Move to module level.",
            )

    def visit_Import(self, node: ast.Import) -> None:
        self._check_import(node)
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        self._check_import(node)
        if not self._is_test_file and node.module == "random":
            for alias in node.names:
                if alias.name not in ALLOWED_RANDOM_ATTRIBUTES:
                    self._add_error(
                        node,
                        "global-random",
                        f"'from random import {alias.name}' draws from the "
                        "shared generator. Take a random source instead.",
                    )
        self.generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        if not self._is_test_file:
            # Rule 4: No print() in library code
            if isinstance(node.func, ast.Name) and node.func.id == "print":
                self._add_error(
                    node,
                    "no-print",
                    "Use logging instead of print() in library code.",
                )
            # Rule 6: No random.random(), random.choice(), ... in library code
            func = node.func
            if (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
                and func.attr not in ALLOWED_RANDOM_ATTRIBUTES
            ):
                self._add_error(
                    node,
                    "global-random",
                    f"random.{func.attr}() uses the shared generator. "
                    "Take a random source instead.",
                )
        self.generic_visit(node)


def check_todo_comments(file: Path, source: str) -> list[LintError]:
    """Rule 5: Check for TODO/FIXME without issue references."""
    errors: list[LintError] = []
    todo_pattern = re.compile(r"#\s*(TODO|FIXME)(?!\(#\d+\)|:\s*#\d+)", re.IGNORECASE)

    for i, line in enumerate(source.splitlines(), 1):
        match = todo_pattern.search(line)
        if match:
            msg = f"{match.group(1)} needs issue reference (e.g., TODO(#12))."
            errors.append(LintError(file, i, match.start(), "todo-needs-issue", msg))
    return errors


def lint_file(path: Path) -> list[LintError]:
    """Lint a single file and return any errors."""
    try:
        source = path.read_text()
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]

    visitor = LintVisitor(path, source)
    visitor.visit(tree)
    return visitor.errors + check_todo_comments(path, source)


def iter_python_files(paths: list[str]) -> list[Path]:
    files: list[Path] = []
    for name in paths:
        path = Path(name)
        if path.is_file() and path.suffix == ".py":
            files.append(path)
        elif path.is_dir():
            files.extend(sorted(path.rglob("*.py")))
    return files


def main(argv: list[str] | None = None) -> int:
    """Run linting on the given paths, or on src and tests."""
    paths = list(argv if argv is not None else sys.argv[1:]) or list(
        DEFAULT_DIRECTORIES
    )
    errors: list[LintError] = []
    for py_file in iter_python_files(paths):
        errors.extend(lint_file(py_file))

    if errors:
        for error in sorted(errors, key=lambda e: (str(e.file), e.line, e.column)):
            print(error)
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1

    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
