"""Boundary test ensuring the schema package remains lightweight.

This test prevents schema from importing the executor, the HTTP service, or
the SQL parser.
"""

import ast
from pathlib import Path


def test_schema_has_no_forbidden_imports():
    """Verify schema package does not import forbidden dependencies."""
    forbidden_prefixes = ("ddl", "sandbox_service", "fastapi", "sqlglot", "uvicorn")

    schema_src = Path(__file__).parents[3] / "src" / "schema"
    py_files = list(schema_src.rglob("*.py"))
    assert py_files, f"no sources found under {schema_src}"

    violations = []
    for py_file in py_files:
        tree = ast.parse(py_file.read_text())
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name.startswith(forbidden_prefixes):
                        violations.append(f"{py_file.name}: import {alias.name}")
            elif isinstance(node, ast.ImportFrom):
                if node.module and node.module.startswith(forbidden_prefixes):
                    violations.append(f"{py_file.name}: from {node.module}")

    assert not violations, "Forbidden imports in schema package:\n" + "\n".join(violations)
