import ast
import subprocess
import sys
import textwrap
from pathlib import Path

import modulekit

REPO_ROOT = Path(__file__).resolve().parents[1]


def _absolute_imports(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    names: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            names.append(node.module)
    return names


def test_modulekit_imports_only_stdlib_and_itself():
    allowed = set(sys.stdlib_module_names) | {"__future__", "modulekit"}
    offenders = [
        f"{path.relative_to(REPO_ROOT)}: {name}"
        for path in sorted((REPO_ROOT / "modulekit").rglob("*.py"))
        for name in _absolute_imports(path)
        if name.split(".")[0] not in allowed
    ]

    assert offenders == []


def test_modulekit_public_names_resolve():
    missing = [name for name in modulekit.__all__ if not hasattr(modulekit, name)]

    assert missing == []
    assert len(set(modulekit.__all__)) == len(modulekit.__all__)


def test_importing_modulekit_keeps_application_stack_unloaded():
    code = textwrap.dedent(
        """\
        import sys

        import modulekit

        loaded = sorted(
            name
            for name in sys.modules
            if name.split(".")[0] in {"module_gate", "pandas", "yaml"}
        )
        if loaded:
            raise SystemExit(f"modulekit pulled in: {loaded}")
        """
    )

    proc = subprocess.run(
        [sys.executable, "-c", code],
        capture_output=True,
        text=True,
        cwd=str(REPO_ROOT),
    )
    assert proc.returncode == 0, proc.stderr or proc.stdout
