import ast
from pathlib import Path


def test_no_print_statements():
    root = Path(__file__).resolve().parents[2]
    offenders = []
    for path in (root / "src").rglob("*.py"):
        tree = ast.parse(path.read_text(encoding="utf-8"))
        for node in ast.walk(tree):
            if isinstance(node, ast.Call):
                func = node.func
                if isinstance(func, ast.Name) and func.id == "print":
                    offenders.append(str(path))
    assert not offenders, f"print() calls remain in: {offenders}"
