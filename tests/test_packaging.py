import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_mcp_dependency_stays_on_1x():
    dependencies = tomllib.loads(PYPROJECT.read_text())["project"]["dependencies"]
    (mcp,) = [dep for dep in dependencies if dep.startswith("mcp")]
    assert "<2" in mcp
