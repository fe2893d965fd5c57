import re
from pathlib import Path

PYPROJECT = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text()


def test_mcp_dependency_stays_on_the_fastmcp_line() -> None:
    # app.mcp_server imports mcp.server.fastmcp, which the 2.x releases drop.
    match = re.search(r'"mcp([^"]*)"', PYPROJECT)

    assert match is not None
    assert "<2" in match.group(1)
