import sys
from pathlib import Path

import pytest

from course_validator.config import DEFAULT_MERMAID_CLI, DIAGRAM_TIMEOUT_SECONDS, MERMAID_CLI_ENV, MERMAID_TIMEOUT_ENV
from course_validator.errors import DiagramParserUnavailableError, DiagramSyntaxError
from course_validator.validation.diagrams import MermaidCliParser, diagram_type

# Stand-in CLIs: each receives "--quiet -i <source> -o <target>" like mmdc does.
RENDER_OK = """
import sys
args = sys.argv[1:]
source = args[args.index("-i") + 1]
target = args[args.index("-o") + 1]
open(target, "w").write("<svg>" + open(source).read() + "</svg>")
"""

RENDER_FAIL = """
import sys
sys.stderr.write("Generating single mermaid chart\\n")
sys.stderr.write("\\x1b[31mError: Parse error on line 2:\\x1b[0m\\n")
sys.stderr.write("graph TD\\n  A--\\n")
sys.stderr.write("Expecting 'SEMI', got 'EOF'\\n")
sys.exit(1)
"""

RENDER_SILENT_FAIL = "import sys; sys.exit(3)"

RENDER_NO_BROWSER = """
import sys
sys.stderr.write("Error: Could not find Chrome (ver. 131.0.6778.204). This can occur if either\\n")
sys.stderr.write(" 1. you did not perform an installation before running the script\\n")
sys.exit(1)
"""

RENDER_HANG = "import time; time.sleep(10)"


def _parser(script: str, timeout: float = DIAGRAM_TIMEOUT_SECONDS) -> MermaidCliParser:
    return MermaidCliParser(command=[sys.executable, "-c", script], timeout=timeout)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("graph TD\n  A-->B", "graph"),
        ("\n\nflowchart LR\n  A-->B\n", "flowchart"),
        ("sequenceDiagram\n  A->>B: hi", "sequenceDiagram"),
        ("stateDiagram-v2\n  [*] --> S", "stateDiagram-v2"),
        ("classDiagram{\n}", "classDiagram"),
        ("", ""),
    ],
)
def test_diagram_type(text: str, expected: str) -> None:
    assert diagram_type(text) == expected


@pytest.mark.asyncio
async def test_cli_success() -> None:
    assert await _parser(RENDER_OK).parse("graph TD\n  A-->B\n") is None


@pytest.mark.asyncio
async def test_cli_failure_keeps_parser_message() -> None:
    with pytest.raises(DiagramSyntaxError) as excinfo:
        await _parser(RENDER_FAIL).parse("graph TD\n  A--\n")

    assert excinfo.value.first_line == "Parse error on line 2:"
    assert "Expecting 'SEMI', got 'EOF'" in excinfo.value.detail
    assert "Generating" not in excinfo.value.detail


@pytest.mark.asyncio
async def test_cli_failure_without_output_is_unavailable() -> None:
    with pytest.raises(DiagramParserUnavailableError, match="exited with code 3"):
        await _parser(RENDER_SILENT_FAIL).parse("pie\n")


@pytest.mark.asyncio
async def test_cli_environment_failure_is_not_a_syntax_error() -> None:
    with pytest.raises(DiagramParserUnavailableError) as excinfo:
        await _parser(RENDER_NO_BROWSER).parse("graph TD\n  A-->B\n")

    assert "Could not find Chrome" in str(excinfo.value)


@pytest.mark.asyncio
async def test_non_executable_cli_is_unavailable(tmp_path: Path) -> None:
    script = tmp_path / "mmdc"
    script.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    script.chmod(0o644)

    with pytest.raises(DiagramParserUnavailableError, match="could not be started"):
        await MermaidCliParser(command=[str(script)]).parse("graph TD\n")


@pytest.mark.asyncio
async def test_missing_cli_is_unavailable() -> None:
    parser = MermaidCliParser(command=["course-validator-no-such-mmdc"])

    with pytest.raises(DiagramParserUnavailableError, match="course-validator-no-such-mmdc not found"):
        await parser.parse("graph TD\n")


@pytest.mark.asyncio
async def test_slow_cli_times_out() -> None:
    with pytest.raises(DiagramParserUnavailableError, match="timed out after 0.5s"):
        await _parser(RENDER_HANG, timeout=0.5).parse("graph TD\n")


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(MERMAID_CLI_ENV, raising=False)
    monkeypatch.delenv(MERMAID_TIMEOUT_ENV, raising=False)

    parser = MermaidCliParser.from_env()

    assert parser.command == [DEFAULT_MERMAID_CLI]
    assert parser.timeout == DIAGRAM_TIMEOUT_SECONDS


def test_from_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(MERMAID_CLI_ENV, "npx -y @mermaid-js/mermaid-cli")
    monkeypatch.setenv(MERMAID_TIMEOUT_ENV, "12.5")

    parser = MermaidCliParser.from_env()

    assert parser.command == ["npx", "-y", "@mermaid-js/mermaid-cli"]
    assert parser.timeout == 12.5
