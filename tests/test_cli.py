from pathlib import Path

import pytest
from builders import CourseBuilder, FakeDiagramParser, content_lesson, manifest, module

from course_validator import __version__
from course_validator.cli import build_parser, main


@pytest.fixture(autouse=True)
def fake_mermaid(monkeypatch: pytest.MonkeyPatch) -> FakeDiagramParser:
    parser = FakeDiagramParser()
    monkeypatch.setattr("course_validator.commands.validate.MermaidCliParser.from_env", lambda: parser)
    return parser


def _write_clean_course(course: CourseBuilder) -> None:
    course.mkdir("assets")
    course.write_text("01_basics/01_welcome.md", "# Welcome\n\n```mermaid\ngraph TD\n  A-->B\n```\n")
    course.write_manifest(manifest([module("01_basics", [content_lesson("01_basics", "01_welcome.md")], index=1)]))


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["some/course"])

    assert args.course_path == "some/course"
    assert args.verbose is False


def test_no_arguments_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1

    err = capsys.readouterr().err
    assert err.startswith("usage: course-validator")
    assert "e.g. course-validator" in err


def test_missing_folder(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nope"

    assert main([str(missing)]) == 1
    assert capsys.readouterr().err.strip() == f"Error: Course folder not found: {missing}"


def test_file_instead_of_folder(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "manifest.json"
    target.write_text("{}", encoding="utf-8")

    assert main([str(target)]) == 1
    assert capsys.readouterr().err.strip() == f"Error: Path is not a directory: {target}"


def test_valid_course_exits_zero(
    course: CourseBuilder, fake_mermaid: FakeDiagramParser, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_clean_course(course)

    assert main([str(course.root)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ["Validating course: intro-course", ""]
    assert '  ✓ "01_basics/01_welcome.md" mermaid diagram 1 is valid (graph)' in lines
    assert lines[-2] == ""
    assert lines[-1].endswith("passed, 0 errors, 0 warnings")
    assert len(fake_mermaid.seen) == 1


def test_relative_path_resolves_against_cwd(
    course: CourseBuilder, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_clean_course(course)
    monkeypatch.chdir(course.root.parent)

    assert main(["intro-course"]) == 0
    assert capsys.readouterr().out.startswith("Validating course: intro-course\n")


def test_invalid_course_exits_one(course: CourseBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(course.root)]) == 1

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Validating course: intro-course",
        "",
        "  ✗ manifest.json not found",
        "",
        "Results: 0 passed, 1 error, 0 warnings",
    ]


def test_warnings_do_not_fail(course: CourseBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    _write_clean_course(course)
    course.write_text("01_basics/02_draft.md", "# Draft\n")

    assert main(["--verbose", str(course.root)]) == 0
    assert capsys.readouterr().out.splitlines()[-1].endswith("1 warning")


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"course-validator {__version__}"


def test_symlinked_course_keeps_given_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stored = CourseBuilder(tmp_path / "store" / "abc123")
    stored.mkdir("assets")
    stored.write_text("01_basics/01_welcome.md", "# Welcome\n")
    lesson = content_lesson(
        "01_basics", "01_welcome.md", markdownPath="/courses/my-course/01_basics/01_welcome.md"
    )
    stored.write_manifest(manifest([module("01_basics", [lesson], index=1)], id="my-course"))
    (tmp_path / "my-course").symlink_to(stored.root, target_is_directory=True)
    monkeypatch.chdir(tmp_path)

    assert main(["my-course"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Validating course: my-course\n")
    assert 'manifest.id matches folder name "my-course"' in out


def test_unknown_flag_exits_one(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--strict", "some/course"]) == 1
    assert "unrecognized arguments: --strict" in capsys.readouterr().err
