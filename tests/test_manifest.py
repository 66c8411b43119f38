from builders import COURSE_ID, CourseBuilder, manifest, module

from course_validator.diagnostics import Diagnostics
from course_validator.validation.manifest import has_modules, validate_manifest


def test_missing_manifest_returns_none(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    assert validate_manifest(course.paths, diagnostics) is None
    assert diagnostics.messages("error") == ["manifest.json not found"]


def test_invalid_json_returns_none(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_text("manifest.json", "{not json")

    assert validate_manifest(course.paths, diagnostics) is None
    errors = diagnostics.messages("error")
    assert len(errors) == 1
    assert errors[0].startswith("manifest.json is not valid JSON: ")


def test_non_object_root_returns_none(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_manifest([1, 2, 3])

    assert validate_manifest(course.paths, diagnostics) is None
    assert diagnostics.errors == 1


def test_valid_manifest_passes(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_manifest(manifest([module("01_intro", [])]))

    result = validate_manifest(course.paths, diagnostics)

    assert result is not None
    assert diagnostics.errors == 0
    assert diagnostics.messages("pass") == [
        "manifest.json exists and is valid JSON",
        "Required manifest fields present",
        f'manifest.id matches folder name "{COURSE_ID}"',
        'Color "#3366ff" is a valid hex color',
        "1 modules found",
    ]


def test_missing_fields_are_aggregated(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_manifest({"id": COURSE_ID})

    result = validate_manifest(course.paths, diagnostics)

    assert result == {"id": COURSE_ID}
    assert not has_modules(result)
    missing = [m for m in diagnostics.messages("error") if m.startswith("Missing required manifest fields")]
    assert missing == ["Missing required manifest fields: title, description, modules"]


def test_id_must_match_folder(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_manifest(manifest([module("01_intro", [])], id="other-course"))

    validate_manifest(course.paths, diagnostics)

    assert f'manifest.id "other-course" does not match folder name "{COURSE_ID}"' in diagnostics.messages("error")


def test_color_formats(course: CourseBuilder) -> None:
    for color, valid in [("#abc", True), ("#AABBCC", True), ("#abcd", False), ("red", False), ("#ggg", False)]:
        diagnostics = Diagnostics()
        course.write_manifest(manifest([module("01_intro", [])], color=color))
        validate_manifest(course.paths, diagnostics)
        assert (diagnostics.errors == 0) is valid, color


def test_empty_modules_is_an_error(course: CourseBuilder, diagnostics: Diagnostics) -> None:
    course.write_manifest(manifest([]))

    result = validate_manifest(course.paths, diagnostics)

    assert result is not None
    assert not has_modules(result)
    assert diagnostics.messages("error") == ["modules must be a non-empty array"]
