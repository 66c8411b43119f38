from __future__ import annotations

from pathlib import Path

import pytest
from builders import COURSE_ID, CourseBuilder, FakeDiagramParser

from course_validator.diagnostics import Diagnostics


@pytest.fixture
def course(tmp_path: Path) -> CourseBuilder:
    """Empty course folder named after the manifest ID used by the builders."""
    return CourseBuilder(tmp_path / COURSE_ID)


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def diagram_parser() -> FakeDiagramParser:
    return FakeDiagramParser()
