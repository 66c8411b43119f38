"""Quiz file validation.

Checks one quiz JSON file: top-level fields, question IDs and types, and the
answer-correctness policy for each question type. Only the ``correct`` field
counts toward correctness; ``isCorrect`` is a legacy field that is warned
about and otherwise ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from course_validator.config import (
    MIN_ANSWERS_PER_QUESTION,
    PASSING_SCORE_MAX,
    PASSING_SCORE_MIN,
    QUESTION_TYPES,
    QUIZ_TYPE,
)
from course_validator.diagnostics import Diagnostics
from course_validator.errors import Err
from course_validator.models.common import as_object, id_key, is_number
from course_validator.persistence.json_io import read_json

logger = logging.getLogger(__name__)


def _count_correct(answers: list[dict[str, Any]]) -> int:
    return sum(1 for answer in answers if answer.get("correct") is True)


def _validate_answer_policy(
    quiz_name: str,
    question_id: Any,
    question_type: Any,
    answers: list[dict[str, Any]],
    diagnostics: Diagnostics,
) -> None:
    """Apply the type-specific correctness rules to a question's answers."""
    if question_type == "MULTIPLE_CHOICE":
        correct_count = _count_correct(answers)
        if correct_count != 1:
            diagnostics.error(
                f'Quiz "{quiz_name}" MULTIPLE_CHOICE question "{question_id}" '
                f"should have exactly 1 correct answer, found {correct_count}"
            )
    elif question_type == "MULTIPLE_RESPONSE":
        if _count_correct(answers) < 1:
            diagnostics.error(
                f'Quiz "{quiz_name}" MULTIPLE_RESPONSE question "{question_id}" '
                "should have at least 1 correct answer"
            )
    elif question_type == "MATCHING":
        missing_match = sum(1 for answer in answers if not answer.get("matchText"))
        if missing_match > 0:
            diagnostics.error(
                f'Quiz "{quiz_name}" MATCHING question "{question_id}" '
                f"has {missing_match} answer(s) missing matchText"
            )


def validate_question(
    quiz_name: str,
    question: dict[str, Any],
    seen_ids: set[Any],
    diagnostics: Diagnostics,
) -> None:
    """Validate a single quiz question.

    Args:
        quiz_name: Quiz file name used in messages
        question: Question object
        seen_ids: Question IDs already seen in this file (updated in place)
        diagnostics: Log to append findings to
    """
    question_id = question.get("id")
    if not question_id:
        diagnostics.error(f'Quiz "{quiz_name}" has a question without an ID')
        return

    label = f'Quiz "{quiz_name}" question "{question_id}"'
    key = id_key(question_id)
    if key in seen_ids:
        diagnostics.error(f'Quiz "{quiz_name}" has duplicate question ID "{question_id}"')
    seen_ids.add(key)

    question_type = question.get("type")
    if question_type not in QUESTION_TYPES:
        diagnostics.error(f'{label} has invalid type "{question_type}"')

    if not question.get("question"):
        diagnostics.error(f"{label} missing question text")

    raw_answers = question.get("answers")
    if not isinstance(raw_answers, list) or len(raw_answers) < MIN_ANSWERS_PER_QUESTION:
        diagnostics.error(f"{label} must have at least {MIN_ANSWERS_PER_QUESTION} answers")
        return
    answers = [as_object(answer) for answer in raw_answers]

    uses_is_correct = any("isCorrect" in answer for answer in answers)
    if uses_is_correct:
        diagnostics.warn(f'{label} uses "isCorrect" instead of "correct"')

    if not any("correct" in answer for answer in answers):
        diagnostics.error(f'{label} answers missing "correct" field')

    _validate_answer_policy(quiz_name, question_id, question_type, answers, diagnostics)

    for answer in answers:
        answer_id = answer.get("id")
        if not answer_id:
            diagnostics.error(f"{label} has an answer without an ID")
        if not answer.get("text"):
            diagnostics.error(f'{label} answer "{answer_id}" missing text')


def validate_quiz_file(
    quiz_path: Path,
    diagnostics: Diagnostics,
    lesson_id: str | None = None,
) -> None:
    """Validate a quiz definition file.

    Args:
        quiz_path: Path to the quiz JSON file
        diagnostics: Log to append findings to
        lesson_id: Lesson that references the quiz, for logging

    Behavior:
        - Parse failures are reported and end validation of this file
        - An empty question list is reported and ends validation of this file
        - Otherwise every question is checked and a final pass is recorded,
          even if individual questions had errors
    """
    quiz_name = quiz_path.name
    logger.debug(f"Validating quiz {quiz_name} for lesson {lesson_id}")

    result = read_json(quiz_path)
    if isinstance(result, Err):
        diagnostics.error(f'Quiz "{quiz_name}" is not valid JSON: {result.error}')
        return
    if not isinstance(result.value, dict):
        diagnostics.error(f'Quiz "{quiz_name}" is not valid JSON: root must be an object')
        return
    quiz: dict[str, Any] = result.value

    if not quiz.get("title"):
        diagnostics.error(f'Quiz "{quiz_name}" missing title')
    if quiz.get("type") != QUIZ_TYPE:
        diagnostics.error(f'Quiz "{quiz_name}" type must be "{QUIZ_TYPE}", got "{quiz.get("type")}"')

    if "passingScore" not in quiz:
        diagnostics.warn(f'Quiz "{quiz_name}" missing passingScore')
    else:
        score = quiz["passingScore"]
        if not is_number(score) or not PASSING_SCORE_MIN <= score <= PASSING_SCORE_MAX:
            diagnostics.error(
                f'Quiz "{quiz_name}" passingScore must be '
                f"{PASSING_SCORE_MIN}-{PASSING_SCORE_MAX}, got {score}"
            )

    questions = quiz.get("questions")
    if not isinstance(questions, list) or len(questions) == 0:
        diagnostics.error(f'Quiz "{quiz_name}" must have at least one question')
        return

    seen_ids: set[Any] = set()
    for question in questions:
        validate_question(quiz_name, as_object(question), seen_ids, diagnostics)

    diagnostics.pass_(f'Quiz "{quiz_name}" structure is valid ({len(questions)} questions)')
