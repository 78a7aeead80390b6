"""
Parse-and-validate stage for incoming JSON payloads.

Every parser returns either ``Valid(value)`` or ``Invalid(reason)``; no
normalization or scoring runs on a payload before it has been parsed here.
"""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

# Largest value a signed 32-bit INTEGER column holds
MAX_TIME_LIMIT_SECONDS = 2**31 - 1


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T

    ok = True


@dataclass(frozen=True)
class Invalid:
    reason: str

    ok = False


ParseResult = Union[Valid[T], Invalid]


@dataclass
class QuestionDraft:
    text: str
    options: list[str]
    correct_index: int


@dataclass
class QuizDraft:
    title: str
    questions: list[QuestionDraft]
    description: str | None = None
    time_limit_seconds: int | None = None
    is_active: bool = True


@dataclass
class SubmitRequest:
    quiz_id: str
    raw_answers: list[Any]
    started_at: Any = None


def _is_integral_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    try:
        return float(value).is_integer()
    except (TypeError, ValueError, OverflowError):
        return False


def parse_question(payload: Any) -> ParseResult[QuestionDraft]:
    if not isinstance(payload, dict):
        return Invalid("Invalid question format")
    text = payload.get("text")
    options = payload.get("options")
    correct_index = payload.get("correctIndex")
    if not isinstance(text, str) or not isinstance(options, list) or not _is_integral_number(correct_index):
        return Invalid("Invalid question format")
    if not text.strip():
        return Invalid("Question text must not be empty")

    cleaned = [str(option).strip() for option in options if option is not None]
    cleaned = [option for option in cleaned if option]
    if len(cleaned) < 2:
        return Invalid("Each question needs at least 2 options")

    correct_index = int(correct_index)
    if not 0 <= correct_index < len(cleaned):
        return Invalid("correctIndex out of range")

    return Valid(QuestionDraft(text=text.strip(), options=cleaned, correct_index=correct_index))


def parse_quiz(payload: Any) -> ParseResult[QuizDraft]:
    """Validate a quiz authoring payload."""
    if not isinstance(payload, dict):
        return Invalid("Invalid quiz payload")
    title = payload.get("title")
    questions = payload.get("questions")
    if not isinstance(title, str) or not title.strip():
        return Invalid("Quiz title is required")
    if not isinstance(questions, list) or not questions:
        return Invalid("Quiz must contain at least one question")

    description = payload.get("description")
    if description is not None and not isinstance(description, str):
        return Invalid("description must be a string")

    time_limit = payload.get("timeLimitSeconds")
    if time_limit is not None:
        if not _is_integral_number(time_limit) or int(time_limit) <= 0:
            return Invalid("timeLimitSeconds must be a positive integer")
        if int(time_limit) > MAX_TIME_LIMIT_SECONDS:
            return Invalid(f"timeLimitSeconds must not exceed {MAX_TIME_LIMIT_SECONDS}")
        time_limit = int(time_limit)

    is_active = payload.get("isActive", True)
    if not isinstance(is_active, bool):
        return Invalid("isActive must be a boolean")

    drafts = []
    for index, raw_question in enumerate(questions):
        parsed = parse_question(raw_question)
        if not parsed.ok:
            return Invalid(f"Question {index + 1}: {parsed.reason}")
        drafts.append(parsed.value)

    return Valid(QuizDraft(
        title=title.strip(),
        description=(description or "").strip() or None,
        time_limit_seconds=time_limit,
        questions=drafts,
        is_active=is_active,
    ))


def parse_quiz_batch(payload: Any) -> ParseResult[list[QuizDraft]]:
    """Validate an import payload: a single quiz or a list of quizzes."""
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        return Invalid("Nothing to import")
    drafts = []
    for item in items:
        parsed = parse_quiz(item)
        if not parsed.ok:
            return parsed
        drafts.append(parsed.value)
    return Valid(drafts)


def parse_submit_request(payload: Any) -> ParseResult[SubmitRequest]:
    """
    Validate the shape of a submit payload.

    Only the envelope is checked here: the answers themselves are clamped
    by the normalizer and ``startedAt`` is interpreted by the timing policy.
    """
    if not isinstance(payload, dict):
        return Invalid("Invalid payload")

    quiz_id = payload.get("quizId")
    if isinstance(quiz_id, bool) or not isinstance(quiz_id, (str, int)) or not str(quiz_id).strip():
        return Invalid("Invalid payload")

    raw_answers = payload.get("rawAnswers", payload.get("selectedIndices"))
    if not isinstance(raw_answers, list):
        return Invalid("Invalid payload")

    started_at = payload.get("startedAt", payload.get("startedAtIso"))
    return Valid(SubmitRequest(quiz_id=str(quiz_id).strip(), raw_answers=raw_answers, started_at=started_at))
