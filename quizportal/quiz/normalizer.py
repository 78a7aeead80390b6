"""
Answer normalization.

Clamps an arbitrary client-supplied answer array into exactly one entry
per question, each either a valid option index or ``UNANSWERED``.
Malformed input never fails a submission; it only counts as unanswered.
"""
import math
from typing import Any, Sequence

UNANSWERED = -1


def coerce_index(value: Any) -> int | None:
    """
    Coerce a raw answer to an integer option index.

    Returns None when the value is not an integral number. Booleans and
    None are not numbers here: an explicit ``null`` means "no answer".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        if math.isfinite(number) and number.is_integer():
            return int(number)
        return None
    return None


def normalize(quiz, raw_answers: Sequence[Any] | None) -> list[int]:
    """
    Return one normalized answer per question of ``quiz``.

    ``quiz`` is anything exposing ``questions`` whose items expose
    ``options``. The output length always equals the question count,
    however long or short ``raw_answers`` is.
    """
    raw_answers = list(raw_answers or [])
    normalized = []
    for i, question in enumerate(quiz.questions):
        index = coerce_index(raw_answers[i]) if i < len(raw_answers) else None
        if index is not None and 0 <= index < len(question.options):
            normalized.append(index)
        else:
            normalized.append(UNANSWERED)
    return normalized
