"""Scoring of normalized answers against a quiz's answer key."""
from dataclasses import dataclass
from typing import Sequence

from quizportal.quiz.timing import TimingVerdict


@dataclass(frozen=True)
class ScoreResult:
    score: int
    total: int
    correct_count: int


def count_correct(quiz, normalized_answers: Sequence[int]) -> int:
    return sum(
        1
        for answer, question in zip(normalized_answers, quiz.questions)
        if answer == question.correct_index
    )


def score(quiz, normalized_answers: Sequence[int], timing: TimingVerdict) -> ScoreResult:
    """
    Score a submission.

    Late submissions are recorded with a score of zero; ``total`` stays the
    full question count either way so percentages remain meaningful.
    """
    total = len(quiz.questions)
    correct = count_correct(quiz, normalized_answers)
    return ScoreResult(
        score=correct if timing.on_time else 0,
        total=total,
        correct_count=correct,
    )
