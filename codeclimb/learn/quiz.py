"""
codeclimb/learn/quiz.py

One pass-through attempt at a level's quiz. Questions are answered in order;
a wrong answer is recorded and the same question is asked again, a right
answer moves on. The attempt passes when the last question is answered
correctly and every question's latest result is correct.

Only one attempt, for the level currently open, is kept in the Flask session;
opening any level page replaces it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Optional

from codeclimb.learn.schema import QuizQuestion


class QuizError(ValueError):
    pass


@dataclass
class AnswerOutcome:
    correct: bool
    correct_answer: str
    index: int
    total: int
    finished: bool
    passed: bool
    just_passed: bool = False


@dataclass
class QuizAttempt:
    total: int
    index: int = 0
    results: List[Optional[bool]] = field(default_factory=list)
    finished: bool = False
    passed: bool = False

    def __post_init__(self):
        if len(self.results) < self.total:
            self.results = self.results + [None] * (self.total - len(self.results))

    def answer(self, question: QuizQuestion, selected: str) -> AnswerOutcome:
        if self.total == 0:
            raise QuizError("This level has no quiz yet.")
        if self.finished:
            raise QuizError("Quiz already finished. Reset it to try again.")

        correct = question.is_correct(selected)
        self.results[self.index] = correct
        just_passed = False

        if correct:
            if self.index < self.total - 1:
                self.index += 1
            else:
                self.finished = True
                self.passed = all(r is True for r in self.results)
                just_passed = self.passed

        return AnswerOutcome(
            correct=correct,
            correct_answer=question.correct_answer,
            index=self.index,
            total=self.total,
            finished=self.finished,
            passed=self.passed,
            just_passed=just_passed,
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: dict | None, total: int) -> "QuizAttempt":
        if not raw or raw.get("total") != total:
            return cls(total=total)
        return cls(
            total=total,
            index=int(raw.get("index", 0)),
            results=list(raw.get("results", [])),
            finished=bool(raw.get("finished", False)),
            passed=bool(raw.get("passed", False)),
        )


def session_key(track: str, level: int) -> str:
    return f"quiz_{track}_{level}"
