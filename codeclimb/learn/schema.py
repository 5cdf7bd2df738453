"""
codeclimb/learn/schema.py
Typed LevelContent records and the parser shared by authored, cached and
generated content. On the wire (JSON, cache rows) keys are camelCase.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SOURCE_AUTHORED    = "authored"
SOURCE_CACHED      = "cached"
SOURCE_GENERATED   = "generated"
SOURCE_PLACEHOLDER = "placeholder"


class ContentError(ValueError):
    """Raised when a content payload does not have the required shape."""


@dataclass(frozen=True)
class Theory:
    content: str
    syntax: Optional[str] = None
    code_example: Optional[str] = None


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: List[str]
    correct_answer: str

    def is_correct(self, selected: str) -> bool:
        return selected == self.correct_answer


@dataclass(frozen=True)
class TestCase:
    __test__ = False   # keep pytest from collecting this

    input: str
    output: str


@dataclass(frozen=True)
class CodingChallenge:
    problem: str
    tasks: List[str] = field(default_factory=list)
    test_cases: List[TestCase] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)
    # None means "no constraints section", not "no constraints"
    constraints: Optional[List[str]] = None


@dataclass(frozen=True)
class LevelContent:
    title: str
    topic: str
    difficulty: str
    theory: Theory
    quiz: List[QuizQuestion]
    coding_challenge: Optional[CodingChallenge] = None
    # where the record came from; not part of equality so a generated record
    # equals the same record read back from the cache
    source: str = field(default=SOURCE_AUTHORED, compare=False)

    @property
    def placeholder(self) -> bool:
        return self.source == SOURCE_PLACEHOLDER

    def payload(self) -> Dict[str, Any]:
        """Wire-format body (what the generator returns and the cache stores)."""
        theory: Dict[str, Any] = {"content": self.theory.content}
        if self.theory.syntax is not None:
            theory["syntax"] = self.theory.syntax
        if self.theory.code_example is not None:
            theory["codeExample"] = self.theory.code_example

        body: Dict[str, Any] = {
            "theory": theory,
            "quiz": [
                {"question": q.question, "options": list(q.options),
                 "correctAnswer": q.correct_answer}
                for q in self.quiz
            ],
        }
        cc = self.coding_challenge
        if cc is not None:
            challenge: Dict[str, Any] = {
                "problem": cc.problem,
                "tasks": list(cc.tasks),
                "testCases": [{"input": t.input, "output": t.output} for t in cc.test_cases],
                "hints": list(cc.hints),
            }
            if cc.constraints is not None:
                challenge["constraints"] = list(cc.constraints)
            body["codingChallenge"] = challenge
        return body

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "topic": self.topic,
            "difficulty": self.difficulty,
            "source": self.source,
            "placeholder": self.placeholder,
            **self.payload(),
        }


# ── Parsing ───────────────────────────────────────────────────────────────────

def _str_list(raw: Any, what: str) -> List[str]:
    if not isinstance(raw, list):
        raise ContentError(f"{what} must be a list")
    return [str(item) for item in raw]


def _parse_theory(raw: Any) -> Theory:
    if not isinstance(raw, dict) or not raw:
        raise ContentError("theory must be a non-empty object")
    content = raw.get("content")
    if not isinstance(content, str) or not content.strip():
        raise ContentError("theory.content must be a non-empty string")
    syntax = raw.get("syntax")
    example = raw.get("codeExample")
    return Theory(
        content=content,
        syntax=str(syntax) if syntax else None,
        code_example=str(example) if example else None,
    )


def _parse_question(raw: Any, index: int) -> QuizQuestion:
    if not isinstance(raw, dict):
        raise ContentError(f"quiz[{index}] must be an object")
    question = raw.get("question")
    if not isinstance(question, str) or not question.strip():
        raise ContentError(f"quiz[{index}].question must be a non-empty string")
    options = _str_list(raw.get("options"), f"quiz[{index}].options")
    if len(options) < 2:
        raise ContentError(f"quiz[{index}] needs at least two options")
    correct = raw.get("correctAnswer")
    if not isinstance(correct, str) or correct not in options:
        raise ContentError(f"quiz[{index}].correctAnswer must match one of its options")
    return QuizQuestion(question=question, options=options, correct_answer=correct)


def _parse_challenge(raw: Any) -> Optional[CodingChallenge]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ContentError("codingChallenge must be an object")
    problem = raw.get("problem")
    if not isinstance(problem, str) or not problem.strip():
        raise ContentError("codingChallenge.problem must be a non-empty string")

    test_cases = []
    for i, tc in enumerate(raw.get("testCases") or []):
        if not isinstance(tc, dict):
            raise ContentError(f"codingChallenge.testCases[{i}] must be an object")
        test_cases.append(TestCase(input=str(tc.get("input", "")),
                                   output=str(tc.get("output", ""))))

    constraints = raw.get("constraints")
    return CodingChallenge(
        problem=problem,
        tasks=_str_list(raw.get("tasks") or [], "codingChallenge.tasks"),
        test_cases=test_cases,
        hints=_str_list(raw.get("hints") or [], "codingChallenge.hints"),
        constraints=(_str_list(constraints, "codingChallenge.constraints")
                     if constraints is not None else None),
    )


def parse_level_content(raw: Any, *, title: str, topic: str, difficulty: str,
                        source: str) -> LevelContent:
    """
    Build a LevelContent from a wire-format payload.
    Requires a non-empty theory object and a non-empty quiz list whose
    answers all appear among their options. Raises ContentError otherwise.
    """
    if not isinstance(raw, dict):
        raise ContentError("content payload must be an object")
    theory = _parse_theory(raw.get("theory"))
    quiz_raw = raw.get("quiz")
    if not isinstance(quiz_raw, list):
        raise ContentError("quiz must be a list")
    if not quiz_raw:
        raise ContentError("quiz must contain at least one question")
    quiz = [_parse_question(q, i) for i, q in enumerate(quiz_raw)]

    return LevelContent(
        title=title,
        topic=topic,
        difficulty=difficulty,
        theory=theory,
        quiz=quiz,
        coding_challenge=_parse_challenge(raw.get("codingChallenge")),
        source=source,
    )
