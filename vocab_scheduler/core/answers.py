"""Typed and spoken answer grading."""
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum

from vocab_scheduler.schemas.progress import LearningOutcome

DEFAULT_CLOSE_THRESHOLD = 0.85

_PUNCTUATION_RE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s+")


class MatchOutcome(str, Enum):
    """How close an answer was to the expected text."""

    CORRECT = "correct"
    CLOSE = "close"
    INCORRECT = "incorrect"


@dataclass(slots=True)
class MatchResult:
    """Grading of a single answer."""

    outcome: MatchOutcome
    similarity: float

    def outcome_for_result(self) -> LearningOutcome:
        """Close answers count as recalled."""

        if self.outcome in (MatchOutcome.CORRECT, MatchOutcome.CLOSE):
            return LearningOutcome.CORRECT
        return LearningOutcome.WRONG


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and punctuation, collapse whitespace."""

    decomposed = unicodedata.normalize("NFD", text.lower().strip())
    without_marks = "".join(char for char in decomposed if not unicodedata.combining(char))
    without_punctuation = _PUNCTUATION_RE.sub("", without_marks)
    return _WHITESPACE_RE.sub(" ", without_punctuation).strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with a rolling row."""

    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current
    return previous[-1]


def string_similarity(first: str, second: str) -> float:
    """Return a similarity score between 0.0 and 1.0 on normalized text."""

    norm_first = normalize_text(first)
    norm_second = normalize_text(second)
    if norm_first == norm_second:
        return 1.0
    if not norm_first or not norm_second:
        return 0.0

    distance = levenshtein_distance(norm_first, norm_second)
    return 1.0 - distance / max(len(norm_first), len(norm_second))


def evaluate_match(
    answer: str,
    target: str,
    *,
    close_threshold: float = DEFAULT_CLOSE_THRESHOLD,
) -> MatchResult:
    """Grade ``answer`` against ``target``."""

    similarity = string_similarity(answer, target)
    if similarity == 1.0:
        outcome = MatchOutcome.CORRECT
    elif similarity >= close_threshold:
        outcome = MatchOutcome.CLOSE
    else:
        outcome = MatchOutcome.INCORRECT
    return MatchResult(outcome=outcome, similarity=similarity)
