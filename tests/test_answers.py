import pytest

from vocab_scheduler.core.answers import (
    MatchOutcome,
    evaluate_match,
    levenshtein_distance,
    normalize_text,
    string_similarity,
)
from vocab_scheduler.schemas import LearningOutcome


def test_normalize_strips_accents_and_punctuation():
    assert normalize_text("  ¡Buenos   Días! ") == "buenos dias"
    assert normalize_text("¿Qué tal?") == "que tal"


@pytest.mark.parametrize(
    "first,second,distance",
    [("kitten", "sitting", 3), ("", "abc", 3), ("abc", "", 3), ("casa", "casa", 0)],
)
def test_levenshtein_distance(first, second, distance):
    assert levenshtein_distance(first, second) == distance


def test_exact_answer_ignoring_accents_is_correct():
    result = evaluate_match("adios", "adiós")

    assert result.outcome == MatchOutcome.CORRECT
    assert result.similarity == 1.0
    assert result.outcome_for_result() == LearningOutcome.CORRECT


def test_typo_is_close_and_counts_as_correct():
    result = evaluate_match("manzanna", "manzana")

    assert result.outcome == MatchOutcome.CLOSE
    assert result.similarity == pytest.approx(0.875)
    assert result.outcome_for_result() == LearningOutcome.CORRECT


def test_unrelated_answer_is_wrong():
    result = evaluate_match("pera", "manzana")

    assert result.outcome == MatchOutcome.INCORRECT
    assert result.outcome_for_result() == LearningOutcome.WRONG


def test_close_threshold_is_configurable():
    assert evaluate_match("manzanna", "manzana", close_threshold=0.9).outcome == MatchOutcome.INCORRECT


def test_empty_answer_has_no_similarity():
    assert string_similarity("", "hola") == 0.0
