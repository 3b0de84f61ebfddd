# backend/wellness/tests/test_scoring.py
from wellness.services.scoring import (
    answer_weight,
    compute_subscores,
    extract_written_text,
    risk_level_for,
    score_answers,
)


def test_empty_answers_are_low():
    assert score_answers({}) == (0, "low")


def test_only_tier3_answers_reach_critical():
    answers = {f"q{i}": "nearly_every_day" for i in range(5)}
    res = score_answers(answers)
    assert res.score == 15
    assert res.level == "critical"


def test_three_tier3_answers_are_moderate():
    answers = {"anxiety": "nearly_every_day", "worry": "nearly_every_day", "stress": "extremely_stressed"}
    assert score_answers(answers) == (9, "moderate")


def test_thresholds():
    assert [risk_level_for(s) for s in (0, 4, 5, 9, 10, 14, 15, 30)] == [
        "low", "low", "moderate", "moderate", "high", "high", "critical", "critical",
    ]


def test_first_matching_tier_wins_and_unknown_is_zero():
    assert answer_weight("overwhelming") == 3
    assert answer_weight("high") == 2
    assert answer_weight("moderately_stressed") == 1
    assert answer_weight("not_at_all") == 0
    assert answer_weight("slightly_stressed") == 0
    assert answer_weight(None) == 0


def test_scoring_is_pure():
    answers = {"anxiety": "more_than_half_days", "academic_pressure": "high", "mood": "fair"}
    assert score_answers(answers) == score_answers(answers) == (4, "low")


def test_subscores_average_per_group():
    answers = {
        "anxiety": "nearly_every_day",        # 75
        "worry": "more_than_half_days",       # 50 -> 62.5 -> 63
        "stress": "very_stressed",            # 75
        "mood": "good",                       # 75
        "sleep": "poor",                      # 25 -> 50
    }
    assert compute_subscores(answers) == {
        "anxiety_score": 63,
        "depression_score": 0,
        "stress_score": 75,
        "overall_wellbeing_score": 50,
    }


def test_written_text_keeps_long_strings_only():
    answers = {"mood": "good", "additional_thoughts": "exams are piling up this month"}
    assert extract_written_text(answers) == "exams are piling up this month"
