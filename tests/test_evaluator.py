import math

from passforge.evaluator import (
    StrengthRating,
    estimate_entropy,
    label_for_score,
    score_password,
)


def test_entropy_increases_with_length():
    e_short = estimate_entropy("Ab1!")
    e_long = estimate_entropy("Ab1!" * 4)
    assert e_long > e_short


def test_entropy_strictly_monotonic_for_fixed_composition():
    previous = estimate_entropy("a")
    for n in range(2, 40):
        current = estimate_entropy("a" * n)
        assert current > previous
        previous = current


def test_entropy_uses_classes_present():
    assert math.isclose(estimate_entropy("Password1"), 9 * math.log2(62))
    assert math.isclose(estimate_entropy("aA1!"), 4 * math.log2(94))


def test_entropy_of_empty_or_unclassified_is_zero():
    assert estimate_entropy("") == 0.0
    assert estimate_entropy("   ") == 0.0


def test_score_is_deterministic():
    assert score_password("Tr0ub4dor&3") == score_password("Tr0ub4dor&3")


def test_variety_bonus():
    weak = score_password("aaaaaaaa")
    varied = score_password("aA1!aA1!")
    assert weak.score < varied.score
    assert weak.score == 25
    assert weak.label == "Weak"
    assert varied.score == 75
    assert varied.label == "Strong"


def test_medium_password():
    result = score_password("abcdefgh1")
    assert result.score == 40
    assert result.label == "Medium"


def test_small_entropy_bonus():
    # 14 lowercase letters: ~65.8 bits
    result = score_password("abcdefghijklmn")
    assert 60 < result.entropy_bits <= 80
    assert result.score == 35


def test_strong_password_scores_high():
    pw = "X7f!9Lq@2Vb#tR4sYp"
    result = score_password(pw)
    assert result.score == 100
    assert result.label == "Very Strong"


def test_empty_password():
    result = score_password("")
    assert result.entropy_bits == 0.0
    assert result.score == 5
    assert result.label == "Weak"


def test_label_thresholds():
    assert label_for_score(100) == "Very Strong"
    assert label_for_score(80) == "Very Strong"
    assert label_for_score(79) == "Strong"
    assert label_for_score(60) == "Strong"
    assert label_for_score(59) == "Medium"
    assert label_for_score(40) == "Medium"
    assert label_for_score(39) == "Weak"
    assert label_for_score(0) == "Weak"


def test_display_score_is_clamped():
    assert StrengthRating(score=130, label="Very Strong", entropy_bits=1.0).display_score == 100
    assert StrengthRating(score=-4, label="Weak", entropy_bits=0.0).display_score == 0
    assert StrengthRating(score=55, label="Medium", entropy_bits=0.0).display_score == 55


def test_as_dict():
    result = score_password("aA1!aA1!").as_dict()
    assert result["score"] == 75
    assert result["label"] == "Strong"
    assert math.isclose(result["entropyBits"], 8 * math.log2(94))
