"""
passforge.evaluator

Password strength scoring:
- estimate_entropy(password): bits implied by the character classes that
  actually appear in the password
- score_password(password): additive score (length, class variety, entropy
  bonus) mapped to a Weak / Medium / Strong / Very Strong label

Scoring looks only at the finished password, never at the options it was
generated with.
"""

import math
from dataclasses import dataclass
from typing import Dict

from .charsets import CLASS_POOL_SIZES, DIGITS, LOWERCASE, SPECIAL, UPPERCASE

LABEL_THRESHOLDS = (
    (80, "Very Strong"),
    (60, "Strong"),
    (40, "Medium"),
)
WEAK = "Weak"


@dataclass(frozen=True)
class StrengthRating:
    score: int
    label: str
    entropy_bits: float

    @property
    def display_score(self) -> int:
        """Score clamped to 0..100 for meters and progress bars."""
        return max(0, min(100, self.score))

    def as_dict(self) -> Dict:
        return {
            "score": self.score,
            "label": self.label,
            "entropyBits": self.entropy_bits,
        }


def _has_any(password: str, chars: str) -> bool:
    return any(c in chars for c in password)


def classes_present(password: str) -> Dict[str, bool]:
    return {
        "lowercase": _has_any(password, LOWERCASE),
        "uppercase": _has_any(password, UPPERCASE),
        "digits": _has_any(password, DIGITS),
        "special": _has_any(password, SPECIAL),
    }


def estimate_entropy(password: str) -> float:
    """
    Entropy estimate:
    - Determine which character classes actually appear in the password.
    - Pool size = sum of sizes of classes used (26/26/10/32).
    - Entropy bits = length * log2(pool_size)

    Returns 0.0 for an empty password or one with no recognised class.
    """
    pool = sum(CLASS_POOL_SIZES[name] for name, present in classes_present(password).items() if present)
    if not password or pool == 0:
        return 0.0
    return len(password) * math.log2(pool)


def length_points(length: int) -> int:
    if length >= 16:
        return 25
    if length >= 12:
        return 15
    if length >= 8:
        return 10
    return 5


def label_for_score(score: int) -> str:
    for threshold, label in LABEL_THRESHOLDS:
        if score >= threshold:
            return label
    return WEAK


def score_password(password: str) -> StrengthRating:
    """
    Compute the strength rating of *password*.

    The score is not clamped; use StrengthRating.display_score for display.
    """
    score = length_points(len(password))

    present = classes_present(password)
    if present["lowercase"]:
        score += 15
    if present["uppercase"]:
        score += 15
    if present["digits"]:
        score += 15
    if present["special"]:
        score += 20

    entropy = estimate_entropy(password)
    if entropy > 80:
        score += 10
    elif entropy > 60:
        score += 5

    return StrengthRating(score=score, label=label_for_score(score), entropy_bits=entropy)
