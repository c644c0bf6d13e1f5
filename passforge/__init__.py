"""PassForge: password generator, strength scorer and per-user history."""

from .errors import AccountError, AuthenticationError, ExhaustedRetries, InvalidConfig, PassForgeError
from .evaluator import StrengthRating, estimate_entropy, score_password
from .generator import (
    GenerationConfig,
    generate,
    generate_memorable,
    generate_rated,
    generate_unique,
)

__all__ = [
    "AccountError",
    "AuthenticationError",
    "ExhaustedRetries",
    "GenerationConfig",
    "InvalidConfig",
    "PassForgeError",
    "StrengthRating",
    "estimate_entropy",
    "generate",
    "generate_memorable",
    "generate_rated",
    "generate_unique",
    "score_password",
]
