"""
passforge.generator
Password generation: uniform random mode, word-based memorable mode and the
uniqueness gate that retries generation against a caller-owned history.

Randomness comes from any object with the random.Random interface; the default
is secrets.SystemRandom, so callers only pass one to get reproducible output.
"""

import logging
from dataclasses import dataclass, fields
from secrets import SystemRandom
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .charsets import (
    DIGITS,
    MEMORABLE_WORDS,
    SPECIAL,
    build_charset,
    enabled_classes,
    strip_similar,
)
from .errors import ExhaustedRetries, InvalidConfig
from .evaluator import StrengthRating, score_password

logger = logging.getLogger(__name__)

MAX_COMPLEXITY_ATTEMPTS = 50
MAX_UNIQUE_ATTEMPTS = 10
MAX_MEMORABLE_WORDS = 3
CHARS_PER_WORD = 6

_sysrand = SystemRandom()

# camelCase keys accepted by GenerationConfig.from_dict
_CAMEL_KEYS = {
    "includeUppercase": "include_uppercase",
    "includeLowercase": "include_lowercase",
    "includeNumbers": "include_numbers",
    "includeSpecial": "include_special",
    "excludeSimilar": "exclude_similar",
    "memorableMode": "memorable_mode",
}


@dataclass(frozen=True)
class GenerationConfig:
    length: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_special: bool = True
    exclude_similar: bool = False
    memorable_mode: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        """
        Build a config from a JSON-shaped mapping. Both snake_case and camelCase
        option names are accepted; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                continue
            if name == "length":
                # bool is an int subclass; reject it along with floats and strings
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidConfig(f"length must be an integer, got {value!r}")
            elif not isinstance(value, bool):
                raise InvalidConfig(f"{key} must be true or false, got {value!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def has_character_class(self) -> bool:
        return any((
            self.include_uppercase,
            self.include_lowercase,
            self.include_numbers,
            self.include_special,
        ))


def validate_config(config: GenerationConfig) -> None:
    """Raise InvalidConfig for a config that cannot produce a password."""
    if not config.has_character_class():
        raise InvalidConfig("At least one character type must be selected")
    if config.length < 1:
        raise InvalidConfig("length must be >= 1")


def _draw(pool: str, count: int, rng) -> str:
    return "".join(pool[rng.randrange(len(pool))] for _ in range(count))


def missing_classes(password: str, config: GenerationConfig) -> List[str]:
    """Enabled classes (canonical definitions) with no character in *password*."""
    return [cls for cls in enabled_classes(config) if not any(c in cls for c in password)]


def _fix_up(password: str, config: GenerationConfig, rng) -> str:
    """
    Force one character of every missing class into the password.

    One occurrence of each class that is already present is left alone, so a
    replacement never removes the last representative of another class.
    """
    chars = list(password)
    classes = enabled_classes(config)
    protected = set()
    for cls in classes:
        for i, c in enumerate(chars):
            if c in cls:
                protected.add(i)
                break
    free = [i for i in range(len(chars)) if i not in protected]

    for cls in missing_classes(password, config):
        if not free:
            break
        pool = strip_similar(cls) if config.exclude_similar else cls
        pos = free.pop(rng.randrange(len(free)))
        chars[pos] = pool[rng.randrange(len(pool))]
    return "".join(chars)


def generate_random(config: GenerationConfig, rng=None) -> str:
    rng = rng or _sysrand
    charset = build_charset(config)

    if config.length < len(enabled_classes(config)):
        # every class cannot fit, so the check would never pass
        logger.debug("length %d shorter than class count; skipping complexity retries", config.length)
        return _fix_up(_draw(charset, config.length, rng), config, rng)

    candidate = ""
    for attempt in range(1, MAX_COMPLEXITY_ATTEMPTS + 1):
        candidate = _draw(charset, config.length, rng)
        if not missing_classes(candidate, config):
            logger.debug("complexity check passed after %d attempt(s)", attempt)
            return candidate

    logger.warning(
        "complexity check failed %d times (length=%d); forcing missing classes",
        MAX_COMPLEXITY_ATTEMPTS,
        config.length,
    )
    return _fix_up(candidate, config, rng)


def generate_memorable(length: int, config: GenerationConfig, rng=None) -> str:
    """
    Word-based password: up to three words from MEMORABLE_WORDS, padded with
    digits/special characters and cut to exactly *length* characters.

    The cut may land inside a word. When neither numbers nor special characters
    are enabled there is no filler and the result can be shorter than *length*.
    """
    rng = rng or _sysrand
    word_count = min(MAX_MEMORABLE_WORDS, length // CHARS_PER_WORD)
    words = [MEMORABLE_WORDS[rng.randrange(len(MEMORABLE_WORDS))] for _ in range(word_count)]
    password = "".join(words)

    remaining = length - len(password)
    if remaining > 0:
        extra = ""
        if config.include_numbers:
            extra += DIGITS
        if config.include_special:
            extra += SPECIAL
        if extra:
            password += _draw(extra, remaining, rng)

    return password[:length]


def generate(config: GenerationConfig, rng=None) -> str:
    """
    Generate one password for *config*.

    Raises InvalidConfig when no character class is enabled or length < 1.
    """
    validate_config(config)
    if config.memorable_mode:
        return generate_memorable(config.length, config, rng)
    return generate_random(config, rng)


def generate_unique(
    config: GenerationConfig,
    is_unique: Callable[[str], bool],
    rng=None,
    max_attempts: int = MAX_UNIQUE_ATTEMPTS,
) -> str:
    """
    Generate passwords until *is_unique* accepts one.

    Every attempt is a fresh generation. Raises ExhaustedRetries once
    *max_attempts* candidates have been rejected.
    """
    validate_config(config)
    for attempt in range(1, max_attempts + 1):
        candidate = generate(config, rng)
        if is_unique(candidate):
            return candidate
        logger.debug("candidate %d/%d already in history, retrying", attempt, max_attempts)
    logger.info("no unique password after %d attempts", max_attempts)
    raise ExhaustedRetries(max_attempts)


def generate_rated(
    config: GenerationConfig,
    is_unique: Optional[Callable[[str], bool]] = None,
    rng=None,
) -> Tuple[str, StrengthRating]:
    """Generate (through the uniqueness gate when a predicate is given) and score."""
    if is_unique is None:
        password = generate(config, rng)
    else:
        password = generate_unique(config, is_unique, rng)
    return password, score_password(password)
