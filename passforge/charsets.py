"""
passforge.charsets
Fixed character-class tables and the memorable-mode word list.
"""

import string
from typing import Dict, List

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS = string.digits
SPECIAL = "!@#$%^&*()-_=+[]{}|;:,.<>?"
SIMILAR = "O0lI1"

MEMORABLE_WORDS = (
    "Alpha", "Brave", "Cyber", "Delta", "Eagle", "Frost", "Ghost", "Hawk",
    "Iron", "Jade", "Knight", "Lotus", "Mystic", "Noble", "Omega", "Phoenix",
    "Quest", "Razor", "Storm", "Tiger", "Ultra", "Viper", "Wolf", "Xenon",
    "Zenith", "Blaze", "Crown", "Drake", "Echo", "Falcon",
)

# pool sizes used by the entropy estimate; special counts as 32 even though
# SPECIAL holds fewer characters
CLASS_POOL_SIZES: Dict[str, int] = {
    "lowercase": 26,
    "uppercase": 26,
    "digits": 10,
    "special": 32,
}


def enabled_classes(config) -> List[str]:
    """Canonical class strings for every flag set on *config*, in charset order."""
    classes = []
    if config.include_uppercase:
        classes.append(UPPERCASE)
    if config.include_lowercase:
        classes.append(LOWERCASE)
    if config.include_numbers:
        classes.append(DIGITS)
    if config.include_special:
        classes.append(SPECIAL)
    return classes


def strip_similar(chars: str) -> str:
    return "".join(c for c in chars if c not in SIMILAR)


def build_charset(config) -> str:
    """
    Working charset for random mode: enabled classes concatenated in a fixed
    order, minus the similar-looking set when exclude_similar is on.
    """
    charset = "".join(enabled_classes(config))
    if config.exclude_similar:
        charset = strip_similar(charset)
    # classes are disjoint, but keep the sequence deduplicated regardless
    return "".join(dict.fromkeys(charset))
