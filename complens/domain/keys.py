"""
Feature and condition keys

Listing pages label features and conditions with free text
("Built in year", "Good condition"). Labels are normalised to compact
camelCase keys and only the keys enumerated here are recognised.
"""

import re
from enum import Enum
from typing import Optional

# runs of letters and digits, any script
_TOKEN_RE = re.compile(r"[^\W_]+")


def _is_boundary(prev: str, char: str, following: str) -> bool:
    if prev.isdigit() != char.isdigit():
        return True
    if prev.islower() and char.isupper():
        return True
    # last capital of an upper-case run starts the next word: "XMLHttp"
    return prev.isupper() and char.isupper() and following.islower()


def split_words(label: str) -> list[str]:
    """Split text into words at punctuation, case changes and digit runs."""
    words = []
    for token in _TOKEN_RE.findall(label):
        start = 0
        for i in range(1, len(token)):
            following = token[i + 1] if i + 1 < len(token) else ""
            if _is_boundary(token[i - 1], token[i], following):
                words.append(token[start:i])
                start = i
        words.append(token[start:])
    return words


def camel_key(label: Optional[str]) -> str:
    """
    Normalise free text to a lower camelCase key.

    "Good condition" -> "goodCondition", "All brand-new" -> "allBrandNew",
    "Pärnu mnt" -> "pärnuMnt". Punctuation and whitespace are dropped.
    """
    if not label:
        return ""
    words = [word.lower() for word in split_words(label)]
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


class FeatureKey(str, Enum):
    """Feature table keys the engine scores"""
    ROOMS = "rooms"
    BUILT_IN_YEAR = "builtInYear"
    CONDITION = "condition"
    NUMBER_OF_FLOORS = "numberOfFloors"
    TOTAL_AREA = "totalArea"


class Condition(str, Enum):
    """Condition labels recognised by the condition scorer"""
    NEEDS_RENOVATING = "needsRenovating"
    SANITARY_RENOVATION_NEEDED = "sanitaryRenovationNeeded"
    DEVELOPMENT = "development"
    READY = "ready"
    SATISFACTORY = "satisfactory"
    GOOD_CONDITION = "goodCondition"
    SANITARY_RENOVATION_DONE = "sanitaryRenovationDone"
    RENOVATED = "renovated"
    ALL_BRAND_NEW = "allBrandNew"
    UNKNOWN = "unknown"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "Condition":
        """Convert a condition label to a Condition, UNKNOWN if unrecognised."""
        key = camel_key(label)
        for member in cls:
            if member is not cls.UNKNOWN and member.value == key:
                return member
        return cls.UNKNOWN
