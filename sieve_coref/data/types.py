"""Closed value sets for mention attributes."""

from __future__ import annotations

from enum import Enum


class MentionType(str, Enum):
    """Surface category of a mention."""

    PRONOMINAL = "PRONOMINAL"
    NOMINAL = "NOMINAL"
    PROPER = "PROPER"
    LIST = "LIST"

    @property
    def representativeness(self) -> int:
        return _REPRESENTATIVENESS[self]


_REPRESENTATIVENESS = {
    MentionType.PRONOMINAL: 0,
    MentionType.NOMINAL: 1,
    MentionType.PROPER: 2,
    MentionType.LIST: 1,
}


class Number(str, Enum):
    SINGULAR = "SINGULAR"
    PLURAL = "PLURAL"
    UNKNOWN = "UNKNOWN"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    NEUTRAL = "NEUTRAL"
    UNKNOWN = "UNKNOWN"


class Animacy(str, Enum):
    ANIMATE = "ANIMATE"
    INANIMATE = "INANIMATE"
    UNKNOWN = "UNKNOWN"


class Person(str, Enum):
    I = "I"  # noqa: E741
    YOU = "YOU"
    HE = "HE"
    SHE = "SHE"
    WE = "WE"
    THEY = "THEY"
    IT = "IT"
    UNKNOWN = "UNKNOWN"


class DocType(str, Enum):
    ARTICLE = "ARTICLE"
    CONVERSATION = "CONVERSATION"


# NER values treated as "no entity type"
NO_NER = "O"
NER_SENTINELS = frozenset({"O", "MISC"})
