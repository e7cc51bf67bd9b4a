"""
Word lists and lexical resources consulted by the predicates
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import numpy as np
import yaml

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


ENGLISH_WORD_LISTS: dict[str, frozenset[str]] = {
    "female_pronouns": frozenset({"her", "hers", "herself", "she"}),
    "male_pronouns": frozenset({"he", "him", "himself", "his"}),
    "neutral_pronouns": frozenset({"it", "its", "itself", "where", "here", "there", "which"}),
    "possessive_pronouns": frozenset({"my", "your", "his", "her", "its", "our", "their", "whose"}),
    "other_pronouns": frozenset({"who", "whom", "whose", "where", "when", "which"}),
    "third_person_pronouns": frozenset({
        "he", "him", "himself", "his", "she", "her", "herself", "hers", "it", "itself", "its",
        "one", "oneself", "one's", "they", "them", "themself", "themselves", "theirs", "their", "'em",
    }),
    "second_person_pronouns": frozenset({"you", "yourself", "yours", "your", "yourselves"}),
    "first_person_pronouns": frozenset({
        "i", "me", "myself", "mine", "my", "we", "us", "ourself", "ourselves", "ours", "our",
    }),
    "money_percent_number_pronouns": frozenset({"it", "its"}),
    "date_time_pronouns": frozenset({"when"}),
    "organization_pronouns": frozenset({"it", "its", "they", "their", "them", "which"}),
    "location_pronouns": frozenset({"it", "its", "where", "here", "there"}),
    "gpe_pronouns": frozenset({"it", "itself", "its", "they", "where"}),
    "facility_vehicle_weapon_pronouns": frozenset({"it", "itself", "its", "they", "where"}),
    "inanimate_pronouns": frozenset({"it", "itself", "its", "where", "when"}),
    "animate_pronouns": frozenset({
        "i", "me", "myself", "mine", "my", "we", "us", "ourself", "ourselves", "ours", "our",
        "you", "yourself", "yours", "your", "yourselves", "he", "him", "himself", "his", "she",
        "her", "herself", "hers", "one", "oneself", "one's", "they", "them", "themself",
        "themselves", "theirs", "their", "'em", "who", "whom", "whose",
    }),
    "indefinite_pronouns": frozenset({
        "another", "anybody", "anyone", "anything", "each", "either", "enough", "everybody",
        "everyone", "everything", "less", "little", "much", "neither", "no one", "nobody",
        "nothing", "one", "other", "plenty", "somebody", "someone", "something", "both", "few",
        "fewer", "many", "others", "several", "all", "any", "more", "most", "none", "some", "such",
    }),
    "relative_pronouns": frozenset({"that", "who", "which", "whom", "where", "whose"}),
    "reflexive_pronouns": frozenset({
        "myself", "yourself", "yourselves", "himself", "herself", "itself", "ourselves",
        "themselves", "oneself",
    }),
    "plural_pronouns": frozenset({
        "we", "us", "ourself", "ourselves", "ours", "our", "yourself", "yourselves", "they",
        "them", "themself", "themselves", "theirs", "their",
    }),
    "singular_pronouns": frozenset({
        "i", "me", "myself", "mine", "my", "yourself", "he", "him", "himself", "his", "she",
        "her", "herself", "hers", "it", "itself", "its", "one", "oneself", "one's",
    }),
    "not_organization_prp": frozenset({
        "i", "me", "myself", "mine", "my", "yourself", "he", "him", "himself", "his", "she",
        "her", "herself", "hers", "here",
    }),
    "quantifiers": frozenset({
        "not", "every", "any", "none", "everything", "anything", "nothing", "all", "enough",
    }),
    "parts": frozenset({
        "half", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten",
        "hundred", "thousand", "million", "billion", "tens", "dozens", "hundreds", "thousands",
        "millions", "billions", "group", "groups", "bunch", "number", "numbers", "pinch",
        "amount", "total", "all", "mile", "miles", "pounds",
    }),
    "stop_words": frozenset({
        "a", "an", "the", "of", "at", "on", "upon", "in", "to", "from", "out", "as", "so",
        "such", "or", "and", "those", "this", "these", "that", "for", ",", "is", "was", "am",
        "are", "'s", "been", "were",
    }),
}

CHINESE_WORD_LISTS: dict[str, frozenset[str]] = {
    "female_pronouns": frozenset({"她", "她们"}),
    "male_pronouns": frozenset({"他", "他们"}),
    "neutral_pronouns": frozenset({
        "它", "它们", "谁", "什么", "那", "那儿", "那个", "那里", "哪", "哪个", "哪儿", "哪里", "这", "这儿", "这个", "这里",
    }),
    "possessive_pronouns": frozenset(),
    "other_pronouns": frozenset({"谁", "哪里", "哪个", "哪些", "哪儿"}),
    "third_person_pronouns": frozenset({"她", "她们", "他", "他们"}),
    "second_person_pronouns": frozenset({"你", "你们", "您"}),
    "first_person_pronouns": frozenset({"我", "我们", "咱们", "咱"}),
    "money_percent_number_pronouns": frozenset({"它"}),
    "date_time_pronouns": frozenset(),
    "organization_pronouns": frozenset({
        "它", "他们", "谁", "什么", "那", "那个", "那里", "哪", "哪个", "哪里", "这", "这个", "这里",
    }),
    "location_pronouns": frozenset({"它", "哪里", "哪个", "这里", "这儿", "那里", "那儿"}),
    "gpe_pronouns": frozenset({
        "它", "它们", "他们", "那", "那儿", "那个", "那里", "哪", "哪个", "哪儿", "哪里", "这", "这儿", "这个", "这里",
    }),
    "facility_vehicle_weapon_pronouns": frozenset({"它", "他们", "哪里", "哪儿"}),
    "inanimate_pronouns": frozenset({
        "它", "它们", "那", "那儿", "那个", "那里", "哪", "哪个", "哪儿", "哪里", "这", "这儿", "这个", "这里",
    }),
    "animate_pronouns": frozenset({"我", "我们", "你", "你们", "她", "她们", "他", "他们", "谁"}),
    "indefinite_pronouns": frozenset({"谁", "另外", "任何", "每", "所有", "许多", "一些"}),
    "relative_pronouns": frozenset(),
    "reflexive_pronouns": frozenset({"自己"}),
    "plural_pronouns": frozenset({"我们", "你们", "她们", "他们", "它们", "咱们"}),
    "singular_pronouns": frozenset({"我", "你", "您", "她", "他"}),
    "not_organization_prp": frozenset(),
    "quantifiers": frozenset({"所有", "没有", "一些", "有些", "都"}),
    "parts": frozenset({"半", "一", "二", "三", "四", "五", "六", "七", "八", "九", "十", "都"}),
    "stop_words": frozenset({"是", "和", "在"}),
}

LOCATION_MODIFIERS = frozenset({
    "east", "west", "north", "south", "eastern", "western", "northern", "southern",
    "upper", "lower",
})

EXTENDED_LOCATION_MODIFIERS = LOCATION_MODIFIERS | frozenset({
    "northwestern", "southwestern", "northeastern", "southeastern",
})

NUMBER_WORDS = frozenset({
    "one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten",
    "hundred", "thousand", "million", "billion",
})

# Dropped from cluster words before the word-inclusion check
INCLUSION_STOP_WORDS = frozenset({
    "the", "this", "mr.", "miss", "mrs.", "dr.", "ms.", "inc.", "ltd.", "corp.", "'s",
})

US_STATES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "FL": "Florida", "GA": "Georgia",
    "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois", "IN": "Indiana", "IA": "Iowa",
    "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada", "NH": "New Hampshire",
    "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York", "NC": "North Carolina",
    "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma", "OR": "Oregon", "PA": "Pennsylvania",
    "RI": "Rhode Island", "SC": "South Carolina", "SD": "South Dakota", "TN": "Tennessee",
    "TX": "Texas", "UT": "Utah", "VT": "Vermont", "VA": "Virginia", "WA": "Washington",
    "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
}

DEFAULT_DEMONYMS = {
    "america": ["american", "americans"],
    "united states": ["american", "americans"],
    "britain": ["british", "briton", "britons"],
    "china": ["chinese"],
    "france": ["french", "frenchman", "frenchmen"],
    "germany": ["german", "germans"],
    "iraq": ["iraqi", "iraqis"],
    "israel": ["israeli", "israelis"],
    "japan": ["japanese"],
    "russia": ["russian", "russians"],
    "africa": ["african", "africans"],
    "europe": ["european", "europeans"],
}

# Coref dictionary columns: head lemma, last premodifier, all premodifiers, full pattern
COREF_DICT_COLUMNS = 4


@dataclass
class Dictionaries:
    """Lexical resources for one language.

    Pronoun classes and closed word lists come from the language tables
    above; demonyms, co-occurrence counts, named-entity signatures and word
    vectors may be extended from a resource file with :meth:`load`.
    """

    language: str = "en"
    word_lists: dict[str, frozenset[str]] = field(default_factory=dict)
    states_abbreviation: dict[str, str] = field(default_factory=dict)
    demonyms: dict[str, set[str]] = field(default_factory=dict)
    demonym_set: set[str] = field(default_factory=set)
    adjective_nation: set[str] = field(default_factory=set)
    coref_dict: list[Counter] = field(
        default_factory=lambda: [Counter() for _ in range(COREF_DICT_COLUMNS)]
    )
    coref_dict_pmi: dict[tuple[str, str], float] = field(default_factory=dict)
    ne_signatures: dict[str, Counter] = field(default_factory=dict)
    vectors: dict[str, np.ndarray] = field(default_factory=dict)

    @classmethod
    def for_language(cls, language: str = "en") -> "Dictionaries":
        """Build the built-in resources for ``en`` or ``zh``."""
        code = normalize_language(language)
        word_lists = ENGLISH_WORD_LISTS if code == "en" else CHINESE_WORD_LISTS
        dictionaries = cls(language=code, word_lists=dict(word_lists))
        if code == "en":
            states = dict(US_STATES)
            # canonical names map to themselves so lookups accept either form
            states.update({name: name for name in US_STATES.values()})
            dictionaries.states_abbreviation = states
            dictionaries.add_demonyms(DEFAULT_DEMONYMS)
        return dictionaries

    @classmethod
    def load(cls, path: Path, language: str = "en") -> "Dictionaries":
        """Extend the built-in resources from a YAML or JSON file."""
        dictionaries = cls.for_language(language)
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        dictionaries.update(data)
        logger.info(f"Loaded lexical resources from {path}")
        return dictionaries

    def update(self, data: dict[str, Any]) -> None:
        """Merge resource tables given as plain mappings and lists."""
        if "demonyms" in data:
            self.add_demonyms(data["demonyms"])
        for abbreviation, name in data.get("states", {}).items():
            self.states_abbreviation[abbreviation] = name
            self.states_abbreviation[name] = name
        for column, rows in enumerate(data.get("coref_dict", [])[:COREF_DICT_COLUMNS]):
            for first, second, count in rows:
                self.coref_dict[column][(first, second)] += count
        for first, second, pmi in data.get("coref_dict_pmi", []):
            self.coref_dict_pmi[(first, second)] = float(pmi)
        for word, contexts in data.get("ne_signatures", {}).items():
            self.ne_signatures.setdefault(word, Counter()).update(contexts)
        for word, values in data.get("word_vectors", {}).items():
            self.vectors[word] = np.asarray(values, dtype=float)

    def add_demonyms(self, table: dict[str, list[str]]) -> None:
        for place, names in table.items():
            place = place.lower()
            entries = {place} | {name.lower() for name in names}
            self.demonyms.setdefault(place, set()).update(entries)
            self.demonym_set.update(entries)
        self.adjective_nation = self.demonym_set - set(self.demonyms)

    # ========================================================================
    # Word lists
    # ========================================================================

    def words(self, name: str) -> frozenset[str]:
        return self.word_lists.get(name, frozenset())

    def __getattr__(self, name: str) -> frozenset[str]:
        word_lists = self.__dict__.get("word_lists", {})
        if name in word_lists:
            return word_lists[name]
        raise AttributeError(name)

    @property
    def all_pronouns(self) -> frozenset[str]:
        return (
            self.words("first_person_pronouns")
            | self.words("second_person_pronouns")
            | self.words("third_person_pronouns")
            | self.words("other_pronouns")
        )

    @property
    def person_pronouns(self) -> frozenset[str]:
        return self.words("animate_pronouns")

    # ========================================================================
    # Lookups
    # ========================================================================

    def lookup_canonical_state_name(self, name: str) -> Optional[str]:
        """Canonical US state name for an abbreviation or a name; cased."""
        return self.states_abbreviation.get(name)

    def get_demonyms(self, name: str) -> set[str]:
        return self.demonyms.get(name, set())

    def is_adjectival_demonym(self, token: str) -> bool:
        return token.lower() in self.adjective_nation

    def vector(self, word: Optional[str]) -> Optional[np.ndarray]:
        if word is None:
            return None
        return self.vectors.get(word.lower())


def normalize_language(language: str) -> str:
    """Map accepted language names to ``en`` or ``zh``."""
    code = language.lower()
    if code in ("en", "english"):
        return "en"
    if code in ("zh", "chinese"):
        return "zh"
    raise ConfigurationError(f"Unsupported language: {language}")
