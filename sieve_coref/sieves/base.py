"""Base class for sieves."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, AbstractSet, Collection, Iterable, Optional

from ..data.mention import Mention
from ..data.types import MentionType, Person
from .trace import TraceRecorder

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document

logger = logging.getLogger(__name__)

DEFAULT_MAX_SENTENCE_DISTANCE = 1000

_PERSON_TYPES = {
    "i": Person.I,
    "you": Person.YOU,
    "he": Person.HE,
    "she": Person.SHE,
    "it": Person.IT,
    "we": Person.WE,
    "they": Person.THEY,
}


def parse_mention_types(value: Optional[Iterable[str] | str]) -> frozenset[MentionType]:
    """Mention types from config; person pronoun names stand for PRONOMINAL."""
    if value is None:
        return frozenset(MentionType)
    if isinstance(value, str):
        value = [v for v in value.replace(" ", "").split(",") if v]
    types = set()
    for name in value:
        if name.lower() == "all":
            return frozenset(MentionType)
        if name.lower() in _PERSON_TYPES:
            types.add(MentionType.PRONOMINAL)
        else:
            types.add(MentionType(name.upper()))
    return frozenset(types)


def _matched_type(mention: Mention, type_string: Optional[str]) -> bool:
    if type_string is None:
        return False
    lowered = type_string.lower()
    if lowered == "all" or lowered == mention.mention_type.value.lower():
        return True
    if lowered in _PERSON_TYPES:
        return mention.is_pronominal() and mention.person is _PERSON_TYPES[lowered]
    if lowered.startswith("ne:"):
        ner = mention.ner_string.lower()
        return lowered[3:].startswith(ner[: min(3, len(ner))])
    return False


def matched_mention_type(mention: Mention, type_strings: Collection[Optional[str]]) -> bool:
    """Does the mention fit any of ``type_strings``? An empty filter matches all.

    Accepted strings: ``all``, a mention type name, a person pronoun
    (``i``, ``you``, ``he``, ``she``, ``it``, ``we``, ``they``) or an
    ``ne:`` prefix followed by a named-entity type.
    """
    if not type_strings:
        return True
    return any(_matched_type(mention, t) for t in type_strings)


class Sieve(ABC):
    """
    One pass over every mention of a document.

    Subclasses implement find_coreferent_antecedent(), which searches the
    candidates of one mention and merges at most once.
    """

    def __init__(
        self,
        name: str,
        language: str = "en",
        max_sentence_distance: int = DEFAULT_MAX_SENTENCE_DISTANCE,
        mention_types: Optional[AbstractSet[MentionType]] = None,
        antecedent_types: Optional[AbstractSet[MentionType]] = None,
        mention_type_strings: Collection[str] = (),
        antecedent_type_strings: Collection[str] = (),
        skip_mention_type: Optional[str] = None,
        skip_antecedent_type: Optional[str] = None,
    ) -> None:
        self.name = name
        self.language = language
        self.max_sentence_distance = max_sentence_distance
        self.mention_types = frozenset(mention_types) if mention_types else frozenset(MentionType)
        self.antecedent_types = (
            frozenset(antecedent_types) if antecedent_types else frozenset(MentionType)
        )
        self.mention_type_strings = frozenset(mention_type_strings)
        self.antecedent_type_strings = frozenset(antecedent_type_strings)
        self.skip_mention_type = skip_mention_type
        self.skip_antecedent_type = skip_antecedent_type
        self.trace: Optional[TraceRecorder] = None
        self.allowed: Optional[dict[int, set[int]]] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def resolve(
        self,
        document: "Document",
        dictionaries: "Dictionaries",
        allowed: Optional[dict[int, set[int]]] = None,
    ) -> None:
        """Visit every mention in sentence order, left to right."""
        self.allowed = allowed
        for sentence_mentions in document.mentions_by_sentence:
            for position, mention in enumerate(sentence_mentions):
                if mention.mention_type not in self.mention_types:
                    continue
                self.find_coreferent_antecedent(document, mention, position, dictionaries)

    @abstractmethod
    def find_coreferent_antecedent(
        self,
        document: "Document",
        mention: Mention,
        position: int,
        dictionaries: "Dictionaries",
    ) -> None:
        """Search the candidates of ``mention`` and merge with at most one."""
        ...

    # ========================================================================
    # Candidate filters shared by every sieve
    # ========================================================================

    def skip_for_analysis(self, antecedent: Mention, mention: Mention) -> bool:
        """Pairs excluded while analysing one mention-type combination."""
        if self.skip_mention_type is None and self.skip_antecedent_type is None:
            return False
        return _matched_type(antecedent, self.skip_antecedent_type) and _matched_type(
            mention, self.skip_mention_type
        )

    def is_allowed(self, mention: Mention, antecedent: Mention) -> bool:
        if self.allowed is None:
            return True
        return antecedent.mention_id in self.allowed.get(mention.mention_id, ())

    def types_match(self, mention: Mention, antecedent: Mention) -> bool:
        """Configured antecedent type plus the finer pronoun filters."""
        if antecedent.mention_type not in self.antecedent_types:
            return False
        if mention.is_pronominal():
            if not matched_mention_type(mention, self.mention_type_strings):
                return False
            if not matched_mention_type(antecedent, self.antecedent_type_strings):
                return False
        return True

    def record(self, event_type: str, document: "Document", **kwargs) -> None:
        if self.trace is not None:
            self.trace.log(event_type, doc_id=document.doc_id, sieve=self.name, **kwargs)
