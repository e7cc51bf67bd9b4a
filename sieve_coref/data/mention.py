"""Mentions: detected noun phrases and their resolution state."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..errors import CorefError
from .tokens import ParseNode, Token
from .types import NER_SENTINELS, Animacy, Gender, MentionType, Number, Person

if TYPE_CHECKING:
    from .dictionaries import Dictionaries
    from .speakers import SpeakerInfo

SUBJECT_RELATIONS = frozenset({"nsubj", "nsubjpass", "nsubj:pass", "csubj", "csubjpass", "csubj:pass"})
DIRECT_OBJECT_RELATIONS = frozenset({"dobj", "obj"})
INDIRECT_OBJECT_RELATIONS = frozenset({"iobj"})
PREPOSITION_OBJECT_PREFIXES = ("pobj", "nmod", "obl")


@dataclass(eq=False)
class Mention:
    """A noun phrase in one sentence of a document.

    Span offsets and ``head_index`` index into ``sentence``. The linguistic
    fields are filled by the annotation stack; ``cluster_id``,
    ``is_singleton``, ``speaker_info`` and the partner sets are updated
    during resolution.
    """

    mention_id: int
    sent_num: int
    start: int
    end: int
    head_index: int
    sentence: list[Token]
    mention_type: MentionType = MentionType.NOMINAL
    number: Number = Number.UNKNOWN
    gender: Gender = Gender.UNKNOWN
    animacy: Animacy = Animacy.UNKNOWN
    person: Person = Person.UNKNOWN
    ner_string: str = "O"
    subtree: Optional[ParseNode] = None
    generic: bool = False
    pleonastic: bool = False
    has_twin: bool = False
    paragraph: int = 0

    # dependency facts about the head word
    relation: Optional[str] = None
    depending_verb: Optional[int] = None
    head_dependents: frozenset[str] = frozenset()
    premodifiers: list[list[int]] = field(default_factory=list)
    postmodifiers: list[list[int]] = field(default_factory=list)

    # resolution state
    cluster_id: int = -1
    gold_cluster_id: int = -1
    is_singleton: bool = False
    speaker_info: Optional["SpeakerInfo"] = None
    appositions: set["Mention"] = field(default_factory=set)
    predicate_nominatives: set["Mention"] = field(default_factory=set)
    relative_pronouns: set["Mention"] = field(default_factory=set)
    list_members: set["Mention"] = field(default_factory=set)
    belong_to_lists: set["Mention"] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not (0 <= self.start <= self.head_index < self.end <= len(self.sentence)):
            raise CorefError(
                f"Mention {self.mention_id} has head {self.head_index} outside "
                f"span [{self.start}, {self.end})"
            )
        if self.cluster_id < 0:
            self.cluster_id = self.mention_id

    def __hash__(self) -> int:
        return hash(self.mention_id)

    def __repr__(self) -> str:
        return f"Mention({self.mention_id}, {self.span_to_string()!r}, s{self.sent_num}[{self.start}:{self.end}])"

    # ========================================================================
    # Surface form
    # ========================================================================

    @property
    def tokens(self) -> list[Token]:
        return self.sentence[self.start:self.end]

    @property
    def head_word(self) -> Token:
        return self.sentence[self.head_index]

    @property
    def head_string(self) -> str:
        return self.head_word.word.lower()

    @property
    def utter(self) -> int:
        return self.head_word.utterance

    @property
    def speaker(self) -> Optional[str]:
        return self.head_word.speaker

    @property
    def is_subject(self) -> bool:
        return self.relation in SUBJECT_RELATIONS

    @property
    def is_direct_object(self) -> bool:
        return self.relation in DIRECT_OBJECT_RELATIONS

    @property
    def is_indirect_object(self) -> bool:
        return self.relation in INDIRECT_OBJECT_RELATIONS

    @property
    def is_preposition_object(self) -> bool:
        return self.relation is not None and self.relation.startswith(PREPOSITION_OBJECT_PREFIXES)

    def is_pronominal(self) -> bool:
        return self.mention_type is MentionType.PRONOMINAL

    def span_to_string(self) -> str:
        return " ".join(t.word for t in self.tokens)

    def lowercase_normalized_span_string(self) -> str:
        return self.span_to_string().lower()

    def lower_case_no_punc(self) -> str:
        return " ".join(
            t.word.lower() for t in self.tokens if t.word not in string.punctuation
        )

    @property
    def words(self) -> list[str]:
        return [t.word.lower() for t in self.tokens]

    def __len__(self) -> int:
        return self.end - self.start

    def remove_phrase_after_head(self) -> str:
        """Span text up to the first comma or wh-word following the head."""
        pos_comma = -1
        pos_wh = -1
        for i in range(self.start, self.end):
            pos = self.sentence[i].pos
            if pos_comma == -1 and pos == ",":
                pos_comma = i
            if pos_wh == -1 and pos.startswith("W"):
                pos_wh = i
        removed = ""
        if pos_comma != -1 and self.head_index < pos_comma:
            removed = " ".join(t.word for t in self.sentence[self.start:pos_comma])
        if pos_comma == -1 and pos_wh != -1 and self.head_index < pos_wh:
            removed = " ".join(t.word for t in self.sentence[self.start:pos_wh])
        if pos_comma == -1 and pos_wh == -1:
            removed = self.span_to_string()
        return removed

    def longest_nnp_ends_with_head(self) -> str:
        words: list[str] = []
        for i in range(self.head_index, self.start - 1, -1):
            if not self.sentence[i].pos.startswith("NNP"):
                break
            words.insert(0, self.sentence[i].word)
        return " ".join(words)

    def ner_tokens(self) -> list[Token]:
        """Tokens around the head that share the mention's NER type."""
        if self.ner_string in NER_SENTINELS or not self.ner_string:
            return []
        start = self.head_index
        end = self.head_index + 1
        while start > self.start and self.sentence[start - 1].ner == self.ner_string:
            start -= 1
        while end < self.end and self.sentence[end].ner == self.ner_string:
            end += 1
        return self.sentence[start:end]

    def get_position(self) -> Optional[str]:
        size = len(self.sentence)
        if self.head_index == 0:
            return "first"
        if self.head_index == size - 1:
            return "last"
        if self.head_index < size // 3:
            return "begin"
        if self.head_index < 2 * size // 3:
            return "middle"
        return "end"

    # ========================================================================
    # Dictionary keys
    # ========================================================================

    def _pattern(self, indices: list[int]) -> str:
        phrase: list[str] = []
        ne = ""
        for k, i in enumerate(indices):
            token = self.sentence[i]
            if i == self.head_index:
                phrase.append(token.lemma)
                ne = ""
            elif (
                (token.lemma == "and" or all(c in string.punctuation for c in token.lemma))
                and 0 < k < len(indices) - 1
                and self.sentence[indices[k + 1]].ner == self.sentence[indices[k - 1]].ner
            ):
                continue
            elif i == self.head_index - 1 and token.ner == self.ner_string:
                phrase.append(token.lemma)
                ne = ""
            elif token.ner != "O":
                if token.ner != ne:
                    ne = token.ner
                    phrase.append(f"<{ne}>")
            else:
                phrase.append(token.lemma)
                ne = ""
        return " ".join(phrase)

    def get_pattern(self) -> str:
        indices = [i for premod in self.premodifiers for i in premod]
        indices.append(self.head_index)
        indices.extend(i for postmod in self.postmodifiers for i in postmod)
        return self._pattern(indices)

    @property
    def split_pattern(self) -> list[str]:
        """Keys for the four coref dictionary columns."""
        lemma = self.head_word.lemma
        components = [lemma, lemma, lemma, self.get_pattern()]
        if len(self.premodifiers) == 1:
            pattern = self._pattern(self.premodifiers[-1] + [self.head_index])
            components[1] = pattern
            components[2] = pattern
        elif self.premodifiers:
            components[1] = self._pattern(self.premodifiers[-1] + [self.head_index])
            every = [i for premod in self.premodifiers for i in premod]
            components[2] = self._pattern(every + [self.head_index])
        return components

    def is_coordinated(self) -> bool:
        return "cc" in self.head_dependents

    @staticmethod
    def _context(tokens: list[Token]) -> set[str]:
        entities: list[list[str]] = []
        previous_type = ""
        previous_index = -1
        for i, token in enumerate(tokens):
            if token.ner and token.ner != "O":
                if token.ner != previous_type or previous_index != i - 1:
                    entities.append([])
                entities[-1].append(token.word)
                previous_type = token.ner
                previous_index = i
        return {" ".join(words) for words in entities}

    def get_context(self) -> set[str]:
        """Named-entity strings of the whole sentence."""
        return self._context(self.sentence)

    def get_premodifier_context(self) -> set[str]:
        context: set[str] = set()
        for premod in self.premodifiers:
            context |= self._context([self.sentence[i] for i in premod])
        return context

    # ========================================================================
    # Position and representativeness
    # ========================================================================

    def same_sentence(self, other: "Mention") -> bool:
        return self.sent_num == other.sent_num

    def inside_in(self, other: "Mention") -> bool:
        """True if this mention is a subspan of ``other``."""
        return (
            self.sent_num == other.sent_num
            and other.start <= self.start
            and self.end <= other.end
        )

    def included_in(self, other: "Mention") -> bool:
        return self.inside_in(other)

    def appear_earlier_than(self, other: "Mention") -> bool:
        if self.sent_num != other.sent_num:
            return self.sent_num < other.sent_num
        if self.start != other.start:
            return self.start < other.start
        if self.end != other.end:
            return self.end > other.end
        if self.head_index != other.head_index:
            return self.head_index < other.head_index
        if self.mention_type is not other.mention_type:
            return self.mention_type.representativeness > other.mention_type.representativeness
        return self.mention_id < other.mention_id

    def more_representative_than(self, other: Optional["Mention"]) -> bool:
        if other is None:
            return True
        mine = self.mention_type.representativeness
        theirs = other.mention_type.representativeness
        if mine != theirs:
            return mine > theirs
        if self.ner_string and not other.ner_string:
            return True
        if not self.ner_string and other.ner_string:
            return False
        if self.ner_string and self.ner_string != other.ner_string:
            for sentinel in ("O", "MISC"):
                if other.ner_string == sentinel:
                    return True
                if self.ner_string == sentinel:
                    return False
        if self.head_index - self.start != other.head_index - other.start:
            return self.head_index - self.start > other.head_index - other.start
        if self.sent_num != other.sent_num:
            return self.sent_num < other.sent_num
        if self.head_index != other.head_index:
            return self.head_index < other.head_index
        if len(self) <= 5 and len(self) != len(other):
            return len(self) > len(other)
        if len(self) != len(other):
            return len(self) < len(other)
        raise CorefError("Comparing a mention with itself for representativeness")

    # ========================================================================
    # Syntactic partners
    # ========================================================================

    def add_apposition(self, other: "Mention") -> None:
        self.appositions.add(other)

    def is_apposition(self, other: "Mention") -> bool:
        return other in self.appositions

    def add_predicate_nominatives(self, other: "Mention") -> None:
        self.predicate_nominatives.add(other)

    def is_predicate_nominatives(self, other: "Mention") -> bool:
        return other in self.predicate_nominatives

    def add_relative_pronoun(self, other: "Mention") -> None:
        self.relative_pronouns.add(other)

    def is_relative_pronoun(self, other: "Mention") -> bool:
        return other in self.relative_pronouns

    def is_list_member_of(self, other: "Mention") -> bool:
        if self is other:
            return False
        if other.mention_type is MentionType.LIST and self.mention_type is MentionType.LIST:
            return False
        if other.mention_type is MentionType.LIST:
            return self.included_in(other)
        return False

    def is_role_appositive(self, other: "Mention", dictionaries: "Dictionaries") -> bool:
        """True for "[role] [name]" constructions such as "President Obama"."""
        this_string = self.span_to_string()
        this_lower = self.lowercase_normalized_span_string()
        if self.is_pronominal() or this_lower in dictionaries.all_pronouns:
            return False
        if not self.ner_string.startswith("PER") and self.ner_string != "O":
            return False
        if not other.ner_string.startswith("PER") and other.ner_string != "O":
            return False
        other_string = other.span_to_string()
        if not self.same_sentence(other) or not other_string.startswith(this_string):
            return False
        if "'" in other_string or " and " in other_string:
            return False
        if (
            not self.animacies_agree(other)
            or self.animacy is Animacy.INANIMATE
            or self.gender is Gender.NEUTRAL
            or other.gender is Gender.NEUTRAL
            or not self.numbers_agree(other)
        ):
            return False
        if (
            this_lower in dictionaries.demonym_set
            or other.lowercase_normalized_span_string() in dictionaries.demonym_set
        ):
            return False
        return True

    def is_demonym(self, other: "Mention", dictionaries: "Dictionaries") -> bool:
        this_normed = dictionaries.lookup_canonical_state_name(self.span_to_string())
        other_normed = dictionaries.lookup_canonical_state_name(other.span_to_string())
        if this_normed is not None and this_normed == other_normed:
            return True
        this_string = self.lowercase_normalized_span_string()
        other_string = other.lowercase_normalized_span_string()
        if this_string.startswith("the "):
            this_string = this_string[4:]
        if other_string.startswith("the "):
            other_string = other_string[4:]
        return (
            other_string in dictionaries.get_demonyms(this_string)
            or this_string in dictionaries.get_demonyms(other_string)
        )

    # ========================================================================
    # Attribute agreement (Unknown tolerated)
    # ========================================================================

    def numbers_agree(self, other: "Mention", strict: bool = False) -> bool:
        if strict:
            return self.number is other.number
        return Number.UNKNOWN in (self.number, other.number) or self.number is other.number

    def genders_agree(self, other: "Mention", strict: bool = False) -> bool:
        if strict:
            return self.gender is other.gender
        return Gender.UNKNOWN in (self.gender, other.gender) or self.gender is other.gender

    def animacies_agree(self, other: "Mention", strict: bool = False) -> bool:
        if strict:
            return self.animacy is other.animacy
        return Animacy.UNKNOWN in (self.animacy, other.animacy) or self.animacy is other.animacy

    def entity_types_agree(
        self, other: "Mention", dictionaries: "Dictionaries", strict: bool = False
    ) -> bool:
        if strict:
            return self.ner_string == other.ner_string
        if self.is_pronominal():
            ner = other.ner_string
            head = self.head_string
            if "-" in self.ner_string or "-" in ner:
                # ACE-style types with gold entity annotation
                if ner == "O":
                    return True
                if ner.startswith("ORG"):
                    return head in dictionaries.organization_pronouns
                if ner.startswith("PER"):
                    return head in dictionaries.person_pronouns
                if ner.startswith("LOC"):
                    return head in dictionaries.location_pronouns
                if ner.startswith("GPE"):
                    return head in dictionaries.gpe_pronouns
                if ner.startswith(("VEH", "FAC", "WEA")):
                    return head in dictionaries.facility_vehicle_weapon_pronouns
                return False
            if ner in NER_SENTINELS:
                return True
            if ner == "ORGANIZATION":
                return head in dictionaries.organization_pronouns
            if ner == "PERSON":
                return head in dictionaries.person_pronouns
            if ner == "LOCATION":
                return head in dictionaries.location_pronouns
            if ner in ("DATE", "TIME"):
                return head in dictionaries.date_time_pronouns
            if ner in ("MONEY", "PERCENT", "NUMBER"):
                return head in dictionaries.money_percent_number_pronouns
            return False
        return self.ner_string == "O" or other.ner_string == "O" or self.ner_string == other.ner_string

    def attributes_agree(self, other: "Mention", dictionaries: "Dictionaries") -> bool:
        return (
            self.animacies_agree(other)
            and self.entity_types_agree(other, dictionaries)
            and self.genders_agree(other)
            and self.numbers_agree(other)
        )

    def heads_agree(self, other: "Mention") -> bool:
        """Same head word, or same-type names where one head appears in the other."""
        if (
            self.ner_string != "O"
            and other.ner_string != "O"
            and self.ner_string == other.ner_string
            and (_included(self.head_word, other.tokens) or _included(other.head_word, self.tokens))
        ):
            return True
        return self.head_string == other.head_string


def _included(small: Token, big: list[Token]) -> bool:
    if small.pos != "NNP":
        return False
    return any(
        small.word == w.word or (len(small.word) > 2 and w.word.startswith(small.word))
        for w in big
    )
