"""
Pairwise features for the statistical sieves

Each (mention, candidate) pair becomes a sparse ``dict[str, float]``.
Binary features carry the value 1.0 and are simply absent when false; the
groups below are switched on per sieve with :class:`FeatureFlags`. The
attribute group is always extracted.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Iterable, Optional

import numpy as np

from ..data.cluster import CorefCluster
from ..data.mention import Mention
from ..data.tokens import Token
from ..data.types import DocType, MentionType, Number, Person
from ..errors import CorefError, FeatureExtractionError
from ..rules import (
    antecedent_is_mention_speaker,
    antecedent_matches_mention_speaker_annotation,
    entity_attributes_agree,
    entity_both_have_proper,
    entity_cluster_exact_string_match,
    entity_cluster_have_incompatible_modifier,
    entity_cluster_iwithini,
    entity_cluster_same_proper_head_last_word,
    entity_have_different_location,
    entity_have_extra_proper_noun,
    entity_heads_agree,
    entity_is_acronym,
    entity_is_apposition,
    entity_is_predicate_nominatives,
    entity_is_role_appositive,
    entity_iwithini,
    entity_number_in_later_mention,
    entity_person_disagree,
    entity_relaxed_exact_string_match,
    entity_relaxed_heads_agree_between_mentions,
    entity_same_proper_head_last_word,
    entity_same_speaker,
    entity_subject_object,
    entity_words_included,
)
from .deterministic import GENERIC_SPEAKER, RuleSieve
from .options import PronounMatch

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document

logger = logging.getLogger(__name__)

NEGATIVE_STARTS = frozenset({"none", "no", "nothing", "not"})
INDEFINITE_ARTICLES = frozenset({"a", "an"})
DEFINITE_DETERMINERS = frozenset({"the", "this", "these", "those"})


@dataclass
class FeatureFlags:
    """Feature groups extracted by one statistical sieve."""

    basic: bool = True
    combine_object_roles: bool = True
    mention_detection: bool = True
    dcoref_rules: bool = True
    pos: bool = True
    lexical: bool = True
    word_embedding: bool = True


@dataclass
class _Context:
    """Surface tokens around the two spans of a pair."""

    first: Token
    last: Token
    preceding: Optional[Token]
    following: Optional[Token]

    @classmethod
    def of(cls, mention: Mention) -> "_Context":
        sentence = mention.sentence
        return cls(
            first=sentence[mention.start],
            last=sentence[mention.end - 1],
            preceding=sentence[mention.start - 1] if mention.start > 0 else None,
            following=sentence[mention.end] if mention.end < len(sentence) else None,
        )


def _pos_or_null(token: Optional[Token]) -> str:
    return "NULL" if token is None else token.pos


def _word_or_null(token: Optional[Token]) -> str:
    return "NULL" if token is None else token.word.lower()


def _role(mention: Mention, prefix: str) -> str:
    role = f"{prefix}-NOROLE"
    if mention.is_subject:
        role = f"{prefix}-SUBJ"
    if mention.is_direct_object:
        role = f"{prefix}-DOBJ"
    if mention.is_indirect_object:
        role = f"{prefix}-IOBJ"
    if mention.is_preposition_object:
        role = f"{prefix}-POBJ"
    return role


def _is_object(mention: Mention) -> bool:
    return mention.is_direct_object or mention.is_indirect_object or mention.is_preposition_object


def _cluster_value(values: Iterable, unknown) -> str:
    """Single cluster-level value, ignoring ``unknown`` when it is mixed in."""
    values = set(values)
    if len(values) == 1:
        return str(next(iter(values)))
    values.discard(unknown)
    if len(values) == 1:
        return str(next(iter(values)))
    return "CONFLICT"


def _value_name(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _is_partitive(mention: Mention, dictionaries: "Dictionaries") -> bool:
    """"[part] of [mention]", as in "hundreds of people"."""
    if mention.start < 2:
        return False
    sentence = mention.sentence
    return (
        sentence[mention.start - 1].word.lower() == "of"
        and sentence[mention.start - 2].word.lower() in dictionaries.parts
    )


def _num_entities_in_list(mention: Mention) -> int:
    tokens = mention.tokens
    count = 0
    for i in range(1, len(tokens)):
        word = tokens[i].word
        if word == ",":
            count += 1
        if word.lower() in ("and", "or") and tokens[i - 1].word != ",":
            count += 1
    return count


def _mentions_two(text: str) -> bool:
    return "two" in text or "2" in text or "both" in text


def _mentions_three(text: str) -> bool:
    return "three" in text or "3" in text


def cosine(first: np.ndarray, second: np.ndarray) -> float:
    """Inner product; word vectors are stored normalized."""
    return float(np.dot(first, second))


class FeatureExtractor:
    """Builds the feature dictionary of a candidate pair."""

    def __init__(
        self,
        dictionaries: "Dictionaries",
        flags: Optional[FeatureFlags] = None,
        mention_types: Optional[AbstractSet[MentionType]] = None,
    ) -> None:
        self.dictionaries = dictionaries
        self.flags = flags or FeatureFlags()
        self.mention_types = frozenset(mention_types) if mention_types else frozenset(MentionType)
        self._pronoun_sieve = RuleSieve(PronounMatch(), language=dictionaries.language)

    def extract(
        self,
        document: "Document",
        mention: Mention,
        candidate: Mention,
        mention_distance: int,
    ) -> dict[str, float]:
        try:
            return self._extract(document, mention, candidate, mention_distance)
        except CorefError:
            raise
        except Exception as e:
            doc_id = document.doc_info.get("DOC_ID", document.doc_id)
            part = document.doc_info.get("DOC_PART", document.part)
            logger.error(
                f"Feature extraction failed for document {doc_id} part {part}: {e}"
            )
            raise FeatureExtractionError(
                f"Feature extraction failed for mentions {mention.mention_id} "
                f"and {candidate.mention_id}",
                doc_id=doc_id,
                part=part,
            ) from e

    def _extract(
        self,
        document: "Document",
        mention: Mention,
        candidate: Mention,
        mention_distance: int,
    ) -> dict[str, float]:
        features: Counter = Counter()
        mc = document.cluster_of(mention)
        ac = document.cluster_of(candidate)
        m_ctx = _Context.of(mention)
        a_ctx = _Context.of(candidate)

        if self.flags.basic:
            self._basic(features, document, mention, candidate, mc, ac, m_ctx, a_ctx, mention_distance)
        if self.flags.mention_detection:
            self._mention_detection(features, mention, candidate, m_ctx, a_ctx)
        self._attributes(features, document, mention, candidate, mc, ac)
        if self.flags.dcoref_rules:
            self._dcoref_rules(features, document, mention, candidate, mc, ac, m_ctx, a_ctx)
        if self.flags.pos:
            self._pos(features, mention, candidate, m_ctx, a_ctx)
        if self.flags.lexical:
            self._lexical(features, mention, candidate, mc, ac, m_ctx, a_ctx)
        if self.flags.word_embedding:
            self._word_vectors(features, mention, candidate, m_ctx, a_ctx)
        return {name: float(value) for name, value in features.items()}

    # ========================================================================
    # Basic: distances, document, length, roles, shape
    # ========================================================================

    def _basic(self, f, document, m, a, mc, ac, m_ctx, a_ctx, mention_distance):
        sent_dist = m.sent_num - a.sent_num
        f["SENTDIST"] += sent_dist
        f["MENTIONDIST"] += mention_distance
        f["MINSENTDIST"] += min([sent_dist] + [abs(m.sent_num - x.sent_num) for x in ac])

        if m.sent_num == a.sent_num:
            clause_count = self._clause_count(m, a)
            if clause_count is not None:
                f["CLAUSECOUNT"] += clause_count

        if document.doc_type is DocType.CONVERSATION:
            f[f"B-DOCTYPE-{document.doc_type.value}"] += 1
        if (m.speaker or "").lower() == GENERIC_SPEAKER.lower():
            f["B-SPEAKER-PER0"] += 1
        # CoNLL ids look like "bc/cnn/00/cnn_0000"; the second field is the source
        source = document.doc_info.get("DOC_ID", "").split("/")
        if len(source) > 1:
            f["B-DOCSOURCE-" + source[1]] += 1

        f["M-LENGTH"] += len(m)
        f["A-LENGTH"] += len(a)
        if len(m) < len(a):
            f["B-A-ISLONGER"] += 1
        f["A-SIZE"] += len(ac)
        f["M-SIZE"] += len(mc)

        m_role = _role(m, "M")
        a_role = _role(a, "A")
        f[f"B-{m_role}"] += 1
        f[f"B-{a_role}"] += 1
        f[f"B-{a_role}-{m_role}"] += 1
        if self.flags.combine_object_roles and (_is_object(m) or _is_object(a)):
            if _is_object(m):
                m_role = "M-OBJ"
                f["B-M-OBJ"] += 1
            if _is_object(a):
                a_role = "A-OBJ"
                f["B-A-OBJ"] += 1
            f[f"B-{a_role}-{m_role}"] += 1

        indefinites = self.dictionaries.indefinite_pronouns
        for prefix, mention, ctx in (("M", m, m_ctx), ("A", a, a_ctx)):
            first = ctx.first.word.lower()
            if first in INDEFINITE_ARTICLES:
                f[f"B-{prefix}-START-WITH-INDEFINITE"] += 1
            if first == "the":
                f[f"B-{prefix}-START-WITH-DEFINITE"] += 1
        for prefix, mention in (("M", m), ("A", a)):
            if mention.lowercase_normalized_span_string() in indefinites:
                f[f"B-{prefix}-INDEFINITE-PRONOUN"] += 1
        for prefix, ctx in (("M", m_ctx), ("A", a_ctx)):
            if ctx.first.word.lower() in indefinites:
                f[f"B-{prefix}-INDEFINITE-ADJ"] += 1
        for prefix, mention in (("M", m), ("A", a)):
            if mention.head_string in self.dictionaries.reflexive_pronouns:
                f[f"B-{prefix}-REFLEXIVE"] += 1

        if m.head_index == m.end - 1:
            f["B-M-HEADEND"] += 1
        else:
            head_next = m.sentence[m.head_index + 1]
            if head_next.word in ("that", ",") or head_next.pos.startswith("W"):
                f["B-M-HASPOSTPHRASE"] += 1
                first = m_ctx.first
                if first.pos == "DT" and first.word.lower() in DEFINITE_DETERMINERS:
                    f["B-M-THE-HASPOSTPHRASE"] += 1
                elif first.word.lower() in INDEFINITE_ARTICLES:
                    f["B-M-INDEFINITE-HASPOSTPHRASE"] += 1

        # cluster shape: member types in document order
        f["B-A-SHAPE-" + "".join(f"{x.mention_type.value}-" for x in ac)] += 1
        f["B-M-SHAPE-" + "".join(f"{x.mention_type.value}-" for x in mc)] += 1

        for prefix, mention in (("M", m), ("A", a)):
            path = self._syntactic_path(document, mention)
            if path is not None:
                f[f"B-{prefix}-SYNPATH-{path}"] += 1

        a_first = (ac.representative or a).sent_num
        m_first = (mc.representative or m).sent_num
        f["A-FIRSTAPPEAR"] += a_first
        f["M-FIRSTAPPEAR"] += m_first
        doc_size = max(len(document.mentions_by_sentence), 1)
        f["A-FIRSTAPPEAR-NORMALIZED"] += a_first / doc_size
        f["M-FIRSTAPPEAR-NORMALIZED"] += m_first / doc_size

    @staticmethod
    def _clause_count(m: Mention, a: Mention) -> Optional[int]:
        """S-labelled nodes between the mention and the node dominating the candidate."""
        if m.subtree is None or a.subtree is None or m.subtree.parent is None:
            return None
        count = 0
        for node in m.subtree.ancestors():
            if node.label.startswith("S"):
                count += 1
            if node.dominates(a.subtree):
                break
            if node.label == "ROOT" or node.parent is None:
                break
        return count

    @staticmethod
    def _syntactic_path(document: "Document", mention: Mention) -> Optional[str]:
        tree = document.tree(mention.sent_num)
        if tree is None:
            return None
        head = tree.preterminal_at(mention.head_index)
        if head is None:
            return None
        labels = []
        for label in head.path_to(tree.root()):
            labels.append(label)
            if label == "S":
                break
        return "".join(f"{label}-" for label in labels)

    # ========================================================================
    # Mention detection
    # ========================================================================

    def _mention_detection(self, f, m, a, m_ctx, a_ctx):
        dictionaries = self.dictionaries
        for prefix, mention in (("M", m), ("A", a)):
            if len(mention) == 1 and mention.head_word.pos == "NNS":
                f[f"B-{prefix}-BAREPLURAL"] += 1
        if m.pleonastic or a.pleonastic:
            f["B-PLEONASTICIT"] += 1
        for prefix, ctx in (("M", m_ctx), ("A", a_ctx)):
            if ctx.first.word.lower() in dictionaries.quantifiers:
                f[f"B-{prefix}-QUANTIFIER"] += 1
        if m_ctx.first.word.lower() in NEGATIVE_STARTS or a_ctx.first.word.lower() in NEGATIVE_STARTS:
            f["B-NEGATIVE-START"] += 1
        for prefix, mention in (("M", m), ("A", a)):
            if _is_partitive(mention, dictionaries):
                f[f"B-{prefix}-PARTITIVE"] += 1
            if mention.head_string == "%":
                f[f"B-{prefix}-HEAD%"] += 1
            if dictionaries.is_adjectival_demonym(mention.span_to_string()):
                f[f"B-{prefix}-ADJ-DEMONYM"] += 1
            if mention.lowercase_normalized_span_string().endswith("etc."):
                f[f"B-{prefix}-ETC-END"] += 1

    # ========================================================================
    # Attributes and agreement
    # ========================================================================

    def _attributes(self, f, document, m, a, mc: CorefCluster, ac: CorefCluster):
        for name in ("number", "gender", "animacy", "person"):
            f[f"B-M-{name.upper()}-{_value_name(getattr(m, name))}"] += 1
            f[f"B-A-{name.upper()}-{_value_name(getattr(a, name))}"] += 1
        f[f"B-M-NETYPE-{m.ner_string}"] += 1
        f[f"B-A-NETYPE-{a.ner_string}"] += 1
        for name in ("number", "gender", "animacy", "person"):
            f[
                f"B-BOTH-{name.upper()}-{_value_name(getattr(a, name))}-"
                f"{_value_name(getattr(m, name))}"
            ] += 1
        f[f"B-BOTH-NETYPE-{a.ner_string}-{m.ner_string}"] += 1

        for prefix, cluster in (("MC", mc), ("AC", ac)):
            for label, values, unknown in (
                ("NUMBER", cluster.numbers, Number.UNKNOWN),
                ("GENDER", cluster.genders, "UNKNOWN"),
                ("ANIMACY", cluster.animacies, "UNKNOWN"),
                ("NETYPE", cluster.ner_strings, "O"),
            ):
                names = {_value_name(v) for v in values}
                for name in names:
                    f[f"B-{prefix}-{label}-{name}"] += 1
                f[f"B-{prefix}-CLUSTER{label}-{_cluster_value(names, _value_name(unknown))}"] += 1

        if m.numbers_agree(a):
            f["B-NUMBER-AGREE"] += 1
        if m.genders_agree(a):
            f["B-GENDER-AGREE"] += 1
        if m.animacies_agree(a):
            f["B-ANIMACY-AGREE"] += 1
        if entity_attributes_agree(mc, ac):
            f["B-ATTRIBUTES-AGREE"] += 1
        if entity_person_disagree(document, m, a):
            f["B-PERSON-DISAGREE"] += 1

    # ========================================================================
    # Deterministic rule outcomes
    # ========================================================================

    def _dcoref_rules(self, f, document, m, a, mc, ac, m_ctx, a_ctx):
        dictionaries = self.dictionaries
        same_speaker = entity_same_speaker(document, m, a)
        if entity_iwithini(m, a, dictionaries):
            f["B-i-within-i"] += 1
        if antecedent_is_mention_speaker(document, m, a):
            f["B-ANT-IS-SPEAKER"] += 1
        if same_speaker:
            f["B-SAME-SPEAKER"] += 1
        if entity_subject_object(m, a):
            f["B-SUBJ-OBJ"] += 1
        for other in ac:
            if entity_subject_object(m, other):
                f["B-CLUSTER-SUBJ-OBJ"] += 1
        if entity_person_disagree(document, m, a) and same_speaker:
            f["B-PERSON-DISAGREE-SAME-SPEAKER"] += 1
        if entity_cluster_iwithini(mc, ac, dictionaries):
            f["B-ENTITY-IWITHINI"] += 1
        if antecedent_matches_mention_speaker_annotation(document, m, a):
            f["B-ANT-IS-SPEAKER-OF-MENTION"] += 1

        types = self.mention_types
        if MentionType.PROPER in types or MentionType.NOMINAL in types:
            self._string_rules(f, document, m, a, mc, ac)
        if MentionType.LIST in types:
            f["NUM-LIST-"] += _num_entities_in_list(m)
            m_text = m.span_to_string()
            a_text = a.span_to_string()
            if _mentions_two(m_text):
                f["LIST-M-TWO"] += 1
            if _mentions_three(m_text):
                f["LIST-M-THREE"] += 1
            if _mentions_two(a_text):
                f["B-LIST-A-TWO"] += 1
            if _mentions_three(a_text):
                f["B-LIST-A-THREE"] += 1
        if MentionType.PRONOMINAL in types:
            self._pronoun_rules(f, document, m, a, mc, m_ctx, a_ctx)
        self._discourse_rules(f, document, m, a, same_speaker)

    def _string_rules(self, f, document, m, a, mc, ac):
        dictionaries = self.dictionaries
        checks = (
            ("B-HEADMATCH", m.head_string == a.head_string),
            ("B-HEADSAGREE", entity_heads_agree(mc, ac, m, a, dictionaries)),
            (
                "B-EXACTSTRINGMATCH",
                entity_cluster_exact_string_match(mc, ac, dictionaries, document.role_set),
            ),
            ("B-HAVE-EXTRA-PROPER-NOUN", entity_have_extra_proper_noun(m, a)),
            ("B-BOTH-HAVE-PROPER", entity_both_have_proper(mc, ac)),
            ("B-HAVE-DIFF-LOC", entity_have_different_location(m, a, dictionaries)),
            ("B-HAVE-INCOMPATIBLE-MODIFIER", entity_cluster_have_incompatible_modifier(mc, ac)),
            ("B-IS-ACRONYM", entity_is_acronym(document, mc, ac)),
            ("B-IS-APPOSITION", entity_is_apposition(mc, ac, m, a)),
            ("B-IS-PREDICATE-NOMINATIVES", entity_is_predicate_nominatives(mc, ac, m, a)),
            ("B-IS-ROLE-APPOSITIVE", entity_is_role_appositive(mc, ac, m, a, dictionaries)),
            ("B-NUMBER-IN-LATER", entity_number_in_later_mention(m, a)),
            (
                "B-RELAXED-EXACT-STRING-MATCH",
                entity_relaxed_exact_string_match(m, a, dictionaries, document.role_set),
            ),
            ("B-RELAXED-HEAD-AGREE", entity_relaxed_heads_agree_between_mentions(mc, ac, m, a)),
            ("B-SAME-PROPER-HEAD", entity_same_proper_head_last_word(m, a)),
            ("B-CLUSTER-SAME-PROPER-HEAD", entity_cluster_same_proper_head_last_word(mc, ac, m, a)),
            ("B-WORD-INCLUSION", entity_words_included(mc, ac, m, a)),
        )
        for name, fired in checks:
            if fired:
                f[name] += 1

    def _pronoun_rules(self, f, document, m, a, mc, m_ctx, a_ctx):
        dictionaries = self.dictionaries
        classes = (
            ("I", dictionaries.first_person_pronouns),
            ("YOU", dictionaries.second_person_pronouns),
            ("3RDPERSON", dictionaries.third_person_pronouns),
            ("POSSESSIVE", dictionaries.possessive_pronouns),
            ("NEUTRAL", dictionaries.neutral_pronouns),
            ("MALE", dictionaries.male_pronouns),
            ("FEMALE", dictionaries.female_pronouns),
        )
        for prefix, mention in (("M", m), ("A", a)):
            for label, words in classes:
                if mention.head_string in words:
                    f[f"B-{prefix}-{label}"] += 1
        f[f"B-M-GENERIC-{str(m.generic).lower()}"] += 1
        f[f"B-A-GENERIC-{str(a.generic).lower()}"] += 1
        if self._pronoun_sieve.skip_this_mention(document, m, mc, dictionaries):
            f["B-SKIPTHISMENTION-true"] += 1

        # "you know" as a discourse marker
        for mention, ctx in ((m, m_ctx), (a, a_ctx)):
            if (
                mention.span_to_string().lower() == "you"
                and ctx.following is not None
                and ctx.following.word.lower() == "know"
            ):
                next_word = (
                    mention.sentence[mention.end + 1]
                    if mention.end + 1 < len(mention.sentence)
                    else None
                )
                f[f"B-YOUKNOW-PRECEDING-POS-{_pos_or_null(ctx.preceding)}"] += 1
                f[f"B-YOUKNOW-PRECEDING-WORD-{_word_or_null(ctx.preceding)}"] += 1
                f[f"B-YOUKNOW-FOLLOWING-POS-{_pos_or_null(next_word)}"] += 1
                f[f"B-YOUKNOW-FOLLOWING-WORD-{_word_or_null(next_word)}"] += 1

    def _discourse_rules(self, f, document, m, a, same_speaker):
        dictionaries = self.dictionaries
        first = dictionaries.first_person_pronouns
        second = dictionaries.second_person_pronouns
        m_string = m.lowercase_normalized_span_string()
        a_string = a.lowercase_normalized_span_string()
        m_first_singular = m.number is Number.SINGULAR and m_string in first
        a_first_singular = a.number is Number.SINGULAR and a_string in first

        if (
            m.person is Person.YOU
            and document.doc_type is DocType.ARTICLE
            and m.speaker == GENERIC_SPEAKER
        ):
            f["B-DISCOURSE-M-YOU-GENERIC?"] += 1
        if a.generic and a.person is Person.YOU:
            f["B-DISCOURSE-A-YOU-GENERIC?"] += 1
        if m_first_singular and a_first_singular and same_speaker:
            f["B-DISCOURSE-I-I-SAMESPEAKER"] += 1
        if m_first_singular and antecedent_is_mention_speaker(document, m, a):
            f["B-DISCOURSE-SPEAKER-I"] += 1
        if a_first_singular and antecedent_is_mention_speaker(document, a, m):
            f["B-DISCOURSE-I-SPEAKER"] += 1
        if m_string in second and a_string in second and same_speaker:
            f["B-DISCOURSE-BOTH-YOU"] += 1
        if (
            {m.person, a.person} == {Person.I, Person.YOU}
            and m.utter - a.utter == 1
            and document.doc_type is DocType.CONVERSATION
        ):
            f["B-DISCOURSE-I-YOU"] += 1
        if m.head_string in dictionaries.reflexive_pronouns and entity_subject_object(m, a):
            f["B-DISCOURSE-REFLEXIVE"] += 1
        for person, label in ((Person.I, "I-I"), (Person.YOU, "YOU-YOU"), (Person.WE, "WE-WE")):
            if m.person is person and a.person is person and not same_speaker:
                f[f"B-DISCOURSE-{label}-DIFFSPEAKER"] += 1

    # ========================================================================
    # Part of speech and lexical
    # ========================================================================

    def _pos(self, f, m, a, m_ctx, a_ctx):
        for prefix, mention, ctx in (("M", m, m_ctx), ("A", a, a_ctx)):
            f[f"B-LEXICAL-{prefix}-HEADPOS-{mention.head_word.pos}"] += 1
            f[f"B-LEXICAL-{prefix}-FIRSTPOS-{ctx.first.pos}"] += 1
            f[f"B-LEXICAL-{prefix}-LASTPOS-{ctx.last.pos}"] += 1
            f[f"B-LEXICAL-{prefix}-PRECEDINGPOS-{_pos_or_null(ctx.preceding)}"] += 1
            f[f"B-LEXICAL-{prefix}-FOLLOWINGPOS-{_pos_or_null(ctx.following)}"] += 1

    def _lexical(self, f, m, a, mc, ac, m_ctx, a_ctx):
        for prefix, mention, ctx in (("M", m, m_ctx), ("A", a, a_ctx)):
            f[f"B-LEXICAL-{prefix}-HEADWORD-{mention.head_string}"] += 1
            f[f"B-LEXICAL-{prefix}-FIRSTWORD-{ctx.first.word.lower()}"] += 1
            f[f"B-LEXICAL-{prefix}-LASTWORD-{ctx.last.word.lower()}"] += 1
            f[f"B-LEXICAL-{prefix}-PRECEDINGWORD-{_word_or_null(ctx.preceding)}"] += 1
            f[f"B-LEXICAL-{prefix}-FOLLOWINGWORD-{_word_or_null(ctx.following)}"] += 1
        for head in mc.heads - ac.heads:
            f[f"B-LEXICAL-MC-EXTRAHEAD-{head}"] += 1
        for word in mc.words - ac.words:
            f[f"B-LEXICAL-MC-EXTRAWORD-{word}"] += 1

    # ========================================================================
    # Word vectors
    # ========================================================================

    def _word_vectors(self, f, m, a, m_ctx, a_ctx):
        vector = self.dictionaries.vector
        pairs = (
            ("HEADWORD", m.head_string, a.head_string),
            ("FIRSTWORD", m_ctx.first.word, a_ctx.first.word),
            ("LASTWORD", m_ctx.last.word, a_ctx.last.word),
        )
        for label, m_word, a_word in pairs:
            self._vector_similarity(f, label, vector(m_word), vector(a_word))
        if m_ctx.preceding is not None and a_ctx.preceding is not None:
            self._vector_similarity(
                f, "PRECEDINGWORD", vector(m_ctx.preceding.word), vector(a_ctx.preceding.word)
            )
        if m_ctx.following is not None and a_ctx.following is not None:
            self._vector_similarity(
                f, "FOLLOWINGWORD", vector(m_ctx.following.word), vector(a_ctx.following.word)
            )

        m_vectors = [v for v in (vector(t.word) for t in m.tokens) if v is not None]
        a_vectors = [v for v in (vector(t.word) for t in a.tokens) if v is not None]
        if m_vectors and a_vectors:
            m_sum = np.sum(m_vectors, axis=0)
            a_sum = np.sum(a_vectors, axis=0)
            if np.linalg.norm(m_sum) != 0 and np.linalg.norm(a_sum) != 0:
                f["WORDVECTOR-AGGREGATE-DIFF"] += cosine(m_sum, a_sum)
            similarities = [cosine(mv, av) for mv in m_vectors for av in a_vectors]
            f["WORDVECTOR-AVG-DIFF"] += sum(similarities) / len(similarities)

    @staticmethod
    def _vector_similarity(f, label, first, second):
        if first is not None and second is not None:
            f[f"WORDVECTOR-DIFF-{label}"] += cosine(first, second)
