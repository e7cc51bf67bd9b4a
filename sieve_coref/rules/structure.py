"""Syntactic-construction predicates: nesting, apposition, copulas, roles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..data.cluster import CorefCluster
from ..data.mention import Mention
from ..data.types import MentionType
from .attributes import entity_attributes_agree

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries

# token offset under which two same-sentence mentions count as close
TOKEN_DISTANCE = 6


def entity_iwithini(m1: Mention, m2: Mention, dictionaries: "Dictionaries") -> bool:
    """One span nests in the other without a construction that licenses it."""
    if (
        m1.is_apposition(m2)
        or m2.is_apposition(m1)
        or m1.is_relative_pronoun(m2)
        or m2.is_relative_pronoun(m1)
        or m1.is_role_appositive(m2, dictionaries)
        or m2.is_role_appositive(m1, dictionaries)
    ):
        return False
    return m1.included_in(m2) or m2.included_in(m1)


def entity_cluster_iwithini(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster, dictionaries: "Dictionaries"
) -> bool:
    return any(
        entity_iwithini(m, a, dictionaries)
        for m in mention_cluster.mentions
        for a in antecedent_cluster.mentions
    )


def entity_is_apposition(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster, m1: Mention, m2: Mention
) -> bool:
    if not entity_attributes_agree(mention_cluster, antecedent_cluster):
        return False
    if m1.mention_type is MentionType.PROPER and m2.mention_type is MentionType.PROPER:
        return False
    if m1.ner_string == "LOCATION":
        return False
    return m1.is_apposition(m2) or m2.is_apposition(m1)


def entity_is_predicate_nominatives(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster, m1: Mention, m2: Mention
) -> bool:
    if not entity_attributes_agree(mention_cluster, antecedent_cluster):
        return False
    if (m1.start <= m2.start and m1.end >= m2.end) or (m1.start >= m2.start and m1.end <= m2.end):
        return False
    return m1.is_predicate_nominatives(m2) or m2.is_predicate_nominatives(m1)


def entity_is_relative_pronoun(m1: Mention, m2: Mention) -> bool:
    return m1.is_relative_pronoun(m2) or m2.is_relative_pronoun(m1)


def entity_is_role_appositive(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    m1: Mention,
    m2: Mention,
    dictionaries: "Dictionaries",
) -> bool:
    if not entity_attributes_agree(mention_cluster, antecedent_cluster):
        return False
    return m1.is_role_appositive(m2, dictionaries) or m2.is_role_appositive(m1, dictionaries)


def entity_is_demonym(m1: Mention, m2: Mention, dictionaries: "Dictionaries") -> bool:
    return m1.is_demonym(m2, dictionaries)


def entity_subject_object(m1: Mention, m2: Mention) -> bool:
    """Subject and object of the same verb."""
    if m1.sent_num != m2.sent_num:
        return False
    if m1.depending_verb is None or m2.depending_verb is None:
        return False
    if m1.depending_verb != m2.depending_verb:
        return False
    return (m1.is_subject and _is_object(m2)) or (m2.is_subject and _is_object(m1))


def _is_object(mention: Mention) -> bool:
    return mention.is_direct_object or mention.is_indirect_object or mention.is_preposition_object


def entity_token_distance(m1: Mention, m2: Mention) -> bool:
    return m1.sent_num == m2.sent_num and m1.start - m2.start < TOKEN_DISTANCE
