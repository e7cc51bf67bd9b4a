"""Attribute agreement between clusters and mentions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..data.cluster import CorefCluster
from ..data.mention import Mention
from ..data.types import NER_SENTINELS, Animacy, Gender, MentionType, Number, Person
from .speakers import entity_same_speaker, get_speaker_cluster_id

if TYPE_CHECKING:
    from ..data.document import Document

FIRST_OR_SECOND_PERSON = (Person.I, Person.WE, Person.YOU)


def _has_extra(values: Iterable, others: set, unknowns: Iterable) -> bool:
    """True if ``values`` holds a known value missing from ``others``.

    A side that itself contains an unknown value never counts as missing
    anything.
    """
    unknowns = set(unknowns)
    if others & unknowns:
        return False
    return any(v not in unknowns and v not in others for v in values)


def _attribute_disagree(mine: set, theirs: set, unknowns: Iterable) -> bool:
    return _has_extra(theirs, mine, unknowns) and _has_extra(mine, theirs, unknowns)


def entity_attributes_agree(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    ignore_gender: bool = False,
) -> bool:
    """Clusters agree unless both sides hold an exclusive known value of one attribute."""
    if _attribute_disagree(mention_cluster.numbers, antecedent_cluster.numbers, [Number.UNKNOWN]):
        return False
    if not ignore_gender and _attribute_disagree(
        mention_cluster.genders, antecedent_cluster.genders, [Gender.UNKNOWN]
    ):
        return False
    if _attribute_disagree(
        mention_cluster.animacies, antecedent_cluster.animacies, [Animacy.UNKNOWN]
    ):
        return False
    return not _attribute_disagree(
        mention_cluster.ner_strings, antecedent_cluster.ner_strings, NER_SENTINELS
    )


def _pruned(values: set, unknowns: set) -> set:
    # only drop the unknowns while something else would remain
    if len(values) > len(unknowns):
        return values - unknowns
    return set(values)


def _set_disagree(first: set, second: set) -> bool:
    return min(len(first), len(second)) > len(first & second)


def entity_attributes_agree_chinese(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster
) -> bool:
    """Set-intersection agreement on pruned copies of the cluster attributes."""
    for attribute, unknowns in (
        ("numbers", {Number.UNKNOWN}),
        ("genders", {Gender.UNKNOWN}),
        ("animacies", {Animacy.UNKNOWN}),
        ("ner_strings", set(NER_SENTINELS)),
    ):
        mine = _pruned(getattr(mention_cluster, attribute), unknowns)
        theirs = _pruned(getattr(antecedent_cluster, attribute), unknowns)
        if _set_disagree(mine, theirs):
            return False
    return True


def entity_attributes_agree_for_language(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster, language: str
) -> bool:
    if language == "zh":
        return entity_attributes_agree_chinese(mention_cluster, antecedent_cluster)
    return entity_attributes_agree(mention_cluster, antecedent_cluster)


def entity_both_have_proper(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster
) -> bool:
    return any(m.mention_type is MentionType.PROPER for m in mention_cluster.mentions) and any(
        a.mention_type is MentionType.PROPER for a in antecedent_cluster.mentions
    )


def entity_person_disagree(
    document: "Document", mention: Mention, ant: Mention
) -> bool:
    """Person clash between two mentions given who is speaking to whom."""
    same_speaker = entity_same_speaker(document, mention, ant)
    if same_speaker and mention.person is not ant.person:
        if (mention.person, ant.person) in (
            (Person.IT, Person.THEY),
            (Person.THEY, Person.IT),
            (Person.THEY, Person.THEY),
        ):
            return False
        if mention.person is not Person.UNKNOWN and ant.person is not Person.UNKNOWN:
            return True
    if same_speaker:
        if not ant.is_pronominal():
            if mention.person in FIRST_OR_SECOND_PERSON:
                return True
        elif not mention.is_pronominal():
            if ant.person in FIRST_OR_SECOND_PERSON:
                return True
    if mention.person is Person.YOU and mention is not ant and ant.appear_earlier_than(mention):
        return _addressee_mismatch(document, mention, ant)
    if ant.person is Person.YOU and mention is not ant and mention.appear_earlier_than(ant):
        return _addressee_mismatch(document, ant, mention)
    return False


def _addressee_mismatch(document: "Document", you: Mention, other: Mention) -> bool:
    previous_speaker = document.speakers.get(you.utter - 1)
    if previous_speaker is None:
        return True
    previous_cluster_id = get_speaker_cluster_id(document, previous_speaker)
    if previous_cluster_id < 0:
        return True
    return other.cluster_id != previous_cluster_id and other.person is not Person.I


def entity_cluster_person_disagree(
    document: "Document",
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
) -> bool:
    return any(
        entity_person_disagree(document, m, a)
        for m in mention_cluster.mentions
        for a in antecedent_cluster.mentions
    )
