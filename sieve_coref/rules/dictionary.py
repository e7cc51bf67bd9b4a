"""Predicates backed by corpus co-occurrence tables."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from ..data.cluster import CorefCluster
from ..data.mention import Mention
from ..data.types import MentionType

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries

# counts above these thresholds accept a pair without consulting PMI
HIGH_FREQUENCY = {1: 75, 2: 16, 3: 16, 4: 16}
PMI_THRESHOLD = 0.18
RANK_THRESHOLD = 10
_NO_RANK = 100000


def entity_coref_dictionary(
    mention: Mention, ant: Mention, dictionaries: "Dictionaries", version: int, freq: int
) -> bool:
    """Pairwise lookup of the mentions' dictionary keys in column ``version``."""
    key = (
        mention.split_pattern[version - 1].lower(),
        ant.split_pattern[version - 1].lower(),
    )
    count = dictionaries.coref_dict[version - 1][key]
    if count > HIGH_FREQUENCY[version]:
        return True
    if count > freq:
        if key not in dictionaries.coref_dict_pmi:
            return True
        return dictionaries.coref_dict_pmi[key] > PMI_THRESHOLD
    return False


def entity_cluster_all_coref_dictionary(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    dictionaries: "Dictionaries",
    column: int,
    freq: int,
) -> bool:
    """Every eligible non-pronominal pair across the clusters is in the dictionary."""
    matched = False
    for men in mention_cluster.mentions:
        if men.is_pronominal():
            continue
        for ant in antecedent_cluster.mentions:
            if ant.is_pronominal() or men.head_word.lemma == ant.head_word.lemma:
                continue
            if not entity_coref_dictionary(men, ant, dictionaries, column, freq):
                return False
            matched = True
    return matched


def _ranks(counter: Counter) -> dict[str, int]:
    """Rank of each key by descending count, starting at 0."""
    return {key: rank for rank, (key, _) in enumerate(counter.most_common())}


def is_context_overlapping(m1: Mention, m2: Mention) -> bool:
    return bool(m1.get_context() & m2.get_context())


def _mention_context(mention: Mention) -> set[str]:
    return mention.get_premodifier_context() or mention.get_context()


def context_incompatible(mention: Mention, ant: Mention, dictionaries: "Dictionaries") -> bool:
    """A proper antecedent's signature words are unrelated to the mention's context."""
    ant_head = ant.head_word.word
    if (
        ant.mention_type is not MentionType.PROPER
        or ant.sent_num == mention.sent_num
        or is_context_overlapping(ant, mention)
        or ant_head not in dictionaries.ne_signatures
    ):
        return False
    ranks = _ranks(dictionaries.ne_signatures[ant_head])
    context = _mention_context(mention)
    if not context:
        return False
    highest = _NO_RANK
    for word in context:
        if word in ranks:
            highest = min(highest, ranks[word])
        if word in dictionaries.ne_signatures:
            reverse = _ranks(dictionaries.ne_signatures[word])
            if ant_head in reverse:
                highest = min(highest, reverse[ant_head])
    return highest > RANK_THRESHOLD


def sentence_context_incompatible(
    mention: Mention, ant: Mention, dictionaries: "Dictionaries"
) -> bool:
    """Two common-noun mentions whose sentence contexts are unrelated."""
    if (
        ant.mention_type is MentionType.PROPER
        or mention.mention_type is MentionType.PROPER
        or ant.sent_num == mention.sent_num
        or is_context_overlapping(ant, mention)
    ):
        return False
    ant_context = _mention_context(ant)
    mention_context = _mention_context(mention)
    if not ant_context or not mention_context:
        return False
    highest = _NO_RANK
    for w1 in ant_context:
        for w2 in mention_context:
            if w1 in dictionaries.ne_signatures:
                ranks = _ranks(dictionaries.ne_signatures[w1])
                if w2 in ranks:
                    highest = min(highest, ranks[w2])
            if w2 in dictionaries.ne_signatures:
                reverse = _ranks(dictionaries.ne_signatures[w2])
                if w1 in reverse:
                    highest = min(highest, reverse[w1])
    return highest > RANK_THRESHOLD
