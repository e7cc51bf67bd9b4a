"""String, head-word and modifier predicates."""

from __future__ import annotations

from typing import TYPE_CHECKING, AbstractSet, Optional, Sequence

from ..data.cluster import CorefCluster
from ..data.dictionaries import (
    EXTENDED_LOCATION_MODIFIERS,
    INCLUSION_STOP_WORDS,
    LOCATION_MODIFIERS,
    NUMBER_WORDS,
)
from ..data.mention import Mention
from ..data.types import MentionType

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document

POSSESSIVE_SUFFIX = " 's"


def _is_uppercase_ascii(char: str) -> bool:
    return "A" <= char <= "Z"


def is_acronym(first: Sequence[str], second: Sequence[str]) -> bool:
    """Is one single-token word list the acronym of the other?

    ``is_acronym(["IBM"], ["International", "Business", "Machines"])`` holds;
    the acronym must consume every capital of the longer side and must not
    occur verbatim in it.
    """
    if len(first) > 1 and len(second) > 1:
        return False
    if not first and not second:
        return False
    if len(first) == len(second):
        first_longer = len(first[0]) > len(second[0])
        longer, shorter = (first, second) if first_longer else (second, first)
    else:
        longer = first if first and len(first) > len(second) else second
        shorter = second if second and len(first) > len(second) else first
    acronym = shorter[0] if shorter else "<UNK>"
    if not all(_is_uppercase_ascii(c) for c in acronym):
        return False
    position = 0
    for word in longer:
        for char in word:
            if not _is_uppercase_ascii(char):
                continue
            if position >= len(acronym) or acronym[position] != char:
                return False
            position += 1
    if position != len(acronym):
        return False
    return not any(acronym in word for word in longer)


def entity_is_acronym(
    document: "Document", mention_cluster: CorefCluster, antecedent_cluster: CorefCluster
) -> bool:
    """Cluster-level acronym test, memoized on the document per cluster pair."""
    first, second = mention_cluster.cluster_id, antecedent_cluster.cluster_id
    key = (min(first, second), max(first, second))
    if key not in document.acronym_cache:
        found = False
        for m in mention_cluster.mentions:
            if m.is_pronominal():
                continue
            m_words = [t.word for t in m.tokens]
            for ant in antecedent_cluster.mentions:
                if is_acronym(m_words, [t.word for t in ant.tokens]):
                    found = True
        document.acronym_cache[key] = found
    return document.acronym_cache[key]


def _is_pronoun_like(mention: Mention, dictionaries: "Dictionaries") -> bool:
    return (
        mention.is_pronominal()
        or mention.lowercase_normalized_span_string() in dictionaries.all_pronouns
    )


def _same_or_possessive(first: str, second: str) -> bool:
    return (
        first == second
        or first == second + POSSESSIVE_SUFFIX
        or second == first + POSSESSIVE_SUFFIX
    )


def entity_exact_string_match(
    mention: Mention,
    ant: Mention,
    dictionaries: "Dictionaries",
    role_set: AbstractSet[Mention] = frozenset(),
) -> bool:
    if mention in role_set:
        return False
    if _is_pronoun_like(mention, dictionaries) or _is_pronoun_like(ant, dictionaries):
        return False
    return _same_or_possessive(
        mention.lowercase_normalized_span_string(), ant.lowercase_normalized_span_string()
    )


def entity_cluster_exact_string_match(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    dictionaries: "Dictionaries",
    role_set: AbstractSet[Mention] = frozenset(),
) -> bool:
    """Any non-pronominal pair across the clusters with the same surface string."""
    matched = False
    for m in mention_cluster.mentions:
        if m in role_set:
            return False
        if _is_pronoun_like(m, dictionaries):
            continue
        for ant in antecedent_cluster.mentions:
            if _is_pronoun_like(ant, dictionaries):
                continue
            if _same_or_possessive(
                m.lowercase_normalized_span_string(), ant.lowercase_normalized_span_string()
            ):
                matched = True
    return matched


def entity_relaxed_exact_string_match(
    mention: Mention,
    ant: Mention,
    dictionaries: "Dictionaries",
    role_set: AbstractSet[Mention] = frozenset(),
) -> bool:
    """Exact match after dropping any phrase that follows the head."""
    if mention in role_set:
        return False
    if MentionType.LIST in (mention.mention_type, ant.mention_type):
        return False
    if _is_pronoun_like(mention, dictionaries) or _is_pronoun_like(ant, dictionaries):
        return False
    mention_span = mention.remove_phrase_after_head()
    ant_span = ant.remove_phrase_after_head()
    if not mention_span or not ant_span:
        return False
    return _same_or_possessive(mention_span, ant_span)


def entity_heads_agree(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    mention: Mention,
    ant: Mention,
    dictionaries: "Dictionaries",
) -> bool:
    if _is_pronoun_like(mention, dictionaries) or _is_pronoun_like(ant, dictionaries):
        return False
    return any(a.head_string == mention.head_string for a in antecedent_cluster.mentions)


def entity_relaxed_heads_agree_between_mentions(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    mention: Mention,
    ant: Mention,
) -> bool:
    if mention.is_pronominal() or ant.is_pronominal():
        return False
    return mention.heads_agree(ant)


def entity_words_included(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    mention: Mention,
    ant: Mention,
) -> bool:
    """Every non-stop word of the mention cluster appears in the antecedent cluster."""
    words = set(mention_cluster.words) - INCLUSION_STOP_WORDS
    words.discard(mention.head_string.lower())
    return words <= antecedent_cluster.words


def entity_have_incompatible_modifier(mention: Mention, ant: Mention) -> bool:
    """Same head but the later mention adds a modifier or the antecedent a location."""
    if ant.head_string.lower() != mention.head_string.lower():
        return False
    mention_words = set()
    for token in mention.tokens:
        word = token.word.lower()
        pos = token.pos
        if not (pos.startswith("N") or pos.startswith("JJ") or pos == "CD" or pos.startswith("V")):
            continue
        if word == mention.head_string.lower():
            continue
        mention_words.add(word)
    ant_words = {t.word.lower() for t in ant.tokens}
    if mention_words - ant_words:
        return True
    return any(l in ant_words and l not in mention_words for l in LOCATION_MODIFIERS)


def entity_cluster_have_incompatible_modifier(
    mention_cluster: CorefCluster, antecedent_cluster: CorefCluster
) -> bool:
    return any(
        entity_have_incompatible_modifier(m, a)
        for m in mention_cluster.mentions
        for a in antecedent_cluster.mentions
    )


def entity_have_different_location(
    mention: Mention, ant: Mention, dictionaries: "Dictionaries"
) -> bool:
    ant_string = ant.span_to_string()
    if ant_string in dictionaries.states_abbreviation and mention.head_string.lower() in (
        "country",
        "nation",
    ):
        return True
    mention_locations: set[str] = set()
    ant_locations: set[str] = set()
    for token in mention.tokens:
        lowered = token.word.lower()
        if lowered in EXTENDED_LOCATION_MODIFIERS:
            return True
        if token.ner == "LOCATION":
            mention_locations.add(lowered)
    for token in ant.tokens:
        lowered = token.word.lower()
        if lowered in EXTENDED_LOCATION_MODIFIERS:
            return True
        if token.ner == "LOCATION":
            ant_locations.add(lowered)
    mention_lower = mention.lowercase_normalized_span_string()
    ant_lower = ant.lowercase_normalized_span_string()
    mention_has_extra = any(loc not in ant_lower for loc in mention_locations)
    ant_has_extra = any(loc not in mention_lower for loc in ant_locations)
    return mention_has_extra and ant_has_extra


def entity_same_proper_head_last_word(mention: Mention, ant: Mention) -> bool:
    """Same proper-noun head ending both mentions, with compatible proper premodifiers."""
    if mention.head_string.lower() != ant.head_string.lower():
        return False
    if not mention.head_word.pos.startswith("NNP") or not ant.head_word.pos.startswith("NNP"):
        return False
    if not mention.remove_phrase_after_head().lower().endswith(mention.head_string):
        return False
    if not ant.remove_phrase_after_head().lower().endswith(ant.head_string):
        return False
    mention_propers = {
        t.word for t in mention.sentence[mention.start:mention.head_index] if t.pos.startswith("NNP")
    }
    ant_propers = {
        t.word for t in ant.sentence[ant.start:ant.head_index] if t.pos.startswith("NNP")
    }
    return not (mention_propers - ant_propers and ant_propers - mention_propers)


def entity_cluster_same_proper_head_last_word(
    mention_cluster: CorefCluster,
    antecedent_cluster: CorefCluster,
    mention: Optional[Mention] = None,
    ant: Optional[Mention] = None,
) -> bool:
    return any(
        entity_same_proper_head_last_word(m, a)
        for m in mention_cluster.mentions
        for a in antecedent_cluster.mentions
    )


def _is_number(word: str) -> bool:
    if not any(c.isdigit() for c in word):
        return False
    try:
        float(word)
    except ValueError:
        return False
    return True


def entity_number_in_later_mention(mention: Mention, ant: Mention) -> bool:
    """The later mention carries a number the antecedent lacks."""
    ant_words = {t.word for t in ant.tokens}
    for token in mention.tokens:
        word = token.word
        if _is_number(word):
            if word not in ant_words:
                return True
        elif word.lower() in NUMBER_WORDS and word not in ant_words:
            return True
    return False


def entity_have_extra_proper_noun(
    mention: Mention, ant: Mention, except_words: AbstractSet[str] = frozenset()
) -> bool:
    mention_propers = {t.word for t in mention.tokens if t.pos.startswith("NNP")}
    ant_propers = {t.word for t in ant.tokens if t.pos.startswith("NNP")}
    mention_string = mention.span_to_string()
    ant_string = ant.span_to_string()
    mention_has_extra = any(
        w not in ant_string and w.lower() not in except_words for w in mention_propers
    )
    ant_has_extra = any(
        w not in mention_string and w.lower() not in except_words for w in ant_propers
    )
    return mention_has_extra and ant_has_extra
