"""Candidate antecedent selection and ordering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional

from .data.mention import Mention

if TYPE_CHECKING:
    from .data.dictionaries import Dictionaries
    from .data.document import Document

logger = logging.getLogger(__name__)


def mention_position(document: "Document", mention: Mention) -> int:
    """Index of ``mention`` among the mentions of its sentence."""
    for i, other in enumerate(document.mentions_by_sentence[mention.sent_num]):
        if other is mention:
            return i
    raise ValueError(f"{mention!r} is not a mention of sentence {mention.sent_num}")


def get_ordered_antecedents(
    document: "Document",
    mention: Mention,
    antecedent_sentence: int,
    dictionaries: "Dictionaries",
    position: Optional[int] = None,
) -> list[Mention]:
    """Candidate antecedents of ``mention`` in one sentence, best first.

    In the mention's own sentence only the mentions before it are
    candidates: reversed when the mention is a relative pronoun, otherwise
    ordered by clause nesting. In an earlier sentence every mention is a
    candidate, left to right.
    """
    if antecedent_sentence == mention.sent_num:
        if position is None:
            position = mention_position(document, mention)
        candidates = list(document.mentions_by_sentence[mention.sent_num][:position])
        if mention.span_to_string() in dictionaries.relative_pronouns:
            candidates.reverse()
        else:
            candidates = sort_mentions_by_clause(candidates, mention)
    else:
        candidates = list(document.mentions_by_sentence[antecedent_sentence])
    return prefer_longer_spans(candidates)


def sort_mentions_by_clause(mentions: list[Mention], mention: Mention) -> list[Mention]:
    """Reorder same-sentence candidates by walking up from ``mention``.

    Each clause or noun-phrase ancestor contributes, in list order, the
    candidates it dominates that were not added by a lower ancestor.
    Candidates no ancestor dominates keep their relative order at the end.
    """
    current = mention.subtree
    if current is None or current.parent is None:
        return mentions
    ordered: list[Mention] = []
    seen: set[int] = set()
    for ancestor in current.ancestors():
        if not ancestor.is_clause_level():
            continue
        for candidate in mentions:
            if candidate.mention_id in seen:
                continue
            if ancestor.dominates(candidate.subtree):
                ordered.append(candidate)
                seen.add(candidate.mention_id)
    ordered.extend(m for m in mentions if m.mention_id not in seen)
    return ordered


def prefer_longer_spans(mentions: list[Mention]) -> list[Mention]:
    """Put the longer of two same-head, same-start mentions first."""
    result = list(mentions)
    for i in range(len(result)):
        for j in range(i + 1, len(result)):
            first, second = result[i], result[j]
            if (
                first.head_string == second.head_string
                and first.start == second.start
                and first.same_sentence(second)
                and len(first.span_to_string()) < len(second.span_to_string())
            ):
                result[i], result[j] = second, first
    return result


def candidate_sentences(mention: Mention, max_sentence_distance: int) -> Iterator[int]:
    """Sentence indices to search, nearest first, stopping at sentence 0."""
    last = max(mention.sent_num - max_sentence_distance, 0)
    for sent_num in range(mention.sent_num, last - 1, -1):
        yield sent_num


def _content_words(mention: Mention) -> set[str]:
    return {t.word.lower() for t in mention.tokens if t.pos.startswith("N")}


class HeuristicFilter:
    """Bounds the antecedent universe of every mention of a document.

    A mention may link to any of the ``max_mention_distance`` mentions
    preceding it, plus any earlier mention that shares a noun with it and
    lies within ``max_mention_distance_with_string_match`` positions.
    """

    def __init__(
        self,
        max_mention_distance: int = 50,
        max_mention_distance_with_string_match: int = 5000,
    ) -> None:
        self.max_mention_distance = max_mention_distance
        self.max_mention_distance_with_string_match = max_mention_distance_with_string_match

    def candidates(self, document: "Document") -> dict[int, set[int]]:
        """Map each mention id to the ids of its allowed antecedents."""
        mentions = list(document.iter_mentions())
        words = [_content_words(m) for m in mentions]
        allowed: dict[int, set[int]] = {}
        for j, mention in enumerate(mentions):
            ids = {
                mentions[i].mention_id
                for i in range(max(0, j - self.max_mention_distance), j)
            }
            lowest = max(0, j - self.max_mention_distance_with_string_match)
            if words[j]:
                for i in range(lowest, j):
                    if words[i] & words[j]:
                        ids.add(mentions[i].mention_id)
            allowed[mention.mention_id] = ids
        logger.debug(
            f"Heuristic filter kept {sum(len(v) for v in allowed.values())} candidate pairs "
            f"for {len(mentions)} mentions"
        )
        return allowed
