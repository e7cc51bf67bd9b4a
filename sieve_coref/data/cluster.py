"""Clusters of mentions hypothesized to denote one entity."""

from __future__ import annotations

from typing import Iterable, Optional

from .mention import Mention
from .types import Animacy, Gender, Number


class CorefCluster:
    """A mutable mention set with attribute sets unioned over its members."""

    def __init__(self, cluster_id: int, mentions: Iterable[Mention] = ()) -> None:
        self.cluster_id = cluster_id
        self.mentions: set[Mention] = set()
        self.numbers: set[Number] = set()
        self.genders: set[Gender] = set()
        self.animacies: set[Animacy] = set()
        self.ner_strings: set[str] = set()
        self.heads: set[str] = set()
        self.words: set[str] = set()
        self.first_mention: Optional[Mention] = None
        self.representative: Optional[Mention] = None
        for mention in mentions:
            self.add_mention(mention)

    @classmethod
    def from_mention(cls, mention: Mention) -> "CorefCluster":
        return cls(mention.cluster_id, [mention])

    def add_mention(self, mention: Mention) -> None:
        self.mentions.add(mention)
        mention.cluster_id = self.cluster_id
        self.numbers.add(mention.number)
        self.genders.add(mention.gender)
        self.animacies.add(mention.animacy)
        self.ner_strings.add(mention.ner_string)
        self.heads.add(mention.head_string)
        self.words.update(mention.words)
        if self.first_mention is None or mention.appear_earlier_than(self.first_mention):
            self.first_mention = mention
        if mention.more_representative_than(self.representative):
            self.representative = mention

    def remove_mention(self, mention: Mention) -> None:
        """Drop a member and rebuild the aggregates from the remaining ones."""
        remaining = [m for m in self.mentions if m is not mention]
        self.__init__(self.cluster_id, sorted(remaining, key=_document_order))

    def __len__(self) -> int:
        return len(self.mentions)

    def __iter__(self):
        return iter(sorted(self.mentions, key=_document_order))

    def __contains__(self, mention: object) -> bool:
        return mention in self.mentions

    def __repr__(self) -> str:
        return f"CorefCluster({self.cluster_id}, {sorted(m.mention_id for m in self.mentions)})"

    def is_singleton(self) -> bool:
        return len(self.mentions) == 1


def merge_clusters(to: CorefCluster, frm: CorefCluster) -> None:
    """Move every member of ``frm`` into ``to`` and union the aggregates."""
    for mention in frm.mentions:
        mention.cluster_id = to.cluster_id
    to.mentions |= frm.mentions
    to.numbers |= frm.numbers
    to.genders |= frm.genders
    to.animacies |= frm.animacies
    to.ner_strings |= frm.ner_strings
    to.heads |= frm.heads
    to.words |= frm.words
    if frm.first_mention is not None and (
        to.first_mention is None or frm.first_mention.appear_earlier_than(to.first_mention)
    ):
        to.first_mention = frm.first_mention
    if frm.representative is not None and frm.representative.more_representative_than(to.representative):
        to.representative = frm.representative


def _document_order(mention: Mention) -> tuple[int, int, int]:
    return (mention.sent_num, mention.start, -mention.end)
