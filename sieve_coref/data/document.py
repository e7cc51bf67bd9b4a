"""Document state shared by every sieve of a resolution run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from ..errors import CorefError
from .cluster import CorefCluster, merge_clusters
from .mention import Mention
from .speakers import SpeakerInfo
from .tokens import ParseNode, Token
from .types import DocType

logger = logging.getLogger(__name__)


def _pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


@dataclass
class Document:
    """Mentions, clusters and the caches the sieves read and extend.

    Clusters are only ever merged, and the incompatibility and acronym
    caches only ever gain entries during a run.
    """

    doc_id: str = ""
    part: str = "0"
    doc_type: DocType = DocType.ARTICLE
    conll_doc: bool = False
    sentences: list[list[Token]] = field(default_factory=list)
    trees: list[Optional[ParseNode]] = field(default_factory=list)
    mentions_by_sentence: list[list[Mention]] = field(default_factory=list)
    mentions_by_id: dict[int, Mention] = field(default_factory=dict)
    clusters_by_id: dict[int, CorefCluster] = field(default_factory=dict)
    speaker_info_map: dict[str, SpeakerInfo] = field(default_factory=dict)
    speakers: dict[int, str] = field(default_factory=dict)
    speaker_pairs: set[tuple[int, int]] = field(default_factory=set)
    incompatibles: set[tuple[int, int]] = field(default_factory=set)
    incompatible_clusters: set[tuple[int, int]] = field(default_factory=set)
    acronym_cache: dict[tuple[int, int], bool] = field(default_factory=dict)
    role_set: set[Mention] = field(default_factory=set)
    doc_info: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mentions(
        cls,
        sentences: list[list[Token]],
        mentions: Iterable[Mention],
        trees: Optional[list[Optional[ParseNode]]] = None,
        **kwargs,
    ) -> "Document":
        """Build a document where every mention starts in its own cluster."""
        doc = cls(sentences=sentences, trees=list(trees or [None] * len(sentences)), **kwargs)
        doc.mentions_by_sentence = [[] for _ in sentences]
        for mention in mentions:
            if mention.mention_id in doc.mentions_by_id:
                raise CorefError(f"Duplicate mention id {mention.mention_id}")
            if not 0 <= mention.sent_num < len(sentences):
                raise CorefError(
                    f"Mention {mention.mention_id} refers to missing sentence {mention.sent_num}"
                )
            mention.cluster_id = mention.mention_id
            doc.mentions_by_sentence[mention.sent_num].append(mention)
            doc.mentions_by_id[mention.mention_id] = mention
            doc.clusters_by_id[mention.mention_id] = CorefCluster.from_mention(mention)
        for sentence_mentions in doc.mentions_by_sentence:
            sentence_mentions.sort(key=lambda m: (m.start, -m.end, m.mention_id))
        if doc.conll_doc:
            doc.doc_info.setdefault("DOC_ID", doc.doc_id)
            doc.doc_info.setdefault("DOC_PART", doc.part)
        doc._register_speakers()
        return doc

    def _register_speakers(self) -> None:
        for sentence in self.sentences:
            for token in sentence:
                if token.speaker is None:
                    continue
                self.speakers.setdefault(token.utterance, token.speaker)
                if token.speaker not in self.speaker_info_map and not token.speaker.isdigit():
                    self.speaker_info_map[token.speaker] = SpeakerInfo(token.speaker)

    # ========================================================================
    # Iteration
    # ========================================================================

    def iter_mentions(self) -> Iterator[Mention]:
        """Every mention, sentence by sentence, left to right."""
        for sentence_mentions in self.mentions_by_sentence:
            yield from sentence_mentions

    def cluster_of(self, mention: Mention) -> CorefCluster:
        return self.clusters_by_id[mention.cluster_id]

    def tree(self, sent_num: int) -> Optional[ParseNode]:
        if 0 <= sent_num < len(self.trees):
            return self.trees[sent_num]
        return None

    def speaker_info(self, speaker: Optional[str]) -> Optional[SpeakerInfo]:
        if speaker is None:
            return None
        return self.speaker_info_map.get(speaker)

    # ========================================================================
    # Incompatibility and acronym caches
    # ========================================================================

    def is_incompatible(self, c1: CorefCluster, c2: CorefCluster) -> bool:
        return _pair(c1.cluster_id, c2.cluster_id) in self.incompatible_clusters

    def is_incompatible_mentions(self, m1: Mention, m2: Mention) -> bool:
        return _pair(m1.mention_id, m2.mention_id) in self.incompatibles

    def add_incompatible(self, m1: Mention, m2: Mention) -> None:
        self.incompatibles.add(_pair(m1.mention_id, m2.mention_id))
        self.incompatible_clusters.add(_pair(m1.cluster_id, m2.cluster_id))

    def merge_incompatibles(self, to: CorefCluster, frm: CorefCluster) -> None:
        """Carry incompatibilities of ``frm`` over to ``to``; old entries stay."""
        additions = set()
        for first, second in self.incompatible_clusters:
            other = None
            if first == frm.cluster_id:
                other = second
            elif second == frm.cluster_id:
                other = first
            if other is not None and other != to.cluster_id:
                additions.add(_pair(other, to.cluster_id))
        self.incompatible_clusters |= additions

    def merge_acronym_cache(self, to: CorefCluster, frm: CorefCluster) -> None:
        additions = {}
        for (first, second), is_acronym in self.acronym_cache.items():
            if not is_acronym:
                continue
            other = None
            if first == frm.cluster_id:
                other = second
            elif second == frm.cluster_id:
                other = first
            if other is not None and other != to.cluster_id:
                additions[_pair(other, to.cluster_id)] = True
        self.acronym_cache.update(additions)

    # ========================================================================
    # Merging
    # ========================================================================

    def merge(self, mention: Mention, antecedent: Mention) -> CorefCluster:
        """Merge the mention's cluster into the antecedent's cluster.

        The antecedent's cluster id survives; the mention's cluster id is
        removed from ``clusters_by_id``.
        """
        to = self.clusters_by_id[antecedent.cluster_id]
        frm = self.clusters_by_id[mention.cluster_id]
        if to is frm:
            return to
        self.merge_incompatibles(to, frm)
        self.merge_acronym_cache(to, frm)
        merge_clusters(to, frm)
        del self.clusters_by_id[frm.cluster_id]
        logger.debug(
            f"Merged cluster {frm.cluster_id} into {to.cluster_id}: "
            f"{mention.span_to_string()!r} -> {antecedent.span_to_string()!r}"
        )
        return to

    # ========================================================================
    # Speakers and gold annotation
    # ========================================================================

    def is_coref(self, m1: Mention, m2: Mention) -> bool:
        return m1.gold_cluster_id >= 0 and m1.gold_cluster_id == m2.gold_cluster_id

    def check_partition(self) -> bool:
        """True if every mention sits in exactly the cluster its id names."""
        seen: set[int] = set()
        for cluster_id, cluster in self.clusters_by_id.items():
            for mention in cluster.mentions:
                if mention.mention_id in seen or mention.cluster_id != cluster_id:
                    return False
                seen.add(mention.mention_id)
        return seen == set(self.mentions_by_id)
