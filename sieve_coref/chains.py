"""
Output models for resolved coreference chains
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .data.cluster import CorefCluster
from .data.document import Document
from .data.mention import Mention
from .data.types import MentionType


class ChainMention(BaseModel):
    """One mention of a chain, located by sentence and token span"""
    mention_id: int
    sentence: int
    start: int
    end: int
    head: int
    text: str
    type: MentionType

    @classmethod
    def from_mention(cls, mention: Mention) -> "ChainMention":
        return cls(
            mention_id=mention.mention_id,
            sentence=mention.sent_num,
            start=mention.start,
            end=mention.end,
            head=mention.head_index,
            text=mention.span_to_string(),
            type=mention.mention_type,
        )


class CorefChain(BaseModel):
    """A resolved entity: its mentions in document order and its representative"""
    chain_id: int
    mentions: List[ChainMention]
    representative: ChainMention
    meta: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_cluster(cls, cluster: CorefCluster) -> "CorefChain":
        mentions = sorted(cluster.mentions, key=lambda m: (m.sent_num, m.start, -m.end))
        representative = cluster.representative or mentions[0]
        return cls(
            chain_id=cluster.cluster_id,
            mentions=[ChainMention.from_mention(m) for m in mentions],
            representative=ChainMention.from_mention(representative),
        )

    def spans(self) -> List[tuple]:
        """(sentence, start, end) of every mention."""
        return [(m.sentence, m.start, m.end) for m in self.mentions]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


def build_chains(document: Document) -> Dict[int, CorefChain]:
    """Chains keyed by cluster id, for every non-empty cluster of ``document``."""
    return {
        cluster_id: CorefChain.from_cluster(cluster)
        for cluster_id, cluster in sorted(document.clusters_by_id.items())
        if cluster.mentions
    }
