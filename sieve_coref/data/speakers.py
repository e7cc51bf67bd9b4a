"""Speaker registry entries."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .mention import Mention

_NAME_SPLIT = re.compile(r"[\s_]+")


class SpeakerInfo:
    """A speaker of a conversation and the mentions known to denote them.

    Speaker strings look like ``"Obama"`` or ``"Barack_Obama, president"``;
    the part after the comma is kept as a description.
    """

    def __init__(self, speaker: str) -> None:
        self.speaker_id = speaker
        name, _, desc = speaker.partition(",")
        self.speaker_name = name.strip()
        self.speaker_desc: Optional[str] = desc.strip() or None
        self.speaker_name_strings = [s for s in _NAME_SPLIT.split(self.speaker_name) if s]
        self.mentions: list["Mention"] = []
        self._cluster_id = -1

    @property
    def cluster_id(self) -> int:
        """Cluster of the mentions evidencing this speaker, -1 if unknown."""
        if self._cluster_id >= 0:
            return self._cluster_id
        for mention in self.mentions:
            if mention.cluster_id >= 0:
                return mention.cluster_id
        return -1

    @cluster_id.setter
    def cluster_id(self, value: int) -> None:
        self._cluster_id = value

    def contains(self, mention: "Mention") -> bool:
        return any(m is mention for m in self.mentions)

    def add_mention(self, mention: "Mention") -> None:
        if not self.contains(mention):
            self.mentions.append(mention)

    def __repr__(self) -> str:
        return f"SpeakerInfo({self.speaker_id!r}, cluster={self.cluster_id})"
