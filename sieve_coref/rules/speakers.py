"""Speaker predicates for conversational documents."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from ..data.mention import Mention
from ..data.speakers import SpeakerInfo

if TYPE_CHECKING:
    from ..data.document import Document

_WHITESPACE = re.compile(r"\s+")


def get_speaker_cluster_id(document: "Document", speaker: Optional[str]) -> int:
    """Cluster id a speaker string denotes, -1 if none is known.

    Numeric speaker strings name the mention that denotes the speaker.
    """
    if speaker is None:
        return -1
    info = document.speaker_info(speaker)
    cluster_id = info.cluster_id if info is not None else -1
    if cluster_id < 0 and speaker.isdecimal():
        mention = document.mentions_by_id.get(int(speaker))
        if mention is not None:
            cluster_id = mention.cluster_id
            if info is not None:
                info.add_mention(mention)
    return cluster_id


def entity_same_speaker(document: "Document", mention: Mention, ant: Mention) -> bool:
    mention_speaker = mention.speaker
    ant_speaker = ant.speaker
    if mention_speaker is None or ant_speaker is None:
        return False
    if mention_speaker == ant_speaker:
        return True
    mention_cluster = get_speaker_cluster_id(document, mention_speaker)
    ant_cluster = get_speaker_cluster_id(document, ant_speaker)
    if mention_cluster >= 0 and ant_cluster >= 0:
        return mention_cluster == ant_cluster
    return False


def mention_matches_speaker(mention: Mention, info: SpeakerInfo, strict: bool) -> bool:
    """Does ``mention`` name the speaker described by ``info``?

    Matches are remembered on ``info``.
    """
    if mention.speaker_info is not None and mention.speaker_info is info:
        return True
    if info.contains(mention):
        return True
    mention_string = _WHITESPACE.sub("", mention.span_to_string())
    if strict:
        if _WHITESPACE.sub("", info.speaker_name).lower() == mention_string.lower():
            info.add_mention(mention)
            return True
        return False
    if not mention.head_word.pos.startswith("NNP"):
        return False
    for name in info.speaker_name_strings:
        if mention.head_string == name.lower():
            info.add_mention(mention)
            return True
    if info.speaker_desc is not None:
        if _WHITESPACE.sub("", info.speaker_desc).lower() == mention_string.lower():
            return True
    return False


def antecedent_matches_mention_speaker_annotation(
    document: "Document", mention: Mention, ant: Mention
) -> bool:
    speaker = mention.speaker
    if speaker is None:
        return False
    info = document.speaker_info(speaker)
    if info is not None:
        return mention_matches_speaker(ant, info, strict=False)
    return any(ant.head_string == s.lower() for s in speaker.split())


def antecedent_is_mention_speaker(document: "Document", mention: Mention, ant: Mention) -> bool:
    """Is ``ant`` the speaker of the utterance containing ``mention``?"""
    if (mention.mention_id, ant.mention_id) in document.speaker_pairs:
        return True
    return antecedent_matches_mention_speaker_annotation(document, mention, ant)
