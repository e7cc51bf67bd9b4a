"""
Input models for documents produced by the annotation stack
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..errors import CorefError
from .document import Document
from .mention import Mention
from .tokens import ParseNode, Token
from .types import Animacy, DocType, Gender, MentionType, Number, Person

logger = logging.getLogger(__name__)


class TokenInput(BaseModel):
    """One token with its tags"""
    word: str
    lemma: Optional[str] = None
    pos: str = ""
    ner: str = "O"
    speaker: Optional[str] = None


class SentenceInput(BaseModel):
    """A tokenized sentence, optionally with its bracketed parse"""
    tokens: List[TokenInput]
    tree: Optional[str] = None
    speaker: Optional[str] = Field(default=None, description="Speaker for tokens without one")
    utterance: int = 0


class MentionInput(BaseModel):
    """A detected mention with the attributes the sieves consult"""
    id: int
    sentence: int
    start: int
    end: int
    head: int
    type: MentionType = MentionType.NOMINAL
    number: Number = Number.UNKNOWN
    gender: Gender = Gender.UNKNOWN
    animacy: Animacy = Animacy.UNKNOWN
    person: Person = Person.UNKNOWN
    ner: str = "O"
    relation: Optional[str] = None
    depending_verb: Optional[int] = None
    head_dependents: List[str] = Field(default_factory=list)
    premodifiers: List[List[int]] = Field(default_factory=list)
    postmodifiers: List[List[int]] = Field(default_factory=list)
    generic: bool = False
    pleonastic: bool = False
    singleton: bool = Field(default=False, description="Predicted singleton")
    appositions: List[int] = Field(default_factory=list)
    predicate_nominatives: List[int] = Field(default_factory=list)
    relative_pronouns: List[int] = Field(default_factory=list)
    gold_cluster: int = -1


class DocumentInput(BaseModel):
    """A whole document ready for coreference resolution"""
    doc_id: str = "document"
    part: str = "0"
    doc_type: DocType = DocType.ARTICLE
    conll: bool = False
    sentences: List[SentenceInput]
    mentions: List[MentionInput] = Field(default_factory=list)
    speaker_pairs: List[Tuple[int, int]] = Field(default_factory=list)
    doc_info: Dict[str, str] = Field(default_factory=dict)


def build_document(data: DocumentInput) -> Document:
    """Convert validated input into a :class:`Document` with singleton clusters."""
    sentences: list[list[Token]] = []
    trees: list[Optional[ParseNode]] = []
    for sentence in data.sentences:
        tokens = [
            Token(
                word=t.word,
                lemma=t.lemma if t.lemma is not None else t.word.lower(),
                pos=t.pos,
                ner=t.ner,
                speaker=t.speaker if t.speaker is not None else sentence.speaker,
                utterance=sentence.utterance,
                index=i,
            )
            for i, t in enumerate(sentence.tokens)
        ]
        sentences.append(tokens)
        trees.append(ParseNode.from_bracketed(sentence.tree) if sentence.tree else None)

    mentions: dict[int, Mention] = {}
    for m in data.mentions:
        if not 0 <= m.sentence < len(sentences):
            raise CorefError(f"Mention {m.id} refers to missing sentence {m.sentence}")
        tree = trees[m.sentence]
        mentions[m.id] = Mention(
            mention_id=m.id,
            sent_num=m.sentence,
            start=m.start,
            end=m.end,
            head_index=m.head,
            sentence=sentences[m.sentence],
            mention_type=m.type,
            number=m.number,
            gender=m.gender,
            animacy=m.animacy,
            person=m.person,
            ner_string=m.ner,
            subtree=tree.find_constituent(m.start, m.end) if tree is not None else None,
            generic=m.generic,
            pleonastic=m.pleonastic,
            is_singleton=m.singleton,
            relation=m.relation,
            depending_verb=m.depending_verb,
            head_dependents=frozenset(m.head_dependents),
            premodifiers=m.premodifiers,
            postmodifiers=m.postmodifiers,
            gold_cluster_id=m.gold_cluster,
        )

    for m in data.mentions:
        mention = mentions[m.id]
        for attr, ids in (
            ("appositions", m.appositions),
            ("predicate_nominatives", m.predicate_nominatives),
            ("relative_pronouns", m.relative_pronouns),
        ):
            for other_id in ids:
                if other_id not in mentions:
                    raise CorefError(f"Mention {m.id} links to unknown mention {other_id}")
                getattr(mention, attr).add(mentions[other_id])

    for mention in mentions.values():
        for other in mentions.values():
            if mention.is_list_member_of(other):
                other.list_members.add(mention)
                mention.belong_to_lists.add(other)

    doc = Document.from_mentions(
        sentences,
        mentions.values(),
        trees=trees,
        doc_id=data.doc_id,
        part=data.part,
        doc_type=data.doc_type,
        conll_doc=data.conll,
        doc_info=dict(data.doc_info),
    )
    doc.speaker_pairs = {tuple(p) for p in data.speaker_pairs}
    logger.debug(f"Built document {data.doc_id} with {len(mentions)} mentions")
    return doc


def load_document(payload: Any) -> Document:
    """Validate a JSON string or mapping and build the document."""
    try:
        if isinstance(payload, str):
            data = DocumentInput.model_validate(json.loads(payload))
        else:
            data = DocumentInput.model_validate(payload)
    except (ValidationError, json.JSONDecodeError) as e:
        raise CorefError(f"Invalid document input: {e}") from e
    return build_document(data)
