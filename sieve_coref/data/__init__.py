"""Shared data model: tokens, mentions, clusters, documents and lexical resources."""

from .cluster import CorefCluster, merge_clusters
from .dictionaries import Dictionaries
from .document import Document
from .loader import DocumentInput, build_document, load_document
from .mention import Mention
from .speakers import SpeakerInfo
from .tokens import ParseNode, Token
from .types import Animacy, DocType, Gender, MentionType, Number, Person

__all__ = [
    "Animacy",
    "CorefCluster",
    "Dictionaries",
    "DocType",
    "Document",
    "DocumentInput",
    "Gender",
    "Mention",
    "MentionType",
    "Number",
    "ParseNode",
    "Person",
    "SpeakerInfo",
    "Token",
    "build_document",
    "load_document",
    "merge_clusters",
]
