"""Sieve Coref package."""

__version__ = "0.1.0"
__author__ = "sieve-coref"

from .chains import ChainMention, CorefChain
from .conll import parse_conll, render_conll
from .data import Dictionaries, Document, Mention, load_document
from .errors import ConfigurationError, CorefError, FeatureExtractionError, ResolutionCancelled
from .pipeline import CorefSystem

__all__ = [
    "ChainMention",
    "ConfigurationError",
    "CorefChain",
    "CorefError",
    "CorefSystem",
    "Dictionaries",
    "Document",
    "FeatureExtractionError",
    "Mention",
    "ResolutionCancelled",
    "load_document",
    "parse_conll",
    "render_conll",
]
