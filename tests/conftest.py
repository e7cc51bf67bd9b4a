"""
Shared fixtures: lexical resources and small annotated documents
"""

import pytest

from sieve_coref.data import Dictionaries, load_document


def _sentence(words, **kwargs):
    """Sentence payload from (word, pos[, ner]) tuples."""
    tokens = []
    for entry in words:
        word, pos = entry[0], entry[1]
        token = {"word": word, "pos": pos}
        if len(entry) > 2:
            token["ner"] = entry[2]
        tokens.append(token)
    return {"tokens": tokens, **kwargs}


@pytest.fixture
def dictionaries():
    return Dictionaries.for_language("en")


@pytest.fixture
def make_document():
    """Factory building a document from sentence word lists and mention dicts."""

    def factory(sentences, mentions, **kwargs):
        payload = {
            "doc_id": kwargs.pop("doc_id", "test_doc"),
            "sentences": [
                s if isinstance(s, dict) else _sentence(s) for s in sentences
            ],
            "mentions": mentions,
            **kwargs,
        }
        return load_document(payload)

    return factory


@pytest.fixture
def obama_payload():
    """Barack Obama ... He ... President Obama, one sentence each."""
    person = {
        "type": "PROPER",
        "number": "SINGULAR",
        "gender": "MALE",
        "animacy": "ANIMATE",
        "ner": "PERSON",
    }
    return {
        "doc_id": "obama",
        "sentences": [
            _sentence([("Barack", "NNP", "PERSON"), ("Obama", "NNP", "PERSON"), ("spoke", "VBD"), (".", ".")]),
            _sentence([("He", "PRP"), ("smiled", "VBD"), (".", ".")]),
            _sentence([("President", "NN"), ("Obama", "NNP", "PERSON"), ("left", "VBD"), (".", ".")]),
        ],
        "mentions": [
            {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, **person},
            {
                "id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0,
                "type": "PRONOMINAL", "number": "SINGULAR", "gender": "MALE",
                "animacy": "ANIMATE", "person": "HE",
            },
            {"id": 2, "sentence": 2, "start": 0, "end": 2, "head": 1, **person},
        ],
    }


@pytest.fixture
def obama_document(obama_payload):
    return load_document(obama_payload)


@pytest.fixture
def company_document(make_document):
    """Two nominal candidates in one sentence and a pronoun in the next."""
    return make_document(
        [
            [("The", "DT"), ("company", "NN"), ("sued", "VBD"), ("the", "DT"), ("board", "NN"), (".", ".")],
            [("It", "PRP"), ("won", "VBD"), (".", ".")],
        ],
        [
            {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, "number": "SINGULAR",
             "animacy": "INANIMATE", "relation": "nsubj", "depending_verb": 2},
            {"id": 1, "sentence": 0, "start": 3, "end": 5, "head": 4, "number": "SINGULAR",
             "animacy": "INANIMATE", "relation": "dobj", "depending_verb": 2},
            {"id": 2, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL",
             "number": "SINGULAR", "gender": "NEUTRAL", "animacy": "INANIMATE", "person": "IT",
             "relation": "nsubj", "depending_verb": 1},
        ],
        doc_id="company",
    )
