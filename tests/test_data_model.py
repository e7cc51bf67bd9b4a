"""Tests for mentions, clusters, documents and the input loader."""

import json

import pytest

from sieve_coref.data import CorefCluster, MentionType, ParseNode, load_document
from sieve_coref.errors import CorefError


def _three_mentions(make_document):
    return make_document(
        [[("Alice", "NNP", "PERSON"), ("met", "VBD"), ("Bob", "NNP", "PERSON"), (".", ".")],
         [("She", "PRP"), ("left", "VBD"), (".", ".")]],
        [
            {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER", "ner": "PERSON"},
            {"id": 1, "sentence": 0, "start": 2, "end": 3, "head": 2, "type": "PROPER", "ner": "PERSON"},
            {"id": 2, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL", "person": "SHE"},
        ],
    )


class TestDocumentConstruction:
    """Tests for building documents from annotated input."""

    def test_every_mention_starts_in_its_own_cluster(self, make_document):
        """Initial clusters are singletons keyed by mention id."""
        doc = _three_mentions(make_document)

        assert sorted(doc.clusters_by_id) == [0, 1, 2]
        for mention_id, cluster in doc.clusters_by_id.items():
            assert [m.mention_id for m in cluster.mentions] == [mention_id]
        assert doc.check_partition()

    def test_mentions_sorted_within_sentence(self, make_document):
        """Mentions of a sentence are ordered by start offset."""
        doc = _three_mentions(make_document)

        assert [m.mention_id for m in doc.mentions_by_sentence[0]] == [0, 1]
        assert [m.mention_id for m in doc.iter_mentions()] == [0, 1, 2]

    def test_head_outside_span_rejected(self, make_document):
        """A head index outside the mention span is an input error."""
        with pytest.raises(CorefError):
            make_document(
                [[("Alice", "NNP"), ("left", "VBD")]],
                [{"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 1}],
            )

    def test_missing_sentence_rejected(self, make_document):
        """Mentions must point at an existing sentence."""
        with pytest.raises(CorefError, match="missing sentence"):
            make_document(
                [[("Alice", "NNP")]],
                [{"id": 0, "sentence": 3, "start": 0, "end": 1, "head": 0}],
            )

    def test_unknown_partner_rejected(self, make_document):
        """Apposition links must name known mentions."""
        with pytest.raises(CorefError, match="unknown mention"):
            make_document(
                [[("Alice", "NNP")]],
                [{"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "appositions": [7]}],
            )

    def test_invalid_json_rejected(self):
        """Malformed JSON surfaces as a CorefError."""
        with pytest.raises(CorefError, match="Invalid document input"):
            load_document("{not json")

    def test_json_string_accepted(self, obama_payload):
        """Documents load from a JSON string as well as a mapping."""
        doc = load_document(json.dumps(obama_payload))

        assert doc.doc_id == "obama"
        assert len(doc.mentions_by_id) == 3
        assert doc.mentions_by_id[1].mention_type is MentionType.PRONOMINAL

    def test_sentence_speaker_fills_tokens(self, make_document):
        """Tokens without a speaker inherit the sentence speaker."""
        doc = make_document(
            [{"tokens": [{"word": "I", "pos": "PRP"}], "speaker": "Obama", "utterance": 0}],
            [{"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL"}],
        )

        assert doc.mentions_by_id[0].speaker == "Obama"
        assert "Obama" in doc.speaker_info_map
        assert doc.speakers[0] == "Obama"


class TestMerging:
    """Tests for cluster merging and the partition invariant."""

    def test_antecedent_cluster_survives(self, make_document):
        """Merging keeps the antecedent's cluster id and drops the other."""
        doc = _three_mentions(make_document)
        she, alice = doc.mentions_by_id[2], doc.mentions_by_id[0]

        survivor = doc.merge(she, alice)

        assert survivor.cluster_id == 0
        assert 2 not in doc.clusters_by_id
        assert she.cluster_id == 0
        assert {m.mention_id for m in survivor.mentions} == {0, 2}
        assert doc.check_partition()

    def test_merge_order_gives_same_members(self, make_document):
        """Either merge direction yields the same member set."""
        first = _three_mentions(make_document)
        second = _three_mentions(make_document)

        forward = first.merge(first.mentions_by_id[2], first.mentions_by_id[0])
        backward = second.merge(second.mentions_by_id[0], second.mentions_by_id[2])

        assert {m.mention_id for m in forward.mentions} == {m.mention_id for m in backward.mentions}
        assert forward.cluster_id == 0
        assert backward.cluster_id == 2

    def test_merge_within_cluster_is_noop(self, make_document):
        """Merging two mentions already together changes nothing."""
        doc = _three_mentions(make_document)
        doc.merge(doc.mentions_by_id[2], doc.mentions_by_id[0])

        survivor = doc.merge(doc.mentions_by_id[0], doc.mentions_by_id[2])

        assert survivor.cluster_id == 0
        assert sorted(doc.clusters_by_id) == [0, 1]

    def test_aggregates_are_union_of_members(self, make_document):
        """Attribute sets of the merged cluster cover both sides."""
        doc = _three_mentions(make_document)
        survivor = doc.merge(doc.mentions_by_id[2], doc.mentions_by_id[0])

        assert survivor.heads == {"alice", "she"}
        assert survivor.ner_strings == {"PERSON", "O"}

    def test_representative_prefers_proper_mention(self, make_document):
        """A proper name represents the cluster over a pronoun."""
        doc = _three_mentions(make_document)
        survivor = doc.merge(doc.mentions_by_id[0], doc.mentions_by_id[2])

        assert survivor.representative.mention_id == 0
        assert survivor.first_mention.mention_id == 0

    def test_remove_mention_rebuilds_aggregates(self, make_document):
        """Removing a member recomputes the cluster attributes."""
        doc = _three_mentions(make_document)
        survivor = doc.merge(doc.mentions_by_id[2], doc.mentions_by_id[0])

        survivor.remove_mention(doc.mentions_by_id[2])

        assert survivor.heads == {"alice"}
        assert len(survivor) == 1


class TestIncompatibilityCache:
    """Tests for the incompatibility and acronym caches on the document."""

    def test_add_incompatible_records_both_pairs(self, make_document):
        """Mention and cluster pairs are stored min/max ordered."""
        doc = _three_mentions(make_document)
        doc.add_incompatible(doc.mentions_by_id[2], doc.mentions_by_id[1])

        assert (1, 2) in doc.incompatibles
        assert doc.is_incompatible(doc.clusters_by_id[1], doc.clusters_by_id[2])
        assert doc.is_incompatible(doc.clusters_by_id[2], doc.clusters_by_id[1])

    def test_incompatibility_follows_merged_cluster(self, make_document):
        """After a merge the survivor inherits the loser's incompatibilities."""
        doc = _three_mentions(make_document)
        doc.add_incompatible(doc.mentions_by_id[2], doc.mentions_by_id[1])

        survivor = doc.merge(doc.mentions_by_id[2], doc.mentions_by_id[0])

        assert doc.is_incompatible(survivor, doc.clusters_by_id[1])
        # the cache only grows
        assert (1, 2) in doc.incompatible_clusters

    def test_acronym_cache_follows_merged_cluster(self, make_document):
        """Positive acronym entries are re-keyed onto the survivor."""
        doc = _three_mentions(make_document)
        doc.acronym_cache[(1, 2)] = True

        doc.merge(doc.mentions_by_id[2], doc.mentions_by_id[0])

        assert doc.acronym_cache[(0, 1)] is True


class TestParseTrees:
    """Tests for bracketed parse reading."""

    def test_spans_and_dominance(self):
        """Inner nodes cover the token span of their leaves."""
        tree = ParseNode.from_bracketed("(ROOT (S (NP (NNP Obama)) (VP (VBD spoke))))")
        np_node = tree.find_constituent(0, 1)
        vp_node = tree.find_constituent(1, 2)

        assert (tree.start, tree.end) == (0, 2)
        assert np_node.label == "NP"
        assert vp_node.label == "VP"
        assert tree.dominates(np_node)
        assert not np_node.dominates(vp_node)

    def test_unbalanced_tree_rejected(self):
        with pytest.raises(ValueError):
            ParseNode.from_bracketed("(ROOT (S (NP (NNP Obama))")

    def test_cluster_iterates_in_document_order(self, make_document):
        doc = _three_mentions(make_document)
        cluster = CorefCluster(99, [doc.mentions_by_id[2], doc.mentions_by_id[0]])

        assert [m.mention_id for m in cluster] == [0, 2]
        assert all(m.cluster_id == 99 for m in cluster)
