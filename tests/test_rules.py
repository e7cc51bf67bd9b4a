"""Tests for the predicate library."""

import pytest

from sieve_coref.rules import (
    antecedent_is_mention_speaker,
    antecedent_matches_mention_speaker_annotation,
    entity_attributes_agree,
    entity_attributes_agree_chinese,
    entity_coref_dictionary,
    entity_exact_string_match,
    entity_have_different_location,
    entity_heads_agree,
    entity_is_acronym,
    entity_iwithini,
    entity_number_in_later_mention,
    entity_person_disagree,
    entity_relaxed_exact_string_match,
    entity_subject_object,
    entity_words_included,
    is_acronym,
)
from sieve_coref.data.types import Number


class TestAcronym:
    """Tests for the acronym predicate."""

    def test_acronym_of_capitalized_words(self):
        assert is_acronym(["IBM"], ["International", "Business", "Machines"])

    def test_argument_order_does_not_matter(self):
        assert is_acronym(["International", "Business", "Machines"], ["IBM"])

    def test_extra_capital_breaks_acronym(self):
        """Every capital of the long form must be consumed."""
        assert not is_acronym(["IBM"], ["International", "Business", "Machine", "Corp"])

    def test_single_letter_is_not_an_acronym(self):
        assert not is_acronym(["A"], ["A"])

    def test_lowercase_short_form_rejected(self):
        assert not is_acronym(["ibm"], ["International", "Business", "Machines"])

    def test_cluster_acronym_is_cached(self, make_document):
        """The cluster-level answer is memoized on the document."""
        doc = make_document(
            [[("International", "NNP"), ("Business", "NNP"), ("Machines", "NNPS")],
             [("IBM", "NNP")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 3, "head": 2, "type": "PROPER"},
                {"id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PROPER"},
            ],
        )
        mc, ac = doc.clusters_by_id[1], doc.clusters_by_id[0]

        assert entity_is_acronym(doc, mc, ac)
        assert doc.acronym_cache[(0, 1)] is True


class TestAttributeAgreement:
    """Tests for cluster attribute agreement."""

    @pytest.fixture
    def numbered(self, make_document):
        sentence = [("the", "DT"), ("dog", "NN"), ("the", "DT"), ("dogs", "NNS"), ("it", "PRP")]
        return make_document(
            [sentence],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, "number": "SINGULAR"},
                {"id": 1, "sentence": 0, "start": 2, "end": 4, "head": 3, "number": "PLURAL"},
                {"id": 2, "sentence": 0, "start": 4, "end": 5, "head": 4, "type": "PRONOMINAL"},
                {"id": 3, "sentence": 0, "start": 1, "end": 2, "head": 1, "number": "SINGULAR"},
            ],
        )

    def test_singular_and_plural_disagree(self, numbered):
        singular = numbered.clusters_by_id[0]
        plural = numbered.clusters_by_id[1]

        assert not entity_attributes_agree(singular, plural)
        assert not entity_attributes_agree_chinese(singular, plural)

    def test_unknown_is_tolerated(self, numbered):
        """{Singular} agrees with {Singular, Unknown}."""
        singular = numbered.clusters_by_id[0]
        mixed = numbered.merge(numbered.mentions_by_id[2], numbered.mentions_by_id[3])

        assert mixed.numbers == {Number.SINGULAR, Number.UNKNOWN}
        assert entity_attributes_agree(singular, mixed)
        assert entity_attributes_agree_chinese(singular, mixed)

    def test_chinese_agreement_leaves_clusters_untouched(self, numbered):
        mixed = numbered.merge(numbered.mentions_by_id[2], numbered.mentions_by_id[3])
        before = set(mixed.numbers)

        entity_attributes_agree_chinese(numbered.clusters_by_id[0], mixed)

        assert mixed.numbers == before

    def test_ner_sentinels_do_not_clash(self, obama_document):
        """A pronoun without an entity type agrees with a PERSON cluster."""
        doc = obama_document

        assert entity_attributes_agree(doc.clusters_by_id[1], doc.clusters_by_id[0])

    def test_person_disagreement_needs_same_speaker(self, obama_document):
        doc = obama_document

        assert not entity_person_disagree(doc, doc.mentions_by_id[1], doc.mentions_by_id[0])


class TestStringMatches:
    """Tests for exact, relaxed and head-based string predicates."""

    @pytest.fixture
    def companies(self, make_document):
        return make_document(
            [
                [("The", "DT"), ("company", "NN"), (",", ","), ("which", "WDT"), ("grew", "VBD")],
                [("The", "DT"), ("company", "NN"), ("'s", "POS"), ("profits", "NNS")],
                [("the", "DT"), ("big", "JJ"), ("company", "NN")],
                [("the", "DT"), ("company", "NN")],
            ],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 5, "head": 1},
                {"id": 4, "sentence": 0, "start": 0, "end": 2, "head": 1},
                {"id": 1, "sentence": 1, "start": 0, "end": 2, "head": 1},
                {"id": 2, "sentence": 1, "start": 0, "end": 3, "head": 1},
                {"id": 3, "sentence": 2, "start": 0, "end": 3, "head": 2},
                {"id": 5, "sentence": 3, "start": 0, "end": 2, "head": 1},
            ],
        )

    def test_exact_match_ignores_case(self, companies, dictionaries):
        m = companies.mentions_by_id
        assert entity_exact_string_match(m[5], m[4], dictionaries)
        assert not entity_exact_string_match(m[1], m[0], dictionaries)

    def test_pronouns_never_string_match(self, obama_document, dictionaries):
        m = obama_document.mentions_by_id
        assert not entity_exact_string_match(m[1], m[1], dictionaries)

    def test_exact_match_accepts_possessive(self, companies, dictionaries):
        """"the company 's" matches "the company"."""
        m = companies.mentions_by_id
        assert entity_exact_string_match(m[2], m[1], dictionaries)

    def test_role_set_blocks_exact_match(self, companies, dictionaries):
        m = companies.mentions_by_id
        assert not entity_exact_string_match(m[2], m[1], dictionaries, role_set={m[2]})

    def test_relaxed_match_drops_trailing_clause(self, companies, dictionaries):
        """"The company , which grew" relaxes to "The company"."""
        m = companies.mentions_by_id
        assert m[0].remove_phrase_after_head() == "The company"
        assert entity_relaxed_exact_string_match(m[1], m[0], dictionaries)
        assert not entity_exact_string_match(m[1], m[0], dictionaries)

    def test_heads_agree_across_cluster(self, companies, dictionaries):
        m = companies.mentions_by_id
        mc = companies.cluster_of(m[3])
        ac = companies.cluster_of(m[0])

        assert entity_heads_agree(mc, ac, m[3], m[0], dictionaries)

    def test_words_inclusion_is_directional(self, companies):
        """Extra modifiers on the later mention block inclusion."""
        m = companies.mentions_by_id
        big, plain = companies.cluster_of(m[3]), companies.cluster_of(m[1])

        assert entity_words_included(plain, big, m[1], m[3])
        assert not entity_words_included(big, plain, m[3], m[1])

    def test_location_modifier_means_different_location(self, make_document, dictionaries):
        doc = make_document(
            [[("North", "NNP", "LOCATION"), ("Korea", "NNP", "LOCATION"), ("and", "CC"),
              ("Korea", "NNP", "LOCATION")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, "type": "PROPER"},
                {"id": 1, "sentence": 0, "start": 3, "end": 4, "head": 3, "type": "PROPER"},
            ],
        )
        m = doc.mentions_by_id

        assert entity_have_different_location(m[1], m[0], dictionaries)

    def test_number_in_later_mention(self, make_document):
        doc = make_document(
            [[("cars", "NNS"), ("and", "CC"), ("two", "CD"), ("cars", "NNS")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0},
                {"id": 1, "sentence": 0, "start": 2, "end": 4, "head": 3},
            ],
        )
        m = doc.mentions_by_id

        assert entity_number_in_later_mention(m[1], m[0])
        assert not entity_number_in_later_mention(m[0], m[1])


class TestStructure:
    """Tests for nesting, role and grammatical-role predicates."""

    @pytest.fixture
    def nested(self, make_document):
        return make_document(
            [[("the", "DT"), ("head", "NN"), ("of", "IN"), ("the", "DT"), ("club", "NN")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 5, "head": 1},
                {"id": 1, "sentence": 0, "start": 3, "end": 5, "head": 4},
            ],
        )

    def test_nested_span_is_iwithini(self, nested, dictionaries):
        m = nested.mentions_by_id
        assert entity_iwithini(m[1], m[0], dictionaries)

    def test_apposition_licenses_nesting(self, nested, dictionaries):
        m = nested.mentions_by_id
        m[0].add_apposition(m[1])

        assert not entity_iwithini(m[1], m[0], dictionaries)

    def test_role_appositive(self, make_document, dictionaries):
        """"President" is a role appositive of "President Obama"."""
        doc = make_document(
            [[("President", "NNP"), ("Obama", "NNP", "PERSON")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, "type": "PROPER", "ner": "PERSON"},
                {"id": 1, "sentence": 0, "start": 0, "end": 1, "head": 0},
            ],
        )
        m = doc.mentions_by_id

        assert m[1].is_role_appositive(m[0], dictionaries)
        assert not m[0].is_role_appositive(m[1], dictionaries)

    def test_subject_and_object_of_same_verb(self, company_document):
        m = company_document.mentions_by_id

        assert entity_subject_object(m[1], m[0])
        assert not entity_subject_object(m[2], m[0])


class TestSpeakers:
    """Tests for speaker predicates."""

    def test_speaker_pair_annotation(self, make_document):
        doc = make_document(
            [[("Obama", "NNP", "PERSON"), ("said", "VBD")], [("I", "PRP"), ("won", "VBD")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER"},
                {"id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL", "person": "I"},
            ],
            speaker_pairs=[[1, 0]],
        )
        m = doc.mentions_by_id

        assert antecedent_is_mention_speaker(doc, m[1], m[0])
        assert not antecedent_is_mention_speaker(doc, m[0], m[1])

    def test_speaker_name_matches_proper_head(self, make_document):
        doc = make_document(
            [
                [("Obama", "NNP", "PERSON"), ("spoke", "VBD")],
                {"tokens": [{"word": "I", "pos": "PRP"}, {"word": "won", "pos": "VBD"}],
                 "speaker": "Barack_Obama", "utterance": 1},
            ],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER"},
                {"id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL", "person": "I"},
            ],
        )
        m = doc.mentions_by_id

        assert antecedent_matches_mention_speaker_annotation(doc, m[1], m[0])
        assert doc.speaker_info("Barack_Obama").contains(m[0])

    def test_missing_speaker_is_not_a_match(self, obama_document):
        m = obama_document.mentions_by_id
        assert not antecedent_is_mention_speaker(obama_document, m[1], m[0])


class TestCorefDictionary:
    """Tests for the co-occurrence dictionary lookup."""

    @pytest.fixture
    def firm_and_company(self, make_document):
        return make_document(
            [[("the", "DT"), ("company", "NN")], [("the", "DT"), ("firm", "NN")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1},
                {"id": 1, "sentence": 1, "start": 0, "end": 2, "head": 1},
            ],
        )

    def test_high_frequency_pair_accepted(self, firm_and_company, dictionaries):
        dictionaries.update({"coref_dict": [[["firm", "company", 100]]]})
        m = firm_and_company.mentions_by_id

        assert entity_coref_dictionary(m[1], m[0], dictionaries, 1, 2)

    def test_low_pmi_pair_rejected(self, firm_and_company, dictionaries):
        dictionaries.update({
            "coref_dict": [[["firm", "company", 10]]],
            "coref_dict_pmi": [["firm", "company", 0.1]],
        })
        m = firm_and_company.mentions_by_id

        assert not entity_coref_dictionary(m[1], m[0], dictionaries, 1, 2)

    def test_unknown_pair_rejected(self, firm_and_company, dictionaries):
        m = firm_and_company.mentions_by_id
        assert not entity_coref_dictionary(m[1], m[0], dictionaries, 1, 2)
