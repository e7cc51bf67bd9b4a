"""Tests for rule variants, the rule runner and the deterministic sieve."""

import json

import pytest

from sieve_coref.errors import ConfigurationError
from sieve_coref.rules import NameMatcher
from sieve_coref.sieves import (
    PairContext,
    Rule,
    RuleSieve,
    TraceRecorder,
    Verdict,
    fold_rules,
    get_variant,
    is_rule_sieve,
    is_statistical_sieve,
    list_registered_variants,
    matched_mention_type,
    run_rules,
)
from sieve_coref.sieves.options import (
    ExactStringMatch,
    MarkRole,
    NameMatch,
    PronounMatch,
    RuleFlags,
)
from sieve_coref.sieves.registry import sieve_variant


class LastWordMatcher:
    """Treats names ending in the same word as aliases."""

    def is_name_match(self, mention, antecedent):
        return mention.tokens[-1].word == antecedent.tokens[-1].word


@pytest.fixture
def repeated_name(make_document):
    return make_document(
        [[("Obama", "NNP", "PERSON"), ("spoke", "VBD")], [("Obama", "NNP", "PERSON"), ("left", "VBD")]],
        [
            {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER", "ner": "PERSON"},
            {"id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PROPER", "ner": "PERSON"},
        ],
    )


def _decide(sieve, doc, mention_id, antecedent_id, dictionaries):
    m = doc.mentions_by_id[mention_id]
    a = doc.mentions_by_id[antecedent_id]
    return sieve.coreferent(doc, doc.cluster_of(m), doc.cluster_of(a), m, a, dictionaries)


class TestVariantRegistry:
    """Tests for the closed set of rule-sieve variants."""

    def test_all_variants_registered(self):
        expected = {
            "MarkRole", "DiscourseMatch", "ExactStringMatch", "RelaxedExactStringMatch",
            "PreciseConstructs", "StrictHeadMatch1", "StrictHeadMatch2", "StrictHeadMatch3",
            "StrictHeadMatch4", "RelaxedHeadMatch", "PronounMatch", "SpeakerMatch",
            "ChineseHeadMatch", "NameMatch", "CorefDictionaryMatch",
        }
        assert expected <= set(list_registered_variants())

    def test_unknown_variant_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown sieve"):
            get_variant("FuzzyMatch")

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError):
            sieve_variant("ExactStringMatch")(type("Again", (RuleFlags,), {}))

    def test_sieve_kinds(self):
        assert is_rule_sieve("PronounMatch")
        assert not is_rule_sieve("pp-rf")
        assert is_statistical_sieve("pp-rf")
        assert is_statistical_sieve("PR-RF")

    def test_variant_flags(self):
        """Variants switch on only their own rules."""
        flags = get_variant("PronounMatch")()

        assert flags.name == "PronounMatch"
        assert flags.do_pronoun and flags.use_iwithini
        assert not flags.use_exact_string_match
        assert flags.matches_only_precisely()
        assert not ExactStringMatch().matches_only_precisely()
        assert "use_exact_string_match" in ExactStringMatch().enabled()


class TestRuleRunner:
    """Tests for run_rules and fold_rules."""

    @pytest.fixture
    def context(self, obama_document, dictionaries):
        doc = obama_document
        m, a = doc.mentions_by_id[1], doc.mentions_by_id[0]
        return PairContext(
            document=doc,
            mention_cluster=doc.cluster_of(m),
            antecedent_cluster=doc.cluster_of(a),
            mention=m,
            antecedent=a,
            dictionaries=dictionaries,
            flags=PronounMatch(),
        )

    def test_first_firing_rule_decides(self, context):
        evaluated = []

        def never(ctx):
            evaluated.append("never")
            return False

        def later(ctx):
            evaluated.append("later")
            return True

        rules = [
            Rule("never", never, Verdict.ACCEPT),
            Rule("block", lambda c: True, Verdict.REJECT, lambda c: c.notes.append("blocked")),
            Rule("later", later, Verdict.ACCEPT),
        ]

        decision = run_rules(rules, context)

        assert decision.rejected
        assert decision.rule == "block"
        assert decision.notes == ["blocked"]
        assert evaluated == ["never"]

    def test_no_rule_continues(self, context):
        decision = run_rules([Rule("never", lambda c: False, Verdict.ACCEPT)], context)

        assert not decision.decided
        assert decision.rule is None

    def test_fold_keeps_last_verdict(self, context):
        """Every tentative rule runs; the last one that holds wins."""
        accept_then_reject = [
            Rule("match", lambda c: True, Verdict.ACCEPT),
            Rule("veto", lambda c: True, Verdict.REJECT),
        ]
        reject_then_accept = list(reversed(accept_then_reject))

        vetoed = fold_rules(accept_then_reject, context)
        accepted = fold_rules(reject_then_accept, context)

        assert not vetoed.decided
        assert vetoed.fired == ["match", "veto"]
        assert accepted.accepted
        assert accepted.rule == "match"

    def test_representative_defaults_to_cluster_representative(self, context):
        assert context.representative is context.mention_cluster.representative


class TestMentionTypeFilters:
    """Tests for the type strings that narrow pronoun sieves."""

    def test_person_and_named_entity_filters(self, obama_document):
        obama, he = obama_document.mentions_by_id[0], obama_document.mentions_by_id[1]

        assert matched_mention_type(he, ["he"])
        assert not matched_mention_type(obama, ["he"])
        assert matched_mention_type(obama, ["ne:PERSON"])
        assert not matched_mention_type(obama, ["ne:ORGANIZATION"])
        assert matched_mention_type(obama, [])

    def test_empty_ner_matches_every_named_entity_filter(self, obama_document):
        he = obama_document.mentions_by_id[1]
        he.ner_string = ""

        assert matched_mention_type(he, ["ne:ORGANIZATION"])
        assert matched_mention_type(he, ["ne:PERSON"])


class TestTraceRecorder:
    """Tests for the shared decision log."""

    def test_events_filter_and_export(self):
        trace = TraceRecorder()
        trace.log("merge", {"notes": []}, sieve="ExactStringMatch", rule="exact-string-match", mention_id=2, antecedent_id=0)
        trace.log("reject", sieve="PronounMatch", rule="incompatible-cache", mention_id=3, antecedent_id=1)

        exported = json.loads(trace.export_json())

        assert [e.mention_id for e in trace.filter_by_type("merge")] == [2]
        assert [e.rule for e in trace.filter_by_sieve("PronounMatch")] == ["incompatible-cache"]
        assert exported == trace.to_list()
        assert exported[1]["data"] == {}
        assert exported[0]["doc_id"] is None
        assert set(exported[0]) == {
            "event_type", "timestamp_ms", "data", "doc_id", "sieve", "rule", "mention_id", "antecedent_id",
        }

    def test_reset_drops_events(self):
        trace = TraceRecorder()
        trace.log("merge", doc_id="a", sieve="ExactStringMatch")

        trace.reset()

        assert trace.events == []
        assert trace.to_list() == []


class TestRuleSieve:
    """Tests for the deterministic sieve."""

    def test_exact_match_merges_and_traces(self, repeated_name, dictionaries):
        sieve = RuleSieve(ExactStringMatch())
        sieve.trace = TraceRecorder()

        sieve.resolve(repeated_name, dictionaries)

        assert repeated_name.mentions_by_id[1].cluster_id == 0
        merges = sieve.trace.filter_by_type("merge")
        assert len(merges) == 1
        assert merges[0].rule == "exact-string-match"
        assert (merges[0].mention_id, merges[0].antecedent_id) == (1, 0)
        assert merges[0].doc_id == repeated_name.doc_id
        assert merges[0].sieve == "ExactStringMatch"

    def test_cached_incompatibility_blocks_merge(self, repeated_name, dictionaries):
        m = repeated_name.mentions_by_id
        repeated_name.add_incompatible(m[1], m[0])

        decision = _decide(RuleSieve(ExactStringMatch()), repeated_name, 1, 0, dictionaries)

        assert decision.rejected
        assert decision.rule == "incompatible-cache"

    def test_incompatibility_cache_can_be_disabled(self, repeated_name, dictionaries):
        m = repeated_name.mentions_by_id
        repeated_name.add_incompatible(m[1], m[0])
        flags = ExactStringMatch(use_incompatibles=False)

        decision = _decide(RuleSieve(flags), repeated_name, 1, 0, dictionaries)

        assert decision.accepted

    def test_nested_spans_rejected(self, make_document, dictionaries):
        doc = make_document(
            [[("the", "DT"), ("club", "NN"), ("of", "IN"), ("the", "DT"), ("club", "NN")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 5, "head": 1},
                {"id": 1, "sentence": 0, "start": 3, "end": 5, "head": 4},
            ],
        )

        decision = _decide(RuleSieve(ExactStringMatch()), doc, 1, 0, dictionaries)

        assert decision.rejected
        assert decision.rule == "nested-spans"

    def test_distant_pronoun_rejected(self, make_document, dictionaries):
        filler = [("It", "PRP"), ("rained", "VBD")]
        doc = make_document(
            [[("Obama", "NNP", "PERSON")], filler, filler, filler, [("He", "PRP"), ("left", "VBD")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER", "ner": "PERSON"},
                {"id": 1, "sentence": 4, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL", "person": "HE"},
            ],
        )

        decision = _decide(RuleSieve(PronounMatch()), doc, 1, 0, dictionaries)

        assert decision.rejected
        assert decision.rule == "pronoun-distance"

    def test_pronoun_links_to_agreeing_antecedent(self, obama_document, dictionaries):
        sieve = RuleSieve(PronounMatch())

        sieve.resolve(obama_document, dictionaries)

        assert obama_document.mentions_by_id[1].cluster_id == 0

    def test_pronoun_rule_effect_marks_incompatible(self, make_document, dictionaries):
        """A demonym never takes a person pronoun; the pair is cached as incompatible."""
        doc = make_document(
            [[("American", "NNP")], [("He", "PRP"), ("left", "VBD")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 1, "head": 0, "type": "PROPER"},
                {"id": 1, "sentence": 1, "start": 0, "end": 1, "head": 0, "type": "PRONOMINAL", "person": "HE"},
            ],
        )

        decision = _decide(RuleSieve(PronounMatch()), doc, 1, 0, dictionaries)

        assert decision.rule == "pronoun-demonym-clash"
        assert (0, 1) in doc.incompatibles
        assert doc.is_incompatible(doc.clusters_by_id[0], doc.clusters_by_id[1])

    def test_mark_role_collects_without_merging(self, make_document, dictionaries):
        doc = make_document(
            [[("President", "NNP"), ("Obama", "NNP", "PERSON"), ("spoke", "VBD")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1, "type": "PROPER", "ner": "PERSON"},
                {"id": 1, "sentence": 0, "start": 0, "end": 1, "head": 0},
            ],
        )

        RuleSieve(MarkRole()).resolve(doc, dictionaries)

        assert doc.role_set == {doc.mentions_by_id[1]}
        assert len(doc.clusters_by_id) == 2

    def test_name_matcher_is_optional(self, obama_document, dictionaries):
        """Without a name matcher the alias rule never holds."""
        RuleSieve(NameMatch()).resolve(obama_document, dictionaries)

        assert len(obama_document.clusters_by_id) == 3

    def test_name_matcher_links_aliases(self, obama_document, dictionaries):
        matcher = LastWordMatcher()
        assert isinstance(matcher, NameMatcher)

        RuleSieve(NameMatch(), name_matcher=matcher).resolve(obama_document, dictionaries)

        clusters = {
            cid: {m.mention_id for m in c.mentions}
            for cid, c in obama_document.clusters_by_id.items()
        }
        assert clusters == {0: {0, 2}, 1: {1}}

    def test_indefinite_mention_skipped(self, make_document, dictionaries):
        doc = make_document(
            [[("the", "DT"), ("dog", "NN")], [("a", "DT"), ("dog", "NN")]],
            [
                {"id": 0, "sentence": 0, "start": 0, "end": 2, "head": 1},
                {"id": 1, "sentence": 1, "start": 0, "end": 2, "head": 1},
            ],
        )
        sieve = RuleSieve(get_variant("StrictHeadMatch1")())
        m = doc.mentions_by_id[1]

        assert sieve.skip_this_mention(doc, m, doc.cluster_of(m), dictionaries)

    def test_later_cluster_member_skipped(self, repeated_name, dictionaries):
        m = repeated_name.mentions_by_id
        repeated_name.merge(m[1], m[0])
        sieve = RuleSieve(PronounMatch())

        assert sieve.skip_this_mention(repeated_name, m[1], repeated_name.cluster_of(m[1]), dictionaries)
        assert not sieve.skip_this_mention(repeated_name, m[0], repeated_name.cluster_of(m[0]), dictionaries)
