"""
Deterministic rule sieve

The pairwise decision is a fixed sequence of rule lists. Hard gates and
speaker rules run first, then the precise matches, the tentative matches
and the overrides that can veto them, and last the dictionary, pronoun and
Chinese head rules. The first accepting or rejecting rule decides.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..candidates import candidate_sentences, get_ordered_antecedents
from ..data.cluster import CorefCluster
from ..data.mention import Mention
from ..data.types import DocType, MentionType, Number, Person
from ..rules import (
    antecedent_is_mention_speaker,
    context_incompatible,
    entity_attributes_agree,
    entity_attributes_agree_for_language,
    entity_cluster_all_coref_dictionary,
    entity_cluster_have_incompatible_modifier,
    entity_cluster_person_disagree,
    entity_cluster_same_proper_head_last_word,
    entity_coref_dictionary,
    entity_exact_string_match,
    entity_have_different_location,
    entity_heads_agree,
    entity_is_acronym,
    entity_is_apposition,
    entity_is_predicate_nominatives,
    entity_is_relative_pronoun,
    entity_is_role_appositive,
    entity_iwithini,
    entity_number_in_later_mention,
    entity_relaxed_exact_string_match,
    entity_relaxed_heads_agree_between_mentions,
    entity_same_speaker,
    entity_subject_object,
    entity_token_distance,
    entity_words_included,
    sentence_context_incompatible,
)
from .base import Sieve
from .cascade import Decision, PairContext, Rule, Verdict, fold_rules, run_rules
from .options import RuleFlags

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document
    from ..rules.names import NameMatcher

logger = logging.getLogger(__name__)

# sentences beyond which a non-speaker pronoun or "this" is not linked
PRONOUN_SENTENCE_WINDOW = 3
GENERIC_SPEAKER = "PER0"


# ============================================================================
# Hard gates
# ============================================================================

def _cached_incompatible(ctx: PairContext) -> bool:
    return ctx.document.is_incompatible(ctx.mention_cluster, ctx.antecedent_cluster)


def _pronoun_too_far(ctx: PairContext) -> bool:
    m = ctx.mention
    return (
        abs(m.sent_num - ctx.antecedent.sent_num) > PRONOUN_SENTENCE_WINDOW
        and m.person is not Person.I
        and m.person is not Person.YOU
    )


def _demonstrative_too_far(ctx: PairContext) -> bool:
    return (
        ctx.mention.lowercase_normalized_span_string() == "this"
        and abs(ctx.mention.sent_num - ctx.antecedent.sent_num) > PRONOUN_SENTENCE_WINDOW
    )


def _generic_you_in_article(ctx: PairContext) -> bool:
    m = ctx.mention
    return (
        m.person is Person.YOU
        and ctx.document.doc_type is DocType.ARTICLE
        and m.speaker == GENERIC_SPEAKER
    )


def _generic_you_antecedent(ctx: PairContext) -> bool:
    ant = ctx.antecedent
    return ctx.document.conll_doc and ant.generic and ant.person is Person.YOU


def _generic_mention(ctx: PairContext) -> bool:
    return ctx.document.conll_doc and ctx.mention.generic


def _nested_spans(ctx: PairContext) -> bool:
    # Chinese newswire annotates nested NPs sharing a head as coreferent
    if ctx.language == "zh" and "nw" in ctx.document.doc_info.get("DOC_ID", ""):
        return False
    return ctx.mention.inside_in(ctx.antecedent) or ctx.antecedent.inside_in(ctx.mention)


GATES = [
    Rule("incompatible-cache", _cached_incompatible, Verdict.REJECT),
    Rule("demonstrative-distance", _demonstrative_too_far, Verdict.REJECT),
    Rule("generic-you-article", _generic_you_in_article, Verdict.REJECT),
    Rule("generic-you-antecedent", _generic_you_antecedent, Verdict.REJECT),
    Rule("generic-mention", _generic_mention, Verdict.REJECT),
    Rule("nested-spans", _nested_spans, Verdict.REJECT),
]

PRONOUN_DISTANCE_GATE = Rule("pronoun-distance", _pronoun_too_far, Verdict.REJECT)


# ============================================================================
# Speaker and discourse rules
# ============================================================================

def _both_first_person(ctx: PairContext) -> bool:
    return ctx.mention.person is Person.I and ctx.antecedent.person is Person.I


def _same_speaker_string(ctx: PairContext) -> bool:
    speaker = ctx.mention.speaker
    return speaker is not None and speaker == ctx.antecedent.speaker


def _speaker_is_other(ctx: PairContext) -> bool:
    m, ant = ctx.mention, ctx.antecedent
    return (m.person is Person.I and m.speaker == str(ant.mention_id)) or (
        ant.person is Person.I and ant.speaker == str(m.mention_id)
    )


SPEAKER_RULES = [
    Rule("speaker-i-i-same", lambda c: _both_first_person(c) and _same_speaker_string(c), Verdict.ACCEPT),
    Rule("speaker-i-i-different", _both_first_person, Verdict.REJECT),
    Rule("speaker-i-mention", _speaker_is_other, Verdict.ACCEPT),
]


def _first_person_singular(mention: Mention, ctx: PairContext) -> bool:
    return (
        mention.number is Number.SINGULAR
        and mention.lowercase_normalized_span_string() in ctx.dictionaries.first_person_pronouns
    )


def _same_speaker_info(ctx: PairContext) -> bool:
    info = ctx.representative.speaker_info
    return info is not None and info is ctx.antecedent.speaker_info


def _i_i_same_speaker(ctx: PairContext) -> bool:
    m, ant = ctx.representative, ctx.antecedent
    return (
        _first_person_singular(m, ctx)
        and _first_person_singular(ant, ctx)
        and entity_same_speaker(ctx.document, m, ant)
    )


def _speaker_then_i(ctx: PairContext) -> bool:
    m = ctx.representative
    return _first_person_singular(m, ctx) and antecedent_is_mention_speaker(
        ctx.document, m, ctx.antecedent
    )


def _adopt_antecedent_speaker(ctx: PairContext) -> None:
    m, ant = ctx.representative, ctx.antecedent
    if m.speaker_info is None and ant.speaker_info is not None:
        m.speaker_info = ant.speaker_info


def _i_then_speaker(ctx: PairContext) -> bool:
    m, ant = ctx.representative, ctx.antecedent
    return _first_person_singular(ant, ctx) and antecedent_is_mention_speaker(
        ctx.document, ant, m
    )


def _adopt_mention_speaker(ctx: PairContext) -> None:
    m, ant = ctx.representative, ctx.antecedent
    if ant.speaker_info is None and m.speaker_info is not None:
        ant.speaker_info = m.speaker_info


def _you_you_same_speaker(ctx: PairContext) -> bool:
    m, ant = ctx.representative, ctx.antecedent
    second = ctx.dictionaries.second_person_pronouns
    return (
        m.lowercase_normalized_span_string() in second
        and ant.lowercase_normalized_span_string() in second
        and entity_same_speaker(ctx.document, m, ant)
    )


def _adjacent_i_you(ctx: PairContext) -> bool:
    m, ant = ctx.representative, ctx.antecedent
    persons = {m.person, ant.person}
    return (
        persons == {Person.I, Person.YOU}
        and m.utter - ant.utter == 1
        and ctx.document.doc_type is DocType.CONVERSATION
    )


def _reflexive_binding(ctx: PairContext) -> bool:
    m = ctx.representative
    return m.head_string in ctx.dictionaries.reflexive_pronouns and entity_subject_object(
        m, ctx.antecedent
    )


DISCOURSE_RULES = [
    Rule("discourse-same-speaker-info", _same_speaker_info, Verdict.ACCEPT),
    Rule("discourse-i-i", _i_i_same_speaker, Verdict.ACCEPT),
    Rule("discourse-speaker-i", _speaker_then_i, Verdict.ACCEPT, _adopt_antecedent_speaker),
    Rule("discourse-i-speaker", _i_then_speaker, Verdict.ACCEPT, _adopt_mention_speaker),
    Rule("discourse-you-you", _you_you_same_speaker, Verdict.ACCEPT),
    Rule("discourse-i-you-adjacent", _adjacent_i_you, Verdict.ACCEPT),
    Rule("discourse-reflexive", _reflexive_binding, Verdict.ACCEPT),
]


# ============================================================================
# Cluster-pair incompatibilities
# ============================================================================

_CLASHING_PERSONS = (Person.I, Person.YOU, Person.WE)


def _speaker_clash(ctx: PairContext) -> bool:
    document = ctx.document
    for m in ctx.mention_cluster:
        for a in ctx.antecedent_cluster:
            if (
                m.person is not Person.I
                and a.person is not Person.I
                and (
                    antecedent_is_mention_speaker(document, m, a)
                    or antecedent_is_mention_speaker(document, a, m)
                )
            ):
                ctx.offending = (m, a)
                return True
            if (
                document.doc_type is not DocType.ARTICLE
                and abs(m.utter - a.utter) == 1
                and not entity_same_speaker(document, m, a)
                and m.person is a.person
                and m.person in _CLASHING_PERSONS
            ):
                ctx.offending = (m, a)
                return True
    return False


def _article_subject_object(ctx: PairContext) -> bool:
    if ctx.document.doc_type is not DocType.ARTICLE:
        return False
    for m in ctx.mention_cluster:
        for a in ctx.antecedent_cluster:
            if entity_subject_object(m, a):
                ctx.offending = (m, a)
                return True
    return False


def _mark_offending(ctx: PairContext) -> None:
    ctx.mark_incompatible(*ctx.offending)


CLUSTER_INCOMPATIBILITY_RULES = [
    Rule("speaker-clash", _speaker_clash, Verdict.REJECT, _mark_offending),
    Rule("article-subject-object", _article_subject_object, Verdict.REJECT, _mark_offending),
]


def _iwithini(ctx: PairContext) -> bool:
    return entity_iwithini(ctx.representative, ctx.antecedent, ctx.dictionaries)


def _mark_representative(ctx: PairContext) -> None:
    ctx.mark_incompatible(ctx.representative, ctx.antecedent)


IWITHINI_RULE = Rule("i-within-i", _iwithini, Verdict.REJECT, _mark_representative)


# ============================================================================
# Matches
# ============================================================================

def _precise_match_rules(flags: RuleFlags) -> list[Rule]:
    rules = []
    if flags.use_exact_string_match:
        rules.append(Rule(
            "exact-string-match",
            lambda c: entity_exact_string_match(
                c.representative, c.antecedent, c.dictionaries, c.document.role_set
            ),
            Verdict.ACCEPT,
        ))
    if flags.use_relaxed_exact_string_match:
        rules.append(Rule(
            "relaxed-exact-string-match",
            lambda c: entity_relaxed_exact_string_match(
                c.representative, c.antecedent, c.dictionaries, c.document.role_set
            ),
            Verdict.ACCEPT,
        ))
    if flags.use_apposition:
        rules.append(Rule(
            "apposition",
            lambda c: entity_is_apposition(
                c.mention_cluster, c.antecedent_cluster, c.representative, c.antecedent
            ),
            Verdict.ACCEPT,
        ))
    if flags.use_predicate_nominatives:
        rules.append(Rule(
            "predicate-nominative",
            lambda c: entity_is_predicate_nominatives(
                c.mention_cluster, c.antecedent_cluster, c.representative, c.antecedent
            ),
            Verdict.ACCEPT,
        ))
    if flags.use_acronym:
        rules.append(Rule(
            "acronym",
            lambda c: entity_is_acronym(c.document, c.mention_cluster, c.antecedent_cluster),
            Verdict.ACCEPT,
        ))
    if flags.use_relative_pronoun:
        rules.append(Rule(
            "relative-pronoun",
            lambda c: entity_is_relative_pronoun(c.representative, c.antecedent),
            Verdict.ACCEPT,
        ))
    if flags.use_demonym:
        rules.append(Rule(
            "demonym",
            lambda c: c.representative.is_demonym(c.antecedent, c.dictionaries),
            Verdict.ACCEPT,
        ))
    return rules


def _name_match(ctx: PairContext) -> bool:
    if ctx.name_matcher is None:
        return False
    return ctx.name_matcher.is_name_match(ctx.representative, ctx.antecedent)


def _tentative_match_rules(flags: RuleFlags, language: str) -> list[Rule]:
    rules = []
    if flags.use_name_match:
        rules.append(Rule("name-match", _name_match, Verdict.ACCEPT))
    if flags.use_role_apposition:
        if language == "zh":
            # role appositives are not trusted for Chinese and cancel earlier matches
            rules.append(Rule("role-apposition-disabled", lambda c: True, Verdict.REJECT))
        else:
            rules.append(Rule(
                "role-apposition",
                lambda c: entity_is_role_appositive(
                    c.mention_cluster, c.antecedent_cluster, c.representative,
                    c.antecedent, c.dictionaries,
                ),
                Verdict.ACCEPT,
            ))
    if flags.use_inclusion_head_match:
        rules.append(Rule(
            "inclusion-head-match",
            lambda c: entity_heads_agree(
                c.mention_cluster, c.antecedent_cluster, c.representative,
                c.antecedent, c.dictionaries,
            ),
            Verdict.ACCEPT,
        ))
    if flags.use_relaxed_head_match:
        rules.append(Rule(
            "relaxed-head-match",
            lambda c: entity_relaxed_heads_agree_between_mentions(
                c.mention_cluster, c.antecedent_cluster, c.representative, c.antecedent
            ),
            Verdict.ACCEPT,
        ))
    return rules


# ============================================================================
# Overrides
# ============================================================================

def _note_unused_gold_check(label: str):
    """Record the gold-cluster comparison made after a proper-head match."""

    def effect(ctx: PairContext) -> None:
        if ctx.flags.use_proper_head_at_last and ctx.tentative:
            differs = ctx.representative.gold_cluster_id != ctx.antecedent.gold_cluster_id
            ctx.notes.append(f"{label} after proper-head match, gold clusters differ: {differs}")

    return effect


def _override_rules(flags: RuleFlags) -> list[Rule]:
    rules = []
    if flags.use_words_inclusion:
        rules.append(Rule(
            "words-inclusion",
            lambda c: c.tentative and not entity_words_included(
                c.mention_cluster, c.antecedent_cluster, c.representative, c.antecedent
            ),
            Verdict.REJECT,
        ))
    if flags.use_incompatible_modifier:
        rules.append(Rule(
            "incompatible-modifier",
            lambda c: c.tentative and entity_cluster_have_incompatible_modifier(
                c.mention_cluster, c.antecedent_cluster
            ),
            Verdict.REJECT,
        ))
    if flags.use_proper_head_at_last:
        rules.append(Rule(
            "proper-head-last-word",
            lambda c: c.tentative and not entity_cluster_same_proper_head_last_word(
                c.mention_cluster, c.antecedent_cluster, c.representative, c.antecedent
            ),
            Verdict.REJECT,
        ))
    if flags.use_attributes_agree:
        rules.append(Rule(
            "attributes-disagree",
            lambda c: not entity_attributes_agree(c.mention_cluster, c.antecedent_cluster),
            Verdict.REJECT,
        ))
    if flags.use_different_location:
        rules.append(Rule(
            "different-location",
            lambda c: entity_have_different_location(c.representative, c.antecedent, c.dictionaries),
            Verdict.REJECT,
            _note_unused_gold_check("different-location"),
        ))
    if flags.use_number_in_mention:
        rules.append(Rule(
            "number-in-later-mention",
            lambda c: entity_number_in_later_mention(c.representative, c.antecedent),
            Verdict.REJECT,
            _note_unused_gold_check("number-in-later-mention"),
        ))
    if flags.use_distance:
        rules.append(Rule(
            "token-distance",
            lambda c: entity_token_distance(c.mention, c.antecedent),
            Verdict.REJECT,
        ))
    return rules


# ============================================================================
# Coreference dictionary
# ============================================================================

def _same_head_lemma(ctx: PairContext) -> bool:
    return ctx.antecedent.head_word.lemma == ctx.mention.head_word.lemma


def _proper_common_mismatch(ctx: PairContext) -> bool:
    head = ctx.mention.head_word
    capitalized = head.word[1:] != head.word[1:].lower()
    return ctx.antecedent.mention_type is not MentionType.PROPER and (
        head.pos.startswith("NNP") or capitalized
    )


def _both_plural(ctx: PairContext) -> bool:
    return ctx.antecedent.head_word.pos == "NNS" and ctx.mention.head_word.pos == "NNS"


def _indefinite_determiner(ctx: PairContext) -> bool:
    indefinites = ctx.dictionaries.indefinite_pronouns
    return (
        ctx.antecedent.tokens[0].lemma in indefinites
        or ctx.mention.tokens[0].lemma in indefinites
    )


def _coordinated(ctx: PairContext) -> bool:
    return ctx.antecedent.is_coordinated() or ctx.mention.is_coordinated()


# column, frequency threshold
_DICTIONARY_LOOKUPS = ((2, 2), (3, 2), (4, 2))

COREF_DICT_RULES = [
    Rule("dict-same-head-lemma", _same_head_lemma, Verdict.REJECT),
    Rule("dict-proper-common", _proper_common_mismatch, Verdict.REJECT),
    Rule("dict-plurals", _both_plural, Verdict.REJECT),
    Rule("dict-indefinite", _indefinite_determiner, Verdict.REJECT),
    Rule("dict-coordinated", _coordinated, Verdict.REJECT),
    Rule(
        "dict-context-incompatible",
        lambda c: context_incompatible(c.mention, c.antecedent, c.dictionaries),
        Verdict.REJECT,
    ),
    Rule(
        "dict-sentence-context-incompatible",
        lambda c: sentence_context_incompatible(c.mention, c.antecedent, c.dictionaries),
        Verdict.REJECT,
    ),
    Rule(
        "dict-cluster-heads",
        lambda c: entity_cluster_all_coref_dictionary(
            c.mention_cluster, c.antecedent_cluster, c.dictionaries, 1, 8
        ),
        Verdict.ACCEPT,
    ),
] + [
    Rule(
        f"dict-column-{column}",
        lambda c, column=column, freq=freq: entity_coref_dictionary(
            c.representative, c.antecedent, c.dictionaries, column, freq
        ),
        Verdict.ACCEPT,
    )
    for column, freq in _DICTIONARY_LOOKUPS
]


# ============================================================================
# Pronouns
# ============================================================================

def _pronoun_side(ctx: PairContext) -> Mention:
    representative = ctx.representative
    if representative.is_predicate_nominatives(ctx.mention):
        return ctx.mention
    return representative


def _pronoun_agrees(ctx: PairContext) -> bool:
    m = _pronoun_side(ctx)
    is_pronoun = (
        m.is_pronominal()
        or m.lowercase_normalized_span_string() in ctx.dictionaries.all_pronouns
    )
    if not is_pronoun:
        return False
    if ctx.default_pronoun_agreement:
        return entity_attributes_agree(ctx.mention_cluster, ctx.antecedent_cluster)
    return entity_attributes_agree_for_language(
        ctx.mention_cluster, ctx.antecedent_cluster, ctx.language
    )


def _demonym_organization_clash(ctx: PairContext) -> bool:
    return (
        ctx.antecedent.lowercase_normalized_span_string() in ctx.dictionaries.demonym_set
        and _pronoun_side(ctx).head_string in ctx.dictionaries.not_organization_prp
    )


def _person_disagree(ctx: PairContext) -> bool:
    return entity_cluster_person_disagree(
        ctx.document, ctx.mention_cluster, ctx.antecedent_cluster
    )


def _mark_pronoun_side(ctx: PairContext) -> None:
    ctx.mark_incompatible(_pronoun_side(ctx), ctx.antecedent)


PRONOUN_RULES = [
    Rule("pronoun-demonym-clash", _demonym_organization_clash, Verdict.REJECT, _mark_pronoun_side),
    Rule("pronoun-person-disagree", _person_disagree, Verdict.REJECT, _mark_pronoun_side),
    Rule("pronoun-agree", lambda c: True, Verdict.ACCEPT),
]


def _chinese_head_match(ctx: PairContext) -> bool:
    m, ant = ctx.mention, ctx.antecedent
    return m.same_sentence(ant) and m.head_index == ant.head_index and m.inside_in(ant)


def _note_gold_mismatch(ctx: PairContext) -> None:
    if not ctx.document.is_coref(ctx.mention, ctx.antecedent):
        ctx.notes.append("chinese head match between mentions of different gold clusters")


CHINESE_HEAD_RULE = Rule("chinese-head-match", _chinese_head_match, Verdict.ACCEPT, _note_gold_mismatch)


class RuleSieve(Sieve):
    """
    Deterministic sieve: links a mention to the first candidate the rules accept.

    The variant flags choose which rules take part; the rule lists are
    assembled once at construction.
    """

    def __init__(
        self,
        flags: RuleFlags,
        name: Optional[str] = None,
        name_matcher: Optional["NameMatcher"] = None,
        default_pronoun_agreement: bool = False,
        **kwargs,
    ) -> None:
        super().__init__(name or flags.name, **kwargs)
        self.flags = flags
        self.name_matcher = name_matcher
        self.default_pronoun_agreement = default_pronoun_agreement

        self.gates = list(GATES)
        if flags.do_pronoun:
            self.gates.insert(1, PRONOUN_DISTANCE_GATE)
        if not flags.use_incompatibles:
            self.gates = [g for g in self.gates if g.name != "incompatible-cache"]

        self.discourse_rules: list[Rule] = []
        if flags.use_speaker_match:
            self.discourse_rules.extend(SPEAKER_RULES)
        if flags.use_discourse_match:
            self.discourse_rules.extend(DISCOURSE_RULES)
        # subject/object clashes only guard sieves without string or inclusion matches
        if flags.matches_only_precisely():
            self.discourse_rules.extend(CLUSTER_INCOMPATIBILITY_RULES)
        if flags.use_iwithini:
            self.discourse_rules.append(IWITHINI_RULE)

        self.precise_rules = _precise_match_rules(flags)
        self.tentative_rules = _tentative_match_rules(flags, self.language)
        self.override_rules = _override_rules(flags)

    # ========================================================================
    # Search
    # ========================================================================

    def find_coreferent_antecedent(
        self,
        document: "Document",
        mention: Mention,
        position: int,
        dictionaries: "Dictionaries",
    ) -> None:
        flags = self.flags
        if (
            not flags.use_speaker_match
            and not flags.use_discourse_match
            and not flags.use_apposition
            and not flags.use_predicate_nominatives
            and self.skip_this_mention(document, mention, document.cluster_of(mention), dictionaries)
        ):
            return

        for sent_num in candidate_sentences(mention, self.max_sentence_distance):
            candidates = get_ordered_antecedents(
                document, mention, sent_num, dictionaries, position=position
            )
            for ant in candidates:
                if self.skip_for_analysis(ant, mention) or not self.is_allowed(mention, ant):
                    continue
                if (
                    mention.is_singleton
                    and ant.is_singleton
                    and mention.mention_type is not MentionType.PROPER
                    and ant.mention_type is not MentionType.PROPER
                ):
                    continue
                if mention.cluster_id == ant.cluster_id:
                    continue
                if not self.types_match(mention, ant):
                    continue
                if flags.use_role_skip:
                    if mention.is_role_appositive(ant, dictionaries):
                        document.role_set.add(mention)
                    elif ant.is_role_appositive(mention, dictionaries):
                        document.role_set.add(ant)
                    continue

                mention_cluster = document.cluster_of(mention)
                antecedent_cluster = document.cluster_of(ant)
                decision = self.coreferent(
                    document, mention_cluster, antecedent_cluster, mention, ant, dictionaries
                )
                if decision.accepted:
                    document.merge(mention, ant)
                    self.record(
                        "merge",
                        document,
                        data={"notes": list(decision.notes)},
                        rule=decision.rule,
                        mention_id=mention.mention_id,
                        antecedent_id=ant.mention_id,
                    )
                    return
                if decision.rejected or decision.notes:
                    self.record(
                        "reject",
                        document,
                        data={"notes": list(decision.notes)},
                        rule=decision.rule,
                        mention_id=mention.mention_id,
                        antecedent_id=ant.mention_id,
                    )

    def skip_this_mention(
        self,
        document: "Document",
        mention: Mention,
        cluster: CorefCluster,
        dictionaries: "Dictionaries",
    ) -> bool:
        """Search pruning: later cluster members and indefinite noun phrases."""
        flags = self.flags
        if (
            not flags.use_role_apposition
            and not flags.use_predicate_nominatives
            and not flags.use_acronym
            and not flags.use_apposition
            and not flags.use_relative_pronoun
            and cluster.first_mention is not mention
        ):
            return True
        span = mention.lowercase_normalized_span_string()
        if (
            not mention.appositions
            and not mention.predicate_nominatives
            and span.startswith(("a ", "an "))
            and not flags.use_exact_string_match
        ):
            return True
        indefinites = dictionaries.indefinite_pronouns
        if span in indefinites:
            return True
        return any(span.startswith(indef + " ") for indef in indefinites)

    # ========================================================================
    # Pairwise decision
    # ========================================================================

    def coreferent(
        self,
        document: "Document",
        mention_cluster: CorefCluster,
        antecedent_cluster: CorefCluster,
        mention: Mention,
        ant: Mention,
        dictionaries: "Dictionaries",
    ) -> Decision:
        """Decide whether two clusters corefer; the first decisive rule wins."""
        ctx = PairContext(
            document=document,
            mention_cluster=mention_cluster,
            antecedent_cluster=antecedent_cluster,
            mention=mention,
            antecedent=ant,
            dictionaries=dictionaries,
            flags=self.flags,
            language=self.language,
            default_pronoun_agreement=self.default_pronoun_agreement,
            name_matcher=self.name_matcher,
        )
        for rules in (self.gates, self.discourse_rules, self.precise_rules):
            decision = run_rules(rules, ctx)
            if decision.decided:
                return decision

        tentative = fold_rules(self.tentative_rules, ctx)
        ctx.tentative = tentative.accepted

        decision = run_rules(self.override_rules, ctx)
        if decision.decided:
            return decision

        if self.flags.use_coref_dict:
            decision = run_rules(COREF_DICT_RULES, ctx)
            if decision.decided:
                return decision

        if self.flags.do_pronoun and _pronoun_agrees(ctx):
            return run_rules(PRONOUN_RULES, ctx)

        if self.flags.use_chinese_head_match:
            decision = run_rules([CHINESE_HEAD_RULE], ctx)
            if decision.decided:
                return decision

        return tentative
