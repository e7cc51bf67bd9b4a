"""
Rule flags of the deterministic sieves

Every rule sieve is one of the variants below. A variant switches on the
rules it needs and is instantiated once when the pipeline is built.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .registry import sieve_variant


@dataclass(frozen=True)
class RuleFlags:
    """Switches for the rules of the pairwise decision."""

    # gates and discourse
    use_incompatibles: bool = True
    use_role_skip: bool = False
    use_speaker_match: bool = False
    use_discourse_match: bool = False
    use_iwithini: bool = False

    # positive matches
    use_exact_string_match: bool = False
    use_relaxed_exact_string_match: bool = False
    use_name_match: bool = False
    use_apposition: bool = False
    use_predicate_nominatives: bool = False
    use_acronym: bool = False
    use_relative_pronoun: bool = False
    use_demonym: bool = False
    use_role_apposition: bool = False
    use_inclusion_head_match: bool = False
    use_relaxed_head_match: bool = False

    # overrides
    use_words_inclusion: bool = False
    use_incompatible_modifier: bool = False
    use_proper_head_at_last: bool = False
    use_attributes_agree: bool = False
    use_different_location: bool = False
    use_number_in_mention: bool = False
    use_distance: bool = False

    # late rules
    use_coref_dict: bool = False
    do_pronoun: bool = False
    use_chinese_head_match: bool = False

    @property
    def name(self) -> str:
        return getattr(self, "_variant_name", type(self).__name__)

    def enabled(self) -> list[str]:
        """Names of the flags switched on."""
        return [key for key, value in asdict(self).items() if value]

    def matches_only_precisely(self) -> bool:
        """True when no string, apposition or inclusion rule is on."""
        return not (
            self.use_exact_string_match
            or self.use_relaxed_exact_string_match
            or self.use_apposition
            or self.use_words_inclusion
        )


@sieve_variant("MarkRole")
@dataclass(frozen=True)
class MarkRole(RuleFlags):
    """Collects role appositives without merging anything."""

    use_role_skip: bool = True


@sieve_variant("DiscourseMatch")
@dataclass(frozen=True)
class DiscourseMatch(RuleFlags):
    """Speaker and dialogue-structure links."""

    use_discourse_match: bool = True


@sieve_variant("ExactStringMatch")
@dataclass(frozen=True)
class ExactStringMatch(RuleFlags):
    use_exact_string_match: bool = True


@sieve_variant("RelaxedExactStringMatch")
@dataclass(frozen=True)
class RelaxedExactStringMatch(RuleFlags):
    use_relaxed_exact_string_match: bool = True


@sieve_variant("PreciseConstructs")
@dataclass(frozen=True)
class PreciseConstructs(RuleFlags):
    """Appositions, copulas, acronyms, relative pronouns, demonyms and roles."""

    use_apposition: bool = True
    use_predicate_nominatives: bool = True
    use_acronym: bool = True
    use_relative_pronoun: bool = True
    use_role_apposition: bool = True
    use_demonym: bool = True


@sieve_variant("StrictHeadMatch1")
@dataclass(frozen=True)
class StrictHeadMatch1(RuleFlags):
    use_iwithini: bool = True
    use_inclusion_head_match: bool = True
    use_incompatible_modifier: bool = True
    use_words_inclusion: bool = True


@sieve_variant("StrictHeadMatch2")
@dataclass(frozen=True)
class StrictHeadMatch2(RuleFlags):
    use_iwithini: bool = True
    use_inclusion_head_match: bool = True
    use_words_inclusion: bool = True


@sieve_variant("StrictHeadMatch3")
@dataclass(frozen=True)
class StrictHeadMatch3(RuleFlags):
    use_iwithini: bool = True
    use_inclusion_head_match: bool = True
    use_incompatible_modifier: bool = True


@sieve_variant("StrictHeadMatch4")
@dataclass(frozen=True)
class StrictHeadMatch4(RuleFlags):
    use_iwithini: bool = True
    use_inclusion_head_match: bool = True
    use_proper_head_at_last: bool = True
    use_different_location: bool = True
    use_number_in_mention: bool = True


@sieve_variant("RelaxedHeadMatch")
@dataclass(frozen=True)
class RelaxedHeadMatch(RuleFlags):
    use_iwithini: bool = True
    use_relaxed_head_match: bool = True
    use_words_inclusion: bool = True
    use_attributes_agree: bool = True


@sieve_variant("PronounMatch")
@dataclass(frozen=True)
class PronounMatch(RuleFlags):
    use_iwithini: bool = True
    do_pronoun: bool = True


@sieve_variant("SpeakerMatch")
@dataclass(frozen=True)
class SpeakerMatch(RuleFlags):
    use_speaker_match: bool = True


@sieve_variant("ChineseHeadMatch")
@dataclass(frozen=True)
class ChineseHeadMatch(RuleFlags):
    use_chinese_head_match: bool = True


@sieve_variant("NameMatch")
@dataclass(frozen=True)
class NameMatch(RuleFlags):
    """Links names through the pluggable name matcher."""

    use_iwithini: bool = True
    use_name_match: bool = True


@sieve_variant("CorefDictionaryMatch")
@dataclass(frozen=True)
class CorefDictionaryMatch(RuleFlags):
    use_iwithini: bool = True
    use_different_location: bool = True
    use_number_in_mention: bool = True
    use_distance: bool = True
    use_attributes_agree: bool = True
    use_coref_dict: bool = True
