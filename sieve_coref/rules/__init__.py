"""Linguistic predicates over mentions and clusters.

Every predicate only reads the document, except for the acronym cache and
the speaker evidence that the speaker predicates record as they match.
"""

from .attributes import (
    entity_attributes_agree,
    entity_attributes_agree_chinese,
    entity_attributes_agree_for_language,
    entity_both_have_proper,
    entity_cluster_person_disagree,
    entity_person_disagree,
)
from .dictionary import (
    context_incompatible,
    entity_cluster_all_coref_dictionary,
    entity_coref_dictionary,
    is_context_overlapping,
    sentence_context_incompatible,
)
from .names import NameMatcher
from .speakers import (
    antecedent_is_mention_speaker,
    antecedent_matches_mention_speaker_annotation,
    entity_same_speaker,
    get_speaker_cluster_id,
    mention_matches_speaker,
)
from .strings import (
    entity_cluster_exact_string_match,
    entity_cluster_have_incompatible_modifier,
    entity_cluster_same_proper_head_last_word,
    entity_exact_string_match,
    entity_have_different_location,
    entity_have_extra_proper_noun,
    entity_have_incompatible_modifier,
    entity_heads_agree,
    entity_is_acronym,
    entity_number_in_later_mention,
    entity_relaxed_exact_string_match,
    entity_relaxed_heads_agree_between_mentions,
    entity_same_proper_head_last_word,
    entity_words_included,
    is_acronym,
)
from .structure import (
    entity_cluster_iwithini,
    entity_is_apposition,
    entity_is_demonym,
    entity_is_predicate_nominatives,
    entity_is_relative_pronoun,
    entity_is_role_appositive,
    entity_iwithini,
    entity_subject_object,
    entity_token_distance,
)

__all__ = [
    "NameMatcher",
    "antecedent_is_mention_speaker",
    "antecedent_matches_mention_speaker_annotation",
    "context_incompatible",
    "entity_attributes_agree",
    "entity_attributes_agree_chinese",
    "entity_attributes_agree_for_language",
    "entity_both_have_proper",
    "entity_cluster_all_coref_dictionary",
    "entity_cluster_exact_string_match",
    "entity_cluster_have_incompatible_modifier",
    "entity_cluster_iwithini",
    "entity_cluster_person_disagree",
    "entity_cluster_same_proper_head_last_word",
    "entity_coref_dictionary",
    "entity_exact_string_match",
    "entity_have_different_location",
    "entity_have_extra_proper_noun",
    "entity_have_incompatible_modifier",
    "entity_heads_agree",
    "entity_is_acronym",
    "entity_is_apposition",
    "entity_is_demonym",
    "entity_is_predicate_nominatives",
    "entity_is_relative_pronoun",
    "entity_is_role_appositive",
    "entity_iwithini",
    "entity_number_in_later_mention",
    "entity_person_disagree",
    "entity_relaxed_exact_string_match",
    "entity_relaxed_heads_agree_between_mentions",
    "entity_same_proper_head_last_word",
    "entity_same_speaker",
    "entity_subject_object",
    "entity_token_distance",
    "entity_words_included",
    "get_speaker_cluster_id",
    "is_acronym",
    "is_context_overlapping",
    "mention_matches_speaker",
    "sentence_context_incompatible",
]
