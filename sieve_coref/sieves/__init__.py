"""Sieves: deterministic rule passes and classifier-scored passes."""

from . import options  # noqa: F401  registers the rule variants
from .base import Sieve, matched_mention_type, parse_mention_types
from .cascade import Decision, PairContext, Rule, Verdict, fold_rules, run_rules
from .deterministic import RuleSieve
from .features import FeatureExtractor, FeatureFlags
from .model import PairwiseModel, train_pairwise_model
from .options import RuleFlags
from .registry import get_variant, is_rule_sieve, is_statistical_sieve, list_registered_variants
from .statistical import DEFAULT_MERGE_THRESHOLD, StatisticalSieve
from .trace import TraceEvent, TraceRecorder

__all__ = [
    "DEFAULT_MERGE_THRESHOLD",
    "Decision",
    "FeatureExtractor",
    "FeatureFlags",
    "PairContext",
    "PairwiseModel",
    "Rule",
    "RuleFlags",
    "RuleSieve",
    "Sieve",
    "StatisticalSieve",
    "TraceEvent",
    "TraceRecorder",
    "Verdict",
    "fold_rules",
    "get_variant",
    "is_rule_sieve",
    "is_statistical_sieve",
    "list_registered_variants",
    "matched_mention_type",
    "parse_mention_types",
    "run_rules",
    "train_pairwise_model",
]
