"""
Multi-pass sieve coreference system

Builds the configured sieve sequence once and runs it over documents.
Sieves are applied in order, each seeing the clusters the earlier ones
produced.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .candidates import HeuristicFilter
from .chains import CorefChain, build_chains
from .data.dictionaries import Dictionaries, normalize_language
from .data.document import Document
from .errors import ConfigurationError, CorefError, ResolutionCancelled
from .rules.names import NameMatcher
from .sieves import (
    FeatureFlags,
    PairwiseModel,
    RuleSieve,
    Sieve,
    StatisticalSieve,
    TraceRecorder,
    get_variant,
    is_rule_sieve,
    is_statistical_sieve,
    parse_mention_types,
)
from .utils.config import ConfigManager, split_names

logger = logging.getLogger(__name__)

Interrupt = Callable[[], bool]

# documents between two progress log lines
PROGRESS_INTERVAL = 10


class CorefSystem:
    """
    Runs a fixed sequence of sieves over a document.

    Usage:
        system = CorefSystem.from_config(ConfigManager(path))
        chains = system.resolve(document)
    """

    def __init__(
        self,
        sieves: List[Sieve],
        dictionaries: Dictionaries,
        language: str = "en",
        postprocessing: bool = False,
        remove_singletons: bool = True,
        debug: bool = False,
        heuristic_filter: Optional[HeuristicFilter] = None,
        trace: Optional[TraceRecorder] = None,
    ) -> None:
        self.sieves = sieves
        self.dictionaries = dictionaries
        self.language = normalize_language(language)
        self.postprocessing = postprocessing
        self.remove_singletons = remove_singletons
        self.debug = debug
        self.heuristic_filter = heuristic_filter
        self.trace = trace
        self.documents_processed = 0
        for sieve in sieves:
            sieve.trace = trace

    @classmethod
    def from_config(
        cls,
        config: Union[ConfigManager, Mapping[str, Any], None] = None,
        dictionaries: Optional[Dictionaries] = None,
        models: Optional[Mapping[str, PairwiseModel]] = None,
        name_matcher: Optional[NameMatcher] = None,
    ) -> "CorefSystem":
        """Build the sieve sequence named by ``coref.sieves``.

        Statistical sieves take their classifier from ``models`` or, failing
        that, from the ``model`` path of their sieve options.
        """
        if config is None:
            config = ConfigManager()
        elif not isinstance(config, ConfigManager):
            config = ConfigManager.from_dict(dict(config))
        models = dict(models or {})

        language = normalize_language(config.get("coref.language", "en"))
        if dictionaries is None:
            path = config.get("coref.dictionaries")
            dictionaries = (
                Dictionaries.load(Path(path), language) if path else Dictionaries.for_language(language)
            )
        elif dictionaries.language != language:
            raise ConfigurationError(
                f"Dictionaries are for {dictionaries.language!r}, configuration asks for {language!r}"
            )

        names = config.sieve_names()
        if not names:
            raise ConfigurationError("No sieves configured")

        sieves: List[Sieve] = []
        for name in names:
            common = cls._sieve_options(config, name, language)
            if is_rule_sieve(name):
                sieves.append(
                    RuleSieve(
                        get_variant(name)(),
                        name=name,
                        name_matcher=name_matcher,
                        default_pronoun_agreement=bool(
                            config.get("coref.default_pronoun_agreement", False)
                        ),
                        **common,
                    )
                )
            elif is_statistical_sieve(name):
                model = models.get(name) or cls._load_model(config, name)
                feature_options = config.sieve_option(name, "features", {}) or {}
                try:
                    feature_flags = FeatureFlags(**feature_options)
                except TypeError as e:
                    raise ConfigurationError(f"Bad feature options for {name}: {e}") from e
                sieves.append(
                    StatisticalSieve(
                        name,
                        model,
                        dictionaries,
                        threshold=float(config.sieve_option(name, "merge_threshold", 0.3)),
                        feature_flags=feature_flags,
                        **common,
                    )
                )
            else:
                raise ConfigurationError(f"Unknown sieve: {name}")

        heuristic_filter = None
        if config.get("coref.heuristic_filter.enabled", False):
            heuristic_filter = HeuristicFilter(
                int(config.get("coref.heuristic_filter.max_mention_distance", 50)),
                int(config.get("coref.heuristic_filter.max_mention_distance_with_string_match", 5000)),
            )

        system = cls(
            sieves,
            dictionaries,
            language=language,
            postprocessing=bool(config.get("coref.postprocessing", False)),
            remove_singletons=bool(config.get("coref.remove_singletons", True)),
            debug=bool(config.get("coref.debug", False)),
            heuristic_filter=heuristic_filter,
            trace=TraceRecorder() if config.get("coref.trace", False) else None,
        )
        logger.info(f"Coref system ready with sieves: {', '.join(names)}")
        return system

    @staticmethod
    def _sieve_options(config: ConfigManager, name: str, language: str) -> Dict[str, Any]:
        mention_types = config.sieve_option(name, "mention_types")
        antecedent_types = config.sieve_option(name, "antecedent_types")
        try:
            return {
                "language": language,
                "max_sentence_distance": int(config.sieve_option(name, "max_sentence_distance", 1000)),
                "mention_types": parse_mention_types(mention_types),
                "antecedent_types": parse_mention_types(antecedent_types),
                "mention_type_strings": split_names(mention_types),
                "antecedent_type_strings": split_names(antecedent_types),
                "skip_mention_type": config.sieve_option(name, "skip_mention_type"),
                "skip_antecedent_type": config.sieve_option(name, "skip_antecedent_type"),
            }
        except ValueError as e:
            raise ConfigurationError(f"Bad mention types for sieve {name}: {e}") from e

    @staticmethod
    def _load_model(config: ConfigManager, name: str) -> PairwiseModel:
        path = config.sieve_option(name, "model")
        if not path:
            raise ConfigurationError(f"No model configured for statistical sieve {name}")
        return PairwiseModel.load(Path(path))

    # ========================================================================
    # Resolution
    # ========================================================================

    def resolve(self, document: Document, interrupt: Optional[Interrupt] = None) -> Dict[int, CorefChain]:
        """Run every sieve over ``document`` and return its chains by cluster id.

        ``interrupt`` is polled before each sieve and once after the last;
        when it returns True the run stops with :class:`ResolutionCancelled`.
        """
        try:
            chains = self._resolve(document, interrupt)
        except CorefError:
            raise
        except Exception as e:
            raise CorefError("Error running hybrid coref system") from e

        self.documents_processed += 1
        if self.documents_processed % PROGRESS_INTERVAL == 0:
            logger.info(f"{self.documents_processed} document(s) processed")
        return chains

    def _resolve(self, document: Document, interrupt: Optional[Interrupt]) -> Dict[int, CorefChain]:
        if self.trace is not None:
            self.trace.reset()

        allowed = None
        if self.heuristic_filter is not None:
            allowed = self.heuristic_filter.candidates(document)

        for sieve in self.sieves:
            self._check_interrupt(interrupt, f"sieve {sieve.name}")
            logger.debug(f"Running {sieve.name} on {document.doc_id}")
            sieve.resolve(document, self.dictionaries, allowed)
            if self.debug and not document.check_partition():
                raise CorefError(
                    f"Cluster partition broken after {sieve.name} in document {document.doc_id}"
                )
        self._check_interrupt(interrupt, "end of sieves")

        if self.postprocessing:
            self._postprocess(document)
        return build_chains(document)

    @staticmethod
    def _check_interrupt(interrupt: Optional[Interrupt], phase: str) -> None:
        if interrupt is not None and interrupt():
            raise ResolutionCancelled(phase)

    def _postprocess(self, document: Document) -> None:
        """Drop apposition, copula and relative-pronoun mentions, then singletons."""
        removed = 0
        for cluster_id in list(document.clusters_by_id):
            cluster = document.clusters_by_id[cluster_id]
            for mention in list(cluster.mentions):
                if mention.appositions or mention.predicate_nominatives or mention.relative_pronouns:
                    cluster.remove_mention(mention)
                    mention.cluster_id = mention.mention_id
                    removed += 1
            if not cluster.mentions or (self.remove_singletons and len(cluster) == 1):
                del document.clusters_by_id[cluster_id]
        logger.debug(f"Post-processing removed {removed} mention(s) from {document.doc_id}")
