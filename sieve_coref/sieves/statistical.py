"""Statistical sieve: classifier-scored antecedent selection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..candidates import get_ordered_antecedents
from ..data.mention import Mention
from .base import Sieve
from .features import FeatureExtractor, FeatureFlags
from .model import PairwiseModel

if TYPE_CHECKING:
    from ..data.dictionaries import Dictionaries
    from ..data.document import Document

logger = logging.getLogger(__name__)

DEFAULT_MERGE_THRESHOLD = 0.3


class StatisticalSieve(Sieve):
    """
    Scores every eligible candidate of a mention and links to the best one.

    Candidates are visited nearest sentence first; a merge happens only when
    the highest probability exceeds ``threshold``. Ties go to the candidate
    visited first.
    """

    def __init__(
        self,
        name: str,
        model: PairwiseModel,
        dictionaries: "Dictionaries",
        threshold: float = DEFAULT_MERGE_THRESHOLD,
        feature_flags: Optional[FeatureFlags] = None,
        **kwargs,
    ) -> None:
        super().__init__(name, **kwargs)
        self.model = model
        self.threshold = threshold
        self.extractor = FeatureExtractor(dictionaries, feature_flags, self.mention_types)

    def find_coreferent_antecedent(
        self,
        document: "Document",
        mention: Mention,
        position: int,
        dictionaries: "Dictionaries",
    ) -> None:
        scored: list[Mention] = []
        batch: list[dict[str, float]] = []
        mention_distance = 0
        for sent_dist in range(min(self.max_sentence_distance, mention.sent_num) + 1):
            candidates = get_ordered_antecedents(
                document, mention, mention.sent_num - sent_dist, dictionaries, position=position
            )
            for candidate in candidates:
                if self.skip_for_analysis(candidate, mention) or candidate is mention:
                    continue
                if not self.is_allowed(mention, candidate) or not self.types_match(mention, candidate):
                    continue
                # no cataphora
                if sent_dist == 0 and mention.appear_earlier_than(candidate):
                    continue
                mention_distance += 1
                scored.append(candidate)
                batch.append(
                    self.extractor.extract(document, mention, candidate, mention_distance)
                )

        if not scored:
            return
        probabilities = self.model.probabilities_of_true(batch)
        best = int(probabilities.argmax())
        best_probability = float(probabilities[best])
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{self.name}: mention {mention.mention_id} best candidate "
                f"{scored[best].mention_id} p={best_probability:.3f} of {len(scored)}"
            )
        if best_probability > self.threshold:
            antecedent = scored[best]
            document.merge(mention, antecedent)
            self.record(
                "merge",
                document,
                data={"probability": best_probability},
                rule=self.name,
                mention_id=mention.mention_id,
                antecedent_id=antecedent.mention_id,
            )
