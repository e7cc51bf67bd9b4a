"""Pairwise classifier behind the statistical sieves."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import joblib
import numpy as np
from sklearn.feature_extraction import DictVectorizer

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class PairwiseModel:
    """
    Probability that a (mention, candidate) pair corefers.

    Wraps any scikit-learn estimator exposing ``predict_proba`` together with
    the ``DictVectorizer`` that maps feature dictionaries onto its columns.
    Features unseen at training time are ignored by the vectorizer.
    """

    def __init__(self, estimator: Any, vectorizer: DictVectorizer) -> None:
        if not hasattr(estimator, "predict_proba"):
            raise ConfigurationError(
                f"{type(estimator).__name__} does not provide predict_proba"
            )
        self.estimator = estimator
        self.vectorizer = vectorizer
        self._positive_column = self._find_positive_column(estimator)

    @staticmethod
    def _find_positive_column(estimator: Any) -> int:
        classes = list(getattr(estimator, "classes_", [False, True]))
        for label in (True, 1, "true", "True"):
            if label in classes:
                return classes.index(label)
        raise ConfigurationError(f"Classifier has no positive class among {classes}")

    @classmethod
    def load(cls, path: Path) -> "PairwiseModel":
        """Load a model saved with :meth:`save`.

        The file holds either a mapping with ``estimator`` and
        ``vectorizer`` entries or an ``(estimator, vectorizer)`` pair.
        """
        try:
            payload = joblib.load(path)
        except FileNotFoundError:
            raise ConfigurationError(f"Model file not found: {path}") from None
        if isinstance(payload, Mapping):
            estimator = payload.get("estimator")
            vectorizer = payload.get("vectorizer")
        elif isinstance(payload, (tuple, list)) and len(payload) == 2:
            estimator, vectorizer = payload
        else:
            raise ConfigurationError(f"Unrecognized model file layout: {path}")
        if estimator is None or vectorizer is None:
            raise ConfigurationError(f"Model file {path} lacks an estimator or vectorizer")
        logger.info(f"Loaded pairwise model {type(estimator).__name__} from {path}")
        return cls(estimator, vectorizer)

    def save(self, path: Path) -> None:
        joblib.dump({"estimator": self.estimator, "vectorizer": self.vectorizer}, path)
        logger.info(f"Saved pairwise model to {path}")

    def probability_of_true(self, features: Mapping[str, float]) -> float:
        return float(self.probabilities_of_true([features])[0])

    def probabilities_of_true(self, batch: Sequence[Mapping[str, float]]) -> np.ndarray:
        """Positive-class probability of every feature dictionary in ``batch``."""
        if not batch:
            return np.zeros(0)
        matrix = self.vectorizer.transform(list(batch))
        return self.estimator.predict_proba(matrix)[:, self._positive_column]


def train_pairwise_model(
    examples: Sequence[Mapping[str, float]],
    labels: Sequence[bool],
    estimator: Optional[Any] = None,
) -> PairwiseModel:
    """Fit a vectorizer and estimator on labelled feature dictionaries.

    Defaults to a random forest, the classifier the statistical sieves are
    usually trained with.
    """
    if estimator is None:
        from sklearn.ensemble import RandomForestClassifier

        estimator = RandomForestClassifier(n_estimators=100, random_state=0)
    vectorizer = DictVectorizer()
    matrix = vectorizer.fit_transform(list(examples))
    estimator.fit(matrix, list(labels))
    return PairwiseModel(estimator, vectorizer)
