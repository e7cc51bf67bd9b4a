"""Exception types raised by the coreference engine."""

from __future__ import annotations

from typing import Optional


class CorefError(Exception):
    """Base class for every error raised while resolving a document."""


class ConfigurationError(CorefError):
    """Invalid pipeline configuration, raised before any document is touched."""


class ResolutionCancelled(CorefError):
    """The caller's interrupt check fired between two resolution phases."""

    def __init__(self, phase: str) -> None:
        super().__init__(f"Coreference resolution cancelled at {phase}")
        self.phase = phase


class FeatureExtractionError(CorefError):
    """Feature extraction failed for a mention pair; fatal for the document."""

    def __init__(
        self,
        message: str,
        doc_id: Optional[str] = None,
        part: Optional[str] = None,
    ) -> None:
        super().__init__(f"{message} (document {doc_id!r}, part {part!r})")
        self.doc_id = doc_id
        self.part = part
