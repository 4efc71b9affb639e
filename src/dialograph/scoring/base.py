"""Similarity scorer contract."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SimilarityScorer(Protocol):
    """Scores an utterance against an ordered list of example phrases.

    Readiness and threshold are read at every evaluation, so implementations
    may change them at any time (e.g. once a model finishes loading).
    """

    def ready(self) -> bool:
        """Whether score() may be called."""
        ...

    def threshold(self) -> float:
        """Scores must be strictly greater than this to count as a match."""
        ...

    async def score(self, utterance: str, candidates: list[str]) -> list[float]:
        """Similarity of `utterance` to each candidate, higher is more similar.

        Returns one score per candidate, in candidate order. Never called with
        an empty candidate list.
        """
        ...
