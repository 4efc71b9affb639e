"""Bag-of-words cosine scorer.

Offline and deterministic; good enough for authoring and tests, and the
default when no embedding model is configured.
"""

import re

import numpy as np

_TOKEN = re.compile(r"[a-z0-9']+")

DEFAULT_LEXICAL_THRESHOLD = 0.5


def tokenize(text: str) -> list[str]:
    return _TOKEN.findall(text.lower())


class LexicalScorer:
    """Cosine similarity between token count vectors."""

    def __init__(self, threshold: float = DEFAULT_LEXICAL_THRESHOLD):
        self._threshold = threshold

    def ready(self) -> bool:
        return True

    def threshold(self) -> float:
        return self._threshold

    def set_threshold(self, threshold: float) -> None:
        self._threshold = threshold

    async def score(self, utterance: str, candidates: list[str]) -> list[float]:
        texts = [tokenize(utterance), *(tokenize(c) for c in candidates)]
        vocab = {token: i for i, token in enumerate(sorted({t for toks in texts for t in toks}))}
        if not vocab:
            return [0.0] * len(candidates)

        counts = np.zeros((len(texts), len(vocab)))
        for row, tokens in enumerate(texts):
            for token in tokens:
                counts[row, vocab[token]] += 1

        norms = np.linalg.norm(counts, axis=1)
        query, query_norm = counts[0], norms[0]
        scores = []
        for row in range(1, len(texts)):
            denom = query_norm * norms[row]
            scores.append(float(counts[row] @ query / denom) if denom else 0.0)
        return scores
