"""Pluggable similarity scorers."""

from dialograph.scoring.base import SimilarityScorer
from dialograph.scoring.embedding import EmbeddingScorer
from dialograph.scoring.factory import build_scorer
from dialograph.scoring.lexical import LexicalScorer

__all__ = ["SimilarityScorer", "LexicalScorer", "EmbeddingScorer", "build_scorer"]
