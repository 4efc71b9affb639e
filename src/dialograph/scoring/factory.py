"""Build a scorer from configuration."""

from dialograph.config.settings import ScorerConfig
from dialograph.scoring.base import SimilarityScorer
from dialograph.scoring.embedding import DEFAULT_EMBEDDING_THRESHOLD, EmbeddingScorer
from dialograph.scoring.lexical import DEFAULT_LEXICAL_THRESHOLD, LexicalScorer


def build_scorer(config: ScorerConfig) -> SimilarityScorer:
    """Create the configured scorer. Embedding scorers still need `await load()`."""
    if config.provider == "embedding":
        return EmbeddingScorer(
            model_name=config.model,
            threshold=(
                config.threshold if config.threshold is not None else DEFAULT_EMBEDDING_THRESHOLD
            ),
            cache_dir=config.cache_dir,
        )
    return LexicalScorer(
        threshold=config.threshold if config.threshold is not None else DEFAULT_LEXICAL_THRESHOLD
    )
