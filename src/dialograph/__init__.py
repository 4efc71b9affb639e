"""dialograph - branching dialog graphs driven by semantic similarity.

Nodes carry prompts; edges carry rules scored by text similarity between the
user's utterance and example phrases, gated by world-state conditions and
backed by repeated-failure fallbacks.

Quick start:
    from dialograph import DialogSession, LexicalScorer
    from dialograph.graph.demo import create_demo_graph

    session = DialogSession(create_demo_graph(), LexicalScorer())
    session.start()
    turn = await session.submit("I would like a lamp")
"""

__version__ = "0.1.0"

from dialograph.core.errors import (
    AutoAdvanceDeadEnd,
    ConfigurationError,
    DialographError,
    NotFoundError,
    NotReadyError,
    ValidationError,
)
from dialograph.graph.editor import GraphEditor
from dialograph.graph.models import Edge, Graph, Node
from dialograph.inference.engine import InferenceState, StepResult, TraversalEngine
from dialograph.inference.evaluator import EvaluationResult, RuleEvaluator
from dialograph.layout.levels import compute_levels
from dialograph.persistence.serialization import graph_to_serializable, serializable_to_graph
from dialograph.runtime.session import DialogSession
from dialograph.scoring.base import SimilarityScorer
from dialograph.scoring.lexical import LexicalScorer

__all__ = [
    "__version__",
    "Graph",
    "Node",
    "Edge",
    "GraphEditor",
    "RuleEvaluator",
    "EvaluationResult",
    "TraversalEngine",
    "InferenceState",
    "StepResult",
    "DialogSession",
    "SimilarityScorer",
    "LexicalScorer",
    "compute_levels",
    "graph_to_serializable",
    "serializable_to_graph",
    "DialographError",
    "ConfigurationError",
    "AutoAdvanceDeadEnd",
    "NotReadyError",
    "NotFoundError",
    "ValidationError",
]
