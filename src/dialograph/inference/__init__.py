"""Inference: rule evaluation and graph traversal."""

from dialograph.inference.engine import InferenceState, StepResult, TraversalEngine
from dialograph.inference.evaluator import (
    EvaluationResult,
    RuleEvaluator,
    ScoredCandidate,
    ScoredRule,
)
from dialograph.inference.tester import NodeTester, NodeTestReport, rule_label

__all__ = [
    "RuleEvaluator",
    "EvaluationResult",
    "ScoredRule",
    "ScoredCandidate",
    "TraversalEngine",
    "InferenceState",
    "StepResult",
    "NodeTester",
    "NodeTestReport",
    "rule_label",
]
