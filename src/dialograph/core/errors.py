"""Core dialograph errors."""


class DialographError(Exception):
    """Base class for all dialograph errors."""

    pass


class ConfigurationError(DialographError):
    """Raised when a graph is structurally unusable (fatal, not retried)."""

    pass


class AutoAdvanceDeadEnd(ConfigurationError):
    """Auto-advance node has no outgoing edge under the current world."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Auto-advance node '{node_id}' has no outgoing edges")


class NotReadyError(DialographError):
    """Raised when the similarity scorer is not ready yet."""

    pass


class NotFoundError(DialographError):
    """Raised when a graph or node cannot be found."""

    pass


class ValidationError(DialographError):
    """Raised when an editing operation would break graph invariants."""

    pass


class ScorerError(DialographError):
    """Raised when a scorer violates its contract."""

    pass


class PersistenceError(DialographError):
    """Raised when a graph store fails to read or write."""

    pass


class SessionBusyError(DialographError):
    """Raised when an utterance is submitted while another is being evaluated."""

    pass
