"""
Graph Errors - Exception taxonomy for compiling and running message graphs.
Compile-time failures and run-time failures are separate families so callers
can tell a broken declaration from a broken invocation.
"""

from typing import List


class GraphError(Exception):
    """Base class for every error raised by the graph engine."""


# ── Compile time ──────────────────────────────────────────────────────


class GraphCompileError(GraphError):
    """The graph declaration cannot be turned into a Runnable."""


class EntryPointNotSetError(GraphCompileError):
    """compile() was called before set_entry_point()."""

    def __init__(self):
        super().__init__("entry point not set")


class GraphValidationError(GraphCompileError):
    """Strict compilation found structural problems in the declaration."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(
            f"graph validation failed ({len(self.problems)} problem(s)): "
            + "; ".join(self.problems)
        )


# ── Run time ──────────────────────────────────────────────────────────


class GraphRuntimeError(GraphError):
    """An invocation aborted. `node` names the node the cursor was on."""

    def __init__(self, node: str, message: str):
        self.node = node
        super().__init__(message)


class NodeNotFoundError(GraphRuntimeError):
    """The execution cursor references a name absent from the node map."""

    def __init__(self, node: str):
        super().__init__(node, f"node not found: {node}")


class NoOutgoingEdgeError(GraphRuntimeError):
    """A non-terminal node finished but no edge originates from it."""

    def __init__(self, node: str):
        super().__init__(node, f"no outgoing edge found for node: {node}")


class NodeExecutionError(GraphRuntimeError):
    """A node function raised. The original exception is kept on `error`."""

    def __init__(self, node: str, error: BaseException):
        self.error = error
        super().__init__(node, f"error in node {node}: {error}")
