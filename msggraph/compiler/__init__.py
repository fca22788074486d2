"""Graph Compiler - Build message graphs and compile them into Runnables"""
from .graph import END, MessageGraph, MessageState, Node, Edge, EdgeType
from .compiler import Runnable, compile_graph
from .context import RunContext
from .errors import (
    GraphError,
    GraphCompileError,
    EntryPointNotSetError,
    GraphValidationError,
    GraphRuntimeError,
    NodeNotFoundError,
    NoOutgoingEdgeError,
    NodeExecutionError,
)

__all__ = [
    "END",
    "MessageGraph",
    "MessageState",
    "Node",
    "Edge",
    "EdgeType",
    "Runnable",
    "compile_graph",
    "RunContext",
    "GraphError",
    "GraphCompileError",
    "EntryPointNotSetError",
    "GraphValidationError",
    "GraphRuntimeError",
    "NodeNotFoundError",
    "NoOutgoingEdgeError",
    "NodeExecutionError",
]
