"""
Graph Compiler - Freezes a MessageGraph into an executable Runnable.

Execution Loop:
1. Look up the node under the cursor (unknown name -> NodeNotFoundError)
2. Run its function on the current state (exception -> NodeExecutionError)
3. Stop if the node just run is END
4. Follow the first edge registered for the node (none -> NoOutgoingEdgeError)

Structural checks beyond "entry point is set" are deferred to run time
unless strict compilation is requested.
"""

import inspect
import logging
from types import MappingProxyType
from typing import Optional, Dict, List, Any, Mapping

from msggraph.compiler.context import RunContext
from msggraph.compiler.errors import (
    EntryPointNotSetError, GraphValidationError,
    NodeNotFoundError, NoOutgoingEdgeError, NodeExecutionError,
)
from msggraph.compiler.graph import END, Edge, Node, MessageGraph
from msggraph.config.settings import settings

logger = logging.getLogger(__name__)


class Runnable:
    """
    Compiled, immutable form of a MessageGraph. Holds its own copy of the
    nodes, edges and entry point, so later changes to the builder are not
    seen. All per-run state lives on the call stack; one Runnable may be
    invoked concurrently as long as the node functions allow it.
    """

    def __init__(self, nodes: Mapping[str, Node], edges: List[Edge], entry_point: str):
        self._nodes: Mapping[str, Node] = MappingProxyType(dict(nodes))
        self._edges = tuple(edges)
        self._entry_point = entry_point

    def invoke(self, ctx: Any, state: Any) -> Any:
        """
        Run the graph from the entry point and return the final state.

        `ctx` is handed unchanged to every node and routing function; pass
        None to get a fresh RunContext. Raises a GraphRuntimeError subclass
        on the first failure; no partial state is returned.
        """
        ctx = self._context(ctx)
        current = self._entry_point
        step = 0

        while True:
            node = self._lookup(current)
            if node is None:
                break
            step += 1
            logger.debug(f"[GRAPH] Step {step}: running '{current}'")
            try:
                state = _require_sync(node.function(ctx, state), f"node '{current}'")
            except Exception as e:
                raise NodeExecutionError(current, e) from e

            if current == END:
                break
            current = _require_sync(
                self._outgoing(current).resolve(ctx, state), f"router of '{current}'"
            )

        logger.debug(f"[GRAPH] Finished after {step} step(s)")
        return state

    async def ainvoke(self, ctx: Any, state: Any) -> Any:
        """
        Async variant of invoke(). Node and routing functions may be plain
        callables or coroutine functions; awaitable results are awaited.
        The loop is still strictly sequential.
        """
        ctx = self._context(ctx)
        current = self._entry_point
        step = 0

        while True:
            node = self._lookup(current)
            if node is None:
                break
            step += 1
            logger.debug(f"[GRAPH] Step {step}: running '{current}' (async)")
            try:
                state = node.function(ctx, state)
                if inspect.isawaitable(state):
                    state = await state
            except Exception as e:
                raise NodeExecutionError(current, e) from e

            if current == END:
                break
            current = self._outgoing(current).resolve(ctx, state)
            if inspect.isawaitable(current):
                current = await current

        logger.debug(f"[GRAPH] Finished after {step} step(s)")
        return state

    # ── Helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _context(ctx: Any) -> Any:
        return ctx if ctx is not None else RunContext()

    def _lookup(self, name: str) -> Optional[Node]:
        """Node under the cursor. None means an unregistered END was reached."""
        node = self._nodes.get(name)
        if node is None:
            if name == END:
                return None
            raise NodeNotFoundError(name)
        return node

    def _outgoing(self, name: str) -> Edge:
        # First match in registration order wins
        for edge in self._edges:
            if edge.source == name:
                logger.debug(f"[GRAPH] Following {edge.edge_type.value} edge from '{name}'")
                return edge
        raise NoOutgoingEdgeError(name)


def _require_sync(value: Any, owner: str) -> Any:
    """Reject awaitables reaching the sync loop; they need ainvoke()."""
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise TypeError(f"{owner} returned an awaitable; use Runnable.ainvoke() for async functions")
    return value


def compile_graph(graph: MessageGraph, strict: Optional[bool] = None) -> Runnable:
    """
    Compile a MessageGraph into a Runnable.

    Only the entry point is required. With `strict` (defaults to
    settings.strict_compile) the graph is also checked for dangling edges,
    dead ends and unreachable nodes, raising GraphValidationError.
    """
    entry = graph.entry_point
    if not entry:
        raise EntryPointNotSetError()

    if strict is None:
        strict = settings.strict_compile
    if strict:
        problems = graph.validate()
        if problems:
            raise GraphValidationError(problems)

    nodes: Dict[str, Node] = graph.nodes
    edges = graph.edges
    logger.info(
        f"[COMPILE] Compiled graph: {len(nodes)} node(s), {len(edges)} edge(s), "
        f"entry '{entry}'{' (strict)' if strict else ''}"
    )
    return Runnable(nodes, edges, entry)
