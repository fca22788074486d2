"""
Message Graph - Declarative builder for node graphs.
Nodes are named transformation functions over a caller-defined state, edges
wire them together either statically or through a routing function. The
builder only accumulates; all checks happen in compile() or at run time.
"""

from typing import Optional, Dict, List, Any, Callable
from enum import Enum
from langchain_core.messages import BaseMessage
from pydantic import BaseModel, ConfigDict, model_validator

# Reserved name of the terminal node. Wire edges and routing results to it.
END = "END"

# The usual state: the conversation so far. Any value works as state.
MessageState = List[BaseMessage]

NodeFunction = Callable[[Any, Any], Any]
RoutingFunction = Callable[[Any, Any], str]


class EdgeType(str, Enum):
    """Edge routing types."""
    STATIC = "static"
    CONDITIONAL = "conditional"


class Node(BaseModel):
    """A named step. `function(ctx, state)` returns the next state or raises."""
    model_config = ConfigDict(frozen=True)

    name: str
    function: NodeFunction


class Edge(BaseModel):
    """A directed edge out of `source`, to a fixed target or a routed one."""
    model_config = ConfigDict(frozen=True)

    source: str
    edge_type: EdgeType = EdgeType.STATIC
    target: Optional[str] = None  # for static edges
    router: Optional[RoutingFunction] = None  # for conditional edges

    @model_validator(mode="after")
    def check_destination(self) -> "Edge":
        if self.edge_type == EdgeType.CONDITIONAL and self.router is None:
            raise ValueError(f"Conditional edge from '{self.source}' needs a router")
        if self.edge_type == EdgeType.STATIC and self.target is None:
            raise ValueError(f"Static edge from '{self.source}' needs a target")
        return self

    def resolve(self, ctx: Any, state: Any) -> Any:
        """Name of the next node. Conditional edges consult the router with
        the state the source node just produced."""
        if self.edge_type == EdgeType.CONDITIONAL:
            return self.router(ctx, state)
        return self.target


class MessageGraph:
    """
    Mutable graph definition: named nodes, edges in registration order and
    a single entry point. Not safe for concurrent mutation; finish building
    before compiling.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._edges: List[Edge] = []
        self._entry_point: str = ""

    # ── Declaration ───────────────────────────────────────────────────

    def add_node(self, name: str, fn: NodeFunction) -> "MessageGraph":
        """Register a node, replacing any node already under that name."""
        self._nodes[name] = Node(name=name, function=fn)
        return self

    def add_edge(self, source: str, target: str) -> "MessageGraph":
        """
        Append a static edge. Several edges may share a source; traversal
        honors the first one registered.
        """
        self._edges.append(Edge(source=source, target=target))
        return self

    def add_conditional_edge(self, source: str, router: RoutingFunction) -> "MessageGraph":
        """Append an edge whose target is `router(ctx, state)` at run time."""
        self._edges.append(
            Edge(source=source, edge_type=EdgeType.CONDITIONAL, router=router)
        )
        return self

    def set_entry_point(self, name: str) -> "MessageGraph":
        self._entry_point = name
        return self

    # ── Accessors ─────────────────────────────────────────────────────

    @property
    def nodes(self) -> Dict[str, Node]:
        return dict(self._nodes)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    @property
    def entry_point(self) -> Optional[str]:
        return self._entry_point or None

    def get_outgoing_edge(self, name: str) -> Optional[Edge]:
        for e in self._edges:
            if e.source == name:
                return e
        return None

    # ── Validation ────────────────────────────────────────────────────

    def validate(self) -> List[str]:
        """
        Report structural problems that would otherwise only surface while
        running. Returns a list of messages; empty means nothing was found.
        """
        problems = []
        names = set(self._nodes)

        if not self._entry_point:
            problems.append("Entry point is not set")
        elif self._entry_point not in names and self._entry_point != END:
            problems.append(f"Entry point '{self._entry_point}' is not a registered node")

        # END needs no registration to terminate a run
        for e in self._edges:
            if e.edge_type == EdgeType.STATIC and e.target != END and e.target not in names:
                problems.append(f"Edge {e.source} -> {e.target}: target '{e.target}' not found")

        for name in self._nodes:
            if name != END and self.get_outgoing_edge(name) is None:
                problems.append(f"Node '{name}' has no outgoing edge")

        # Conditional targets are only known at run time
        has_conditional = any(e.edge_type == EdgeType.CONDITIONAL for e in self._edges)
        if self._entry_point in names and not has_conditional:
            reachable = self._reachable_from(self._entry_point)
            for name in self._nodes:
                if name not in reachable:
                    problems.append(f"Node '{name}' is unreachable from '{self._entry_point}'")

        return problems

    def _reachable_from(self, start: str) -> List[str]:
        seen = []
        current: Optional[str] = start
        while current is not None and current not in seen:
            seen.append(current)
            if current == END:
                break
            edge = self.get_outgoing_edge(current)
            current = edge.target if edge is not None else None
        return seen

    # ── Compilation ───────────────────────────────────────────────────

    def compile(self, strict: Optional[bool] = None):
        """Freeze this definition into a Runnable. See compiler.compile_graph."""
        from msggraph.compiler.compiler import compile_graph
        return compile_graph(self, strict=strict)
