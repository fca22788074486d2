"""
Shared fixtures for the msggraph test suite.
"""
import sys
import os
import pytest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set env vars before any imports that read them
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("MSGGRAPH_LOG_LEVEL", "WARNING")
os.environ["MSGGRAPH_STRICT_COMPILE"] = "false"

from langchain_core.messages import AIMessage, HumanMessage, ToolMessage  # noqa: E402


def append_ai(text):
    """Node function that appends an AI message with `text`."""
    def node(_ctx, state):
        return state + [AIMessage(content=text)]
    return node


def passthrough(_ctx, state):
    return state


def as_pairs(messages):
    """(type, content) pairs for comparing message lists."""
    return [(m.type, m.content) for m in messages]


@pytest.fixture
def graph():
    """Fresh MessageGraph instance."""
    from msggraph.compiler.graph import MessageGraph
    return MessageGraph()


@pytest.fixture
def human_input():
    return [HumanMessage(content="Input")]


@pytest.fixture
def linear_graph(graph):
    """node1 -> node2 -> END, each node appending one AI message."""
    from msggraph.compiler.graph import END
    graph.add_node("node1", append_ai("Node 1"))
    graph.add_node("node2", append_ai("Node 2"))
    graph.add_edge("node1", "node2")
    graph.add_edge("node2", END)
    graph.set_entry_point("node1")
    return graph


@pytest.fixture
def calculator_graph(graph):
    """node1 routes to `calculator` when its output mentions it, else to node2."""
    from msggraph.compiler.graph import END

    def route(_ctx, state):
        if "calculator" in state[-1].content:
            return "calculator"
        return "node2"

    def calculator(_ctx, state):
        return state + [ToolMessage(content="1+1=2", tool_call_id="calc-1")]

    graph.add_node("node1", append_ai("function calling: use calculator"))
    graph.add_node("node2", append_ai("Node 2"))
    graph.add_node("calculator", calculator)
    graph.add_conditional_edge("node1", route)
    graph.add_edge("node2", END)
    graph.add_edge("calculator", END)
    graph.set_entry_point("node1")
    return graph
