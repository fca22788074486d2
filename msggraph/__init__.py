"""
msggraph - a small directed-graph engine that threads a state value (usually a
list of chat messages) through named nodes, with static or routed edges.
"""
from msggraph.compiler import *  # noqa: F401,F403
from msggraph.compiler import __all__ as _compiler_all
from msggraph.config.log import configure_logging

__version__ = "0.1.0"

__all__ = list(_compiler_all) + ["configure_logging"]
