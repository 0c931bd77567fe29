"""
Graph construction for the conversation engine.

Builds and compiles the LangGraph workflow that handles one turn.
"""

from typing import Callable

from langgraph.graph import END, StateGraph

from roomora.conversation.context import EngineContext
from roomora.conversation.intents import TARGETS
from roomora.conversation.nodes.budget import budget_node
from roomora.conversation.nodes.classify import classify_node, route_to_target
from roomora.conversation.nodes.copy import copy_node
from roomora.conversation.nodes.geolocation import geolocation_node
from roomora.conversation.nodes.location import location_node
from roomora.conversation.nodes.recommend import recommend_node
from roomora.conversation.nodes.restart import restart_node
from roomora.conversation.schemas import ConversationGraphState


STEP_NODES = {
    "restart": restart_node,
    "location": location_node,
    "budget": budget_node,
    "recommend": recommend_node,
    "geolocation": geolocation_node,
}


def _bind(node: Callable, context: EngineContext) -> Callable:
    """Close a node function over the engine context."""

    def run(state: ConversationGraphState) -> dict:
        return node(state, context)

    run.__name__ = node.__name__
    return run


def create_conversation_graph(context: EngineContext):
    """
    Create and compile the LangGraph workflow for one conversation turn.

    The graph structure is:
        Entry → classify → route_to_target()
                             ├→ restart ────┐
                             ├→ location ───┤
                             ├→ budget ─────┼→ copy → END
                             ├→ recommend ──┤
                             └→ geolocation ┘

    Args:
        context: Candidate pool, limits and optional copy client

    Returns:
        Compiled LangGraph application ready for execution.
    """
    graph = StateGraph(ConversationGraphState)

    graph.add_node("classify", _bind(classify_node, context))
    for name in TARGETS:
        graph.add_node(name, _bind(STEP_NODES[name], context))
    graph.add_node("copy", _bind(copy_node, context))

    graph.set_entry_point("classify")

    graph.add_conditional_edges(
        "classify",
        route_to_target,
        {name: name for name in TARGETS},
    )

    for name in TARGETS:
        graph.add_edge(name, "copy")

    graph.add_edge("copy", END)

    return graph.compile()
