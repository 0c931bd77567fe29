"""Graph nodes for the conversation engine."""

from roomora.conversation.nodes.classify import classify_node, route_to_target
from roomora.conversation.nodes.restart import restart_node
from roomora.conversation.nodes.location import location_node
from roomora.conversation.nodes.budget import budget_node
from roomora.conversation.nodes.recommend import build_recommendations, recommend_node
from roomora.conversation.nodes.geolocation import geolocation_node
from roomora.conversation.nodes.copy import copy_node

__all__ = [
    "classify_node",
    "route_to_target",
    "restart_node",
    "location_node",
    "budget_node",
    "recommend_node",
    "build_recommendations",
    "geolocation_node",
    "copy_node",
]
