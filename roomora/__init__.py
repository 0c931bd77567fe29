"""
Roomora: location-aware hotel recommendations and a guided booking assistant.

This package contains:
- shared/: Common infrastructure (settings, errors, geo math, LLM client, logging)
- candidates/: POI-backed candidate source with synthetic fallback and catalog
- scoring/: Desirability scoring, ranking and filtering
- routing/: Route planner over the routing service
- recommendations/: "Hotels near me" explorer and its API
- conversation/: Location/budget dialogue built on LangGraph, and its API
"""

from roomora.candidates.source import CandidateSource
from roomora.conversation.engine import ConversationEngine
from roomora.recommendations.explorer import NearbyExplorer
from roomora.routing.planner import RoutePlanner

__all__ = ["CandidateSource", "ConversationEngine", "NearbyExplorer", "RoutePlanner"]
