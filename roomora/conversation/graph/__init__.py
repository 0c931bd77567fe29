"""
Graph construction and configuration for the conversation engine.

Import create_conversation_graph from roomora.conversation.graph.build;
the nodes depend on this package's config, so it is not re-exported here.
"""

from roomora.conversation.graph.config import DEFAULT_CONFIG, ConversationConfig

__all__ = ["ConversationConfig", "DEFAULT_CONFIG"]
