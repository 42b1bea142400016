"""Search pipeline services.

Leaves first: EventStore, filter_engine, lexical_ranker, SemanticRetriever,
QueryInterpreter, and the SearchService that ties them together.
"""

from eventfinder.services.event_store import EventStore
from eventfinder.services.filter_engine import filter_events
from eventfinder.services.lexical_ranker import rank_events
from eventfinder.services.query_interpreter import (
    HeuristicQueryStrategy,
    LLMQueryStrategy,
    QueryInterpreter,
    QueryStrategy,
)
from eventfinder.services.search_service import SearchService, SearchState
from eventfinder.services.semantic_retriever import SemanticRetriever

__all__ = [
    "EventStore",
    "HeuristicQueryStrategy",
    "LLMQueryStrategy",
    "QueryInterpreter",
    "QueryStrategy",
    "SearchService",
    "SearchState",
    "SemanticRetriever",
    "filter_events",
    "rank_events",
]
