"""
Search Resolver

Responsibility:
Turn a raw query into either an exact single match (auto-select) or a
suggestion set. Pure: the caller applies the result to the state.

MATCHING RULES:
===============
1. Empty query -> no selection, no suggestions (search cleared)
2. Case-insensitive substring match against every node label
3. Exactly one match whose label equals the query (case-sensitive)
   -> selected node, no suggestions
4. Anything else -> the full matching set as suggestions, which may be
   empty ("no results", every node and edge hidden)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple

from graphdata.contracts.base import NodeId, ErrorSink, GraphLookupError, ErrorCode, Error
from graphdata.core.provider import GraphDataProvider


LABEL_KEY = "label"


@dataclass(frozen=True)
class SearchResolution:
    """Result of resolving one query."""
    selected_node: Optional[NodeId] = None
    suggestions: Optional[FrozenSet[NodeId]] = None

    @property
    def is_exact(self) -> bool:
        return self.selected_node is not None

    @property
    def is_cleared(self) -> bool:
        return self.selected_node is None and self.suggestions is None


def resolve_search(
    query: str,
    graph: GraphDataProvider,
    on_error: Optional[ErrorSink] = None
) -> SearchResolution:
    if not query:
        return SearchResolution()

    matches = _matching_nodes(query, graph, on_error)

    if len(matches) == 1 and matches[0][1] == query:
        return SearchResolution(selected_node=matches[0][0])

    return SearchResolution(suggestions=frozenset(node for node, _ in matches))


def _matching_nodes(
    query: str,
    graph: GraphDataProvider,
    on_error: Optional[ErrorSink]
) -> List[Tuple[NodeId, str]]:
    lc_query = query.lower()
    matches = []
    for node in graph.nodes():
        try:
            label = str(graph.get_node_attribute(node, LABEL_KEY))
        except LookupError as exc:
            # Unlabelled nodes never match
            if on_error is not None:
                on_error(_lookup_error(exc, node))
            continue
        if lc_query in label.lower():
            matches.append((node, label))
    return matches


def _lookup_error(exc: LookupError, node: NodeId) -> Error:
    if isinstance(exc, GraphLookupError):
        return exc.to_error().with_context("stage", "search")
    return Error.create(ErrorCode.ATTRIBUTE_MISSING, str(exc), entity_id=node, stage="search")


def autocomplete_candidates(graph: GraphDataProvider) -> Tuple[str, ...]:
    """
    Labels offered by the search box, in provider order.

    Computed once at session start; unlabelled nodes are skipped.
    """
    labels = []
    for node in graph.nodes():
        try:
            labels.append(str(graph.get_node_attribute(node, LABEL_KEY)))
        except LookupError:
            continue
    return tuple(labels)
