"""
Presentation Contracts

Responsibility:
ViewModels for the UI chrome around the graph (search box, focus panel).
Built from a state snapshot; no interaction logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from ..state.interaction import StateSnapshot


@dataclass(frozen=True)
class SearchBoxViewModel:
    """ViewModel for the search input and its datalist."""
    query: str
    candidates: Tuple[str, ...]  # static for the session
    suggestion_count: Optional[int]  # None when no search is active
    selected_label: Optional[str]

    @property
    def has_no_results(self) -> bool:
        return self.suggestion_count == 0


@dataclass(frozen=True)
class FocusViewModel:
    """ViewModel for the hovered / pinned node panel."""
    focused_node: Optional[str]
    focused_label: Optional[str]
    neighbor_count: int
    is_pinned: bool


def build_search_box(
    snapshot: StateSnapshot,
    candidates: Tuple[str, ...],
    selected_label: Optional[str]
) -> SearchBoxViewModel:
    return SearchBoxViewModel(
        query=snapshot.search_query,
        candidates=candidates,
        suggestion_count=None if snapshot.suggestions is None else len(snapshot.suggestions),
        selected_label=selected_label,
    )


def build_focus(snapshot: StateSnapshot, focused_label: Optional[str]) -> FocusViewModel:
    neighbors = snapshot.hovered_neighbors
    return FocusViewModel(
        focused_node=snapshot.hovered_node,
        focused_label=focused_label,
        neighbor_count=0 if neighbors is None else len(neighbors),
        is_pinned=snapshot.click_mode,
    )
