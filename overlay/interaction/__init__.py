"""
Interaction Layer

Responsibility:
Translate user intent into interaction state mutations.
"""

from .contracts import ActionType, InteractionRequest, DispatchOutcome
from .search import SearchResolution, resolve_search, autocomplete_candidates
from .hover import resolve_hover, set_hovered_node
from .click import ClickController, ClickState

__all__ = [
    'ActionType', 'InteractionRequest', 'DispatchOutcome',
    'SearchResolution', 'resolve_search', 'autocomplete_candidates',
    'resolve_hover', 'set_hovered_node',
    'ClickController', 'ClickState',
]
