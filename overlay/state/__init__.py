"""
State Layer

Responsibility:
Hold the interaction state that the reducers read each frame.

PRINCIPLES:
1. One owned state object per session, no module globals
2. Mutated only by the interaction layer
3. Immutable snapshots for anything that leaves the session
"""

from .interaction import InteractionState, StateSnapshot

__all__ = ['InteractionState', 'StateSnapshot']
