"""
Exploration Session
===================

Orchestrates one interactive exploration of a graph.

DESIGN PRINCIPLES:
==================
1. One InteractionState per session, threaded explicitly into the
   click controller and the reducers
2. All mutations happen synchronously inside the event handlers below
3. Reducers only read; the session requests a redraw after mutating
4. Every handled event is traceable through observability

EVENT FLOW:
===========
UI input -> handler -> ClickController / resolve_search mutate state
         -> renderer.refresh() -> reducers run on the next frame
"""

from __future__ import annotations
from typing import Callable, Optional, Tuple
from urllib.parse import quote
import webbrowser

from graphdata.contracts.base import NodeId, Error, ErrorCode, NodeNotFoundError
from graphdata.contracts.events import AuditEventType
from graphdata.core.provider import GraphDataProvider
from graphdata.observability import ObservabilityEngine

from .config import SessionConfig
from .state.interaction import InteractionState, StateSnapshot
from .interaction.contracts import ActionType, InteractionRequest, DispatchOutcome
from .interaction.search import resolve_search, autocomplete_candidates, LABEL_KEY
from .interaction.click import ClickController
from .visualization.graph import NetworkGraphView
from .visualization.reducers import NodeReducer, EdgeReducer
from .visualization.renderer import (
    RenderEngine, HeadlessRenderer, Camera, CameraTransition,
)
from .presentation.viewmodels import (
    SearchBoxViewModel, FocusViewModel, build_search_box, build_focus,
)


UrlOpener = Callable[[str], object]


class ExplorationSession:
    """
    Interactive exploration overlay over one graph and one renderer.

    Without an explicit renderer a HeadlessRenderer is created, whose
    frames are available through `frame`.
    """

    def __init__(
        self,
        graph: GraphDataProvider,
        renderer: Optional[RenderEngine] = None,
        config: Optional[SessionConfig] = None,
        opener: Optional[UrlOpener] = None
    ):
        self._config = config or SessionConfig()
        self._graph = graph
        self._observability = ObservabilityEngine(self._config.observability)
        self._opener = opener or webbrowser.open

        if renderer is None:
            camera = Camera(
                min_ratio=self._config.min_camera_ratio,
                max_ratio=self._config.max_camera_ratio,
                zoom_ratio=self._config.zoom_ratio,
            )
            renderer = HeadlessRenderer(graph, camera=camera, on_frame=self._record_frame)
        self._renderer = renderer

        self._state = InteractionState()
        self._clicks = ClickController(self._state, graph)
        self._refreshes = 0
        # Pin put in place by an exact search match, released when the search clears
        self._search_pin: Optional[NodeId] = None

        # Static for the session
        self._candidates = autocomplete_candidates(graph)

        self._renderer.set_node_reducer(NodeReducer(
            graph, self._state,
            muted_color=self._config.muted_color,
            on_error=self._record_error,
        ))
        self._renderer.set_edge_reducer(EdgeReducer(
            graph, self._state,
            on_error=self._record_error,
        ))

        self._observability.log_audit(
            action="session_started",
            event_type=AuditEventType.SYSTEM,
            metadata={
                "node_count": str(len(graph.nodes())),
                "edge_count": str(len(graph.edges())),
            },
        )

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def state(self) -> InteractionState:
        """Live state. Callers outside the session must treat it as read-only."""
        return self._state

    @property
    def graph(self) -> GraphDataProvider:
        return self._graph

    @property
    def renderer(self) -> RenderEngine:
        return self._renderer

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def observability(self) -> ObservabilityEngine:
        return self._observability

    @property
    def autocomplete(self) -> Tuple[str, ...]:
        return self._candidates

    @property
    def click_controller(self) -> ClickController:
        return self._clicks

    def snapshot(self) -> StateSnapshot:
        return self._state.snapshot()

    @property
    def frame(self) -> NetworkGraphView:
        if not isinstance(self._renderer, HeadlessRenderer):
            raise TypeError("Frames are only available from a HeadlessRenderer")
        return self._renderer.frame

    def search_box(self) -> SearchBoxViewModel:
        selected = self._state.selected_node
        return build_search_box(
            self.snapshot(),
            self._candidates,
            None if selected is None else self._label_of(selected),
        )

    def focus(self) -> FocusViewModel:
        hovered = self._state.hovered_node
        return build_focus(
            self.snapshot(),
            None if hovered is None else self._label_of(hovered),
        )

    # =========================================================================
    # SEARCH
    # =========================================================================

    def set_search_query(self, query: str) -> bool:
        """
        Apply a new query. Returns whether the state changed.

        An exact unique match selects the node, pins it like a click and
        moves the camera onto it. An empty query clears the search and
        releases the pin if the search put it there.
        """
        if not isinstance(query, str):
            raise ValueError(f"query must be a string, got {type(query).__name__}")

        state = self._state
        before = state.snapshot()
        state.search_query = query

        resolution = resolve_search(
            query, self._graph,
            on_error=lambda error: self._record_error(error, layer="search"),
        )

        if resolution.is_exact:
            node = resolution.selected_node
            state.selected_node = node
            state.suggestions = None
            self._clicks.apply_selection(node)
            self._search_pin = node
            self._move_camera_to(node)
            outcome = "exact"
        elif query:
            state.selected_node = None
            state.suggestions = resolution.suggestions
            self._observability.collect_metric("search_match_count", len(resolution.suggestions))
            outcome = "suggestions"
        else:
            self._clear_search()
            outcome = "cleared"

        self._request_refresh()
        self._observability.log_audit(
            action="query_resolved",
            layer="search",
            entity_id=state.selected_node,
            entity_type="node" if state.selected_node else None,
            event_type=AuditEventType.STATE_CHANGE,
            metadata={
                "query": query,
                "outcome": outcome,
                "suggestion_count": "" if state.suggestions is None else str(len(state.suggestions)),
            },
        )
        return state.snapshot() != before

    def blur_search(self) -> bool:
        """Leaving the search box clears the query."""
        return self.set_search_query("")

    def _clear_search(self):
        state = self._state
        pinned = self._search_pin
        if pinned is not None and state.clicked_node == pinned:
            self._clicks.release()
            self._observability.log_audit(
                action="pin_released",
                layer="click",
                entity_id=pinned,
                entity_type="node",
                metadata={"reason": "search_cleared"},
            )
        self._search_pin = None
        state.selected_node = None
        state.suggestions = None

    def _move_camera_to(self, node: NodeId):
        position = self._renderer.get_node_display_position(node)
        transition = self._renderer.get_camera().animate_to(
            position, duration=self._config.selection_camera_duration_ms
        )
        self._record_camera(transition)

    # =========================================================================
    # POINTER
    # =========================================================================

    def pointer_enter(self, node: NodeId) -> bool:
        self._require_node(node)
        changed = self._clicks.enter(node)
        if changed:
            self._observability.log_audit(
                action="hover_entered", layer="hover", entity_id=node, entity_type="node"
            )
            self._request_refresh()
        return changed

    def pointer_leave(self, node: NodeId) -> bool:
        self._require_node(node)
        changed = self._clicks.leave(node)
        if changed:
            self._observability.log_audit(
                action="hover_left", layer="hover", entity_id=node, entity_type="node"
            )
            self._request_refresh()
        return changed

    def pointer_click(self, node: NodeId) -> bool:
        self._require_node(node)
        changed = self._clicks.click(node)
        # A click takes ownership of the pin, whichever way it went
        self._search_pin = None
        self._observability.log_audit(
            action="pinned" if self._state.click_mode else "pin_released",
            layer="click",
            entity_id=node,
            entity_type="node",
            event_type=AuditEventType.STATE_CHANGE,
        )
        if changed:
            self._request_refresh()
        return changed

    def pointer_double_click(self, node: NodeId) -> str:
        """Open the external reference page for node. State is untouched."""
        self._require_node(node)
        url = self._config.reference_url_template.format(query=quote(node, safe=""))
        self._opener(url)
        self._observability.log_audit(
            action="reference_opened",
            entity_id=node,
            entity_type="node",
            metadata={"url": url},
        )
        return url

    def _require_node(self, node: NodeId):
        if not self._graph.has_node(node):
            raise NodeNotFoundError(f"Node {node!r} not in graph", node)

    # =========================================================================
    # CAMERA BUTTONS
    # =========================================================================

    def zoom_in(self) -> CameraTransition:
        transition = self._renderer.get_camera().animated_zoom(duration=self._config.zoom_duration_ms)
        self._record_camera(transition)
        return transition

    def zoom_out(self) -> CameraTransition:
        transition = self._renderer.get_camera().animated_unzoom(duration=self._config.zoom_duration_ms)
        self._record_camera(transition)
        return transition

    def reset_zoom(self) -> CameraTransition:
        transition = self._renderer.get_camera().animated_reset(duration=self._config.zoom_duration_ms)
        self._record_camera(transition)
        return transition

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def dispatch(self, request: InteractionRequest) -> DispatchOutcome:
        """
        Route one UI input event to its handler.

        Requests with an unknown action or a malformed payload are recorded
        as rejections and raise ValueError before any state is touched.
        """
        action = request.action
        if not isinstance(action, ActionType):
            self._reject(request, ErrorCode.UNKNOWN_ACTION, f"Unknown action type: {action!r}")

        node = None
        query = ""
        try:
            if action.targets_node:
                node = request.node
            elif action is ActionType.SEARCH_INPUT:
                query = request.query
        except ValueError as e:
            self._reject(request, ErrorCode.INVALID_PAYLOAD, str(e))

        self._observability.collect_metric(
            "interaction_events_total", 1, {"action": action.value}
        )

        refreshes_before = self._refresh_count()
        opened_url = None
        notes = {}

        if action is ActionType.SEARCH_INPUT:
            changed = self.set_search_query(query)
        elif action is ActionType.SEARCH_BLUR:
            changed = self.blur_search()
        elif action is ActionType.POINTER_ENTER:
            changed = self.pointer_enter(node)
        elif action is ActionType.POINTER_LEAVE:
            changed = self.pointer_leave(node)
        elif action is ActionType.POINTER_CLICK:
            changed = self.pointer_click(node)
        elif action is ActionType.POINTER_DOUBLE_CLICK:
            opened_url = self.pointer_double_click(node)
            changed = False
        else:
            if action is ActionType.ZOOM_IN:
                transition = self.zoom_in()
            elif action is ActionType.ZOOM_OUT:
                transition = self.zoom_out()
            else:
                transition = self.reset_zoom()
            notes["camera_ratio"] = str(transition.target.ratio)
            changed = False

        return DispatchOutcome(
            request_id=request.request_id,
            action=action,
            state_changed=changed,
            refreshed=self._refresh_count() != refreshes_before,
            opened_url=opened_url,
            notes=notes,
        )

    def _reject(self, request: InteractionRequest, code: ErrorCode, message: str):
        self._observability.record_rejection(Error.create(
            code, message,
            request_id=request.request_id,
            source_component=request.source_component,
        ))
        raise ValueError(message)

    def _refresh_count(self) -> int:
        return self._refreshes

    def _request_refresh(self):
        self._refreshes += 1
        self._renderer.refresh()

    # =========================================================================
    # OBSERVABILITY HOOKS
    # =========================================================================

    def _record_error(self, error: Error, layer: str = "render"):
        self._observability.record_error(error, layer=layer)

    def _record_frame(self, frame: NetworkGraphView):
        self._observability.collect_metric("frames_rendered_total", 1)

    def _record_camera(self, transition: CameraTransition):
        self._observability.collect_metric(
            "camera_transitions_total", 1, {"kind": transition.kind}
        )
        self._observability.log_audit(
            action=f"camera_{transition.kind}",
            layer="render",
            event_type=AuditEventType.RENDER,
            metadata={
                "x": str(transition.target.x),
                "y": str(transition.target.y),
                "ratio": str(transition.target.ratio),
                "duration_ms": str(transition.duration_ms),
            },
        )

    def _label_of(self, node: NodeId) -> Optional[str]:
        try:
            return str(self._graph.get_node_attribute(node, LABEL_KEY))
        except LookupError:
            return None
