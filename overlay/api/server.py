"""
Graph Exploration Overlay: Event API Server
===========================================

HTTP surface for a browser front end: UI input events go in, the
reducer-applied frame and the interaction state come out.

Endpoints:
- GET  /health               -> Session status
- GET  /api/v1/autocomplete  -> Search box candidates (static)
- GET  /api/v1/state         -> Interaction state snapshot
- GET  /api/v1/frame         -> Current frame (display overrides applied)
- POST /api/v1/events        -> Dispatch one UI input event

All endpoints are `async def`, so every session mutation runs on the
event loop thread, one event at a time.

Usage:
    GRAPH_OVERLAY_GEXF=graph.gexf uvicorn overlay.api.server:app --reload
"""
import os
from contextlib import asynccontextmanager
from typing import Optional, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from graphdata.contracts.base import Error, ErrorCode, NodeNotFoundError
from graphdata.core.provider import NetworkXGraphProvider
from ..config import SessionConfig
from ..session import ExplorationSession
from ..interaction.contracts import ActionType, InteractionRequest


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================

class EventBody(BaseModel):
    action: str
    node: Optional[str] = None
    query: Optional[str] = None


class EventResponse(BaseModel):
    request_id: str
    action: str
    state_changed: bool
    refreshed: bool
    opened_url: Optional[str] = None
    state: dict


class AutocompleteResponse(BaseModel):
    candidates: List[str]


# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(session: Optional[ExplorationSession] = None) -> FastAPI:
    """
    Build the API around a session.

    Without a session, one is created at startup from the GEXF file named
    by GRAPH_OVERLAY_GEXF.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.session is None:
            gexf_path = os.environ.get("GRAPH_OVERLAY_GEXF")
            if not gexf_path:
                print("[!] GRAPH_OVERLAY_GEXF is not set; no graph loaded.")
            else:
                print(f"[*] Loading graph from: {gexf_path}")
                try:
                    graph = NetworkXGraphProvider.from_gexf(gexf_path)
                    # The browser opens reference pages from opened_url
                    app.state.session = ExplorationSession(
                        graph, config=SessionConfig.from_env(), opener=lambda url: None
                    )
                except Exception as e:
                    print(f"[!] FAILED to load graph: {e}")
                    raise
                print(f"[*] Session ready: {len(graph.nodes())} nodes, {len(graph.edges())} edges.")

        yield

        print("[*] Shutting down exploration session.")
        app.state.session = None

    app = FastAPI(
        title="Graph Exploration Overlay API",
        version="0.1.0",
        description="Search, hover and pin interactions over a node-link graph",
        lifespan=lifespan,
    )
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    def current_session() -> ExplorationSession:
        if app.state.session is None:
            raise HTTPException(status_code=503, detail="No graph loaded")
        return app.state.session

    # =========================================================================
    # ENDPOINTS
    # =========================================================================

    @app.get("/health")
    async def health_check():
        s = current_session()
        return {
            "status": "online",
            "nodes": len(s.graph.nodes()),
            "edges": len(s.graph.edges()),
        }

    @app.get("/api/v1/autocomplete", response_model=AutocompleteResponse)
    async def get_autocomplete():
        return AutocompleteResponse(candidates=list(current_session().autocomplete))

    @app.get("/api/v1/state")
    async def get_state():
        return current_session().snapshot().to_dict()

    @app.get("/api/v1/frame")
    async def get_frame():
        s = current_session()
        try:
            return s.frame.to_dict()
        except TypeError as e:
            raise HTTPException(status_code=501, detail=str(e))

    @app.post("/api/v1/events", response_model=EventResponse)
    async def post_event(body: EventBody):
        s = current_session()
        try:
            action = ActionType.parse(body.action)
        except ValueError as e:
            s.observability.record_rejection(
                Error.create(ErrorCode.UNKNOWN_ACTION, str(e), source_component="http")
            )
            raise HTTPException(status_code=422, detail=str(e))

        try:
            payload = {}
            if body.node is not None:
                payload["node"] = body.node
            if body.query is not None:
                payload["query"] = body.query
            outcome = s.dispatch(InteractionRequest.create(action, source_component="http", **payload))
        except NodeNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))

        return EventResponse(
            request_id=outcome.request_id,
            action=outcome.action.value,
            state_changed=outcome.state_changed,
            refreshed=outcome.refreshed,
            opened_url=outcome.opened_url,
            state=s.snapshot().to_dict(),
        )

    return app


app = create_app()
