import uvicorn
import os

if __name__ == "__main__":
    if not os.environ.get("GRAPH_OVERLAY_GEXF"):
        print("[!] Set GRAPH_OVERLAY_GEXF to the graph file to explore.")

    print("Starting Exploration Overlay API Server...")
    print("Docs available at: http://localhost:8000/docs")

    uvicorn.run(
        "overlay.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
