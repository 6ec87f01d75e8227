"""
Graph Data Package

Layers:
- contracts: immutable shared types and error records
- core: read-only graph data provider over networkx
- observability: audit log and metrics collection
"""
