"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Edge, GraphError
"""

from graph.edge  import Edge
from graph.graph import Graph, GraphError

__all__ = [
    "Edge",
    "Graph",
    "GraphError",
]
