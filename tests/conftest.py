import sys
from pathlib import Path

# Make the top-level packages importable without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

import config
from graph import Graph


@pytest.fixture
def sample_graph() -> Graph:
    """The 6-vertex undirected graph every graph screen starts with."""
    return Graph.from_dict(config.SAMPLE_GRAPH)


@pytest.fixture
def signed_graph() -> Graph:
    """Directed, one negative edge, no negative cycle."""
    return Graph.from_dict(config.SAMPLE_SIGNED_GRAPH)


@pytest.fixture
def directed_graph() -> Graph:
    return Graph.from_dict(config.SAMPLE_DIRECTED_GRAPH)
