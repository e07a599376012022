"""
config.py — Application Configuration
=======================================
Constants shared by the engines, the playback layer and the Flask API.
Anything that a deployment may want to tune can be overridden through
environment variables (prefix TRACEVIZ_) or through `create_app(config)`.
"""

import os
import secrets
from typing import Any, Dict


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------
# seconds between auto-play ticks
SPEED_PRESETS: Dict[str, float] = {
    "slow":   2.0,
    "normal": 1.0,
    "fast":   0.4,
    "turbo":  0.1,
}
DEFAULT_PLAYBACK_PERIOD: float = SPEED_PRESETS["normal"]
MIN_PLAYBACK_PERIOD: float     = 0.02


# ---------------------------------------------------------------------------
# Engine constants
# ---------------------------------------------------------------------------
# Floyd-Warshall "infinity" — finite so it can take part in matrix sums
FLOYD_WARSHALL_INF: int = 999

RABIN_KARP_BASE:  int = 256
RABIN_KARP_PRIME: int = 101


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------
LOG_LEVEL:  str = os.environ.get("TRACEVIZ_LOG_LEVEL", "INFO").upper()
SECRET_KEY: str = os.environ.get("TRACEVIZ_SECRET_KEY") or secrets.token_hex(32)
HOST:       str = os.environ.get("TRACEVIZ_HOST", "127.0.0.1")
PORT:       int = int(os.environ.get("TRACEVIZ_PORT", "5000"))

# clients whose playback state the API keeps in memory
SESSION_LIMIT: int = int(os.environ.get("TRACEVIZ_SESSION_LIMIT", "256"))


# ---------------------------------------------------------------------------
# Sample inputs (what each screen is pre-filled with)
# ---------------------------------------------------------------------------
SAMPLE_GRAPH: Dict[str, Any] = {
    "vertex_count": 6,
    "edges": [
        [0, 1, 4], [0, 2, 2], [1, 2, 1], [1, 3, 5], [2, 3, 8],
        [2, 4, 10], [3, 4, 2], [3, 5, 6], [4, 5, 3],
    ],
}

SAMPLE_SIGNED_GRAPH: Dict[str, Any] = {
    "vertex_count": 5,
    "directed": True,
    "edges": [
        [0, 1, 4], [0, 2, 2], [1, 3, 3], [2, 1, -2],
        [2, 3, 4], [3, 4, 1], [1, 4, 6],
    ],
}

SAMPLE_DIRECTED_GRAPH: Dict[str, Any] = {
    "vertex_count": 4,
    "directed": True,
    "edges": [
        [0, 1, 3], [0, 3, 7], [1, 0, 8], [1, 2, 2],
        [2, 0, 5], [2, 3, 1], [3, 0, 2],
    ],
}

SAMPLE_TEXT:    str = "ABABCABABA"
SAMPLE_PATTERN: str = "ABABA"
SAMPLE_HUFFMAN_TEXT: str = "ABRACADABRA"

# default params per registry key
SAMPLE_PARAMS: Dict[str, Dict[str, Any]] = {
    "dijkstra":       {"graph": SAMPLE_GRAPH, "source": 0},
    "bellman_ford":   {"graph": SAMPLE_SIGNED_GRAPH, "source": 0},
    "floyd_warshall": {"graph": SAMPLE_DIRECTED_GRAPH},
    "kruskal":        {"graph": SAMPLE_GRAPH},
    "prim":           {"graph": SAMPLE_GRAPH, "start": 0},
    "naive":          {"text": SAMPLE_TEXT, "pattern": SAMPLE_PATTERN},
    "kmp":            {"text": SAMPLE_TEXT, "pattern": SAMPLE_PATTERN},
    "rabin_karp":     {"text": SAMPLE_TEXT, "pattern": SAMPLE_PATTERN,
                       "base": RABIN_KARP_BASE, "prime": RABIN_KARP_PRIME},
    "huffman":        {"text": SAMPLE_HUFFMAN_TEXT},
}
