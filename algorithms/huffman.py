"""
huffman.py — Huffman Coding
============================
Builds a prefix-free code from character frequencies by repeatedly merging
the two lightest trees.

Records a Step for:
  1. Initialisation: one leaf per distinct character
  2. Each merge of the two front trees
  3. Completion, with the code table

Tie-breaking: the queue is a list that is stably re-sorted by frequency
after every merge (the new node is appended first), NOT a binary heap.
The visualised merge order depends on this, so keep it.

Nodes live in an arena (a list); children are arena indices.  The arena
only grows, so every step can hold a snapshot of it without cycles.
"""

import logging
from typing import Dict, List, Optional

from algorithms.step import HuffmanNode, HuffmanStep, HuffmanTrace, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Huffman(text):",                          # 0
    "    freq ← count characters",                 # 1
    "    queue ← leaves sorted by freq",           # 2
    "    while |queue| > 1:",                      # 3
    "        left ← pop front;  right ← pop front",# 4
    "        node ← (left.freq + right.freq)",     # 5
    "        queue.append(node); sort(queue)",     # 6
    "    codes ← walk(root, 0 = left, 1 = right)", # 7
    "    return codes",                            # 8
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def huffman(text: str) -> Trace:
    tb = TraceBuilder("huffman", HuffmanStep)
    if not text:
        return tb.build(HuffmanTrace)

    frequencies = character_frequencies(text)
    nodes: List[HuffmanNode] = [HuffmanNode(char=c, freq=f) for c, f in frequencies.items()]

    tb.add(
        "Initialize leaf nodes with character frequencies",
        pseudocode_line=1,
        forest=list(range(len(nodes))),
        nodes=nodes,
    )

    queue = sorted(range(len(nodes)), key=lambda idx: nodes[idx].freq)

    while len(queue) > 1:
        left  = queue.pop(0)
        right = queue.pop(0)
        merged = HuffmanNode(
            char=None,
            freq=nodes[left].freq + nodes[right].freq,
            left=left,
            right=right,
        )
        nodes.append(merged)
        queue.append(len(nodes) - 1)
        queue.sort(key=lambda idx: nodes[idx].freq)

        tb.add(
            f"Merge nodes with frequencies {nodes[left].freq} and {nodes[right].freq} → {merged.freq}",
            pseudocode_line=6,
            forest=queue,
            nodes=nodes,
            merged=len(nodes) - 1,
        )

    root  = queue[0]
    codes = generate_codes(nodes, root)
    encoded = "".join(codes[c] for c in text)

    tb.add(
        "Huffman tree construction complete! Generate character codes.",
        pseudocode_line=7,
        forest=[root],
        nodes=nodes,
        codes=codes,
    )

    trace = tb.build(
        HuffmanTrace,
        frequencies=frequencies,
        codes=codes,
        encoded=encoded,
        nodes=nodes,
        root=root,
    )
    logger.debug(
        "huffman: %d symbols, %d bits (raw %d), %d steps",
        len(frequencies), len(encoded), len(text) * 8, len(trace),
    )
    return trace


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def character_frequencies(text: str) -> Dict[str, int]:
    """Counts in first-occurrence order."""
    freq: Dict[str, int] = {}
    for char in text:
        freq[char] = freq.get(char, 0) + 1
    return freq


def generate_codes(nodes: List[HuffmanNode], root: int) -> Dict[str, str]:
    """Prefix walk: "0" for left, "1" for right; a lone root leaf gets "0"."""
    codes: Dict[str, str] = {}

    def walk(idx: Optional[int], code: str) -> None:
        if idx is None:
            return
        node = nodes[idx]
        if node.char is not None:
            codes[node.char] = code or "0"
            return
        walk(node.left, code + "0")
        walk(node.right, code + "1")

    walk(root, "")
    return codes


def decode(bits: str, codes: Dict[str, str]) -> str:
    """Invert a prefix-free code table."""
    lookup = {code: char for char, code in codes.items()}
    out: List[str] = []
    buf = ""
    for bit in bits:
        buf += bit
        if buf in lookup:
            out.append(lookup[buf])
            buf = ""
    if buf:
        raise ValueError(f"trailing bits {buf!r} do not form a code")
    return "".join(out)
