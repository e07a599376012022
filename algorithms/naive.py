"""
naive.py — Naive (Brute-Force) String Matching
===============================================
Slides a window of the pattern's length over the text and compares left to
right until the first mismatch.

Records a Step for:
  1. Initialisation
  2. Each new window
  3. Each matching character comparison
  4. A complete match  OR  the mismatching comparison
  5. Each shift of the window
  6. Completion, with the number of comparisons

A mismatch is only counted when the compared text position exists.
"""

import logging
from typing import List

from algorithms.step import MatchStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def NaiveSearch(text, pattern):",             # 0
    "    for i in 0 … n-m:",                       # 1
    "        j ← 0",                               # 2
    "        while j < m and text[i+j] = pat[j]:", # 3
    "            j ← j + 1",                       # 4
    "        if j = m: report match at i",         # 5
    "        else: mismatch at i+j",               # 6
    "        shift window right by one",           # 7
    "    return matches",                          # 8
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def naive_search(text: str, pattern: str) -> Trace:
    n, m = len(text), len(pattern)
    tb = TraceBuilder("naive", MatchStep)
    if m == 0 or m > n:
        return tb.build()

    matches: List[int] = []
    comparisons = 0

    def record(description: str, line: int, **extra) -> None:
        tb.add(description, pseudocode_line=line, matches=matches, comparisons=comparisons, **extra)

    record("Initialize: Start brute force pattern matching from position 0", 0)

    for i in range(n - m + 1):
        record(f"Starting new window at position {i}", 2, text_index=i, window_start=i)

        j = 0
        while j < m and text[i + j] == pattern[j]:
            comparisons += 1
            record(
                f"Match: '{text[i + j]}' = '{pattern[j]}' at position {i + j}",
                4,
                text_index=i + j,
                pattern_index=j,
                window_start=i,
                is_match=True,
            )
            j += 1

        if j == m:
            matches.append(i)
            record(
                f"Complete match found at position {i}!",
                5,
                text_index=i + j - 1,
                pattern_index=j - 1,
                window_start=i,
                is_match=True,
                is_complete_match=True,
            )
        elif i + j < n:
            comparisons += 1
            record(
                f"Mismatch: '{text[i + j]}' ≠ '{pattern[j]}' at position {i + j}",
                6,
                text_index=i + j,
                pattern_index=j,
                window_start=i,
            )

        if i < n - m:
            record("Shift pattern one position right", 7, text_index=i + 1, window_start=i + 1)

    record(
        f"Search complete! Found {len(matches)} matches using {comparisons} comparisons.",
        8,
        text_index=n - 1,
        window_start=n - m,
    )

    trace = tb.build()
    logger.debug("naive: %d matches, %d comparisons, %d steps", len(matches), comparisons, len(trace))
    return trace
