"""
kmp.py — Knuth–Morris–Pratt String Matching
============================================
Never moves backwards in the text: after a mismatch the pattern jumps to
the longest proper prefix that is also a suffix of what already matched
(the failure function, or LPS array).

Records a Step for:
  1. Initialisation
  2. Each character match
  3. Each complete occurrence
  4. Each mismatch
  5. Each fall-back through the failure function
  6. Completion

Every step carries the LPS table so it can be drawn under the pattern.
"""

import logging
from typing import List

from algorithms.step import MatchStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def KMPSearch(text, pattern):",               # 0
    "    lps ← failure function of pattern",       # 1
    "    i ← 0;  j ← 0",                           # 2
    "    while i < n:",                            # 3
    "        if text[i] = pattern[j]:",            # 4
    "            i ← i + 1;  j ← j + 1",           # 5
    "            if j = m: report i - j",          # 6
    "                j ← lps[j - 1]",              # 7
    "        else if j ≠ 0: j ← lps[j - 1]",       # 8
    "        else: i ← i + 1",                     # 9
    "    return matches",                          # 10
]


# ---------------------------------------------------------------------------
# Failure function
# ---------------------------------------------------------------------------
def build_failure_function(pattern: str) -> List[int]:
    """lps[i] = length of the longest proper prefix of pattern[:i+1] that is also its suffix."""
    lps = [0] * len(pattern)
    length = 0
    i = 1
    while i < len(pattern):
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            i += 1
        elif length != 0:
            length = lps[length - 1]
        else:
            lps[i] = 0
            i += 1
    return lps


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def kmp_search(text: str, pattern: str) -> Trace:
    n, m = len(text), len(pattern)
    tb = TraceBuilder("kmp", MatchStep)
    if m == 0 or m > n:
        return tb.build()

    lps = build_failure_function(pattern)
    matches: List[int] = []
    text_index = 0
    pattern_index = 0

    def record(description: str, line: int, **extra) -> None:
        extra.setdefault("text_index", text_index)
        extra.setdefault("pattern_index", pattern_index)
        extra.setdefault("window_start", extra["text_index"] - extra["pattern_index"])
        tb.add(description, pseudocode_line=line, matches=matches, lps=lps, **extra)

    record("Initialize: Start comparing from the beginning", 2)

    while text_index < n:
        if text[text_index] == pattern[pattern_index]:
            record(f"Match found: '{text[text_index]}' at position {text_index}", 5, is_match=True)
            text_index += 1
            pattern_index += 1

            if pattern_index == m:
                matches.append(text_index - pattern_index)
                record(
                    f"Complete pattern match found at position {text_index - pattern_index}!",
                    6,
                    text_index=text_index - 1,
                    pattern_index=pattern_index - 1,
                    is_match=True,
                    is_complete_match=True,
                )
                pattern_index = lps[pattern_index - 1]
        else:
            record(
                f"Mismatch: '{text[text_index]}' ≠ '{pattern[pattern_index]}' at position {text_index}",
                4,
            )
            if pattern_index != 0:
                pattern_index = lps[pattern_index - 1]
                record(f"Using failure function: shift pattern to position {pattern_index}", 8)
            else:
                text_index += 1

    record(
        f"Search complete! Found {len(matches)} matches.",
        10,
        text_index=n - 1,
        pattern_index=0,
        window_start=n - m,
    )

    trace = tb.build()
    logger.debug("kmp: %d matches, %d steps", len(matches), len(trace))
    return trace
