"""
rabin_karp.py — Rabin–Karp String Matching
===========================================
Compares polynomial hashes of text windows with the pattern's hash and
only checks characters when the hashes agree.

    hash(s)  = (…((s[0]·b + s[1])·b + s[2])…) mod p          (Horner)
    pow      = b^(m-1) mod p
    roll     = ((h - ord(out)·pow) · b + ord(in)) mod p      (kept ≥ 0)

Records a Step for:
  1. Initialisation (pattern hash + first window hash)
  2. Each rolling-hash computation, match or not
  3. After every hash match: exact match  OR  hash collision
  4. Completion

The hashes are shown to the user, so the modular arithmetic above is
reproduced exactly; base and prime come from the caller.
"""

import logging
from typing import Dict, List

import config
from algorithms.step import MatchStep, RabinKarpTrace, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def RabinKarp(text, pattern, b, p):",         # 0
    "    hp ← hash(pattern);  ht ← hash(text[0:m])",  # 1
    "    pow ← b^(m-1) mod p",                     # 2
    "    for i in 0 … n-m:",                       # 3
    "        if i > 0: ht ← roll(ht, out, in)",    # 4
    "        if ht = hp:",                         # 5
    "            if text[i:i+m] = pattern:",       # 6
    "                report match at i",           # 7
    "            else: hash collision",            # 8
    "    return matches",                          # 9
]


# ---------------------------------------------------------------------------
# Hashing
# ---------------------------------------------------------------------------
def polynomial_hash(s: str, length: int, base: int, prime: int) -> int:
    h = 0
    for i in range(length):
        h = (h * base + ord(s[i])) % prime
    return h


def rolling_hash(old_hash: int, old_char: str, new_char: str, pow_: int, base: int, prime: int) -> int:
    h = old_hash - (ord(old_char) * pow_) % prime
    return (h * base + ord(new_char)) % prime


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def rabin_karp_search(
    text: str,
    pattern: str,
    base: int = config.RABIN_KARP_BASE,
    prime: int = config.RABIN_KARP_PRIME,
) -> Trace:
    n, m = len(text), len(pattern)
    tb = TraceBuilder("rabin_karp", MatchStep)
    if m == 0 or m > n:
        return tb.build(RabinKarpTrace)

    matches:    List[int]      = []
    hash_table: Dict[str, int] = {}

    pattern_hash = polynomial_hash(pattern, m, base, prime)
    hash_table[pattern] = pattern_hash

    pow_ = 1
    for _ in range(m - 1):
        pow_ = (pow_ * base) % prime

    window_hash = polynomial_hash(text, m, base, prime)
    hash_table[text[:m]] = window_hash

    def record(description: str, line: int, start: int, **extra) -> None:
        tb.add(
            description,
            pseudocode_line=line,
            text_index=start,
            window_start=start,
            current_window=text[start:start + m],
            window_hash=window_hash,
            pattern_hash=pattern_hash,
            matches=matches,
            **extra,
        )

    def verify(start: int) -> None:
        is_exact = text[start:start + m] == pattern
        if is_exact:
            matches.append(start)
            description = f"Hash match and exact match found at position {start}!"
        else:
            description = f"Hash collision at position {start} - not an exact match"
        record(
            description,
            7 if is_exact else 8,
            start,
            is_hash_match=True,
            is_exact_match=is_exact,
            is_match=is_exact,
            is_complete_match=is_exact,
        )

    record(
        f"Initialize: Calculate pattern hash ({pattern_hash}) and first window hash ({window_hash})",
        1,
        0,
        is_hash_match=window_hash == pattern_hash,
    )
    if window_hash == pattern_hash:
        verify(0)

    for i in range(1, n - m + 1):
        old_char, new_char = text[i - 1], text[i + m - 1]
        window_hash = rolling_hash(window_hash, old_char, new_char, pow_, base, prime)
        hash_table[text[i:i + m]] = window_hash

        is_hash_match = window_hash == pattern_hash
        record(
            f"Rolling hash: Remove '{old_char}', add '{new_char}' → hash = {window_hash}",
            4,
            i,
            is_hash_match=is_hash_match,
        )
        if is_hash_match:
            verify(i)

    record(f"Search complete! Found {len(matches)} matches.", 9, n - m)

    trace = tb.build(RabinKarpTrace, pattern_hash=pattern_hash, hash_table=hash_table)
    logger.debug("rabin_karp b=%d p=%d: %d matches, %d steps", base, prime, len(matches), len(trace))
    return trace
