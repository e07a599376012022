import random

import pytest

from algorithms.kmp import build_failure_function, kmp_search
from algorithms.naive import naive_search
from algorithms.rabin_karp import polynomial_hash, rabin_karp_search, rolling_hash
from algorithms.step import RabinKarpTrace, find_matches

ENGINES = [naive_search, kmp_search, rabin_karp_search]


def _occurrences(text: str, pattern: str):
    m = len(pattern)
    return tuple(i for i in range(len(text) - m + 1) if text[i:i + m] == pattern)


@pytest.mark.parametrize("engine", ENGINES)
def test_sample_match(engine) -> None:
    trace = engine("ABABCABABA", "ABABA")
    assert find_matches(trace) == (5,)
    assert trace.last.is_final
    assert trace.last.description.startswith("Search complete! Found 1 matches")


@pytest.mark.parametrize("engine", ENGINES)
@pytest.mark.parametrize("text, pattern", [("ABC", ""), ("AB", "ABC"), ("", "A")])
def test_unsatisfiable_input_gives_empty_trace(engine, text: str, pattern: str) -> None:
    trace = engine(text, pattern)
    assert len(trace) == 0
    assert find_matches(trace) == ()


@pytest.mark.parametrize("engine", ENGINES)
def test_overlapping_matches(engine) -> None:
    assert find_matches(engine("AAAA", "AA")) == (0, 1, 2)


@pytest.mark.parametrize("seed", range(12))
def test_engines_agree_on_random_text(seed: int) -> None:
    rng = random.Random(seed)
    text = "".join(rng.choice("AB") for _ in range(24))
    pattern = "".join(rng.choice("AB") for _ in range(rng.randint(1, 4)))
    expected = _occurrences(text, pattern)
    for engine in ENGINES:
        assert find_matches(engine(text, pattern)) == expected


# ---------------------------------------------------------------------------
# Naive
# ---------------------------------------------------------------------------
def test_naive_counts_every_comparison() -> None:
    trace = naive_search("ABABCABABA", "ABABA")
    compared = [s for s in trace if s.pseudocode_line in (4, 6)]
    assert trace.last.comparisons == len(compared)
    assert trace[0].description == "Initialize: Start brute force pattern matching from position 0"


def test_naive_shift_steps_between_windows() -> None:
    trace = naive_search("ABCD", "CD")
    shifts = [s.window_start for s in trace if s.description == "Shift pattern one position right"]
    assert shifts == [1, 2]


# ---------------------------------------------------------------------------
# KMP
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "pattern, lps",
    [
        ("ABABA", [0, 0, 1, 2, 3]),
        ("AAAA", [0, 1, 2, 3]),
        ("ABCDABD", [0, 0, 0, 0, 1, 2, 0]),
        ("AABAACAABAA", [0, 1, 0, 1, 2, 0, 1, 2, 3, 4, 5]),
    ],
)
def test_failure_function(pattern: str, lps) -> None:
    assert build_failure_function(pattern) == lps


def test_kmp_steps_carry_failure_table() -> None:
    trace = kmp_search("ABABCABABA", "ABABA")
    assert all(s.lps == (0, 0, 1, 2, 3) for s in trace)
    assert any(s.description.startswith("Using failure function") for s in trace)
    complete = [s for s in trace if s.is_complete_match]
    assert [s.window_start for s in complete] == [5]


# ---------------------------------------------------------------------------
# Rabin-Karp
# ---------------------------------------------------------------------------
def test_rolling_hash_agrees_with_direct_hash() -> None:
    text, m, base, prime = "HELLOWORLD", 4, 256, 101
    pow_ = pow(base, m - 1, prime)
    h = polynomial_hash(text, m, base, prime)
    for i in range(1, len(text) - m + 1):
        h = rolling_hash(h, text[i - 1], text[i + m - 1], pow_, base, prime)
        assert h == polynomial_hash(text[i:], m, base, prime)
        assert 0 <= h < prime


def test_rabin_karp_hash_table_and_trace_type() -> None:
    trace = rabin_karp_search("ABABCABABA", "ABABA")
    assert isinstance(trace, RabinKarpTrace)
    assert trace.pattern_hash == polynomial_hash("ABABA", 5, 256, 101)
    for window, h in trace.hash_table.items():
        assert h == polynomial_hash(window, 5, 256, 101)
    assert set(trace.hash_table) >= {"ABABA", "ABABC", "BABCA"}


def test_rabin_karp_reports_collisions_with_tiny_prime() -> None:
    trace = rabin_karp_search("ABCD", "AD", base=256, prime=2)
    collisions = [s.window_start for s in trace if s.pseudocode_line == 8]
    assert collisions == [0, 2]
    assert find_matches(trace) == ()


@pytest.mark.parametrize("prime", [2, 3, 5, 101])
def test_rabin_karp_exact_flag_iff_equal(prime: int) -> None:
    text, pattern = "ABABCABABAAB", "AB"
    trace = rabin_karp_search(text, pattern, prime=prime)
    verified = [s for s in trace if s.pseudocode_line in (7, 8)]
    assert verified
    for step in verified:
        assert step.is_hash_match
        assert step.is_exact_match == (step.current_window == pattern)
    assert find_matches(trace) == _occurrences(text, pattern)
