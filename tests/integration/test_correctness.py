"""
Correctness validation tests
Segmentation must never change the consolidated table
"""

import random
import re
from collections import Counter

import pytest

from rangecount.coordinator.job_manager import count_file_concurrently

WORD_RE = re.compile(rb"[A-Za-z]+")


def reference_counts(data: bytes) -> dict:
    """Single-pass oracle: every [A-Za-z]+ run, lowercased"""
    return dict(Counter(m.group().lower().decode("ascii") for m in WORD_RE.finditer(data)))


def random_text(seed: int, size: int) -> bytes:
    rng = random.Random(seed)
    words = ["alpha", "Beta", "GAMMA", "delta", "x", "to", "be", "Or", "not",
             "supercalifragilistic", "don't", "co-op", "naïve", "42nd"]
    separators = [" ", "  ", "\n", ", ", ". ", "\t", "--", "!", "\r\n"]
    parts = []
    length = 0
    while length < size:
        piece = rng.choice(words) + rng.choice(separators)
        parts.append(piece)
        length += len(piece.encode("utf-8"))
    return "".join(parts).encode("utf-8")


@pytest.mark.integration
class TestExactlyOnceCounting:
    """Every word counted by exactly one range"""

    @pytest.mark.parametrize("num_segments", [1, 2, 3, 7])
    def test_sample_text_independent_of_segments(self, make_input_file, sample_text, num_segments):
        path = make_input_file(sample_text)

        _, consolidated = count_file_concurrently(path, num_segments)

        assert consolidated == reference_counts(sample_text.encode("ascii"))
        assert consolidated["the"] == 4
        assert consolidated["quick"] == 3

    @pytest.mark.parametrize("seed", [1, 2, 3])
    @pytest.mark.parametrize("num_segments", [1, 2, 3, 7])
    def test_random_text_independent_of_segments(self, make_input_file, seed, num_segments):
        data = random_text(seed, 50 * 1024)
        path = make_input_file(data)

        _, consolidated = count_file_concurrently(path, num_segments, overlap=64)

        assert consolidated == reference_counts(data)

    def test_every_segment_count_on_short_text(self, make_input_file):
        data = b"It's a co-operating system's scheduler; words: Alpha alpha ALPHA!"
        path = make_input_file(data)
        expected = reference_counts(data)

        for num_segments in range(1, len(data) + 3):
            _, consolidated = count_file_concurrently(path, num_segments, overlap=32)
            assert consolidated == expected, f"mismatch with {num_segments} segments"

    def test_text_without_separators(self, make_input_file):
        path = make_input_file(b"abcdefghijklmnopqrstuvwxyz")

        for num_segments in (1, 2, 5, 26):
            _, consolidated = count_file_concurrently(path, num_segments)
            assert consolidated == {"abcdefghijklmnopqrstuvwxyz": 1}

    def test_repeated_lines_under_load(self, make_input_file):
        path = make_input_file("one two three four five\n" * 100)

        _, single = count_file_concurrently(path, 1)
        results, parallel = count_file_concurrently(path, 4)

        assert len(results) == 4
        assert sum(parallel.values()) == 500
        assert parallel == single
        assert sum(r.total_words for r in results) == 500


@pytest.mark.integration
class TestBoundaryWords:
    """Words straddling a computed range boundary"""

    def test_straddling_word_counted_once_in_full(self, make_input_file):
        data = b"xx supercalifragilistic yy"
        path = make_input_file(data)

        # 26 bytes in 2 ranges: the boundary at 13 falls inside the long word
        results, consolidated = count_file_concurrently(path, 2)

        assert results[0].end_byte == 13
        assert consolidated == {"xx": 1, "supercalifragilistic": 1, "yy": 1}
        owners = [r.range_id for r in results if "supercalifragilistic" in r.table]
        assert owners == [1]
        assert set(results[1].table) == {"yy"}

    def test_word_owned_by_range_holding_its_first_byte(self, make_input_file):
        data = b"aaaa bbbb"
        path = make_input_file(data)

        # 9 bytes in 3 ranges: [0,3) [3,6) [6,9); "bbbb" starts at 5
        results, consolidated = count_file_concurrently(path, 3)

        assert consolidated == {"aaaa": 1, "bbbb": 1}
        assert dict(results[0].table) == {"aaaa": 1}
        assert dict(results[1].table) == {"bbbb": 1}
        assert dict(results[2].table) == {}

    def test_word_longer_than_overlap_is_truncated(self, make_input_file):
        """Known limitation: the overlap window bounds how far a word can be completed"""
        path = make_input_file(b"abcdefghij")

        _, consolidated = count_file_concurrently(path, 2, overlap=2)

        assert consolidated == {"abcdefg": 1}
