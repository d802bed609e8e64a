"""Tests for lexical path helpers."""

import itertools
import random
from pathlib import PurePosixPath

import pytest

from dotfilesctl.core.paths import normalize_lexical, relative_to

P = PurePosixPath

SAMPLE_PATHS = [
    P("/"),
    P("/a"),
    P("/a/b"),
    P("/a/b/c"),
    P("/a/e"),
    P("/d"),
    P("/d/a/b"),
]


class TestRelativeTo:
    """Walking from one absolute path to another."""

    @pytest.mark.parametrize(
        "base, target, expected",
        [
            ("/a/b/c", "/a/e", "../../e"),
            ("/a/b/c", "/", "../../.."),
            ("/a/b/c", "/a/b/c/d", "d"),
            ("/a/b/c", "/a/b/c", "."),
            ("/", "/a/b", "a/b"),
            ("/a", "/b", "../b"),
        ],
    )
    def test_explicit_cases(self, base, target, expected):
        assert relative_to(P(base), P(target)) == P(expected)

    def test_result_is_relative(self):
        assert not relative_to(P("/x/y"), P("/z")).is_absolute()

    def test_round_trip_grid(self):
        """Joining base with the result and normalizing gives the target back."""
        for base, target in itertools.product(SAMPLE_PATHS, repeat=2):
            result = relative_to(base, target)
            assert normalize_lexical(base / result) == target

    def test_round_trip_random(self):
        rng = random.Random(1234)
        alphabet = ["a", "b", "c", "dd"]

        def random_path():
            return P("/", *(rng.choice(alphabet) for _ in range(rng.randint(0, 5))))

        for _ in range(200):
            base, target = random_path(), random_path()
            assert normalize_lexical(base / relative_to(base, target)) == target


class TestNormalizeLexical:
    """Removing . and .. without touching the filesystem."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/a/b/../c", "/a/c"),
            ("/a/./b", "/a/b"),
            ("/..", "/"),
            ("/../a", "/a"),
            ("/a/b/c/../../..", "/"),
            ("a/../..", ".."),
            ("../a", "../a"),
            ("../../a/..", "../.."),
        ],
    )
    def test_cases(self, path, expected):
        assert normalize_lexical(P(path)) == P(expected)

    def test_keeps_path_type(self):
        assert isinstance(normalize_lexical(P("/a/..")), PurePosixPath)
