"""Catalog discovery and filtering tests.

Covers search-path scanning, case-insensitive ordering, adjacent dedup, and
the substring filter that derives the visible list.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from comrad.catalog import build_catalog, dedupe_adjacent, filter_catalog


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("", encoding="utf-8")


class BuildCatalogTests(unittest.TestCase):
    def test_collects_regular_files_sorted_case_insensitively(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "bin"
            second = Path(tmp) / "usr-bin"
            first.mkdir()
            second.mkdir()
            _touch(first, "ls", "Bash")
            _touch(second, "cat", "zsh")
            (second / "subdir").mkdir()

            catalog = build_catalog(f"{first}{os.pathsep}{second}")

        self.assertEqual(catalog, ("Bash", "cat", "ls", "zsh"))

    def test_duplicates_across_directories_are_collapsed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "a"
            second = Path(tmp) / "b"
            first.mkdir()
            second.mkdir()
            _touch(first, "python3", "git")
            _touch(second, "python3", "vim")

            catalog = build_catalog(f"{first}{os.pathsep}{second}")

        self.assertEqual(catalog, ("git", "python3", "vim"))

    def test_missing_and_non_directory_entries_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            real = Path(tmp) / "bin"
            real.mkdir()
            _touch(real, "tool")
            not_a_dir = Path(tmp) / "file.txt"
            not_a_dir.write_text("x", encoding="utf-8")
            search_path = os.pathsep.join([str(Path(tmp) / "missing"), str(not_a_dir), "", str(real)])

            catalog = build_catalog(search_path)

        self.assertEqual(catalog, ("tool",))

    def test_empty_or_absent_search_path_gives_empty_catalog(self) -> None:
        self.assertEqual(build_catalog(""), ())
        with mock.patch.dict("comrad.catalog.os.environ", {}, clear=True):
            self.assertEqual(build_catalog(), ())

    def test_defaults_to_path_environment_variable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            _touch(Path(tmp), "only-here")
            with mock.patch.dict("comrad.catalog.os.environ", {"PATH": tmp}, clear=True):
                catalog = build_catalog()

        self.assertEqual(catalog, ("only-here",))

    def test_custom_separator_is_honored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            first = Path(tmp) / "x"
            second = Path(tmp) / "y"
            first.mkdir()
            second.mkdir()
            _touch(first, "one")
            _touch(second, "two")

            catalog = build_catalog(f"{first}|{second}", pathsep="|")

        self.assertEqual(catalog, ("one", "two"))

    def test_catalog_is_sorted_without_equal_neighbours(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            dirs = []
            for idx, names in enumerate((("b", "A", "c"), ("a", "B", "d"), ("C", "e", "a"))):
                directory = Path(tmp) / f"d{idx}"
                directory.mkdir()
                _touch(directory, *names)
                dirs.append(str(directory))

            catalog = build_catalog(os.pathsep.join(dirs))

        lowered = [name.lower() for name in catalog]
        self.assertEqual(lowered, sorted(lowered))
        for left, right in zip(lowered, lowered[1:]):
            self.assertNotEqual(left, right)


class DedupeAdjacentTests(unittest.TestCase):
    def test_only_neighbouring_repeats_are_removed(self) -> None:
        self.assertEqual(dedupe_adjacent(["a", "a", "b", "a"]), ["a", "b", "a"])

    def test_first_spelling_wins_for_case_variants(self) -> None:
        self.assertEqual(dedupe_adjacent(["Make", "make", "mv"]), ["Make", "mv"])


class FilterCatalogTests(unittest.TestCase):
    CATALOG = ("Bash", "cat", "ls")

    def test_empty_query_matches_everything_in_order(self) -> None:
        self.assertEqual(filter_catalog(self.CATALOG, ""), [0, 1, 2])

    def test_query_matches_case_insensitively(self) -> None:
        indices = filter_catalog(self.CATALOG, "a")
        self.assertEqual([self.CATALOG[idx] for idx in indices], ["Bash", "cat"])

    def test_uppercase_query_matches_lowercase_names(self) -> None:
        indices = filter_catalog(self.CATALOG, "LS")
        self.assertEqual(indices, [2])

    def test_no_match_gives_empty_view(self) -> None:
        self.assertEqual(filter_catalog(self.CATALOG, "zzz"), [])

    def test_view_is_an_ordered_subsequence_with_matching_entries(self) -> None:
        catalog = ("awk", "Base64", "basename", "cabal", "tar", "xargs")
        for query in ("a", "ba", "AR", "s", ""):
            indices = filter_catalog(catalog, query)
            self.assertEqual(indices, sorted(indices))
            for idx in indices:
                self.assertIn(query.lower(), catalog[idx].lower())


if __name__ == "__main__":
    unittest.main()
