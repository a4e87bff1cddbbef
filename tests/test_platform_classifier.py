"""
Test platform classification (both / only Greenhouse / only Lever)

Tests:
1. Known example split
2. Partition properties (disjoint buckets, union preserved)
3. Duplicate handling
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline.platform_classifier import ClassificationResult, classify_platforms


class TestClassifyPlatforms:
    """Test classify_platforms() results"""

    def test_known_split(self):
        """x only on Greenhouse, y on both, z only on Lever"""
        result = classify_platforms(["x", "y"], ["y", "z"])
        assert result.both == ["y"]
        assert result.only_greenhouse == ["x"]
        assert result.only_lever == ["z"]

    def test_empty_inputs(self):
        """No names in, empty buckets out"""
        result = classify_platforms([], [])
        assert result == ClassificationResult()
        assert result.total == 0

    def test_one_side_empty(self):
        """Everything lands in the non-empty side's bucket"""
        result = classify_platforms(["a", "b"], [])
        assert result.both == []
        assert result.only_greenhouse == ["a", "b"]
        assert result.only_lever == []

    def test_identical_inputs(self):
        """Same names on both platforms all go to 'both'"""
        result = classify_platforms(["a", "b"], ["b", "a"])
        assert sorted(result.both) == ["a", "b"]
        assert result.only_greenhouse == []
        assert result.only_lever == []

    def test_larger_lever_list(self):
        """Intersection is the same whichever side is longer"""
        result = classify_platforms(["b"], ["a", "b", "c", "d"])
        assert result.both == ["b"]
        assert result.only_lever == ["a", "c", "d"]

    def test_duplicates_removed(self):
        """Buckets are deduplicated even when inputs repeat names"""
        result = classify_platforms(["a", "a", "b", "b"], ["b", "c", "c"])
        assert result.both == ["b"]
        assert result.only_greenhouse == ["a"]
        assert result.only_lever == ["c"]

    def test_order_preserved(self):
        """Buckets keep first-seen input order"""
        result = classify_platforms(["delta", "alpha", "charlie"], ["zulu", "alpha"])
        assert result.only_greenhouse == ["delta", "charlie"]
        assert result.only_lever == ["zulu"]


class TestPartitionProperties:
    """Set properties that must hold for any input"""

    @pytest.mark.parametrize("greenhouse,lever", [
        (["a", "b"], ["c", "d"]),
        (["one"], ["two", "three"]),
        ([], ["solo"]),
    ])
    def test_disjoint_inputs_have_empty_both(self, greenhouse, lever):
        """Disjoint inputs: nothing on both, only-buckets don't overlap"""
        result = classify_platforms(greenhouse, lever)
        assert result.both == []
        assert set(result.only_greenhouse) & set(result.only_lever) == set()

    @pytest.mark.parametrize("greenhouse,lever", [
        (["a", "b", "c"], ["b", "c", "d"]),
        (["a", "a"], ["a"]),
        (["x"], ["y"]),
        ([], []),
        (["Oscar Health", "Tempus"], ["Tempus", "Ro", "Ro"]),
    ])
    def test_union_preserved(self, greenhouse, lever):
        """both + only_greenhouse + only_lever == union of inputs, with no overlap"""
        result = classify_platforms(greenhouse, lever)
        buckets = [set(result.both), set(result.only_greenhouse), set(result.only_lever)]

        assert set().union(*buckets) == set(greenhouse) | set(lever)
        assert result.total == len(set(greenhouse) | set(lever))
        assert buckets[0] & buckets[1] == set()
        assert buckets[0] & buckets[2] == set()
        assert buckets[1] & buckets[2] == set()
