"""Test the event and result data structures."""

import numpy as np

from doublecount.data import CheckResult, EventData, HitDiagnostic, build_relation


def test_build_relation():
    """Pairs are grouped by source key, keeping the association order."""
    relation = build_relation([[1, 5], [0, 2], [1, 3], [1, 5]])

    assert relation == {1: [5, 3, 5], 0: [2]}
    assert build_relation(np.empty((0, 2))) == {}


def test_event_from_pairs():
    """Events built from product sizes and association pairs."""
    event = EventData.from_pairs(3, 2, 1, [[0, 1]], [[1, 0], [1, 2]], run=4, event=7)

    assert event.num_hits == 3
    assert list(event.clusters) == [0, 1]
    assert event.pfo_to_clusters == {0: [1]}
    assert event.run_info == (4, -1, 7)
    np.testing.assert_array_equal(event.pairs("cluster_to_hits"), [[1, 0], [1, 2]])


def test_event_defaults():
    """Each event gets its own containers."""
    first, second = EventData(), EventData()
    first.cluster_to_hits[0] = [0]

    assert second.cluster_to_hits == {}
    assert second.clusters is None
    assert second.pairs("pfo_to_clusters").shape == (0, 2)


def test_check_result():
    """Verdict and offending hits of a result."""
    result = CheckResult(
        total_hits=2,
        over_associated_hits=1,
        diagnostics=[HitDiagnostic("a", 2, 3), HitDiagnostic("b", 1, 1)],
    )

    assert not result.passed
    assert result.over_associated == ["a"]
    assert tuple(result.diagnostics[1]) == ("b", 1)
    assert CheckResult().passed
