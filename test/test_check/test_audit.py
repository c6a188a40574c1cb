"""Test that the multiplicity auditor classifies hits as intended."""

import logging

from doublecount.check import HitPfoMap, audit


def build_map(pairs):
    """Builds a derived relation from (hit, pfo) pairs."""
    hit_to_pfos = HitPfoMap()
    for hit, pfo in pairs:
        hit_to_pfos.add(hit, pfo)

    return hit_to_pfos


def test_all_unique():
    """Every hit owned by at most one PFO."""
    result = audit([0, 1, 2], build_map([(0, "a"), (1, "a"), (2, "b")]))

    assert result.passed
    assert result.total_hits == 3
    assert result.over_associated_hits == 0
    assert result.over_associated == []


def test_over_associated():
    """One hit owned by two PFOs."""
    result = audit([0, 1], build_map([(0, "a"), (0, "b"), (1, "b")]))

    assert not result.passed
    assert result.over_associated_hits == 1
    assert result.over_associated == [0]
    assert [tuple(d) for d in result.diagnostics] == [(0, 2), (1, 1)]


def test_missing_hits_count_as_unassociated():
    """Hits absent from the derived relation are zero-associated."""
    result = audit(list(range(5)), HitPfoMap())

    assert result.passed
    assert result.total_hits == 5
    assert all(d.num_pfos == 0 and d.num_refs == 0 for d in result.diagnostics)


def test_hits_outside_list_are_ignored():
    """Only the hits of the hit list are checked."""
    result = audit([0], build_map([(0, "a"), (1, "a"), (1, "b")]))

    assert result.total_hits == 1
    assert result.passed


def test_distinct_count():
    """Repeated references from one PFO count once."""
    result = audit(["h"], build_map([("h", "a"), ("h", "a")]))

    diag = result.diagnostics[0]
    assert diag.num_pfos == 1
    assert diag.num_refs == 2
    assert not diag.over_associated
    assert result.passed


def test_diagnostic_log(caplog):
    """One debug line per hit, one summary line."""
    with caplog.at_level(logging.DEBUG, logger="doublecount"):
        audit([3, 4], build_map([(3, "a"), (3, "b")]))

    messages = [r.getMessage() for r in caplog.records]
    assert "Hit 3 - nPFParticles = 2" in messages
    assert "Hit 4 - nPFParticles = 0" in messages
    assert "Of 2 hits, 1 were associated to more than one PFParticle" in messages


def test_result_serialization():
    """Summary and per-hit rows of a result."""
    result = audit([0, 1], build_map([(0, "a"), (0, "a")]))

    assert result.as_dict() == {
        "total_hits": 2,
        "over_associated_hits": 0,
        "passed": True,
    }
    assert result.hit_rows() == [
        {"hit": 0, "num_pfos": 1, "num_refs": 2},
        {"hit": 1, "num_pfos": 0, "num_refs": 0},
    ]
