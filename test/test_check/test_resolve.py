"""Test that the Hit -> PFOs association resolver works as intended."""

import itertools

import pytest

from doublecount.check import HitPfoMap, MalformedInputError, resolve_associations


def reachable(pfos, pfo_to_clusters, cluster_to_hits):
    """Brute-force set of (hit, pfo) pairs linked through one cluster."""
    return {
        (h, p)
        for p in pfos
        for c in pfo_to_clusters.get(p, ())
        for h in cluster_to_hits.get(c, ())
    }


def test_single_pfo():
    """One PFO owning one cluster which owns every hit."""
    hit_to_pfos = resolve_associations(["p"], {"p": ["c"]}, {"c": [0, 1, 2]})

    assert len(hit_to_pfos) == 3
    for hit in range(3):
        assert hit_to_pfos.get(hit) == ["p"]
        assert hit_to_pfos.num_pfos(hit) == 1


def test_traversal_order():
    """PFOs are appended in PFO order, then cluster order, then hit order."""
    pfos = [1, 0]
    pfo_to_clusters = {0: ["a"], 1: ["b", "a"]}
    cluster_to_hits = {"a": [5, 6], "b": [6]}
    hit_to_pfos = resolve_associations(pfos, pfo_to_clusters, cluster_to_hits)

    assert list(hit_to_pfos) == [6, 5]
    assert hit_to_pfos.get(6) == [1, 1, 0]
    assert hit_to_pfos.get(5) == [1, 0]
    assert hit_to_pfos.pfos(6) == [1, 0]


def test_no_deduplication_of_references():
    """A PFO reaching a hit through two clusters is referenced twice, but
    only counts as one owner."""
    hit_to_pfos = resolve_associations(
        [0], {0: ["a", "b"]}, {"a": ["h"], "b": ["h"]}
    )

    assert hit_to_pfos.get("h") == [0, 0]
    assert hit_to_pfos.num_refs("h") == 2
    assert hit_to_pfos.num_pfos("h") == 1


def test_unreached_hit():
    """Hits which no PFO reaches map to an empty sequence."""
    hit_to_pfos = resolve_associations([], {}, {"a": [0]})

    assert len(hit_to_pfos) == 0
    assert "x" not in hit_to_pfos
    assert hit_to_pfos.get("x") == []
    assert hit_to_pfos.num_pfos("x") == 0
    assert hit_to_pfos.num_refs("x") == 0


def test_pfo_without_clusters():
    """A PFO absent from the PFO -> Cluster relation owns nothing."""
    hit_to_pfos = resolve_associations([0, 1], {0: ["a"]}, {"a": [0]})

    assert hit_to_pfos.get(0) == [0]


def test_declared_cluster_without_hits():
    """A declared cluster absent from the Cluster -> Hit relation is empty."""
    hit_to_pfos = resolve_associations(
        [0], {0: ["a", "b"]}, {"a": [0]}, clusters=["a", "b"]
    )

    assert hit_to_pfos.get(0) == [0]
    assert len(hit_to_pfos) == 1


def test_transitivity():
    """The derived relation holds exactly the two-hop reachable pairs."""
    pfos = [0, 1, 2]
    pfo_to_clusters = {0: [0, 1], 1: [2], 2: [1, 3]}
    cluster_to_hits = {0: [0, 1], 1: [2], 2: [3, 4], 3: [4, 5]}
    hit_to_pfos = resolve_associations(pfos, pfo_to_clusters, cluster_to_hits)

    derived = {(h, p) for h in hit_to_pfos for p in hit_to_pfos.get(h)}
    assert derived == reachable(pfos, pfo_to_clusters, cluster_to_hits)


def test_permutation_invariance():
    """Permuting PFOs or clusters changes the order of the derived
    sequences, never their content."""
    pfos = [0, 1, 2]
    pfo_to_clusters = {0: [0, 1], 1: [2], 2: [1, 3]}
    cluster_to_hits = {0: [0, 1], 1: [2], 2: [3, 4], 3: [4, 5]}
    ref = resolve_associations(pfos, pfo_to_clusters, cluster_to_hits)

    for perm in itertools.permutations(pfos):
        shuffled = {p: list(reversed(cs)) for p, cs in pfo_to_clusters.items()}
        hit_to_pfos = resolve_associations(list(perm), shuffled, cluster_to_hits)
        assert set(hit_to_pfos) == set(ref)
        for hit in ref:
            assert sorted(hit_to_pfos.get(hit)) == sorted(ref.get(hit))
            assert hit_to_pfos.num_pfos(hit) == ref.num_pfos(hit)


def test_unknown_pfo():
    """A PFO key of the relation which is not in the PFO list."""
    with pytest.raises(MalformedInputError) as excinfo:
        resolve_associations([0], {0: ["a"], 7: ["a"]}, {"a": [0]})

    assert excinfo.value.relation == "pfo_to_clusters"
    assert excinfo.value.missing == [7]
    assert excinfo.value.source == "PFO"


def test_unknown_cluster():
    """A cluster referenced by a PFO which is not declared."""
    with pytest.raises(MalformedInputError) as excinfo:
        resolve_associations([0], {0: ["a", "z"]}, {"a": [0]})

    assert excinfo.value.missing == ["z"]
    assert excinfo.value.source == "cluster"

    with pytest.raises(MalformedInputError):
        resolve_associations([0], {0: ["a", "z"]}, {"a": [0]}, clusters=["a"])


def test_undeclared_cluster_in_cluster_relation():
    """A Cluster -> Hit key which is not in the declared cluster list."""
    with pytest.raises(MalformedInputError) as excinfo:
        resolve_associations([0], {0: ["a"]}, {"a": [0], "b": [1]}, clusters=["a"])

    assert excinfo.value.relation == "cluster_to_hits"
    assert excinfo.value.missing == ["b"]


def test_unknown_hit():
    """A hit referenced by a cluster which is not in the hit list."""
    with pytest.raises(MalformedInputError) as excinfo:
        resolve_associations([0], {0: ["a"]}, {"a": [0, 3, 3]}, hits=[0, 1, 2])

    assert excinfo.value.missing == [3]
    assert excinfo.value.source == "hit"
    assert "cluster_to_hits" in str(excinfo.value)


def test_hit_pfo_map_add():
    """Manual filling of the derived relation."""
    hit_to_pfos = HitPfoMap()
    hit_to_pfos.add(0, "a")
    hit_to_pfos.add(0, "b")
    hit_to_pfos.add(0, "a")

    assert 0 in hit_to_pfos
    assert hit_to_pfos.get(0) == ["a", "b", "a"]
    assert hit_to_pfos.pfos(0) == ["a", "b"]
    assert hit_to_pfos.num_pfos(0) == 2
    assert hit_to_pfos.num_refs(0) == 3
