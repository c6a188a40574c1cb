"""Association resolver.

Composes the PFO -> Cluster and Cluster -> Hit relations into a single
Hit -> PFOs relation by walking every PFO -> Cluster -> Hit path.
"""

from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

from .errors import MalformedInputError

__all__ = ["HitPfoMap", "resolve_associations", "validate_associations"]


class HitPfoMap:
    """Derived mapping from each hit to the PFOs which reach it.

    For each hit, the PFOs are stored in traversal order, without
    deduplication: a PFO which reaches a hit through two of its clusters
    appears twice in the sequence of that hit. The set of distinct owners
    is tracked alongside, as this is what the multiplicity of a hit is
    evaluated on.

    Attributes
    ----------
    refs : Dict[Hashable, List[Hashable]]
        Raw sequence of PFOs which reference each hit, in traversal order
    owners : Dict[Hashable, Dict[Hashable, None]]
        Insertion-ordered set of distinct PFOs which reference each hit
    """

    def __init__(self):
        """Initialize an empty mapping."""
        self.refs = {}
        self.owners = {}

    def __len__(self):
        """Number of hits reached by at least one PFO."""
        return len(self.refs)

    def __contains__(self, hit):
        return hit in self.refs

    def __iter__(self):
        return iter(self.refs)

    def add(self, hit, pfo):
        """Records that a PFO reaches a hit.

        Parameters
        ----------
        hit : Hashable
            Hit identity
        pfo : Hashable
            PFO identity
        """
        if hit not in self.refs:
            self.refs[hit] = []
            self.owners[hit] = {}

        self.refs[hit].append(pfo)
        self.owners[hit][pfo] = None

    def get(self, hit) -> List[Hashable]:
        """Returns the raw sequence of PFO references to a hit.

        Hits which are not reached by any PFO map to an empty sequence.
        """
        return list(self.refs.get(hit, ()))

    def pfos(self, hit) -> List[Hashable]:
        """Returns the distinct PFOs which reach a hit, in first-seen order."""
        return list(self.owners.get(hit, ()))

    def num_pfos(self, hit) -> int:
        """Returns the number of distinct PFOs which reach a hit."""
        return len(self.owners.get(hit, ()))

    def num_refs(self, hit) -> int:
        """Returns the number of PFO -> Cluster -> Hit paths ending at a hit."""
        return len(self.refs.get(hit, ()))


def _check_members(relation, ids, declared, source):
    """Raises if some of the identities are not in the declared set."""
    missing = [i for i in dict.fromkeys(ids) if i not in declared]
    if missing:
        raise MalformedInputError(relation, missing, source)


def validate_associations(
    pfos: Sequence[Hashable],
    pfo_to_clusters: Mapping[Hashable, Sequence[Hashable]],
    cluster_to_hits: Mapping[Hashable, Sequence[Hashable]],
    clusters: Optional[Iterable[Hashable]] = None,
    hits: Optional[Iterable[Hashable]] = None,
):
    """Checks that the relations of one event only reference declared objects.

    Takes the same inputs as :func:`resolve_associations`, which calls it
    before walking the relations.

    Raises
    ------
    MalformedInputError
        If one of the relations references an undeclared identity
    """
    _check_members("pfo_to_clusters", pfo_to_clusters.keys(), set(pfos), "PFO")
    if clusters is not None:
        cluster_set = set(clusters)
        _check_members(
            "cluster_to_hits", cluster_to_hits.keys(), cluster_set, "cluster"
        )
    else:
        cluster_set = set(cluster_to_hits.keys())

    referenced = (c for p in pfos for c in pfo_to_clusters.get(p, ()))
    _check_members("pfo_to_clusters", referenced, cluster_set, "cluster")

    if hits is not None:
        hit_set = set(hits)
        referenced = (h for c in cluster_to_hits.values() for h in c)
        _check_members("cluster_to_hits", referenced, hit_set, "hit")


def resolve_associations(
    pfos: Sequence[Hashable],
    pfo_to_clusters: Mapping[Hashable, Sequence[Hashable]],
    cluster_to_hits: Mapping[Hashable, Sequence[Hashable]],
    clusters: Optional[Iterable[Hashable]] = None,
    hits: Optional[Iterable[Hashable]] = None,
) -> HitPfoMap:
    """Builds the Hit -> PFOs relation of one event.

    Loops over the PFOs in input order, over the clusters of each PFO in
    relation order and over the hits of each cluster in relation order.

    Parameters
    ----------
    pfos : Sequence[Hashable]
        List of PFO identities
    pfo_to_clusters : Mapping[Hashable, Sequence[Hashable]]
        Ordered list of clusters associated with each PFO. PFOs missing
        from the mapping own no cluster.
    cluster_to_hits : Mapping[Hashable, Sequence[Hashable]]
        Ordered list of hits associated with each cluster
    clusters : Iterable[Hashable], optional
        List of cluster identities. If not provided, the clusters which
        appear as keys of `cluster_to_hits` are the only valid ones.
    hits : Iterable[Hashable], optional
        List of hit identities. If provided, every hit referenced by a
        cluster must belong to it.

    Returns
    -------
    HitPfoMap
        Mapping from each reached hit to the PFOs which reference it

    Raises
    ------
    MalformedInputError
        If one of the relations references an undeclared identity
    """
    validate_associations(
        pfos, pfo_to_clusters, cluster_to_hits, clusters=clusters, hits=hits
    )

    # Walk every PFO -> Cluster -> Hit path
    hit_to_pfos = HitPfoMap()
    for pfo in pfos:
        for cluster in pfo_to_clusters.get(pfo, ()):
            for hit in cluster_to_hits.get(cluster, ()):
                hit_to_pfos.add(hit, pfo)

    return hit_to_pfos
