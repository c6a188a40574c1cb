"""Module with a data structure holding the inputs of one event."""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence

import numpy as np

__all__ = ["EventData", "build_relation"]


def build_relation(pairs):
    """Turns a list of association pairs into an ordered one-to-many map.

    Parameters
    ----------
    pairs : np.ndarray
        (N, 2) array of (source key, target key) pairs, in association order

    Returns
    -------
    Dict[int, List[int]]
        Ordered list of target keys for each source key
    """
    relation = {}
    pairs = np.asarray(pairs, dtype=np.int64).reshape(-1, 2)
    for src, tgt in pairs:
        relation.setdefault(int(src), []).append(int(tgt))

    return relation


@dataclass(eq=False)
class EventData:
    """Inputs of the double-counting check for one event.

    Identities are opaque hashable values. The HDF5 reader uses the key of
    each object, i.e. its position in the product collection of the event.

    Attributes
    ----------
    hits : Sequence[Hashable]
        (N_h) Hit identities
    pfos : Sequence[Hashable]
        (N_p) PFO identities
    pfo_to_clusters : Dict[Hashable, List[Hashable]]
        Ordered list of clusters associated with each PFO
    cluster_to_hits : Dict[Hashable, List[Hashable]]
        Ordered list of hits associated with each cluster
    clusters : Sequence[Hashable], optional
        (N_c) Cluster identities. If not provided, the keys of
        `cluster_to_hits` are the only valid clusters.
    index : int
        Global entry index
    run : int
        Run number
    subrun : int
        Subrun number
    event : int
        Event number
    """

    hits: Sequence[Hashable] = field(default_factory=list)
    pfos: Sequence[Hashable] = field(default_factory=list)
    pfo_to_clusters: Dict[Hashable, List[Hashable]] = field(default_factory=dict)
    cluster_to_hits: Dict[Hashable, List[Hashable]] = field(default_factory=dict)
    clusters: Optional[Sequence[Hashable]] = None
    index: int = -1
    run: int = -1
    subrun: int = -1
    event: int = -1

    @classmethod
    def from_pairs(
        cls, num_hits, num_clusters, num_pfos, pfo_cluster, cluster_hit, **kwargs
    ):
        """Builds an event from product sizes and association pairs.

        Parameters
        ----------
        num_hits : int
            Number of hits in the event
        num_clusters : int
            Number of clusters in the event
        num_pfos : int
            Number of PFOs in the event
        pfo_cluster : np.ndarray
            (N, 2) PFO -> Cluster association pairs
        cluster_hit : np.ndarray
            (M, 2) Cluster -> Hit association pairs
        **kwargs : dict, optional
            Event identification (index, run, subrun, event)

        Returns
        -------
        EventData
            Event inputs
        """
        return cls(
            hits=np.arange(num_hits, dtype=np.int64),
            pfos=np.arange(num_pfos, dtype=np.int64),
            pfo_to_clusters=build_relation(pfo_cluster),
            cluster_to_hits=build_relation(cluster_hit),
            clusters=np.arange(num_clusters, dtype=np.int64),
            **kwargs,
        )

    @property
    def num_hits(self):
        """Number of hits in the event."""
        return len(self.hits)

    @property
    def run_info(self):
        """(run, subrun, event) triplet of the event."""
        return (self.run, self.subrun, self.event)

    def pairs(self, relation):
        """Flattens one of the relations back into association pairs.

        Only meaningful for integer keys.

        Parameters
        ----------
        relation : str
            Either 'pfo_to_clusters' or 'cluster_to_hits'

        Returns
        -------
        np.ndarray
            (N, 2) array of (source key, target key) pairs
        """
        mapping = getattr(self, relation)
        pairs = [(s, t) for s, targets in mapping.items() for t in targets]

        return np.array(pairs, dtype=np.int64).reshape(-1, 2)
