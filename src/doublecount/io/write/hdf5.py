"""Contains a writer class which stores events in the HDF5 event store
layout read by :class:`doublecount.io.read.HDF5Reader`."""

from collections import Counter

import h5py
import numpy as np

from doublecount.check import MalformedInputError, validate_associations
from doublecount.io import layout
from doublecount.utils.logger import logger

__all__ = ["HDF5EventWriter"]


class HDF5EventWriter:
    """Stores a list of events to an HDF5 file.

    Hit, cluster and PFO identities are written as keys, i.e. they must be
    the integer position of each object in its per-event collection. If an
    event does not declare its cluster list, the keys of `cluster_to_hits`
    are its clusters. Events which do not follow these rules are rejected,
    so that reading the store back yields the same check outcome.
    """

    name = "hdf5"

    def __init__(self, file_name, hit_label, pandora_label, overwrite=False):
        """Initialize the writer.

        Parameters
        ----------
        file_name : str
            Path to the output HDF5 file
        hit_label : str
            Label under which to store the hits
        pandora_label : str
            Label under which to store the clusters, PFOs and associations
        overwrite : bool, default False
            If True, overwrite the output file if it already exists
        """
        self.file_name = file_name
        self.hit_label = hit_label
        self.pandora_label = pandora_label
        self.mode = "w" if overwrite else "w-"

    def __call__(self, events):
        """Write a list of events to file.

        Parameters
        ----------
        events : List[EventData]
            Events to store, in entry order

        Raises
        ------
        MalformedInputError
            If an identity is not a valid key in its collection or if a
            relation references an undeclared identity
        """
        num_entries = len(events)
        run_info = np.array([e.run_info for e in events], dtype=np.int64)
        sizes = np.array([self.num_objects(e) for e in events], dtype=np.int64)
        sizes = sizes.reshape(-1, 3)
        counts = {
            layout.HIT_KEY: sizes[:, 0],
            layout.CLUSTER_KEY: sizes[:, 1],
            layout.PFO_KEY: sizes[:, 2],
        }

        with h5py.File(self.file_name, self.mode) as out_file:
            out_file.create_dataset(layout.RUN_INFO_KEY, data=run_info.reshape(-1, 3))

            for product, values in counts.items():
                label = self.hit_label if product == layout.HIT_KEY else self.pandora_label
                key = layout.product_path(label, product, layout.COUNTS)
                out_file.create_dataset(key, data=np.asarray(values, dtype=np.int64))

            for assn, relation in (
                (layout.PFO_CLUSTER_KEY, "pfo_to_clusters"),
                (layout.CLUSTER_HIT_KEY, "cluster_to_hits"),
            ):
                pairs = [e.pairs(relation) for e in events]
                offsets = np.zeros(num_entries + 1, dtype=np.int64)
                offsets[1:] = np.cumsum([len(p) for p in pairs])
                flat = np.vstack(pairs) if pairs else np.empty((0, 2), np.int64)

                key = layout.product_path(self.pandora_label, assn, layout.PAIRS)
                out_file.create_dataset(key, data=flat)
                key = layout.product_path(self.pandora_label, assn, layout.OFFSETS)
                out_file.create_dataset(key, data=offsets)

        logger.info("Wrote %d event(s) to %s", num_entries, self.file_name)

    @staticmethod
    def num_objects(event):
        """Checks that an event can be stored as keys, counts its objects.

        Parameters
        ----------
        event : EventData
            Event to store

        Returns
        -------
        Tuple[int]
            Number of hits, clusters and PFOs in the event

        Raises
        ------
        MalformedInputError
            If the identities of a collection are not its keys or if a
            relation references an undeclared identity
        """
        clusters = event.clusters
        if clusters is None:
            clusters = list(event.cluster_to_hits)

        for source, ids in (
            ("hit", event.hits),
            ("cluster", clusters),
            ("PFO", event.pfos),
        ):
            ids, keys = list(ids), range(len(ids))
            bad = [i for i, c in Counter(ids).items() if c > 1 or i not in keys]
            if bad:
                raise MalformedInputError(f"{source}s", bad, f"{source} key")

        validate_associations(
            event.pfos,
            event.pfo_to_clusters,
            event.cluster_to_hits,
            clusters=clusters,
            hits=event.hits,
        )

        return len(event.hits), len(clusters), len(event.pfos)
