"""Contains a reader class dedicated to loading events from HDF5 files."""

import h5py
import numpy as np

from doublecount.data import EventData
from doublecount.io import layout
from doublecount.utils.docstring import inherit_docstring
from doublecount.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5Reader"]


@inherit_docstring(ReaderBase)
class HDF5Reader(ReaderBase):
    """Class which reads the inputs of the double-counting check from HDF5
    event stores.

    The products are selected by the label of the producer which made
    them: hits come from `hit_label`, clusters, PFOs and both associations
    come from `pandora_label`. See :mod:`doublecount.io.layout` for the
    structure of the file.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          reader:
            name: hdf5
            file_keys: events.h5
            hit_label: gaushit
            pandora_label: pandora

    Attributes
    ----------
    hit_label : str
        Label of the hit producer
    pandora_label : str
        Label of the cluster/PFO producer
    file_index : np.ndarray
        Index of the file each global entry lives in
    file_offsets : np.ndarray
        Global index of the first entry of each file
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        hit_label,
        pandora_label,
        limit_num_files=None,
        max_print_files=10,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
        create_run_map=False,
    ):
        """Initalize the HDF5 file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            List of paths to the HDF5 files to be read
        hit_label : str
            Label of the hit producer
        pandora_label : str
            Label of the cluster/PFO producer
        limit_num_files : int, optional
            Integer limiting number of files to be taken
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        create_run_map : bool, default False
            Initialize a map between (run, subrun, event) triplets and entries
        """
        # Store the producer labels
        self.hit_label = hit_label
        self.pandora_label = pandora_label

        # Process the list of files
        self.process_file_paths(file_keys, limit_num_files, max_print_files)

        # Loop over the input files, build a map from index to file ID
        self.num_entries = 0
        file_index = []
        self.file_offsets = np.empty(len(self.file_paths), dtype=np.int64)
        run_info = []
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                # Check that the requested products are all there
                for label, product, dataset in self.required_datasets():
                    key = layout.product_path(label, product, dataset)
                    if key not in in_file:
                        raise KeyError(
                            f"File {path} does not contain the `{product}` "
                            f"product of the `{label}` producer."
                        )

                # Update the total number of entries
                key = layout.product_path(hit_label, layout.HIT_KEY, layout.COUNTS)
                num_entries = len(in_file[key])
                file_index.append(np.full(num_entries, i, dtype=np.int64))
                self.file_offsets[i] = self.num_entries
                self.num_entries += num_entries

                # If available, register the (run, subrun, event) information
                if create_run_map:
                    assert (
                        layout.RUN_INFO_KEY in in_file
                    ), f"Must provide {layout.RUN_INFO_KEY} to create run map"
                    run_info.append(in_file[layout.RUN_INFO_KEY][:])

        logger.info("Total number of entries in the file(s): %d\n", self.num_entries)

        self.file_index = np.concatenate(file_index)
        if create_run_map:
            self.run_info = np.vstack(run_info).reshape(-1, 3)

        self.process_run_info()
        self.process_entry_list(n_entry, n_skip, entry_list, skip_entry_list)

    def required_datasets(self):
        """List of (label, product, dataset) triplets the reader needs.

        Returns
        -------
        List[Tuple[str, str, str]]
            Datasets which must be present in every file
        """
        pandora = self.pandora_label
        return [
            (self.hit_label, layout.HIT_KEY, layout.COUNTS),
            (pandora, layout.CLUSTER_KEY, layout.COUNTS),
            (pandora, layout.PFO_KEY, layout.COUNTS),
            (pandora, layout.PFO_CLUSTER_KEY, layout.PAIRS),
            (pandora, layout.PFO_CLUSTER_KEY, layout.OFFSETS),
            (pandora, layout.CLUSTER_HIT_KEY, layout.PAIRS),
            (pandora, layout.CLUSTER_HIT_KEY, layout.OFFSETS),
        ]

    def get_entry(self, entry):
        """Loads one entry from its global index.

        Parameters
        ----------
        entry : int
            Global entry index

        Returns
        -------
        EventData
            Inputs of the check for this entry
        """
        file_idx = self.file_index[entry]
        file_entry = entry - self.file_offsets[file_idx]
        with h5py.File(self.file_paths[file_idx], "r") as in_file:
            counts = {}
            for label, product in (
                (self.hit_label, layout.HIT_KEY),
                (self.pandora_label, layout.CLUSTER_KEY),
                (self.pandora_label, layout.PFO_KEY),
            ):
                key = layout.product_path(label, product, layout.COUNTS)
                counts[product] = int(in_file[key][file_entry])

            pfo_cluster = self.load_pairs(in_file, layout.PFO_CLUSTER_KEY, file_entry)
            cluster_hit = self.load_pairs(in_file, layout.CLUSTER_HIT_KEY, file_entry)

            run, subrun, event = -1, -1, -1
            if layout.RUN_INFO_KEY in in_file:
                run, subrun, event = (
                    int(v) for v in in_file[layout.RUN_INFO_KEY][file_entry]
                )

        return EventData.from_pairs(
            counts[layout.HIT_KEY],
            counts[layout.CLUSTER_KEY],
            counts[layout.PFO_KEY],
            pfo_cluster,
            cluster_hit,
            index=int(entry),
            run=run,
            subrun=subrun,
            event=event,
        )

    def load_pairs(self, in_file, assn, file_entry):
        """Loads the association pairs of one entry.

        Parameters
        ----------
        in_file : h5py.File
            HDF5 file instance
        assn : str
            Name of the association product
        file_entry : int
            Index of the entry within the file

        Returns
        -------
        np.ndarray
            (N, 2) array of (source key, target key) pairs
        """
        group = in_file[self.pandora_label][assn]
        start, end = group[layout.OFFSETS][file_entry : file_entry + 2]

        return group[layout.PAIRS][start:end].reshape(-1, 2)
