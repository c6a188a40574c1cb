"""Contains the data reader base class.

Data readers are used to extract specific entries from files and return
the inputs of the double-counting check for each of them.
"""

import glob
import os

import numpy as np

from doublecount.utils.logger import logger


class ReaderBase:
    """Parent reader class which provides common functions between all readers.

    This class provides these basic functions:
    1. Method to parse the requested file list or file list file into a list of
       paths to existing files (throws if nothing is found)
    2. Method to produce a list of entries in the file(s) as selected by the
       provided parameters, checks that they exist (throws if they do not)
    3. Essential `__len__` and `__getitem__` methods. Must define the
       `get` function in the inheriting class for both of them to work.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_entries : int
        Total number of entries available
    entry_index : np.ndarray
        List of global indexes to cycle through
    run_info : np.ndarray
        (run, subrun, event) triplets associated with each entry
    run_map : Dict[Tuple[int], int]
        Maps each available (run, subrun, event) triplet onto an entry index
    """

    name = ""
    num_entries = None
    entry_index = None
    file_paths = None
    run_info = None
    run_map = None

    def __len__(self):
        """Returns the number of selected entries.

        Returns
        -------
        int
            Number of entries to cycle through
        """
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Returns a specific entry.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        EventData
            Inputs of the check for one entry
        """
        if idx >= len(self):
            raise IndexError(f"Entry {idx} out of range ({len(self)} entries)")

        return self.get(idx)

    def get(self, idx):
        """Returns the entry at a given position in the selected entry list.

        Parameters
        ----------
        idx : int
            Position in the list of selected entries

        Returns
        -------
        EventData
            Inputs of the check for one entry
        """
        return self.get_entry(int(self.entry_index[idx]))

    def process_file_paths(self, file_keys, limit_num_files=None, max_print_files=10):
        """Process list of files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths (glob patterns allowed) to the files to read,
            or path to a `.txt` file which lists them
        limit_num_files : int, optional
            Integer limiting number of files to be taken
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        """
        assert file_keys is not None, "No input `file_keys` provided, abort."
        assert (
            limit_num_files is None or limit_num_files > 0
        ), "If `limit_num_files` is provided, it must be larger than 0."

        # If the file_keys points to a single text file, parse it to a list
        if isinstance(file_keys, str) and os.path.splitext(file_keys)[-1] == ".txt":
            assert os.path.isfile(file_keys), (
                "If the `file_keys` are specified as a single text file, "
                "it must exist and contain a file list."
            )
            with open(file_keys, "r", encoding="utf-8") as f:
                file_keys = [l for l in f.read().splitlines() if l.strip()]

        # Convert the file keys to a list of file paths with glob
        if isinstance(file_keys, str):
            file_keys = [file_keys]

        self.file_paths = []
        for file_key in file_keys:
            file_paths = sorted(glob.glob(file_key))
            assert file_paths, f"File key {file_key} yielded no compatible path."
            self.file_paths.extend(file_paths)

        self.file_paths = sorted(self.file_paths)[:limit_num_files]

        # Print out the list of loaded files
        num_files = len(self.file_paths)
        file_list = " - " + "\n - ".join(self.file_paths[:max_print_files])
        file_list += "\n ... \n" if num_files > max_print_files else "\n"
        logger.info("Will load %d file(s):\n%s", num_files, file_list)

    def process_run_info(self):
        """Builds the map from (run, subrun, event) triplets to entry index.

        The triplets must be unique in the dataset.
        """
        self.run_map = None
        if self.run_info is not None:
            assert len(self.run_info) == self.num_entries
            self.run_map = {}
            for i, triplet in enumerate(self.run_info):
                triplet = tuple(int(v) for v in triplet)
                assert triplet not in self.run_map, (
                    "Cannot create a run map if (run, subrun, event) triplets "
                    f"are not unique in the dataset. Duplicate: {triplet}."
                )
                self.run_map[triplet] = i

    def process_entry_list(
        self, n_entry=None, n_skip=None, entry_list=None, skip_entry_list=None
    ):
        """Create a list of entries that can be accessed by :meth:`__getitem__`.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        """
        assert (n_entry is None and n_skip is None) or (
            entry_list is None and skip_entry_list is None
        ), (
            "Cannot specify `n_entry` or `n_skip` at the same time "
            "as `entry_list` or `skip_entry_list`."
        )
        assert not entry_list or not skip_entry_list, (
            "Cannot specify both `entry_list` and "
            "`skip_entry_list` at the same time."
        )

        entry_index = np.arange(self.num_entries, dtype=np.int64)
        if n_entry is not None or n_skip is not None:
            n_skip = n_skip if n_skip else 0
            n_entry = n_entry if n_entry else self.num_entries - n_skip
            assert n_skip + n_entry <= self.num_entries, (
                f"Mismatch between `n_entry` ({n_entry}), `n_skip` ({n_skip}) "
                f"and the number of entries in the files ({self.num_entries})."
            )
            entry_index = entry_index[n_skip : n_skip + n_entry]

        elif entry_list:
            entry_list = self.parse_entry_list(entry_list)
            assert np.all(
                entry_list < self.num_entries
            ), "Values in entry_list outside of bounds."
            entry_index = entry_index[entry_list]

        elif skip_entry_list:
            skip_entry_list = self.parse_entry_list(skip_entry_list)
            assert np.all(
                skip_entry_list < self.num_entries
            ), "Values in skip_entry_list outside of bounds."
            entry_mask = np.ones(self.num_entries, dtype=bool)
            entry_mask[skip_entry_list] = False
            entry_index = entry_index[entry_mask]

        assert len(entry_index), "Must at least have one entry to load."

        logger.info("Total number of entries selected: %d\n", len(entry_index))

        self.entry_index = entry_index

    def get_run_event(self, run, subrun, event):
        """Returns the entry corresponding to a (run, subrun, event) triplet.

        Parameters
        ----------
        run : int
            Run number
        subrun : int
            Subrun number
        event : int
            Event number

        Returns
        -------
        EventData
            Inputs of the check for one entry
        """
        assert (
            self.run_map is not None
        ), "Must build a run map to get entries by (run, subrun, event)."
        assert (run, subrun, event) in self.run_map, (
            f"Could not find (run={run}, subrun={subrun}, event={event})."
        )

        return self.get_entry(self.run_map[(run, subrun, event)])

    def get_entry(self, entry):
        """Returns an entry from its global index, ignoring the selection.

        Placeholder to be defined by the daughter class.
        """
        raise NotImplementedError

    @staticmethod
    def parse_entry_list(list_source):
        """Parses a list into an np.ndarray.

        The list can be passed as a simple python list or a path to a file
        which contains space or comma separated numbers (can be on multiple
        lines or not)

        Parameters
        ----------
        list_source : Union[list, str]
            List as a python list or a text file path

        Returns
        -------
        np.ndarray
            List as a numpy array
        """
        if list_source is None:
            return np.empty(0, dtype=np.int64)

        if isinstance(list_source, str):
            assert os.path.isfile(list_source), "The list source file does not exist."
            with open(list_source, "r", encoding="utf-8") as f:
                words = f.read().replace(",", " ").split()

            return np.array([int(w) for w in words], dtype=np.int64)

        if not np.isscalar(list_source):
            return np.asarray(list_source, dtype=np.int64)

        raise ValueError("List format not recognized.")
