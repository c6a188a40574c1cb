"""Double-counting check driver.

Takes care of everything in one centralized place:
- Event loading
- Hit -> PFO association resolution
- Multiplicity audit
- Writing check logs to file
"""

import os
from datetime import datetime

import psutil
import yaml

from .check import MultiAssociationError, check
from .io import reader_factory, writer_factory
from .utils.logger import logger
from .utils.stopwatch import StopwatchManager
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central double-counting check driver.

    Loops over the entries provided by a reader and, for each of them:
      1. Loads the hits, clusters, PFOs and their associations
      2. Resolves the Hit -> PFOs relation and audits its multiplicity
      3. Logs the per-hit diagnostics and the entry summary

    Each entry is checked independently. By default, the first entry which
    fails the check aborts the loop.

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        io:
          reader:
            <Event reader configuration>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        # Initialize the timers
        self.watch = StopwatchManager()
        self.watch.initialize(["iteration", "read", "check"])

        # Process the full configuration dictionary and store it
        base, io = self.process_config(**cfg)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the input
        self.initialize_io(**io)

        # Initialize the book-keeping of the checked entries
        self.counter = 0
        self.failed = []
        self.event_log = None
        self.hit_log = None

    def process_config(self, io, base=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary

        Returns
        -------
        base : dict
            Base driver configuration dictionary
        io : dict
            I/O configuration dictionary
        """
        base = base if base is not None else {}

        # Set the verbosity of the logger before anything gets printed
        logger.setLevel(base.get("verbosity", "info").upper())

        # Dump the configuration
        self.cfg = {"base": base, "io": io}
        logger.info("doublecount v%s\n", __version__)
        logger.info("Configuration processed at: %s\n", datetime.now())
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        return base, io

    def initialize_base(
        self,
        verbosity="info",
        log_dir=None,
        prefix_log=None,
        overwrite_log=False,
        log_hits=False,
        stop_on_failure=True,
        parent_path=None,
    ):
        """Initialize the base driver parameters.

        Parameters
        ----------
        verbosity : str, default 'info'
            Verbosity level to pass to the `logging` module. Per-hit
            diagnostics are printed at the 'debug' level.
        log_dir : str, optional
            Path to the directory where the CSV logs are written. If not
            specified, no CSV log is written.
        prefix_log : str, optional
            String to prefix the CSV log names with
        overwrite_log : bool, default False
            If `True`, overwrite existing CSV logs
        log_hits : bool, default False
            If `True`, write one row per hit to a separate CSV log. Values are
            written unquoted, so hit identities must not contain commas or
            line breaks (integer keys, as read from the HDF5 store, are safe).
        stop_on_failure : bool, default True
            If `True`, the first entry which fails the check aborts the loop
        parent_path : str, optional
            Path to the parent directory of the configuration file
        """
        self.verbosity = verbosity
        self.log_dir = log_dir
        if log_dir is not None and parent_path is not None:
            self.log_dir = os.path.join(parent_path, log_dir)
        self.prefix_log = prefix_log
        self.overwrite_log = overwrite_log
        self.log_hits = log_hits
        self.stop_on_failure = stop_on_failure

    def initialize_io(self, reader):
        """Initializes the event reader.

        Parameters
        ----------
        reader : dict
            Reader configuration dictionary
        """
        self.reader = reader_factory(reader)

    def initialize_log(self):
        """Initialize the CSV logs for this driver process, if requested."""
        self.event_log, self.hit_log = None, None
        if self.log_dir is None:
            return

        # Make a directory if it does not exist
        os.makedirs(self.log_dir, exist_ok=True)

        # Initialize the logs
        prefix = f"{self.prefix_log}_" if self.prefix_log else ""
        log_cfg = {"name": "csv", "overwrite": self.overwrite_log}
        log_name = os.path.join(self.log_dir, f"{prefix}doublecount_log.csv")
        self.event_log = writer_factory(dict(log_cfg, file_name=log_name))
        if self.log_hits:
            hit_name = os.path.join(self.log_dir, f"{prefix}doublecount_hits.csv")
            self.hit_log = writer_factory(dict(log_cfg, file_name=hit_name))

    def __len__(self):
        """Returns the number of entries in the underlying reader.

        Returns
        -------
        int
            Number of entries to check
        """
        return len(self.reader)

    def __iter__(self):
        """Resets the counter and returns itself.

        Returns
        -------
        object
            The Driver itself
        """
        self.counter = 0

        return self

    def __next__(self):
        """Checks the next entry.

        Returns
        -------
        CheckResult
            Outcome of the check for the entry

        Raises
        ------
        MultiAssociationError
            If the entry fails the check
        """
        if self.counter < len(self):
            entry = self.counter
            self.counter += 1

            return self.process(entry)

        raise StopIteration

    def run(self):
        """Loop over the selected entries, check each of them.

        Returns
        -------
        dict
            Number of entries checked and list of the entries which failed

        Raises
        ------
        MultiAssociationError
            If an entry fails the check and `stop_on_failure` is set
        """
        # Initialize the output logs
        self.initialize_log()

        # Loop and check each entry
        self.failed = []
        num_checked = 0
        for entry in range(len(self)):
            num_checked += 1
            try:
                self.process(entry)

            except MultiAssociationError as err:
                self.failed.append(err.entry)
                logger.error(str(err))
                if self.stop_on_failure:
                    raise

        logger.info(
            "Checked %d entries, %d failed the double-counting check",
            num_checked,
            len(self.failed),
        )

        return {"num_entries": num_checked, "failed": list(self.failed)}

    def process(self, entry=None, run=None, subrun=None, event=None):
        """Check one entry.

        Parameters
        ----------
        entry : int, optional
            Entry number to load
        run : int, optional
            Run number to load
        subrun : int, optional
            Subrun number to load
        event : int, optional
            Event number to load

        Returns
        -------
        CheckResult
            Outcome of the check for the entry

        Raises
        ------
        MalformedInputError
            If the entry associations reference unknown objects
        MultiAssociationError
            If the entry fails the check
        """
        # Make sure there is no watch left running, start the iteration timer
        if self.watch.running:
            self.watch.reset()

        self.watch.start("iteration")

        # 1. Load data
        data = self.load(entry, run, subrun, event)
        logger.debug(
            "Checking entry %s (run %s, subrun %s, event %s)",
            data.index,
            *data.run_info,
        )

        # 2. Resolve associations and audit them
        self.watch.start("check")
        try:
            result = check(
                data.hits,
                data.pfos,
                data.pfo_to_clusters,
                data.cluster_to_hits,
                clusters=data.clusters,
                entry=data.index,
            )

        except MultiAssociationError as err:
            self.watch.stop("check")
            self.watch.stop("iteration")
            self.log(data, err.result)
            raise

        self.watch.stop("check")
        self.watch.stop("iteration")

        # 3. Record the outcome
        self.log(data, result)

        return result

    def load(self, entry=None, run=None, subrun=None, event=None):
        """Loads one entry to check.

        Parameters
        ----------
        entry : int, optional
            Entry number
        run : int, optional
            Run number
        subrun : int, optional
            Subrun number
        event : int, optional
            Event number

        Returns
        -------
        EventData
            Inputs of the check for the entry
        """
        # Must provide either entry number or run, subrun and event numbers
        assert (entry is not None) or (
            run is not None and subrun is not None and event is not None
        ), (
            "Provide either the entry number or the run, subrun "
            "and event number to read."
        )

        self.watch.start("read")
        if entry is not None:
            data = self.reader[entry]
        else:
            data = self.reader.get_run_event(run, subrun, event)
        self.watch.stop("read")

        return data

    def log(self, data, result):
        """Log the outcome of the check of one entry to the CSV logs.

        Parameters
        ----------
        data : EventData
            Inputs of the check for the entry
        result : CheckResult
            Outcome of the check for the entry
        """
        ident = {
            "index": data.index,
            "run": data.run,
            "subrun": data.subrun,
            "event": data.event,
        }

        if self.event_log is not None:
            log_dict = dict(ident, **result.as_dict())

            # Fetch the memory usage (in GB)
            log_dict["cpu_mem"] = psutil.virtual_memory().used / 1.0e9
            log_dict["cpu_mem_perc"] = psutil.virtual_memory().percent

            # Fetch the times
            for key in self.watch.keys():
                log_dict[f"{key}_time"] = self.watch.time(key).wall
                log_dict[f"{key}_time_cpu"] = self.watch.time(key).cpu
            self.event_log.append(log_dict)

        if self.hit_log is not None:
            self.hit_log.extend([dict(ident, **row) for row in result.hit_rows()])
