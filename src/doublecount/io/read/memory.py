"""Contains a reader class which serves events held in memory or in YAML."""

import yaml

from doublecount.data import EventData
from doublecount.utils.docstring import inherit_docstring
from doublecount.utils.logger import logger

from .base import ReaderBase

__all__ = ["DictReader"]


@inherit_docstring(ReaderBase)
class DictReader(ReaderBase):
    """Class which serves events described as dictionaries.

    Each event is a dictionary with the following keys:
    - `hits`: list of hit identities
    - `pfos`: list of PFO identities
    - `pfo_to_clusters`: map from PFO to its ordered list of clusters
    - `cluster_to_hits`: map from cluster to its ordered list of hits
    - `clusters` (optional): list of cluster identities
    - `run`, `subrun`, `event` (optional): event identification

    Products set to null hold no objects.

    Identities are opaque: any hashable value can be used. The events can
    either be provided directly or through YAML files with a top-level
    `events` list:

    .. code-block:: yaml

        io:
          reader:
            name: dict
            file_keys: events.yaml

    Attributes
    ----------
    events : List[dict]
        List of event dictionaries
    """

    name = "dict"

    def __init__(
        self,
        events=None,
        file_keys=None,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
        create_run_map=False,
    ):
        """Initialize the dictionary reader.

        Parameters
        ----------
        events : List[dict], optional
            List of event dictionaries
        file_keys : Union[str, List[str]], optional
            Path(s) to YAML files which contain an `events` list
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
        assert (events is None) ^ (
            file_keys is None
        ), "Must provide one of `events` or `file_keys`, not both."

        if events is None:
            self.process_file_paths(file_keys)
            events = []
            for path in self.file_paths:
                with open(path, "r", encoding="utf-8") as in_file:
                    content = yaml.safe_load(in_file) or {}
                assert "events" in content, f"File {path} has no `events` list."
                events.extend(content["events"])

        self.events = list(events)
        self.num_entries = len(self.events)
        logger.info("Total number of events provided: %d\n", self.num_entries)

        if create_run_map:
            self.run_info = [
                (e.get("run", -1), e.get("subrun", -1), e.get("event", -1))
                for e in self.events
            ]

        self.process_run_info()
        self.process_entry_list(n_entry, n_skip, entry_list, skip_entry_list)

    def get_entry(self, entry):
        """Builds the inputs of the check for one event.

        Parameters
        ----------
        entry : int
            Index of the event

        Returns
        -------
        EventData
            Inputs of the check for this event
        """
        event = self.events[entry]
        for key in ("hits", "pfos", "pfo_to_clusters", "cluster_to_hits"):
            if key not in event:
                raise KeyError(f"Event {entry} is missing the `{key}` product.")

        # Identities are kept as provided, empty (null) products hold nothing
        pfo_to_clusters = event["pfo_to_clusters"] or {}
        cluster_to_hits = event["cluster_to_hits"] or {}
        clusters = event.get("clusters")
        return EventData(
            hits=list(event["hits"] or ()),
            pfos=list(event["pfos"] or ()),
            pfo_to_clusters={k: list(v or ()) for k, v in pfo_to_clusters.items()},
            cluster_to_hits={k: list(v or ()) for k, v in cluster_to_hits.items()},
            clusters=list(clusters) if clusters is not None else None,
            index=entry,
            run=event.get("run", -1),
            subrun=event.get("subrun", -1),
            event=event.get("event", -1),
        )
