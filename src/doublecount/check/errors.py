"""Typed exceptions raised by the double-counting check.

Both error kinds are fatal at the level of one event: the check does not
attempt to recover from them and they must reach the caller.
"""

from typing import Hashable, List, Optional


class DoubleCountError(Exception):
    """Base exception for all errors raised by the double-counting check."""


class MalformedInputError(DoubleCountError):
    """Raised when a relation references an identity which is not present
    in the list of objects it is declared to draw from."""

    def __init__(self, relation: str, missing: List[Hashable], source: str):
        """Initialize with the relation and the unknown identities.

        Parameters
        ----------
        relation : str
            Name of the relation which holds the bad reference
            (e.g. 'cluster_to_hits')
        missing : List[Hashable]
            Identities referenced by the relation but not declared
        source : str
            Name of the object list the identities should belong to
        """
        self.relation = relation
        self.missing = list(missing)
        self.source = source

        shown = ", ".join(str(m) for m in self.missing[:10])
        if len(self.missing) > 10:
            shown += ", ..."
        super().__init__(
            f"The `{relation}` relation references {len(self.missing)} "
            f"identit{'y' if len(self.missing) == 1 else 'ies'} absent "
            f"from the {source} list: [{shown}]"
        )


class MultiAssociationError(DoubleCountError):
    """Raised when at least one hit is associated with more than one
    particle-flow object."""

    def __init__(self, result, entry: Optional[int] = None):
        """Initialize with the result of the audit which failed.

        Parameters
        ----------
        result : CheckResult
            Outcome of the multiplicity audit
        entry : int, optional
            Index of the entry in which the violation was found
        """
        self.result = result
        self.entry = entry

        hits = result.over_associated
        shown = ", ".join(str(h) for h in hits[:10])
        if len(hits) > 10:
            shown += ", ..."
        where = f" in entry {entry}" if entry is not None else ""
        super().__init__(
            f"Found hits with multiple associated PFParticles{where}: "
            f"{result.over_associated_hits} of {result.total_hits} hits "
            f"are double counted (hits: [{shown}])"
        )
