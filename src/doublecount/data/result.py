"""Module with the data structures which hold the outcome of a check."""

from dataclasses import asdict, dataclass, field
from typing import Hashable, List

__all__ = ["HitDiagnostic", "CheckResult"]


@dataclass
class HitDiagnostic:
    """Association multiplicity of a single hit.

    Attributes
    ----------
    hit : Hashable
        Hit identity
    num_pfos : int
        Number of distinct PFOs which reach the hit
    num_refs : int
        Number of PFO -> Cluster -> Hit paths which end at the hit. Larger
        than `num_pfos` when a PFO reaches the hit through several clusters.
    """

    hit: Hashable
    num_pfos: int = 0
    num_refs: int = 0

    @property
    def over_associated(self):
        """Whether the hit is claimed by more than one PFO."""
        return self.num_pfos > 1

    def __iter__(self):
        """Unpacks as an `(hit, num_pfos)` pair."""
        return iter((self.hit, self.num_pfos))


@dataclass
class CheckResult:
    """Outcome of the double-counting check of one event.

    Attributes
    ----------
    total_hits : int
        Number of hits checked
    over_associated_hits : int
        Number of hits associated with more than one PFO
    diagnostics : List[HitDiagnostic]
        One diagnostic per hit, in hit list order
    """

    total_hits: int = 0
    over_associated_hits: int = 0
    diagnostics: List[HitDiagnostic] = field(default_factory=list)

    @property
    def passed(self):
        """Whether no hit is associated with more than one PFO."""
        return self.over_associated_hits == 0

    @property
    def over_associated(self):
        """List of hits associated with more than one PFO."""
        return [d.hit for d in self.diagnostics if d.over_associated]

    def as_dict(self):
        """Summary of the check as a dictionary of scalars.

        Returns
        -------
        dict
            Total count, over-associated count and verdict
        """
        return {
            "total_hits": self.total_hits,
            "over_associated_hits": self.over_associated_hits,
            "passed": self.passed,
        }

    def hit_rows(self):
        """Per-hit diagnostics as a list of dictionaries.

        Returns
        -------
        List[dict]
            One `{hit, num_pfos, num_refs}` dictionary per hit
        """
        return [asdict(d) for d in self.diagnostics]
