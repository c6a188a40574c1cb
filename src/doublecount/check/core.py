"""Entry point of the double-counting check."""

from typing import Hashable, Iterable, Mapping, Optional, Sequence

from doublecount.data.result import CheckResult

from .audit import audit
from .errors import MultiAssociationError
from .resolve import resolve_associations

__all__ = ["check"]


def check(
    hits: Sequence[Hashable],
    pfos: Sequence[Hashable],
    pfo_to_clusters: Mapping[Hashable, Sequence[Hashable]],
    cluster_to_hits: Mapping[Hashable, Sequence[Hashable]],
    clusters: Optional[Iterable[Hashable]] = None,
    entry: Optional[int] = None,
) -> CheckResult:
    """Checks that no hit is associated with more than one PFO.

    Parameters
    ----------
    hits : Sequence[Hashable]
        List of hit identities
    pfos : Sequence[Hashable]
        List of PFO identities
    pfo_to_clusters : Mapping[Hashable, Sequence[Hashable]]
        Ordered list of clusters associated with each PFO
    cluster_to_hits : Mapping[Hashable, Sequence[Hashable]]
        Ordered list of hits associated with each cluster
    clusters : Iterable[Hashable], optional
        List of cluster identities
    entry : int, optional
        Entry index, only used to label the error message

    Returns
    -------
    CheckResult
        Counts and per-hit diagnostics of a passing event

    Raises
    ------
    MalformedInputError
        If a relation references an undeclared identity
    MultiAssociationError
        If at least one hit is associated with more than one PFO
    """
    hit_to_pfos = resolve_associations(
        pfos, pfo_to_clusters, cluster_to_hits, clusters=clusters, hits=hits
    )
    result = audit(hits, hit_to_pfos)
    if not result.passed:
        raise MultiAssociationError(result, entry=entry)

    return result
