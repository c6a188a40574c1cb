"""Multiplicity auditor.

Scans every hit of an event, counts the distinct PFOs which reach it and
decides whether the event passes the double-counting check.
"""

from typing import Hashable, Sequence

from doublecount.data.result import CheckResult, HitDiagnostic
from doublecount.utils.logger import logger

from .resolve import HitPfoMap

__all__ = ["audit"]


def audit(hits: Sequence[Hashable], hit_to_pfos: HitPfoMap) -> CheckResult:
    """Classifies each hit as uniquely associated or over-associated.

    Every hit in `hits` is checked, including the ones which no PFO
    reaches (they count as having zero associations). A hit is
    over-associated if two or more distinct PFOs reach it.

    Parameters
    ----------
    hits : Sequence[Hashable]
        Full list of hit identities of the event
    hit_to_pfos : HitPfoMap
        Derived Hit -> PFOs relation

    Returns
    -------
    CheckResult
        Counts and per-hit diagnostics. Does not raise on failure.
    """
    result = CheckResult()
    for hit in hits:
        num_pfos = hit_to_pfos.num_pfos(hit)
        num_refs = hit_to_pfos.num_refs(hit)
        logger.debug("Hit %s - nPFParticles = %d", hit, num_pfos)

        diag = HitDiagnostic(hit, num_pfos, num_refs)
        result.diagnostics.append(diag)
        result.total_hits += 1
        if diag.over_associated:
            result.over_associated_hits += 1

    logger.info(
        "Of %d hits, %d were associated to more than one PFParticle",
        result.total_hits,
        result.over_associated_hits,
    )

    return result
