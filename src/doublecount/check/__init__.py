"""Hit double-counting check.

The check proceeds in two steps:
- :func:`resolve_associations` walks the PFO -> Cluster -> Hit relations
  and builds the list of PFOs which reach each hit;
- :func:`audit` counts the distinct PFOs of each hit and flags the hits
  claimed by more than one of them.

:func:`check` chains both and raises if the event fails.
"""

from .audit import audit
from .core import check
from .errors import DoubleCountError, MalformedInputError, MultiAssociationError
from .resolve import HitPfoMap, resolve_associations, validate_associations

__all__ = [
    "check",
    "audit",
    "resolve_associations",
    "validate_associations",
    "HitPfoMap",
    "DoubleCountError",
    "MalformedInputError",
    "MultiAssociationError",
]
