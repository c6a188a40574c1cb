"""Top-level module of the hit double-counting check."""

# Import the check entry point and its errors
from .check import MalformedInputError, MultiAssociationError, check

# Import main workflow entry point
from .driver import Driver
from .version import __version__
