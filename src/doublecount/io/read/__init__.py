"""Readers which serve the inputs of the double-counting check."""

from .memory import *
from .hdf5 import *
