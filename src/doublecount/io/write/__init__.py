"""Writers which store events and check logs to file."""

from .csv import *
from .hdf5 import *
