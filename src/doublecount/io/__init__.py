"""I/O tools: event store readers and log/event writers."""

from .factories import reader_factory, writer_factory
from .read import DictReader, HDF5Reader
from .write import CSVWriter, HDF5EventWriter
