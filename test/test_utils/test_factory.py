"""Test the class instantiation helpers."""

import pytest

from doublecount.io import read
from doublecount.io.read import DictReader, HDF5Reader
from doublecount.utils.factory import instantiate, module_dict


def test_module_dict():
    """Classes are registered under their class name and their alias."""
    classes = module_dict(read)

    assert classes["hdf5"] is HDF5Reader
    assert classes["HDF5Reader"] is HDF5Reader
    assert classes["dict"] is DictReader
    assert "ReaderBase" not in classes


def test_instantiate():
    """Instantiate a class from a configuration block or a name."""
    classes = module_dict(read)
    events = [{"hits": [], "pfos": [], "pfo_to_clusters": {}, "cluster_to_hits": {}}]

    reader = instantiate(classes, {"name": "dict", "events": events})
    assert isinstance(reader, DictReader)

    reader = instantiate(classes, {"reader": "dict"}, alt_name="reader", events=events)
    assert isinstance(reader, DictReader)

    with pytest.raises(ValueError):
        instantiate(classes, "larcv")

    with pytest.raises(AssertionError):
        instantiate(classes, {"events": events})

    with pytest.raises(AssertionError):
        instantiate(classes, {"name": "dict", "events": events}, events=events)
