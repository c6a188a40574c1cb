"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import os

import pytest

from doublecount.data import EventData
from doublecount.io.write import HDF5EventWriter


def make_events():
    """Builds a small list of events with integer keys.

    Entry 0 passes, entry 1 has one hit shared by two PFOs, entry 2 has a
    hit reached twice by the same PFO (passes).
    """
    return [
        EventData.from_pairs(
            3, 1, 1, [[0, 0]], [[0, 0], [0, 1], [0, 2]], run=1, subrun=0, event=10
        ),
        EventData.from_pairs(
            2,
            2,
            2,
            [[0, 0], [1, 1]],
            [[0, 0], [1, 0], [1, 1]],
            run=1,
            subrun=0,
            event=11,
        ),
        EventData.from_pairs(
            4,
            2,
            1,
            [[0, 0], [0, 1]],
            [[0, 0], [0, 1], [1, 1], [1, 2]],
            run=1,
            subrun=0,
            event=12,
        ),
    ]


@pytest.fixture(name="events")
def fixture_events():
    """List of events with one failing entry (entry 1)."""
    return make_events()


@pytest.fixture(name="hdf5_events")
def fixture_hdf5_events(tmp_path, events):
    """Writes the list of events to an HDF5 event store.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    events : List[EventData]
       Events to store
    """
    path = os.path.join(tmp_path, "events.h5")
    writer = HDF5EventWriter(path, hit_label="gaushit", pandora_label="pandora")
    writer(events)

    return path


@pytest.fixture(name="hdf5_passing")
def fixture_hdf5_passing(tmp_path, events):
    """Writes the passing events only to an HDF5 event store."""
    path = os.path.join(tmp_path, "passing.h5")
    writer = HDF5EventWriter(path, hit_label="gaushit", pandora_label="pandora")
    writer([events[0], events[2]])

    return path
