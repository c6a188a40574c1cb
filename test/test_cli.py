"""Test the command-line entry point."""

import os

import pytest

from doublecount.bin.cli import build_parser, cli


@pytest.fixture(name="config_file")
def fixture_config_file(tmp_path):
    """Writes a minimal configuration file next to the event stores."""
    path = os.path.join(tmp_path, "check.yaml")
    with open(path, "w", encoding="utf-8") as f:
        f.write("""
base:
  verbosity: warning
io:
  reader:
    name: hdf5
    hit_label: gaushit
    pandora_label: pandora
""")

    return path


def test_cli_pass(config_file, hdf5_passing):
    """Every entry passes: zero exit status."""
    assert cli(["-c", config_file, "-s", hdf5_passing]) == 0


def test_cli_fail(config_file, hdf5_events):
    """One entry fails: non-zero exit status."""
    assert cli(["-c", config_file, "-s", hdf5_events]) == 1


def test_cli_entry_selection(config_file, hdf5_events):
    """Restricting the entries to the passing one."""
    assert cli(["-c", config_file, "-s", hdf5_events, "-n", "1"]) == 0


def test_cli_overrides(config_file, hdf5_events, tmp_path):
    """Overrides from the command line reach the driver."""
    status = cli(
        [
            "-c",
            config_file,
            "-s",
            hdf5_events,
            "--set",
            "base.stop_on_failure=false",
            "--log-dir",
            str(tmp_path),
        ]
    )

    assert status == 1
    with open(os.path.join(tmp_path, "doublecount_log.csv"), encoding="utf-8") as f:
        assert len(f.read().splitlines()) == 4


def test_cli_bad_label(config_file, hdf5_passing):
    """A producer label which is not in the file."""
    with pytest.raises(KeyError):
        cli(["-c", config_file, "-s", hdf5_passing, "--hit-label", "hitcheat"])


def test_cli_bad_override(config_file, hdf5_passing):
    """An override without a value."""
    with pytest.raises(ValueError):
        cli(["-c", config_file, "-s", hdf5_passing, "--set", "base.verbosity"])


def test_parser():
    """The configuration file is mandatory."""
    with pytest.raises(SystemExit):
        build_parser().parse_args([])

    args = build_parser().parse_args(["-c", "a.yaml", "-S", "files.txt"])
    assert args.source is None
    assert args.source_list == "files.txt"
