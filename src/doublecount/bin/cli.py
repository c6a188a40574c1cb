#!/usr/bin/env python3
"""Command-line entry point of the double-counting check."""

import argparse
import os
import pathlib
import sys
from typing import List

from doublecount.check import DoubleCountError
from doublecount.config import load_config_file, parse_value, resolve_config_path
from doublecount.config import set_nested_value
from doublecount.utils.logger import logger
from doublecount.version import __version__


def main(
    config: str,
    source: List[str],
    source_list: str,
    n: int,
    nskip: int,
    entry_list: str,
    skip_entry_list: str,
    hit_label: str,
    pandora_label: str,
    log_dir: str,
    config_overrides: List[str],
):
    """Main driver for the double-counting check.

    Performs these basic functions:
    - Update the configuration with the command-line arguments
    - Run the check over the requested entries

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the input files
    source_list : str
        Path to a text file containing a list of data file paths
    n : int
        Number of entries to check
    nskip : int
        Number of entries to skip
    entry_list : str
        Path to a text file containing a list of entries to check
    skip_entry_list : str
        Path to a text file containing a list of entries to skip
    hit_label : str
        Label of the hit producer
    pandora_label : str
        Label of the cluster/PFO producer
    log_dir : str
        Path to the directory for storing the CSV logs
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"

    Returns
    -------
    dict
        Number of entries checked and list of the entries which failed
    """
    # Load the configuration file
    cfg_file = resolve_config_path(config, current_dir=os.getcwd())
    cfg = load_config_file(cfg_file)

    # If there is no base block, build one
    if cfg.get("base") is None:
        cfg["base"] = {}

    # Propagate the configuration parent directory to enable relative paths
    cfg["base"]["parent_path"] = str(pathlib.Path(cfg_file).parent)

    # The configuration must minimally contain a reader block
    if "io" not in cfg or "reader" not in cfg["io"]:
        raise KeyError("Configuration file must contain an `io.reader` block.")

    # Override the input command-line information into the configuration
    io_mapping = {
        "file_keys": source if source is not None else source_list,
        "n_entry": n,
        "n_skip": nskip,
        "entry_list": entry_list,
        "skip_entry_list": skip_entry_list,
        "hit_label": hit_label,
        "pandora_label": pandora_label,
    }
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    if log_dir is not None:
        cfg["base"]["log_dir"] = log_dir

    # Apply any generic config overrides from --set arguments
    for override in config_overrides or []:
        if "=" not in override:
            raise ValueError(
                f"Invalid --set format: '{override}'. "
                f"Expected format: 'key.path=value'"
            )

        key_path, value_str = override.split("=", 1)
        cfg, _ = set_nested_value(cfg, key_path.strip(), parse_value(value_str.strip()))

    # Run the check
    from doublecount.main import run

    return run(cfg)


def build_parser():
    """Builds the command-line argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Argument parser
    """
    parser = argparse.ArgumentParser(
        description="doublecount - check that no hit is shared between PFParticles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  doublecount -c config.yaml                        Run the check
  doublecount -c config.yaml -s events.h5           Override the input file
  doublecount -c config.yaml --set base.verbosity=debug   Print every hit
""",
    )

    parser.add_argument(
        "--version", "-v", action="version", version=f"doublecount {__version__}"
    )
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the input files"
    )
    group.add_argument(
        "-S",
        "--source-list",
        help="Path to a text file containing a list of data file paths",
    )

    parser.add_argument("-n", type=int, help="Number of entries to check")
    parser.add_argument("--nskip", type=int, help="Number of entries to skip")
    parser.add_argument(
        "--entry-list", help="Path to a text file with a list of entries to check"
    )
    parser.add_argument(
        "--skip-entry-list", help="Path to a text file with a list of entries to skip"
    )
    parser.add_argument("--hit-label", help="Label of the hit producer")
    parser.add_argument("--pandora-label", help="Label of the cluster/PFO producer")
    parser.add_argument("--log-dir", help="Directory where to write the CSV logs")
    parser.add_argument(
        "--set",
        dest="config_overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override a configuration parameter (e.g. --set base.log_hits=true)",
    )

    return parser


def cli(argv=None):
    """Main CLI entry point.

    Parameters
    ----------
    argv : List[str], optional
        Command-line arguments (default: `sys.argv[1:]`)

    Returns
    -------
    int
        Exit status: 0 if every entry passes, 1 otherwise
    """
    args = build_parser().parse_args(argv)

    try:
        summary = main(
            args.config,
            args.source,
            args.source_list,
            args.n,
            args.nskip,
            args.entry_list,
            args.skip_entry_list,
            args.hit_label,
            args.pandora_label,
            args.log_dir,
            args.config_overrides,
        )

    except DoubleCountError as err:
        logger.error("Double-counting check failed: %s", err)
        return 1

    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    sys.exit(cli())
