from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dirstats CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dirstats",
        description=(
            "Recursively analyze a directory: file and directory totals, "
            "largest file, most common words in .txt files, largest images "
            "and vacant directories."
        ),
    )

    p.add_argument(
        "top_n",
        metavar="N",
        type=int,
        help="Number of words and images to report.",
    )
    p.add_argument(
        "input_path",
        metavar="directory_name",
        help="Directory to analyze.",
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON instead of the text report.",
    )

    # --- Runtime constraints ---
    p.add_argument(
        "--max-open-files",
        dest="max_open_files",
        type=int,
        default=None,
        help="Cap on simultaneously open file descriptors (default: 256).",
    )
    p.add_argument(
        "--probe-command",
        dest="image_probe_command",
        default=None,
        help="Executable used to measure images (default: identify).",
    )
    p.add_argument(
        "--probe-timeout",
        dest="image_probe_timeout",
        type=float,
        default=None,
        help="Seconds to wait for the image probe on each file.",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted user configuration.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective runtime options for future runs.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options left unset map to None and do not override lower layers.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "top_n": args.top_n,
        "max_open_files": args.max_open_files,
        "image_probe_command": args.image_probe_command,
        "image_probe_timeout": args.image_probe_timeout,
        "log_file": args.log_file,
    }

    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
