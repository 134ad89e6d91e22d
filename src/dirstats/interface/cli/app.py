from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration resolution (defaults,
persisted user file, command-line overrides), logging bootstrap, the
descriptor cap, the switch into the target directory, the analysis run and
the final report.
"""

import os
import sys
from typing import Any, Dict, List, Optional

from dirstats.core.pipeline.engine import analyze_directory
from dirstats.core.pipeline.validator import validate_config
from dirstats.domain.config import get_default_config, load_config, save_config
from dirstats.domain.constants import ROOT_DIR
from dirstats.domain.errors import ResourceLimitError, ScanError
from dirstats.infra.fs import enter_directory
from dirstats.infra.image_probe import build_identify_probe
from dirstats.infra.limits import apply_open_files_limit
from dirstats.infra.logging import LoggingConfig, configure_logging, get_logger
from dirstats.interface.cli import args as cli_args
from dirstats.interface.cli.report import render_json_report, render_text_report

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing (argparse exits with status 2 on malformed input)
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration: defaults < persisted file < command line
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    cfg, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr keeps stdout for the report)
    configure_logging(LoggingConfig(
        level=cfg["log_level"],
        console=True,
        log_file=cfg["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.save_config and save_config(cfg):
        logger.info("Runtime options saved.")

    # 4. Descriptor cap, applied before any directory is opened
    try:
        apply_open_files_limit(cfg["max_open_files"])
    except ResourceLimitError as e:
        logger.critical(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Enter the target directory exactly as given; the scan runs relative to it
    input_path = args.input_path
    if not input_path or not os.path.isdir(input_path) or not enter_directory(input_path):
        logger.error(f"Cannot enter directory: {input_path}")
        parser.print_usage(sys.stderr)
        print(f"ERROR: cannot access directory '{input_path}'", file=sys.stderr)
        return EXIT_USAGE

    # 6. Analysis
    probe = build_identify_probe(
        command=cfg["image_probe_command"],
        timeout=cfg["image_probe_timeout"],
    )
    try:
        results = analyze_directory(cfg["top_n"], ROOT_DIR, image_probe=probe)
    except KeyboardInterrupt:
        logger.warning("Analysis interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except ScanError as e:
        logger.critical(f"Analysis aborted: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 7. Report
    if args.json_output:
        _emit(render_json_report(results))
    else:
        _emit(render_text_report(results))

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge known override keys that carry a value.

    Args:
        base: The lower-precedence configuration.
        overrides: Values from the command line.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def _emit(text: str) -> None:
    """
    Write a report to stdout as filesystem bytes.

    Filenames that are not valid in the filesystem encoding reach the
    report as surrogate escapes; os.fsencode restores their original bytes.

    Args:
        text: Rendered report, without a trailing newline.
    """
    stream = getattr(sys.stdout, "buffer", None)
    if stream is None:
        print(text)
        return
    sys.stdout.flush()
    stream.write(os.fsencode(text + "\n"))
    stream.flush()

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
