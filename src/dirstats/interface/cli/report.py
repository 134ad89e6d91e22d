from __future__ import annotations

"""
Report Rendering.

Turns a ScanResults value into the human-readable console report or its
JSON equivalent.
"""

import json
from typing import List

from dirstats.domain.scan_models import ScanResults

RULE = "-" * 62


def render_text_report(res: ScanResults) -> str:
    """
    Format the result as the labeled text report.

    Args:
        res: Completed analysis.

    Returns:
        str: Multi-line report, without a trailing newline.
    """
    lines: List[str] = [
        RULE,
        f'Largest file:      "{res.largest_file_path}"',
        f"Largest file size: {res.largest_file_size}",
        f"Number of files:   {res.n_files}",
        f"Number of dirs:    {res.n_dirs}",
        f"Total file size:   {res.all_files_size}",
        "Most common words from .txt files:",
    ]
    lines.extend(f' - "{word}" x {count}' for word, count in res.most_common_words)

    lines.append("Vacant directories:")
    lines.extend(f' - "{d}"' for d in res.vacant_dirs)

    lines.append("Largest images:")
    lines.extend(
        f' - "{img.path}" {img.width}x{img.height}' for img in res.largest_images
    )
    lines.append(RULE)
    return "\n".join(lines)


def render_json_report(res: ScanResults) -> str:
    """Serialize the result as indented JSON."""
    return json.dumps(res.to_dict(), ensure_ascii=False, indent=2)
