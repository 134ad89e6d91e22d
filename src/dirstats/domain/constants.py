from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed parameters of the directory analysis: path
sentinels, word extraction thresholds, and runtime defaults.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# Relative path of the scan root and the sentinel parent of the root
ROOT_DIR = "."
NO_PATH = ""
PATH_SEPARATOR = "/"

# Largest-file candidate before any file has been seen
DEFAULT_LARGEST_SIZE = -1

# Word extraction
TEXT_FILE_SUFFIX = ".txt"
MIN_WORD_LENGTH = 5

# Runtime defaults
DEFAULT_TOP_N = 10
DEFAULT_MAX_OPEN_FILES = 256
DEFAULT_IMAGE_PROBE_COMMAND = "identify"
# One line per frame; multi-frame images report the first frame
IMAGE_PROBE_FORMAT = "%w %h\\n"
