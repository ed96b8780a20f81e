"""Configuration constants for the spymaster equaliser.

This module centralizes the operational parameters of the knowledge
distribution equaliser, the informant file format and the command line.

Usage:
    from spymaster.config import (
        MAX_EQUALIZATION_STEPS,
        FIELDS_PER_RECORD,
        LOG_FORMAT,
    )
"""

# Equalisation limits
# Upper bound on informants synthesised in one equalisation run; exceeding
# it raises EqualizationLimitError instead of looping forever
MAX_EQUALIZATION_STEPS = 1000

# Informant file format
# condition, coin1 (secret true), coin2 (secret false)
FIELDS_PER_RECORD = 3
FILE_ENCODING = "utf-8"

# Files written by ``spymaster --output-dir``
OUTPUT_FILENAMES = ("spy_a.txt", "spy_b.txt")

# Logging (configured by the CLI only)
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
