"""Limits and defaults for the base and time converters."""

import string

DIGITS = string.digits + string.ascii_lowercase
"""Digit alphabet shared by every supported base."""

MIN_BASE = 2
MAX_BASE = 36

DEFAULT_CUSTOM_BASE = 32

MAX_FRACTION_DIGITS = 8
"""Maximum number of fractional digits emitted by a base conversion."""

DEFAULT_MAX_RECURSION_DEPTH = 100
"""Maximum expression tree visit depth (CWE-674 prevention)."""

MAX_EXPRESSION_LENGTH = 256
"""Maximum length of an arithmetic timestamp expression."""

RELATIVE_TIME_REFRESH_SECONDS = 1.0

EMPTY_DISPLAY = "-"
"""Placeholder rendered for derived time fields without a valid instant."""
