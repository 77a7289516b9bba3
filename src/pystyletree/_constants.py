"""Internal constants shared across the library."""

WILDCARD = "*"
NOUN_SEPARATOR = "."
STATE_SEPARATOR = "-"
KEY_SEPARATOR = ":"

# Each literal noun segment outweighs any number of explicit states.
NOUN_WEIGHT = 100

BASE_STATES: tuple[str, ...] = (WILDCARD,)

# ------------------------------------------------------------------
# Style document conventions
# ------------------------------------------------------------------

STATE_PREFIX = "$"
STATE_LIST_DELIMITER = ","
