"""
System Constants and Enumerations

This module defines constants and enumerations shared across the loader.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for stage identifiers and entry states
- Store value tags live here so the codec and the probe script agree
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Loader processing stages for structured logging.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}
    - SEQUENCE: Numeric order (0.0, 1.0, 2.0) or alphabetic prefix (REDIS, D)
    - DESCRIPTIVE_NAME: Clear, uppercase description with underscores

    Examples:
        log_stage(logger, Stage.STORE_READ, "Reading keys from redis", keys=[...])
    """

    # Loader lifecycle
    LOADER_INIT = "0.0_LOADER_INIT"

    # Resolution pass (sequential)
    DEDUPLICATION = "1.0_DEDUPLICATION"
    STORE_READ = "2.0_STORE_READ"
    FALLBACK_FETCH = "3.0_FALLBACK_FETCH"
    STORE_WRITE = "4.0_STORE_WRITE"
    STORE_WRITE_NOT_FOUND = "4.1_STORE_WRITE_NOT_FOUND"
    RESULT_ASSEMBLY = "5.0_RESULT_ASSEMBLY"

    # Operations layered on the resolver
    EXISTS_PROBE = "E_EXISTS_PROBE"
    CACHED_READ = "C_CACHED_READ"
    CLEAR = "X_CLEAR"
    PRIME = "P_PRIME"

    # Cross-cutting concerns
    DISPATCH = "D_BATCH_DISPATCH"
    REDIS = "REDIS_CLIENT"


# ============================================================================
# Resolution Entry States
# ============================================================================


class EntryState(str, Enum):
    """
    State of a single resolution entry inside one batch pass.

    UNRESOLVED: Not found in the store yet (a miss until fetched)
    HIT: Value read from the store
    NEGATIVE_HIT: Negative entry read from the store
    FETCHED: Value returned by the fallback fetch and written back
    FETCH_NOT_FOUND: Fallback reported "no value"; negative entry written
    FETCH_ERROR: Fallback returned an error; nothing written
    """

    UNRESOLVED = "unresolved"
    HIT = "hit"
    NEGATIVE_HIT = "negative_hit"
    FETCHED = "fetched"
    FETCH_NOT_FOUND = "fetch_not_found"
    FETCH_ERROR = "fetch_error"


# ============================================================================
# Stored Value Tags
# ============================================================================

# Every value the loader writes starts with one of these tags.
# A negative entry is the bare tag, so no serialized payload can equal it.
VALUE_TAG = "v"
NOT_FOUND_TAG = "n"

# Probe script reply for a key holding a positive entry
PROBE_PRESENT = 1

# ============================================================================
# Defaults
# ============================================================================

DEFAULT_TTL = 3600  # Positive entries (1 hour)
DEFAULT_NOT_FOUND_TTL = 30  # Negative entries (seconds)

KEY_SEPARATOR = ":"  # Between namespace and normalized key
SUFFIX_SEPARATOR = "-"  # Between loader name and suffix
SEQUENCE_KEY_SEPARATOR = ","  # Joins list/tuple keys

LOG_KEY_TRUNCATE = 64  # Max characters of a store key shown in log lines
