"""
Version information for claude-dashboard-event-logger.

Format: MAJOR.MINOR.PATCH[-PHASE]
"""

# Semantic version components
MAJOR = 0
MINOR = 1
PATCH = 0

# Optional release phase (alpha, beta, rc1, rc2, etc.)
# Set to None for stable releases
PHASE = None  # Stable release

__version__ = f"{MAJOR}.{MINOR}.{PATCH}"


def get_version():
    """Return the version string with optional phase."""
    if PHASE:
        return f"{__version__}-{PHASE}"
    return __version__


# For convenience in imports
VERSION = get_version()
