"""Value utilities registered on Mix (check, clean, pick, loop, ...)."""

# Import transforms to register capabilities
from . import transforms  # noqa: F401
