"""DigestX: dirty-checking change detection for plain Python state."""

from importlib.metadata import version as _version

__version__ = _version("digestx")

from digestx.errors import DigestError, NonConvergenceError
from digestx.equality import are_equal, snapshot
from digestx.scope import Scope, TTL
from digestx.watch import NOT_YET_SAMPLED, Watch, WatchHandle
# textual NOT auto-imported — opt-in only

__all__ = [
    "Scope",
    "TTL",
    "Watch",
    "WatchHandle",
    "NOT_YET_SAMPLED",
    "are_equal",
    "snapshot",
    "DigestError",
    "NonConvergenceError",
]
