"""Scope — a state container whose watches are re-sampled until stable.

Application code mutates a Scope with plain assignment. Nothing is notified
at write time; instead digest() re-runs every watch's observe function and
compares each sample with the last one recorded. Changed watches get their
react callback, and passes repeat until one comes back clean.

Fields live in a dedicated dict (Scope.fields) reachable by attribute and
item access. The registry and the dirty marker are private slots, so they
never collide with application fields.

Short-circuit: the dirty marker remembers the last watch that changed. When
a later pass reaches that watch again and it is clean, every watch since
the change is clean too, and the pass stops. This only holds while the walk
order is fixed, so any watch()/unwatch() clears the marker.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import Any, Callable, NamedTuple

from digestx._registry import WatchRegistry
from digestx.equality import are_equal, snapshot
from digestx.errors import NonConvergenceError
from digestx.watch import Watch, WatchHandle

logger = logging.getLogger("digestx.scope")

# Passes allowed per digest before giving up on convergence.
TTL = 10


class _Outcome(NamedTuple):
    """Result of running one piece of user code: value, or the error it raised."""

    value: Any = None
    error: Exception | None = None


def _contain(fn: Callable[..., Any], *args: Any) -> _Outcome:
    try:
        return _Outcome(value=fn(*args))
    except Exception as exc:
        return _Outcome(error=exc)


class Scope:
    """State container with dirty-checked watches."""

    __slots__ = ("_fields", "_watchers", "_last_dirty")

    def __init__(self, **fields: Any) -> None:
        object.__setattr__(self, "_fields", dict(fields))
        object.__setattr__(self, "_watchers", WatchRegistry())
        object.__setattr__(self, "_last_dirty", None)

    # --- Fields ---

    @property
    def fields(self) -> dict[str, Any]:
        return self._fields

    def get(self, name: str, default: Any = None) -> Any:
        """Read a field, or default if it was never assigned."""
        return self._fields.get(name, default)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name in Scope.__slots__:
            raise AttributeError(name)
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} object has no field {name!r}"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name in Scope.__slots__:
            object.__setattr__(self, name, value)
        else:
            self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._fields[name]
        except KeyError:
            raise AttributeError(name) from None

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self._fields[name] = value

    def __delitem__(self, name: str) -> None:
        del self._fields[name]

    def __contains__(self, name: str) -> bool:
        return name in self._fields

    # --- Watches ---

    @property
    def watch_count(self) -> int:
        return len(self._watchers)

    def watch(self, observe, react=None, *, deep: bool = False) -> WatchHandle:
        """Register observe(scope); react(new, old, scope) runs when its sample changes.

        The first digest after registration always reacts, with old == new.
        Returns a WatchHandle (call .dispose() or scope.unwatch() to stop).

        Usage:
            scope = Scope(name="Jane")
            scope.watch(
                lambda s: s.name,
                lambda new, old, s: setattr(s, "upper", new.upper()),
            )
            scope.digest()
            # scope.upper == "JANE"
        """
        watch = Watch(observe, react, deep)
        self._watchers.add(watch)
        self._last_dirty = None
        return WatchHandle(self, watch)

    def unwatch(self, handle: WatchHandle) -> bool:
        """Remove the handle's watch. Returns False if it was already gone."""
        if handle._scope is not self:
            return False
        handle._disposed = True
        if not self._watchers.remove(handle.watch):
            return False
        self._last_dirty = None
        return True

    # --- Digest ---

    def digest(self) -> int:
        """Run passes until one is clean. Returns the number of passes run.

        Raises NonConvergenceError if the TTL-th pass still saw changes.
        """
        self._last_dirty = None
        passes = 0
        while True:
            passes += 1
            if not self._digest_once():
                logger.debug("Digest settled after %d pass(es)", passes)
                return passes
            if passes >= TTL:
                logger.error("Digest did not settle within %d passes", TTL)
                raise NonConvergenceError(TTL)

    def _digest_once(self) -> bool:
        """One walk over the registry. Returns True if any watch changed."""
        dirty = False
        with closing(iter(self._watchers)) as walk:
            for watch in walk:
                observed = _contain(watch.observe, self)
                if observed.error is not None:
                    logger.exception("Observer of %r failed", watch, exc_info=observed.error)
                    continue
                new_value = observed.value
                old_value = watch.last

                if watch.sampled:
                    compared = _contain(are_equal, new_value, old_value, watch.deep)
                    if compared.error is not None:
                        logger.exception("Comparing samples of %r failed", watch, exc_info=compared.error)
                        continue
                    if compared.value:
                        if self._last_dirty is watch:
                            break
                        continue
                else:
                    old_value = new_value

                stored = _contain(snapshot, new_value, watch.deep)
                if stored.error is not None:
                    logger.exception("Copying sample of %r failed", watch, exc_info=stored.error)
                    continue

                self._last_dirty = watch
                watch.last = stored.value
                reacted = _contain(watch.react, new_value, old_value, self)
                if reacted.error is not None:
                    logger.exception("Reaction of %r failed", watch, exc_info=reacted.error)
                dirty = True
        return dirty

    def __repr__(self) -> str:
        names = ", ".join(self._fields)
        return f"Scope({names}; watches={len(self._watchers)})"
