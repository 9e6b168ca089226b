"""Watch records and the handles that remove them.

A Watch is the (observe, react, deep) triple plus the last recorded sample.
Scope.watch() returns a WatchHandle for cleanup via .dispose(), the same
call as Scope.unwatch(handle).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from digestx.scope import Scope

    Observer = Callable[[Scope], Any]
    Reactor = Callable[[Any, Any, Scope], None]

# Baseline of a watch that has never been sampled. Distinct from None.
NOT_YET_SAMPLED = object()


def _noop(new_value, old_value, scope) -> None:
    pass


class Watch:
    """One registered observation on a Scope."""

    __slots__ = ("observe", "react", "deep", "last")

    def __init__(self, observe: Observer, react: Reactor | None = None, deep: bool = False) -> None:
        self.observe = observe
        self.react = react if react is not None else _noop
        self.deep = bool(deep)
        self.last: Any = NOT_YET_SAMPLED

    @property
    def sampled(self) -> bool:
        return self.last is not NOT_YET_SAMPLED

    def __repr__(self) -> str:
        name = getattr(self.observe, "__name__", repr(self.observe))
        mode = "deep" if self.deep else "ref"
        return f"Watch({name}, {mode})"


class WatchHandle:
    """Disposable handle for a registered watch."""

    __slots__ = ("_scope", "_watch", "_disposed")

    def __init__(self, scope: Scope, watch: Watch) -> None:
        self._scope = scope
        self._watch = watch
        self._disposed = False

    @property
    def watch(self) -> Watch:
        return self._watch

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Remove the watch from its scope. Safe to call more than once."""
        self._scope.unwatch(self)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"WatchHandle({self._watch!r}, {state})"
