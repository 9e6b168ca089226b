"""Textual integration for DigestX. Opt-in — requires textual.

Reactions that touch widgets go through watch() here: the guard, the
NoMatches catch and the thread marshal live in this module, not at
callsites. Core DigestX stays agnostic of Textual. Digest scheduling is
still up to the caller.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded reactions during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def watch(app, scope, observe, react=None, *, deep=False):
    """scope.watch() whose reaction safely bridges to Textual widgets.

    Skips the reaction while the app is paused or not running, catches
    NoMatches from widget queries, and marshals reactions through
    call_from_thread when the digest runs on a thread other than the one
    that called watch(). Register from the app thread so that thread is
    the app's. The sample is recorded either way, so a skipped reaction
    is not replayed on the next digest.
    """
    if react is None:
        return scope.watch(observe, deep=deep)

    _main = threading.get_ident()

    def _guarded(new_value, old_value, scope):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, new_value, old_value, scope)
        else:
            _safe(new_value, old_value, scope)

    def _safe(new_value, old_value, scope):
        try:
            react(new_value, old_value, scope)
        except NoMatches:
            pass

    return scope.watch(observe, _guarded, deep=deep)
