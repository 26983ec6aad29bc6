"""Which backend the storefront talks to.

The real catalog and order orchestrator sit behind HttpBackend, built lazily
from configuration on first use. A session or a test can swap in another
backend (usually FakeBackend) for the duration of a block with use_backend().
"""

from collections.abc import Iterator
from contextlib import contextmanager

from storefront.backend.http_adapter import HttpBackend
from storefront.backend.port import StorefrontBackend

_current_backend: StorefrontBackend | None = None


def get_backend() -> StorefrontBackend:
    global _current_backend
    if _current_backend is None:
        _current_backend = HttpBackend()
    return _current_backend


def set_backend(backend: StorefrontBackend | None) -> None:
    """Make `backend` current; None falls back to HttpBackend on the next lookup."""
    global _current_backend
    _current_backend = backend


def reset_backend() -> None:
    set_backend(None)


@contextmanager
def use_backend(backend: StorefrontBackend) -> Iterator[StorefrontBackend]:
    """Make `backend` current inside the block, then restore the previous one."""
    previous = _current_backend
    set_backend(backend)
    try:
        yield backend
    finally:
        set_backend(previous)
