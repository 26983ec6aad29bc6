"""Tests for selecting the active backend."""

import pytest
from storefront.app import StorefrontApp
from storefront.backend import get_backend, reset_backend, set_backend, use_backend
from storefront.backend.fake_adapter import FakeBackend
from storefront.backend.http_adapter import HttpBackend


def test_http_backend_by_default():
    assert isinstance(get_backend(), HttpBackend)
    assert get_backend() is get_backend()


def test_reset_rebuilds_http_backend():
    set_backend(FakeBackend())
    reset_backend()
    assert isinstance(get_backend(), HttpBackend)


def test_use_backend_restores_previous(backend):
    outer = FakeBackend()
    set_backend(outer)

    with use_backend(backend) as active:
        assert active is backend
        assert get_backend() is backend
        assert StorefrontApp().backend is backend

    assert get_backend() is outer


def test_use_backend_restores_after_error(backend):
    outer = FakeBackend()
    set_backend(outer)
    with pytest.raises(RuntimeError):
        with use_backend(backend):
            raise RuntimeError("boom")
    assert get_backend() is outer
