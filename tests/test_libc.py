"""Tests for libc-backed handles passed through ctypes."""

import ctypes

import pytest

from rawhandle import OwningHandle, libc


def test_allocate_passes_handle_to_foreign_functions() -> None:
    with libc.allocate(16) as buf:
        ctypes.memmove(buf, b"hello\0", 6)

        assert ctypes.string_at(buf) == b"hello"
        assert libc.strlen(buf) == 5
        assert buf.owns

    assert not buf.owns


def test_duplicate_copies_string() -> None:
    with libc.duplicate(b"legacy") as s:
        assert isinstance(s.value, libc.void_p)
        assert libc.strlen(s) == 6
        assert ctypes.string_at(s) == b"legacy"


def test_released_pointer_is_freed_by_consumer() -> None:
    handle = libc.allocate(32)

    ptr = handle.release()
    libc.free(ptr)
    handle.close()

    assert not handle
    assert handle.get() is None


def test_moved_pointer_is_freed_once() -> None:
    source = libc.duplicate(b"moved")

    with source.take() as dest:
        assert ctypes.string_at(dest) == b"moved"
        source.close()

    assert not dest.owns


def test_handle_over_foreign_null_is_empty() -> None:
    handle = OwningHandle(libc.void_p(None), libc.free)

    assert not handle
    handle.close()


def test_allocate_failure_raises_memory_error(monkeypatch) -> None:
    monkeypatch.setattr(libc, "malloc", lambda size: libc.void_p(None))

    with pytest.raises(MemoryError):
        libc.allocate(8)
