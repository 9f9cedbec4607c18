import ctypes
from collections.abc import Callable
from typing import Any


def _address(value: Any) -> Any:
    if isinstance(value, ctypes._Pointer):
        return ctypes.cast(value, ctypes.c_void_p).value
    if isinstance(value, ctypes._SimpleCData):
        return value.value
    return value


def is_null(value: Any, null: Any = None) -> bool:
    '''Check whether a raw resource value is null or the given sentinel'''
    if value is None:
        return True
    if isinstance(value, ctypes._Pointer):
        return not value
    if isinstance(value, ctypes._SimpleCData):
        # an explicit sentinel replaces the "falsy is NULL" rule, so c_int(0) stays a valid descriptor
        if null is not None:
            return value.value is None or value.value == null
        return not value
    return null is not None and value == null


def is_same(a: Any, b: Any) -> bool:
    '''Check whether two raw values refer to the same resource'''
    if a is b:
        return True
    if a is None or b is None:
        return False
    return _address(a) == _address(b)


class Deleter[T]:
    '''Wraps a cleanup function so that it is never called with a null value'''

    def __init__(self, free: Callable[[T], None], null: Any = None):
        if not callable(free):
            raise TypeError("cleanup must be callable")
        self.free = free
        self.null = null

    def __call__(self, value: T) -> bool:
        if is_null(value, self.null):
            return False
        self.free(value)
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.free!r}, null={self.null!r})"
