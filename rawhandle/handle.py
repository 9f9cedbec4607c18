import logging
import operator
import warnings
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

from .config import CleanupErrorPolicy, get_settings
from .deleter import Deleter, is_null, is_same
from .errors import HandleCopyError, NullHandleError


logger = logging.getLogger(__name__)


class OwningHandle[T]:
    """
    Single-owner handle binding a raw resource to the function that frees it.

    The cleanup function is called exactly once, when the handle is closed while it still owns a non-null value:
    explicitly with close(), on leaving a `with` block (including on exceptions), or as a last resort when the
    handle is garbage collected.

    A handle can be passed in place of its raw value to ctypes foreign functions and to functions taking an int
    descriptor. That is a borrowed view, ownership stays with the handle.

    DO NOT pass the handle (or its raw value) to a legacy function that consumes the resource, it would be freed
    twice. Hand it over with release() instead:

        legacy_consume(handle.release())
    """

    def __init__(
        self,
        value: T | None,
        cleanup: Callable[[T], None],
        *,
        null: Any = None,
        on_cleanup_error: CleanupErrorPolicy | None = None,
    ) -> None:
        self.__owns = False
        self.__deleter = Deleter(cleanup, null)
        self.__null = null
        self.__value = value
        self.__on_error = on_cleanup_error
        self.__owns = True

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}({self.__value!r}, owns={self.__owns})"

    def __bool__(self) -> bool:
        return self.__owns and not is_null(self.__value, self.__null)

    def __index__(self) -> int:
        return operator.index(self.__value)

    @property
    def _as_parameter_(self):
        return self.__value

    @property
    def owns(self) -> bool:
        return self.__owns

    @property
    def value(self) -> T:
        # null ctypes instances are returned so they can be filled through byref()
        if self.__value is None or (self.__null is not None and self.__value == self.__null):
            raise NullHandleError("null handle dereference")
        return self.__value

    def get(self) -> T | None:
        '''Borrow the raw value without transferring ownership'''
        return self.__value

    def release(self) -> T | None:
        '''Give up ownership and return the raw value, the caller becomes responsible for freeing it'''
        value, self.__value = self.__value, self.__null
        self.__owns = False
        return value

    def reset(self, value: T | None = None) -> None:
        if value is None:
            value = self.__null
        if self.__owns and is_same(value, self.__value):
            return
        old, owned = self.__value, self.__owns
        self.__value, self.__owns = value, True
        if owned:
            self.__dispose(old, reraise=self.__policy() == CleanupErrorPolicy.RAISE)

    def take(self) -> "OwningHandle[T]":
        '''
        Move ownership into a new handle, leaving this one empty.

        The new handle has the same type and carries over any attributes a subclass set on this one.
        '''
        value, owned = self.__detach()
        handle = object.__new__(type(self))
        handle.__dict__.update(self.__dict__)
        handle.__value, handle.__owns = value, owned
        return handle

    def move_from(self, other: "OwningHandle[T]") -> None:
        '''Free the currently owned value, then take over ownership from `other`'''
        if other is self:
            return
        if not isinstance(other, OwningHandle):
            raise TypeError(f"cannot move from {type(other).__name__}")

        value, owned = self.__detach()
        if owned:
            self.__dispose(value, reraise=self.__policy() == CleanupErrorPolicy.RAISE)

        self.__deleter = other.__deleter
        self.__null = other.__null
        self.__on_error = other.__on_error
        self.__value, self.__owns = other.__detach()

    def close(self) -> None:
        value, owned = self.__detach()
        if owned:
            self.__deleter(value)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        value, owned = self.__detach()
        if not owned:
            return
        try:
            self.__deleter(value)
        except Exception as e:
            if exc is None and self.__policy() == CleanupErrorPolicy.RAISE:
                raise
            logger.error("cleanup of %r failed", value, exc_info=True)
            if exc is not None:
                exc.add_note(f"cleanup of {value!r} also failed: {e!r}")

    def __del__(self):
        if not self.__owns:
            return
        value, _ = self.__detach()
        if is_null(value, self.__null):
            return
        if get_settings().warn_unclosed:
            warnings.warn(f"unclosed handle {value!r}", ResourceWarning, source=self)
        self.__dispose(value, reraise=False)

    def __copy__(self):
        raise HandleCopyError(type(self))

    def __deepcopy__(self, memo):
        raise HandleCopyError(type(self))

    def __reduce_ex__(self, protocol):
        raise HandleCopyError(type(self))

    def __detach(self) -> tuple[Any, bool]:
        # the handle is emptied before any cleanup runs, so a failing cleanup is never retried
        value, owned = self.__value, self.__owns
        self.__value, self.__owns = self.__null, False
        return value, owned

    def __dispose(self, value: Any, reraise: bool) -> None:
        try:
            self.__deleter(value)
        except Exception:
            if reraise:
                raise
            logger.error("cleanup of %r failed", value, exc_info=True)

    def __policy(self) -> CleanupErrorPolicy:
        if self.__on_error is not None:
            return self.__on_error
        return get_settings().cleanup_errors


def make_handle[T](
    value: T,
    cleanup: Callable[[T], None],
    *,
    null: Any = None,
    on_cleanup_error: CleanupErrorPolicy | None = None,
) -> OwningHandle[T]:
    return OwningHandle(value, cleanup, null=null, on_cleanup_error=on_cleanup_error)
