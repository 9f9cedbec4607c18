import sys

if sys.version_info < (3, 12):
    print("rawhandle requires python 3.12+", file=sys.stderr)
    exit(1)


from .config import CleanupErrorPolicy, HandleSettings, get_settings
from .deleter import Deleter, is_null, is_same
from .errors import HandleCopyError, NullHandleError
from .handle import OwningHandle, make_handle


__all__ = [
    "OwningHandle",
    "make_handle",

    "Deleter",
    "is_null",
    "is_same",

    "CleanupErrorPolicy",
    "HandleSettings",
    "get_settings",

    "HandleCopyError",
    "NullHandleError",
]
