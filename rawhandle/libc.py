from ctypes import *
import ctypes.util

from .handle import OwningHandle


libc = CDLL(ctypes.util.find_library("c"))

def _import(symbol: str, restype: type | None, *argtypes: type):
    f = libc[symbol]
    f.argtypes = argtypes
    f.restype = restype
    return f

# subclassing keeps ctypes from converting returned pointers to int
class void_p(c_void_p): pass

# Memory

malloc = _import("malloc", void_p, c_size_t)
free = _import("free", None, c_void_p)

def allocate(size: int) -> OwningHandle[void_p]:
    ptr = malloc(size)
    if not ptr:
        raise MemoryError(f"malloc({size}) failed")
    return OwningHandle(ptr, free)

# Strings

strdup = _import("strdup", void_p, c_char_p)
strlen = _import("strlen", c_size_t, c_void_p)

def duplicate(data: bytes) -> OwningHandle[void_p]:
    ptr = strdup(data)
    if not ptr:
        raise MemoryError("strdup failed")
    return OwningHandle(ptr, free)
