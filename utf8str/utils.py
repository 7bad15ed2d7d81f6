from collections.abc import MutableSequence
from ctypes import c_uint32
from typing import Any, Iterable, Tuple, Union

from .char import INVALID_CHAR, INVALID_SIZE, predict_size_from_lead_byte


class Vector(MutableSequence):
    """Provides a Python list-like interface for a C array of characters to
    access and modify them in-place without copying the entire data.

    The size is fixed: characters can't be inserted or deleted.
    """

    def __init__(self, data: Any, size: int):
        self._data = data
        self._size = size

    def __getitem__(self, index: int) -> int:
        self._validate_index(index)
        return self._data[index]

    def __setitem__(self, index: int, value: int) -> None:
        self._validate_index(index)
        self._data[index] = value

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Vector({list(self)!r})"

    @property
    def data(self) -> Any:
        """The underlying C array."""
        return self._data

    def _validate_index(self, index: int) -> None:
        if not isinstance(index, int):
            raise TypeError("list index must be integer")
        if not 0 <= index < self._size:
            raise IndexError("list index out of range")

    def __delitem__(self, index: int) -> None:
        raise NotImplementedError("This operation is not allowed.")

    def insert(self, index: int, value: int) -> None:
        raise NotImplementedError("This operation is not allowed.")


def create_char_buffer(init: Union[int, Iterable[int]]) -> Vector:
    """Allocates a zero-filled character buffer.

    Args:
        init: The number of characters, or the characters to copy into the
            buffer. A terminating zero is appended to copied characters.

    Returns:
        `Vector` over a `c_uint32` array.
    """
    if isinstance(init, int):
        size = init
        data = (c_uint32 * size)()
    else:
        chars = list(init) + [0]
        for c in chars:
            # ctypes silently wraps values that don't fit.
            if not 0 <= c <= INVALID_CHAR:
                raise ValueError(f"Character {c} doesn't fit in 32 bits.")
        size = len(chars)
        data = (c_uint32 * size)(*chars)
    return Vector(data, size)


def create_byte_buffer(size: int) -> bytearray:
    """Allocates a zero-filled byte buffer."""
    return bytearray(size)


def utf8_is_continuation_byte(byte: int) -> bool:
    """Checks if a byte is a UTF-8 continuation byte (`0b10xxxxxx`)."""
    return (byte & 0b11000000) == 0b10000000


def utf8_count(seq: bytes) -> int:
    """Counts the characters in a sequence of UTF-8 encoded bytes by counting
    the bytes that are not continuation bytes."""
    return sum(1 for byte in seq if not utf8_is_continuation_byte(byte))


def utf8_split_incomplete(seq: bytes) -> Tuple[bytes, bytes]:
    """Splits a sequence of UTF-8 encoded bytes into complete and incomplete bytes.

    The incomplete part is a trailing multi-byte character whose lead byte
    asks for more bytes than there are. Malformed bytes are left in the
    complete part.
    """
    n = len(seq)
    # A character is at most 4 bytes long.
    for i in range(n - 1, max(n - 4, 0) - 1, -1):
        if utf8_is_continuation_byte(seq[i]):
            continue
        size = predict_size_from_lead_byte(seq[i])
        if size != INVALID_SIZE and i + size > n:
            return seq[:i], seq[i:]
        break
    return seq, seq[n:]
