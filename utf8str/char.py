"""A single UTF-8 character packed into a 32-bit unsigned integer."""

from ctypes import c_size_t, c_uint32
from typing import Sequence

INVALID_SIZE = c_size_t(-1).value
INVALID_CHAR = c_uint32(-1).value


def size_of(c: int) -> int:
    """Returns the number of bytes (1, 2, 3 or 4) a packed character occupies.

    Returns `INVALID_SIZE` if `c` is not a valid UTF-8 character.
    """
    if not 0 <= c <= INVALID_CHAR:
        return INVALID_SIZE
    if c < 128:
        return 1
    b0 = c & 0x000000FF
    b1 = c & 0x0000FF00
    b2 = c & 0x00FF0000
    if c < 57344 and 128 <= b0 < 192:
        return 2
    if c < 15728640 and 128 <= b0 < 192 and 32768 <= b1 < 49152:
        return 3
    if (
        c < 4160749568
        and 128 <= b0 < 192
        and 32768 <= b1 < 49152
        and 8388608 <= b2 < 12582912
    ):
        return 4
    return INVALID_SIZE


def predict_size_from_lead_byte(b: int) -> int:
    """Deduces the size of a character by looking at its first byte.

    Returns `0` if `b` can't start a character but might be one of the
    following bytes, and `INVALID_SIZE` if `b` can't be part of a valid
    character at all.
    """
    if b < 128:
        return 1
    elif b < 192:
        return 0
    elif b < 224:
        return 2
    elif b < 240:
        return 3
    elif b < 248:
        return 4
    else:
        return INVALID_SIZE


def decode(data: Sequence[int], offset: int = 0) -> int:
    """Parses the character starting at `data[offset]`.

    Returns `INVALID_CHAR` if `data` doesn't hold a complete, valid character
    at that position.
    """
    if offset >= len(data):
        return INVALID_CHAR
    size = predict_size_from_lead_byte(data[offset])
    if size == 0 or size == INVALID_SIZE or offset + size > len(data):
        return INVALID_CHAR

    c = 0
    for i in range(size):
        c |= data[offset + i] << (8 * (size - 1 - i))

    if size_of(c) == INVALID_SIZE:
        return INVALID_CHAR
    return c


def encode(c: int, buf: bytearray, offset: int = 0) -> int:
    """Writes a character into `buf` at `offset`.

    Returns the number of bytes written, or `INVALID_SIZE` if `c` is not a
    valid character. The buffer is left untouched in that case.
    """
    size = size_of(c)
    if size == INVALID_SIZE:
        return size

    for i in range(size):
        buf[offset + i] = (c >> (8 * (size - 1 - i))) & 0xFF
    return size
