"""Zero-terminated sequences of packed UTF-8 characters."""

from typing import Iterator, MutableSequence, Optional, Sequence

from .char import (
    INVALID_CHAR,
    INVALID_SIZE,
    decode,
    encode,
    predict_size_from_lead_byte,
    size_of,
)


def _scan(seq: Sequence[int], limit: Optional[int] = None) -> Iterator[int]:
    """Yields characters up to and including the terminating zero, stopping
    after `limit` characters if given."""
    count = 0
    for c in seq:
        if limit is not None and count >= limit:
            return
        yield c
        if c == 0:
            return
        count += 1
    if limit is None or count < limit:
        raise ValueError("Character sequence is not terminated.")


def length(seq: Sequence[int]) -> int:
    """Returns the number of characters in `seq`, not including the
    terminating zero."""
    for i, c in enumerate(seq):
        if c == 0:
            return i
    raise ValueError("Character sequence is not terminated.")


def copy_n(
    dst: MutableSequence[int],
    src: Sequence[int],
    n: int,
) -> MutableSequence[int]:
    """Copies `n` characters from `src` to `dst` and returns `dst`."""
    for i in range(n):
        dst[i] = src[i]
    return dst


def copy(dst: MutableSequence[int], src: Sequence[int]) -> MutableSequence[int]:
    """Copies characters up to and including the terminating zero."""
    return copy_n(dst, src, length(src) + 1)


def buffer_size(seq: Sequence[int]) -> int:
    """Returns the number of bytes (including the terminating zero) `seq`
    would occupy in a buffer or a file.

    Returns `INVALID_SIZE` if `seq` contains an invalid character.
    """
    size = 0
    for c in _scan(seq):
        n = size_of(c)
        if n == INVALID_SIZE:
            return n
        size += n
    return size


def buffer_size_n(seq: Sequence[int], n: int) -> int:
    """Returns the number of bytes the first `n` characters of `seq` would
    occupy. Stops early, counting the terminator, if the terminating zero
    comes first.

    Returns `INVALID_SIZE` if those characters contain an invalid one.
    """
    size = 0
    for c in _scan(seq, limit=n):
        k = size_of(c)
        if k == INVALID_SIZE:
            return k
        size += k
    return size


def valid_prefix_size(seq: Sequence[int]) -> int:
    """Like `buffer_size()`, but returns the number of bytes up to the first
    invalid character instead of failing.

    This is how many bytes a failed `write_to_buffer()` left in the buffer.
    """
    size = 0
    for c in _scan(seq):
        n = size_of(c)
        if n == INVALID_SIZE:
            return size
        size += n
    return size


def write_to_buffer(buf: bytearray, seq: Sequence[int], offset: int = 0) -> int:
    """Writes `seq`, including the terminating zero, into `buf` at `offset`.

    The buffer must hold at least `buffer_size(seq)` bytes past `offset`.

    Returns:
        The number of bytes written, or `INVALID_SIZE` if `seq` contains an
        invalid character. Bytes written before the invalid character stay
        in the buffer; `valid_prefix_size(seq)` tells how many.
    """
    size = 0
    for c in _scan(seq):
        n = encode(c, buf, offset + size)
        if n == INVALID_SIZE:
            return n
        size += n
    return size


def write_to_buffer_n(
    buf: bytearray,
    seq: Sequence[int],
    n: int,
    offset: int = 0,
) -> int:
    """Writes the first `n` characters of `seq` into `buf` at `offset`.

    The buffer must hold at least `buffer_size_n(seq, n)` bytes past `offset`.
    Stops early, writing the terminator, if the terminating zero comes first.

    Returns:
        The number of bytes written, or `INVALID_SIZE` if those characters
        contain an invalid one.
    """
    size = 0
    for c in _scan(seq, limit=n):
        k = encode(c, buf, offset + size)
        if k == INVALID_SIZE:
            return k
        size += k
    return size


def read_from_buffer(
    seq: MutableSequence[int],
    buf: Sequence[int],
    byte_len: Optional[int] = None,
    offset: int = 0,
) -> int:
    """Reads characters from `buf[offset:offset + byte_len]` into `seq`.

    Reading stops without further processing at an invalid or truncated
    character, and after storing a terminating zero. Which of these
    happened is not reported.

    Args:
        seq: Destination with room for `byte_len + 1` characters.
        buf: The bytes to read.
        byte_len: The number of bytes available. Defaults to the rest of
            `buf`.
        offset: Position of the first byte to read.

    Returns:
        The number of bytes actually consumed.
    """
    if byte_len is None:
        byte_len = len(buf) - offset
    end = offset + byte_len
    count = 0
    i = offset
    while i < end:
        size = predict_size_from_lead_byte(buf[i])
        if size == 0 or size == INVALID_SIZE or i + size > end:
            break

        c = decode(buf, i)
        if c == INVALID_CHAR:
            break

        seq[count] = c
        count += 1
        i += size

        if c == 0:
            break
    return i - offset
