import inspect
from collections import OrderedDict
from ctypes import c_uint32, sizeof
from dataclasses import dataclass, replace
from typing import (
    Generator,
    Iterable,
    List,
    Optional,
    Tuple,
    Union,
)

from .char import INVALID_SIZE, size_of
from .logger import logger
from .sequence import buffer_size, read_from_buffer, valid_prefix_size, write_to_buffer
from .utils import (
    Vector,
    create_byte_buffer,
    create_char_buffer,
    utf8_count,
    utf8_split_incomplete,
)

ERRORS = ("strict", "ignore", "replace")

# U+FFFD REPLACEMENT CHARACTER
REPLACEMENT_CHARACTER = 0xEFBFBD


class EncodeError(ValueError):
    """Raised when a character sequence contains an invalid character."""

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset


class DecodeError(ValueError):
    """Raised when a byte buffer contains invalid or incomplete UTF-8."""

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset


@dataclass
class Config:
    errors: str = "strict"
    terminate: bool = True
    replacement: int = REPLACEMENT_CHARACTER


docs = OrderedDict(
    errors="How to handle invalid characters and bytes: `strict`, `ignore` or `replace`.",
    terminate="Whether to keep the terminating zero in encoded bytes and decoded characters.",
    replacement="The packed character used in place of invalid data when `errors` is `replace`.",
)


def doc(fn):
    doc = []
    for param in inspect.signature(fn).parameters:
        if param in docs:
            default = getattr(Config, param)
            doc.append(f"{param}: {docs[param]} Default: `{default}`")
    doc = ("\n" + " " * 12).join(doc)
    fn.__doc__ = fn.__doc__.format(params=doc)
    return fn


def get(*values):
    for value in values:
        if value is not None:
            return value


def check_errors(errors: str) -> None:
    if errors not in ERRORS:
        raise ValueError(
            f"Unknown error handler '{errors}'. Expected one of {', '.join(ERRORS)}."
        )


def _view(vector: Vector, start: int) -> Vector:
    # The characters of `vector` from `start` on, sharing the same memory.
    size = len(vector) - start
    data = (c_uint32 * size).from_buffer(vector.data, start * sizeof(c_uint32))
    return Vector(data, size)


class Codec:
    def __init__(self, config: Optional[Config] = None, **kwargs):
        """Creates a UTF-8 codec which allocates its own buffers.

        Args:
            config: `Config` object.
            kwargs: `Config` fields to override.
        """
        config = replace(config or Config())
        for k, v in kwargs.items():
            if not hasattr(config, k):
                raise TypeError(f"'{k}' is an invalid keyword argument for Codec()")
            setattr(config, k, v)
        check_errors(config.errors)
        if size_of(config.replacement) == INVALID_SIZE:
            raise ValueError(
                f"Replacement character 0x{config.replacement:X} is not a valid UTF-8 character."
            )
        self._config = config

    @property
    def config(self) -> Config:
        """The config object."""
        return self._config

    @doc
    def encode(
        self,
        chars: Iterable[int],
        *,
        errors: Optional[str] = None,
        terminate: Optional[bool] = None,
    ) -> bytes:
        """Converts packed characters to UTF-8 encoded bytes.

        Args:
            chars: The characters to encode. They end at the first zero, or
            at the end of `chars` if there is none.
            {params}

        Returns:
            The encoded bytes.
        """
        config = self.config
        errors = get(errors, config.errors)
        terminate = get(terminate, config.terminate)
        check_errors(errors)

        chars = list(chars)
        if 0 in chars:
            chars = chars[: chars.index(0)]
        chars.append(0)

        # Validate before the characters are narrowed to 32 bits.
        size = buffer_size(chars)
        if size == INVALID_SIZE:
            chars = self._repair(chars, errors)
            size = buffer_size(chars)
        seq = create_char_buffer(chars[:-1])

        buf = create_byte_buffer(size)
        write_to_buffer(buf, seq)
        if not terminate:
            del buf[-1]
        return bytes(buf)

    def _repair(self, chars: List[int], errors: str) -> List[int]:
        repaired = []
        for i, c in enumerate(chars[:-1]):
            if size_of(c) != INVALID_SIZE:
                repaired.append(c)
                continue
            if errors == "strict":
                raise EncodeError(
                    f"Invalid UTF-8 character 0x{c:08X} at index {i} "
                    f"(after {valid_prefix_size(chars)} valid bytes).",
                    offset=i,
                )
            logger.debug(f"Skipping invalid UTF-8 character 0x{c:08X} at index {i}.")
            if errors == "replace":
                repaired.append(self.config.replacement)
        repaired.append(0)
        return repaired

    @doc
    def decode(
        self,
        data: bytes,
        *,
        errors: Optional[str] = None,
        terminate: Optional[bool] = None,
    ) -> Vector:
        """Converts UTF-8 encoded bytes to packed characters.

        Decoding stops at the first zero byte.

        Args:
            data: The bytes to decode.
            {params}

        Returns:
            `Vector` of the decoded characters.
        """
        config = self.config
        errors = get(errors, config.errors)
        terminate = get(terminate, config.terminate)
        check_errors(errors)

        seq, count, terminated = self._decode(bytes(data), errors)
        if terminated:
            count -= 1
        if terminate:
            # The buffer is zero-filled past the decoded characters.
            count += 1
        return Vector(seq.data, count)

    def _decode(
        self, data: bytes, errors: str, base: int = 0
    ) -> Tuple[Vector, int, bool]:
        # `base` is the position of `data` in a larger stream, for reporting.
        n = len(data)
        seq = create_char_buffer(n + 1)
        count = 0
        offset = 0
        while offset < n:
            consumed = read_from_buffer(_view(seq, count), data, offset=offset)
            count += utf8_count(data[offset : offset + consumed])
            offset += consumed
            if consumed and seq[count - 1] == 0:
                return seq, count, True
            if offset >= n:
                break

            if errors == "strict":
                raise DecodeError(
                    f"Invalid or incomplete UTF-8 character at byte offset {base + offset}.",
                    offset=base + offset,
                )
            logger.debug(f"Skipping invalid UTF-8 byte 0x{data[offset]:02X} at offset {base + offset}.")
            if errors == "replace":
                seq[count] = self.config.replacement
                count += 1
            offset += 1
        return seq, count, False

    def from_text(self, text: str) -> Vector:
        """Converts a Python string to packed characters.

        Args:
            text: The text to convert.

        Returns:
            `Vector` of the characters, terminated unless `terminate` is
            disabled in the config.
        """
        return self.decode(text.encode("utf-8"), errors="strict")

    @doc
    def to_text(
        self,
        chars: Iterable[int],
        *,
        errors: Optional[str] = None,
    ) -> str:
        """Converts packed characters to a Python string.

        Args:
            chars: The characters to convert.
            {params}

        Returns:
            The text.
        """
        errors = get(errors, self.config.errors)
        data = self.encode(chars, errors=errors, terminate=False)
        return data.decode("utf-8", errors=errors)

    @doc
    def stream(
        self,
        chunks: Iterable[Union[bytes, bytearray]],
        *,
        errors: Optional[str] = None,
    ) -> Generator[List[int], None, None]:
        """Decodes UTF-8 encoded bytes arriving in chunks.

        Characters split across chunks are held back until they are complete.
        Decoding stops at the first zero byte.

        Args:
            chunks: The chunks of bytes to decode.
            {params}

        Returns:
            The decoded characters of each chunk, without terminator.
        """
        errors = get(errors, self.config.errors)
        check_errors(errors)

        incomplete = b""
        # Number of bytes before `incomplete` in the stream.
        position = 0
        for chunk in chunks:
            # Handle incomplete UTF-8 multi-byte characters.
            complete, incomplete = utf8_split_incomplete(incomplete + bytes(chunk))
            if not complete:
                continue
            seq, count, terminated = self._decode(complete, errors, base=position)
            position += len(complete)
            if terminated:
                count -= 1
            if count:
                yield [seq[i] for i in range(count)]
            if terminated:
                return

        if incomplete:
            logger.warning(
                f"Stream ended with an incomplete UTF-8 character ({len(incomplete)} bytes)."
            )
            seq, count, _ = self._decode(incomplete, errors, base=position)
            if count:
                yield [seq[i] for i in range(count)]
