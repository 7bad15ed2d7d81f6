from .char import (
    INVALID_CHAR,
    INVALID_SIZE,
    decode,
    encode,
    predict_size_from_lead_byte,
    size_of,
)
from .sequence import (
    buffer_size,
    buffer_size_n,
    copy,
    copy_n,
    length,
    read_from_buffer,
    valid_prefix_size,
    write_to_buffer,
    write_to_buffer_n,
)
from .utils import Vector, create_byte_buffer, create_char_buffer
from .codec import Codec, Config, DecodeError, EncodeError

__version__ = "0.1.0"
