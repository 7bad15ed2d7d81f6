import logging

import pytest

from utf8str import Codec, Config, DecodeError, EncodeError
from utf8str.codec import REPLACEMENT_CHARACTER as R

A = 0x41
B = 0x42
EURO = 0xE282AC
BAD = 0xFFFFFFFF


def pack(text):
    return [int.from_bytes(ch.encode("utf-8"), "big") for ch in text]


class TestConfig:
    def test_kwargs(self):
        config = Config()
        codec = Codec(config, errors="ignore", terminate=False)
        assert codec.config.errors == "ignore"
        assert codec.config.terminate is False
        assert config.errors == "strict"

    def test_invalid(self):
        with pytest.raises(TypeError):
            Codec(foo=1)
        with pytest.raises(ValueError):
            Codec(errors="surrogateescape")
        with pytest.raises(ValueError):
            Codec(replacement=BAD)
        with pytest.raises(ValueError):
            Codec().encode([A], errors="surrogateescape")


class TestEncode:
    def test_encode(self, codec):
        expected = [
            ([], b"\x00"),
            ([A, EURO], b"A\xe2\x82\xac\x00"),
            ([A, EURO, 0], b"A\xe2\x82\xac\x00"),
            ([A, 0, B], b"A\x00"),
        ]
        for chars, data in expected:
            assert codec.encode(chars) == data, chars
            assert codec.encode(chars, terminate=False) == data[:-1], chars

    def test_strict(self, codec):
        with pytest.raises(EncodeError) as e:
            codec.encode([A, EURO, BAD, B])
        assert e.value.offset == 2
        assert isinstance(e.value, ValueError)

    def test_errors(self):
        chars = [A, BAD, B]
        assert Codec(errors="ignore").encode(chars) == b"AB\x00"
        assert Codec(errors="replace").encode(chars) == b"A\xef\xbf\xbdB\x00"
        assert Codec().encode(chars, errors="ignore") == b"AB\x00"

    def test_out_of_range(self, codec):
        wide = (1 << 32) + A
        negative = -(1 << 32) + A
        for c in [wide, negative]:
            with pytest.raises(EncodeError) as e:
                codec.encode([A, c])
            assert e.value.offset == 1

        chars = [A, wide, negative, B]
        assert Codec(errors="ignore").encode(chars) == b"AB\x00"
        assert (
            Codec(errors="replace").encode(chars)
            == b"A\xef\xbf\xbd\xef\xbf\xbdB\x00"
        )


class TestDecode:
    def test_decode(self, codec):
        expected = [
            (b"", []),
            (b"A", [A]),
            (b"A\xe2\x82\xac", [A, EURO]),
            (b"A\x00B", [A]),
        ]
        for data, chars in expected:
            assert list(codec.decode(data)) == chars + [0], data
            assert list(codec.decode(data, terminate=False)) == chars, data

    def test_strict(self, codec):
        expected = [
            (b"\x80", 0),
            (b"A\xff", 1),
            (b"AB\xe2\x82", 2),
            (b"A\xe2\x41\xac", 1),
        ]
        for data, offset in expected:
            with pytest.raises(DecodeError) as e:
                codec.decode(data)
            assert e.value.offset == offset, data

    def test_errors(self):
        data = b"A\xffB\x80"
        assert list(Codec(errors="ignore").decode(data)) == [A, B, 0]
        assert list(Codec(errors="replace").decode(data)) == [A, R, B, R, 0]
        assert list(Codec(errors="replace").decode(b"\xe2\x82")) == [R, R, 0]

    def test_errors_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="utf8str"):
            Codec(errors="ignore").decode(b"A\xff")
        assert "0xFF" in caplog.text


class TestText:
    def test_from_text(self, codec, samples):
        text = "".join(samples[1:])
        assert list(codec.from_text(text)) == pack(text) + [0]

    def test_to_text(self, codec, samples):
        text = "".join(samples[1:])
        assert codec.to_text(codec.from_text(text)) == text
        assert codec.to_text(pack("h\xe9llo")) == "h\xe9llo"

    def test_to_text_errors(self):
        assert Codec(errors="replace").to_text([A, BAD, B]) == "A\ufffdB"
        with pytest.raises(EncodeError):
            Codec().to_text([A, BAD])


class TestStream:
    def test_stream(self, codec):
        chunks = [b"A\xe2", b"\x82", b"\xacB", b"\xf0\x9f", b"\x98\x80"]
        assert list(codec.stream(chunks)) == [[A], [EURO, B], [0xF09F9880]]

    def test_terminator(self, codec):
        assert list(codec.stream([b"A\x00B", b"C"])) == [[A]]

    def test_incomplete(self, caplog):
        with caplog.at_level(logging.WARNING, logger="utf8str"):
            chars = list(Codec(errors="ignore").stream([b"A\xe2\x82"]))
        assert chars == [[A]]
        assert "incomplete" in caplog.text

        chars = list(Codec(errors="replace").stream([b"A\xe2\x82"]))
        assert chars == [[A], [R, R]]

        with pytest.raises(DecodeError):
            list(Codec().stream([b"A\xe2\x82"]))

    def test_error_offset(self, codec):
        expected = [
            ([b"AAAA", b"\xff"], 4),
            ([b"A\xe2", b"\x82\xac\xff"], 4),
            ([b"AB", b"\x80C"], 2),
            ([b"AB", b"C\xe2\x82"], 3),
        ]
        for chunks, offset in expected:
            with pytest.raises(DecodeError) as e:
                list(codec.stream(chunks))
            assert e.value.offset == offset, chunks

    def test_invalid(self):
        chunks = [b"A\xff", b"B"]
        assert list(Codec(errors="ignore").stream(chunks)) == [[A], [B]]
        with pytest.raises(DecodeError):
            list(Codec().stream(chunks))
