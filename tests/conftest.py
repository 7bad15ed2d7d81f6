import pytest

from utf8str import Codec


@pytest.fixture
def codec():
    return Codec()


@pytest.fixture
def samples():
    """Characters at each encoded length boundary, from U+0000 to U+10FFFF."""
    return [
        "\x00",
        "A",
        "\x7f",
        "\x80",
        "\xe9",
        "\u07ff",
        "\u0800",
        "\u20ac",
        "\uffff",
        "\U00010000",
        "\U0001f600",
        "\U0010ffff",
    ]
