"""Test multibase encoding and decoding."""

import random

import base58
import pytest

from pki_cid.multiformats import (
    EmptyInput,
    InvalidEncoding,
    MultibaseError,
    RegistryError,
    UnsupportedEncoding,
    UnsupportedPrefix,
)
from pki_cid.multiformats import multibase
from pki_cid.multiformats.multibase import (
    Base16Encoder,
    Base58BtcEncoder,
    BigIntegerEncoder,
    Encoding,
    _build_index,
)

SAMPLES = [
    b"",
    b"\x00",
    b"\x00\x00\x00",
    b"\x00\x00\x01",
    b"\x00\x01\x00",
    b"\xff" * 1024,
    b"multibase",
    "Hello, 世界".encode(),
    random.Random(1234).randbytes(257),
]


@pytest.fixture(params=list(Encoding), ids=lambda encoding: encoding.name)
def encoding(request):
    yield request.param


@pytest.mark.parametrize("data", SAMPLES)
def test_roundtrip(encoding: Encoding, data: bytes):
    encoded = multibase.encode(data, encoding)
    assert encoded[0] == encoding.value.character
    assert multibase.decode(encoded) == data


def test_empty_body(encoding: Encoding):
    assert encoding.value.encode(b"") == ""
    assert encoding.value.decode("") == b""
    assert multibase.decode(encoding.value.character) == b""


@pytest.mark.parametrize(
    ["name", "expected"],
    [
        [
            "base2",
            "00111100101100101011100110010000001101101011000010110111001101001"
            "0010000000100001",
        ],
        ["base10", "9573277761329450583662625"],
        ["base16", "f796573206d616e692021"],
        ["base16upper", "F796573206D616E692021"],
        ["base32", "bpfsxgidnmfxgsibb"],
        ["base32upper", "BPFSXGIDNMFXGSIBB"],
        ["base32hex", "vf5in683dc5n6i811"],
        ["base32hexupper", "VF5IN683DC5N6I811"],
        ["base36", "k2lcpzo5yikidynfl"],
        ["base36upper", "K2LCPZO5YIKIDYNFL"],
        ["base58btc", "z7paNL19xttacUY"],
        ["base64url", "ueWVzIG1hbmkgIQ"],
    ],
)
def test_known_vectors(name: str, expected: str):
    data = b"yes mani !"
    assert multibase.encode(data, name) == expected
    assert multibase.decode(expected) == data


@pytest.mark.parametrize(
    ["name", "expected"],
    [
        ["base10", "90573277761329450583662625"],
        ["base36", "k02lcpzo5yikidynfl"],
        ["base58btc", "z17paNL19xttacUY"],
    ],
)
def test_known_vectors_leading_zero(name: str, expected: str):
    data = b"\x00yes mani !"
    assert multibase.encode(data, name) == expected
    assert multibase.decode(expected) == data


@pytest.mark.parametrize(
    ["data", "expected"],
    [
        [b"\x01\x00", "7400"],
        [b"\x00\x01", "701"],
        [b"\xff", "7377"],
        [b"\x00\x00", "700"],
    ],
)
def test_base8(data: bytes, expected: str):
    assert multibase.encode(data, Encoding.base8) == expected
    assert multibase.decode(expected) == data


def test_base58_leading_zeros():
    encoded = multibase.encode(b"\x00\x00\x01", "base58btc")
    assert encoded == "z112"
    assert multibase.decode(encoded) == b"\x00\x00\x01"


@pytest.mark.parametrize("data", SAMPLES)
def test_base58_matches_reference(data: bytes):
    assert Base58BtcEncoder().encode(data) == base58.b58encode(data).decode()


def test_base58_hello_world():
    assert multibase.encode(b"hello world", "base58btc") == "zStV1DL6CwTryKyV"


def test_base36_upper_and_lower_share_digits():
    data = b"\x00\xff"
    lower = multibase.encode(data, "base36")
    upper = multibase.encode(data, "base36upper")
    assert lower == "k073"
    assert upper == "K073"


@pytest.mark.parametrize(
    "name", ["base16upper", "base32upper", "base32hexupper", "base36upper"]
)
def test_decode_is_case_insensitive(name: str):
    data = b"case folding"
    encoded = multibase.encode(data, name)
    assert multibase.decode(encoded[0] + encoded[1:].lower()) == data


@pytest.mark.parametrize("name", ["base16", "base32", "base32hex", "base36"])
def test_lower_decode_accepts_upper(name: str):
    data = b"case folding"
    encoded = multibase.encode(data, name)
    assert multibase.decode(encoded[0] + encoded[1:].upper()) == data


def test_base58_is_case_sensitive():
    assert multibase.decode("za") != multibase.decode("zA")


def test_decode_empty():
    with pytest.raises(EmptyInput):
        multibase.decode("")
    with pytest.raises(EmptyInput):
        multibase.get_encoding("")


def test_decode_unsupported_prefix():
    with pytest.raises(UnsupportedPrefix):
        multibase.decode("x123")


def test_decode_non_ascii_prefix():
    with pytest.raises(UnsupportedPrefix):
        multibase.decode("🚀abc")


@pytest.mark.parametrize(
    "value",
    [
        "fabc",
        "Fabc",
        "f0g",
        "f 0",
        "0000000001",
        "000000002",
        "0 0000000",
        "7128",
        "91a",
        "9-1",
        "bpfsx1",
        "bpfsx====",
        "b8",
        "bp",
        "vwxyz",
        "k2lcpz!",
        "z0OIl",
        "z7paNL19+",
        "ueWVz+",
        "ueWVz/",
        "ueWVzIG1hbmkgIQ==",
        "ue",
    ],
)
def test_decode_invalid(value: str):
    with pytest.raises(InvalidEncoding):
        multibase.decode(value)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        multibase.decode("x")
    assert issubclass(InvalidEncoding, MultibaseError)


def test_decode_with():
    encoder, data = multibase.decode_with("F796573206D616E692021")
    assert encoder is Encoding.base16upper.value
    assert data == b"yes mani !"
    assert multibase.encode(data, encoder) == "F796573206D616E692021"


def test_get_encoding():
    assert multibase.get_encoding("zStV1DL6CwTryKyV") is Encoding.base58btc.value


def test_registry_unique():
    encoders = [encoding.value for encoding in Encoding]
    assert len({encoder.character for encoder in encoders}) == len(encoders)
    assert len({encoder.name for encoder in encoders}) == len(encoders)
    for encoding in Encoding:
        assert encoding.name == encoding.value.name
        assert Encoding.from_name(encoding.name) is encoding.value
        assert Encoding.from_character(encoding.value.character) is encoding.value


def test_from_name_unsupported():
    with pytest.raises(UnsupportedEncoding):
        Encoding.from_name("base1024")
    with pytest.raises(UnsupportedEncoding):
        multibase.encode(b"data", "base1024")  # type: ignore


def test_encode_wrong_type():
    with pytest.raises(TypeError):
        multibase.encode(b"data", 58)  # type: ignore


def test_prefix_must_be_single_character():
    with pytest.raises(RegistryError):
        BigIntegerEncoder("base10", "99", "0123456789")


@pytest.mark.parametrize(
    "value",
    [
        "k\u212a",
        "K\u212a",
        "b\u212aa",
        "v\u212a0",
        "f\u212a0",
        "9\u0661",
        "z\uff11",
    ],
)
def test_decode_rejects_non_ascii_lookalikes(value: str):
    with pytest.raises(InvalidEncoding):
        multibase.decode(value)


@pytest.mark.parametrize(
    ["alphabet", "data", "expected"],
    [
        ["01234567", b"\x00\x00\x01", "001"],
        ["01234567", b"\x01\xff", "777"],
        ["0123456789", b"\x00yes mani !", "0573277761329450583662625"],
        ["0123456789abcdefghijklmnopqrstuvwxyz", b"\xff\xff", "1ekf"],
        ["0123456789abcdefghijklmnopqrstuvwxyz", b"\x00\x00", "00"],
    ],
)
def test_big_integer_digits(alphabet: str, data: bytes, expected: str):
    encoder = BigIntegerEncoder("test", "t", alphabet)
    assert encoder.encode(data) == expected
    assert encoder.decode(expected) == data


def test_build_index_rejects_duplicate_character():
    encoders = [Base16Encoder("base16", "f"), Base16Encoder("hex", "f")]
    with pytest.raises(RegistryError):
        _build_index(encoders, "character")


def test_build_index_rejects_duplicate_name():
    encoders = [Base16Encoder("base16", "f"), Base16Encoder("base16", "h")]
    with pytest.raises(RegistryError):
        _build_index(encoders, "name")


def test_build_index():
    lower = Base16Encoder("base16", "f")
    upper = Base16Encoder("base16upper", "F", upper=True)
    index = _build_index([lower, upper], "character")
    assert index["f"] is lower
    assert index["F"] is upper
    with pytest.raises(TypeError):
        index["h"] = lower  # type: ignore


def test_lookup_errors_share_base():
    for call, argument in [
        (Encoding.from_name, "base1024"),
        (Encoding.from_character, "x"),
    ]:
        with pytest.raises(MultibaseError):
            call(argument)
