"""MultiBase encoding and decoding utilities."""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Literal, Mapping, Tuple, Union

import base58

from pki_cid.multiformats import (
    EmptyInput,
    InvalidEncoding,
    RegistryError,
    UnsupportedEncoding,
    UnsupportedPrefix,
)

LOG = logging.getLogger(__name__)

DIGITS = "0123456789"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = LOWERCASE.upper()


class MultibaseEncoder(ABC):
    """Encoding details."""

    name: str
    character: str

    @abstractmethod
    def encode(self, value: bytes) -> str:
        """Encode a byte string using this encoding."""

    @abstractmethod
    def decode(self, value: str) -> bytes:
        """Decode a string using this encoding."""

    def __repr__(self) -> str:
        """Return a debug representation of the encoder."""
        return f"<{type(self).__name__} {self.name} '{self.character}'>"


class AlphabetEncoder(MultibaseEncoder):
    """Encoding over a fixed alphabet.

    The alphabet is stored in its canonical (lower or mixed) case. An upper case
    variant shares the conversion logic and only transforms the case of the
    encoded text; case insensitive alphabets are lowered before decoding.
    """

    alphabet: str
    case_insensitive: bool = True

    def __init__(self, name: str, character: str, upper: bool = False):
        """Initialize the encoder."""
        if len(character) != 1:
            raise RegistryError(f"Prefix must be a single character: {character!r}")
        self.name = name
        self.character = character
        self.upper = upper

    def encode(self, value: bytes) -> str:
        """Encode a byte string using this encoding."""
        encoded = self._encode(value)
        return encoded.upper() if self.upper else encoded

    def decode(self, value: str) -> bytes:
        """Decode a string using this encoding."""
        if not value.isascii():
            raise InvalidEncoding(f"Non-ASCII character in {self.name} string")
        if self.case_insensitive:
            value = value.lower()
        for char in value:
            if char not in self.alphabet:
                raise InvalidEncoding(f"Invalid {self.name} character: {char!r}")
        return self._decode(value)

    @abstractmethod
    def _encode(self, value: bytes) -> str:
        """Encode into the canonical case of the alphabet."""

    @abstractmethod
    def _decode(self, value: str) -> bytes:
        """Decode a string already known to use only alphabet characters."""


class Base2Encoder(AlphabetEncoder):
    """Binary encoding, eight digits per byte."""

    alphabet = "01"

    def __init__(self):
        """Initialize the encoder."""
        super().__init__("base2", "0")

    def _encode(self, value: bytes) -> str:
        return "".join(format(byte, "08b") for byte in value)

    def _decode(self, value: str) -> bytes:
        if len(value) % 8:
            raise InvalidEncoding("base2 length must be a multiple of 8")
        return bytes(int(value[i : i + 8], 2) for i in range(0, len(value), 8))


class Base16Encoder(AlphabetEncoder):
    """Hexadecimal encoding."""

    alphabet = DIGITS + "abcdef"

    def _encode(self, value: bytes) -> str:
        return binascii.hexlify(value).decode()

    def _decode(self, value: str) -> bytes:
        if len(value) % 2:
            raise InvalidEncoding(f"Odd-length {self.name} string")
        return binascii.unhexlify(value)


class Base32Encoder(AlphabetEncoder):
    """RFC 4648 base32 encoding without padding."""

    def __init__(
        self,
        name: str,
        character: str,
        upper: bool = False,
        extended_hex: bool = False,
    ):
        """Initialize the encoder."""
        super().__init__(name, character, upper)
        self.extended_hex = extended_hex
        if extended_hex:
            self.alphabet = DIGITS + LOWERCASE[:22]
        else:
            self.alphabet = LOWERCASE + "234567"

    def _encode(self, value: bytes) -> str:
        encode = base64.b32hexencode if self.extended_hex else base64.b32encode
        return encode(value).decode().rstrip("=").lower()

    def _decode(self, value: str) -> bytes:
        decode = base64.b32hexdecode if self.extended_hex else base64.b32decode
        padding = -len(value) % 8
        try:
            return decode(value.upper() + "=" * padding)
        except binascii.Error as err:
            raise InvalidEncoding(f"Invalid {self.name} string: {err}") from err


class Base64UrlEncoder(AlphabetEncoder):
    """Base64URL encoding."""

    alphabet = UPPERCASE + LOWERCASE + DIGITS + "-_"
    case_insensitive = False

    def __init__(self):
        """Initialize the encoder."""
        super().__init__("base64url", "u")

    def _encode(self, value: bytes) -> str:
        return base64.urlsafe_b64encode(value).decode().rstrip("=")

    def _decode(self, value: str) -> bytes:
        # Ensure correct padding
        padding_needed = 4 - (len(value) % 4)
        if padding_needed != 4:
            value += "=" * padding_needed

        try:
            return base64.urlsafe_b64decode(value)
        except binascii.Error as err:
            raise InvalidEncoding(f"Invalid {self.name} string: {err}") from err


class BigIntegerEncoder(AlphabetEncoder):
    """Encoding of the bytes as a single big-endian unsigned integer.

    The integer is written in the radix given by the alphabet length, most
    significant digit first. Leading zero bytes carry no value, so each one is
    written as a leading zero symbol (the first alphabet character) and each
    leading zero symbol decodes back to a zero byte. The empty byte string
    encodes to the empty string.

    The base58 package performs the conversion; its codec takes the radix from
    the length of the alphabet it is given.
    """

    def __init__(
        self,
        name: str,
        character: str,
        alphabet: str,
        upper: bool = False,
        case_insensitive: bool = True,
    ):
        """Initialize the encoder."""
        super().__init__(name, character, upper)
        self.alphabet = alphabet
        self.case_insensitive = case_insensitive

    def _encode(self, value: bytes) -> str:
        return base58.b58encode(value, alphabet=self.alphabet.encode()).decode()

    def _decode(self, value: str) -> bytes:
        return base58.b58decode(value, alphabet=self.alphabet.encode())


class Base58BtcEncoder(BigIntegerEncoder):
    """Base58BTC encoding."""

    def __init__(self):
        """Initialize the encoder."""
        super().__init__(
            "base58btc",
            "z",
            base58.BITCOIN_ALPHABET.decode(),
            case_insensitive=False,
        )


class Encoding(Enum):
    """Enum for supported encodings."""

    base2 = Base2Encoder()
    base8 = BigIntegerEncoder("base8", "7", DIGITS[:8])
    base10 = BigIntegerEncoder("base10", "9", DIGITS)
    base16 = Base16Encoder("base16", "f")
    base16upper = Base16Encoder("base16upper", "F", upper=True)
    base32 = Base32Encoder("base32", "b")
    base32upper = Base32Encoder("base32upper", "B", upper=True)
    base32hex = Base32Encoder("base32hex", "v", extended_hex=True)
    base32hexupper = Base32Encoder(
        "base32hexupper", "V", upper=True, extended_hex=True
    )
    base36 = BigIntegerEncoder("base36", "k", DIGITS + LOWERCASE)
    base36upper = BigIntegerEncoder("base36upper", "K", DIGITS + LOWERCASE, upper=True)
    base58btc = Base58BtcEncoder()
    base64url = Base64UrlEncoder()

    @classmethod
    def from_name(cls, name: str) -> MultibaseEncoder:
        """Get encoding from name."""
        encoder = _BY_NAME.get(name)
        if encoder is None:
            raise UnsupportedEncoding(f"Unsupported encoding: {name}")
        return encoder

    @classmethod
    def from_character(cls, character: str) -> MultibaseEncoder:
        """Get encoding from character."""
        encoder = _BY_CHARACTER.get(character)
        if encoder is None:
            raise UnsupportedPrefix(f"Unsupported encoding: {character!r}")
        return encoder


EncodingStr = Literal[
    "base2",
    "base8",
    "base10",
    "base16",
    "base16upper",
    "base32",
    "base32upper",
    "base32hex",
    "base32hexupper",
    "base36",
    "base36upper",
    "base58btc",
    "base64url",
]


def _build_index(
    encoders: Iterable[MultibaseEncoder], attribute: str
) -> Mapping[str, MultibaseEncoder]:
    """Index encoders by an attribute that must be unique among them."""
    index = {}
    for encoder in encoders:
        key = getattr(encoder, attribute)
        if key in index:
            raise RegistryError(
                f"Encodings {index[key].name} and {encoder.name} "
                f"share {attribute} {key!r}"
            )
        index[key] = encoder
    return MappingProxyType(index)


_BY_NAME = _build_index((encoding.value for encoding in Encoding), "name")
_BY_CHARACTER = _build_index((encoding.value for encoding in Encoding), "character")


def encode(
    value: bytes, encoding: Union[Encoding, MultibaseEncoder, EncodingStr]
) -> str:
    """Encode a byte string using the given encoding.

    Args:
        value: The byte string to encode
        encoding: The encoding to use

    Returns:
        The encoded string
    """
    if isinstance(encoding, str):
        encoder = Encoding.from_name(encoding)
    elif isinstance(encoding, Encoding):
        encoder = encoding.value
    elif isinstance(encoding, MultibaseEncoder):
        encoder = encoding
    else:
        raise TypeError("encoding must be an Encoding or EncodingStr")

    return encoder.character + encoder.encode(value)


def get_encoding(value: str) -> MultibaseEncoder:
    """Get the encoding a multibase encoded string is tagged with.

    Args:
        value: The multibase encoded string

    Returns:
        The encoder named by the prefix character
    """
    if not value:
        raise EmptyInput("Cannot decode an empty multibase string")

    try:
        return Encoding.from_character(value[0])
    except UnsupportedPrefix:
        LOG.debug("No multibase encoding registered for prefix %r", value[0])
        raise


def decode_with(value: str) -> Tuple[MultibaseEncoder, bytes]:
    """Decode a multibase encoded string, reporting the encoding used.

    Args:
        value: The string to decode

    Returns:
        The encoder named by the prefix and the decoded byte string
    """
    encoder = get_encoding(value)
    try:
        return encoder, encoder.decode(value[1:])
    except InvalidEncoding as err:
        LOG.debug("Invalid %s body: %s", encoder.name, err)
        raise


def decode(value: str) -> bytes:
    """Decode a multibase encoded string.

    Args:
        value: The string to decode

    Returns:
        The decoded byte string
    """
    _, decoded = decode_with(value)
    return decoded
