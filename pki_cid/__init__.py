"""Self-describing content identifier encodings."""

from pki_cid.multiformats import (
    DigestTruncated,
    EmptyInput,
    InvalidEncoding,
    LengthMismatch,
    MultibaseError,
    MultiformatsError,
    MultihashError,
    TooShort,
    UnknownCode,
    UnsupportedAlgorithm,
    UnsupportedEncoding,
    UnsupportedPrefix,
)
from pki_cid.multiformats import multibase, multihash


__all__ = [
    "DigestTruncated",
    "EmptyInput",
    "InvalidEncoding",
    "LengthMismatch",
    "MultibaseError",
    "MultiformatsError",
    "MultihashError",
    "TooShort",
    "UnknownCode",
    "UnsupportedAlgorithm",
    "UnsupportedEncoding",
    "UnsupportedPrefix",
    "multibase",
    "multihash",
]
