"""MultiHash framing of hash digests.

A multihash frame is laid out as ``code || length || digest``: one byte naming
the hash algorithm, one byte giving the digest length, then the digest itself.
Every supported algorithm has exactly one digest length.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Literal, Mapping, Tuple, Union

from pki_cid.multiformats import (
    DigestTruncated,
    LengthMismatch,
    MultihashError,
    RegistryError,
    TooShort,
    UnknownCode,
    UnsupportedAlgorithm,
)

LOG = logging.getLogger(__name__)

HEADER_LENGTH = 2


@dataclass(frozen=True)
class Algorithm:
    """Multihash algorithm details."""

    name: str
    code: int
    digest_length: int
    hash_constructor: Callable[[], Any]

    def new(self):
        """Create a fresh incremental hash object."""
        return self.hash_constructor()

    def digest(self, data: bytes) -> bytes:
        """Compute the bare digest of data."""
        hasher = self.new()
        hasher.update(data)
        return hasher.digest()

    def sum(self, data: bytes) -> bytes:
        """Compute the digest of data and frame it as a multihash."""
        digest = self.digest(data)
        return bytes((self.code, len(digest))) + digest


class Algorithms(Enum):
    """Enum for supported hash algorithms."""

    sha2_256 = Algorithm("sha2-256", 0x12, 32, hashlib.sha256)
    sha2_512 = Algorithm("sha2-512", 0x13, 64, hashlib.sha512)
    sha3_512 = Algorithm("sha3-512", 0x14, 64, hashlib.sha3_512)
    sha3_384 = Algorithm("sha3-384", 0x15, 48, hashlib.sha3_384)
    sha3_256 = Algorithm("sha3-256", 0x16, 32, hashlib.sha3_256)
    sha3_224 = Algorithm("sha3-224", 0x17, 28, hashlib.sha3_224)

    @classmethod
    def from_name(cls, name: str) -> Algorithm:
        """Get algorithm from name."""
        for algorithm in cls:
            if algorithm.value.name == name:
                return algorithm.value
        raise UnsupportedAlgorithm(f"Unsupported hash algorithm: {name}")

    @classmethod
    def from_code(cls, code: int) -> Algorithm:
        """Get algorithm from code."""
        algorithm = _BY_CODE.get(code)
        if algorithm is None:
            raise UnknownCode(f"Unknown multihash code: 0x{code:02x}")
        return algorithm


AlgorithmStr = Literal[
    "sha2-256",
    "sha2-512",
    "sha3-512",
    "sha3-384",
    "sha3-256",
    "sha3-224",
]


def _build_index(algorithms: Iterable[Algorithm]) -> Mapping[int, Algorithm]:
    """Index algorithms by code, checking their declared sizes."""
    index = {}
    for algorithm in algorithms:
        if not 0 <= algorithm.code <= 0xFF:
            raise RegistryError(f"Code of {algorithm.name} does not fit in a byte")
        if algorithm.code in index:
            raise RegistryError(
                f"Algorithms {index[algorithm.code].name} and {algorithm.name} "
                f"share code 0x{algorithm.code:02x}"
            )
        if algorithm.new().digest_size != algorithm.digest_length:
            raise RegistryError(
                f"Digest length of {algorithm.name} does not match its hash"
            )
        index[algorithm.code] = algorithm
    return MappingProxyType(index)


_BY_CODE = _build_index(member.value for member in Algorithms)


def _resolve(algorithm: Union[Algorithms, Algorithm, AlgorithmStr]) -> Algorithm:
    """Get the algorithm named by a member, an instance or a name."""
    if isinstance(algorithm, str):
        return Algorithms.from_name(algorithm)
    if isinstance(algorithm, Algorithms):
        return algorithm.value
    if isinstance(algorithm, Algorithm):
        return algorithm
    raise TypeError("algorithm must be an Algorithms member or AlgorithmStr")


def encode(
    data: bytes, algorithm: Union[Algorithms, Algorithm, AlgorithmStr]
) -> bytes:
    """Hash data and frame the digest as a multihash.

    Args:
        data: The bytes to hash
        algorithm: The hash algorithm to use

    Returns:
        The multihash frame
    """
    return _resolve(algorithm).sum(data)


def parse(frame: bytes) -> Algorithm:
    """Validate a multihash frame and get its algorithm.

    Bytes following the declared digest are ignored.

    Args:
        frame: The multihash frame

    Returns:
        The algorithm the frame was produced with
    """
    try:
        if len(frame) < HEADER_LENGTH:
            raise TooShort("Multihash frame is shorter than its header")

        code, length = frame[0], frame[1]
        algorithm = Algorithms.from_code(code)
        if length != algorithm.digest_length:
            raise LengthMismatch(
                f"{algorithm.name} digests are {algorithm.digest_length} bytes, "
                f"frame declares {length}"
            )
        if len(frame) - HEADER_LENGTH < length:
            raise DigestTruncated(
                f"Frame declares {length} digest bytes but holds "
                f"{len(frame) - HEADER_LENGTH}"
            )
    except MultihashError as err:
        LOG.debug("Invalid multihash frame: %s", err)
        raise

    return algorithm


def unwrap(frame: bytes) -> Tuple[Algorithm, bytes]:
    """Split a multihash frame into its algorithm and digest.

    Args:
        frame: The multihash frame

    Returns:
        The algorithm and the digest bytes
    """
    algorithm = parse(frame)
    end = HEADER_LENGTH + algorithm.digest_length
    return algorithm, bytes(frame[HEADER_LENGTH:end])


def verify(frame: bytes, data: bytes) -> bool:
    """Check that a multihash frame is the digest of data."""
    algorithm, digest = unwrap(frame)
    return hmac.compare_digest(digest, algorithm.digest(data))
