"""Self-describing multiformats encodings: multibase and multihash."""


class MultiformatsError(ValueError):
    """Represents an error from a multiformats codec."""


class RegistryError(MultiformatsError):
    """Represents an inconsistent encoding or algorithm registry."""


class MultibaseError(MultiformatsError):
    """Represents an error decoding a multibase string."""


class EmptyInput(MultibaseError):
    """Represents an attempt to decode an empty multibase string."""


class UnsupportedPrefix(MultibaseError):
    """Represents a multibase prefix with no registered encoding."""


class InvalidEncoding(MultibaseError):
    """Represents a body that is not valid in its claimed encoding."""


class UnsupportedEncoding(MultibaseError):
    """Represents an encoding name with no registered encoding."""


class MultihashError(MultiformatsError):
    """Represents an error parsing a multihash frame."""


class TooShort(MultihashError):
    """Represents a frame too short to hold the code and length header."""


class UnknownCode(MultihashError):
    """Represents a multihash code with no registered algorithm."""


class LengthMismatch(MultihashError):
    """Represents a declared digest length that disagrees with the algorithm."""


class DigestTruncated(MultihashError):
    """Represents a frame holding fewer digest bytes than it declares."""


class UnsupportedAlgorithm(MultihashError):
    """Represents an algorithm name with no registered algorithm."""


__all__ = [
    "DigestTruncated",
    "EmptyInput",
    "InvalidEncoding",
    "LengthMismatch",
    "MultibaseError",
    "MultiformatsError",
    "MultihashError",
    "RegistryError",
    "TooShort",
    "UnknownCode",
    "UnsupportedAlgorithm",
    "UnsupportedEncoding",
    "UnsupportedPrefix",
]
