"""
Crowdfund Codec Errors

Every failure raised by the binary codecs and address derivation. These are
contract violations (corrupted bytes, mismatched layouts), never transient
conditions, so callers should surface them rather than retry.
"""


class CodecError(ValueError):
    """Base class for decode/encode/derivation failures."""


class TruncatedInput(CodecError):
    """Input length does not match what the layout requires."""


class MalformedLength(CodecError):
    """A declared string length exceeds the capacity of its field."""


class InvalidEncoding(CodecError):
    """Bytes that should hold text are not valid UTF-8."""


class TrailingData(CodecError):
    """Bytes were left over after a variable-length payload was read."""


class UnknownInstruction(CodecError):
    """Instruction discriminator is not one this client understands."""


class InvalidSeeds(CodecError):
    """Seeds violate the ledger's limits or produce an on-curve address."""


class NoValidSeedFound(CodecError):
    """No bump in 255..0 produced an off-curve program address."""
