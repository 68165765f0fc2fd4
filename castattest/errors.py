"""Error types raised by the attestation pipeline."""


class CastAttestError(Exception):
    """Base class for attestation webhook errors."""


class AuthenticationError(CastAttestError):
    """The webhook caller presented the wrong shared secret."""


class ConfigurationError(CastAttestError):
    """A required credential or setting is missing or invalid."""


class SubmissionError(CastAttestError):
    """Encoding, signing or sending the attestation failed."""


class MethodError(CastAttestError):
    """The route was called with an unsupported HTTP method."""
