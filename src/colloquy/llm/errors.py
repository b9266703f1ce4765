"""Error taxonomy for the remote text-generation layer."""


class LLMError(Exception):
    """Base class for text-generation backend errors."""


class InitializationError(LLMError):
    """The backend client could not be constructed.

    Raised for a missing or blank credential, an unknown provider, or an SDK
    that refuses its configuration. A client that failed to initialize stays
    unusable for the rest of the process.
    """


class TransportError(LLMError):
    """A single generation request failed.

    Covers network failures, timeouts and remote rejections. The provider's
    own exception is kept as ``__cause__``.
    """
