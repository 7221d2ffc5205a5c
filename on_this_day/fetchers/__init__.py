"""Event feed layer: providers, response decoders and the HTTP client."""

from .decoders import DecodeError, decode_events
from .feed import FeedClient, MissingCredentialError
from .providers import BUILTIN_PROVIDERS, get_provider

__all__ = [
    "DecodeError",
    "decode_events",
    "FeedClient",
    "MissingCredentialError",
    "BUILTIN_PROVIDERS",
    "get_provider",
]
