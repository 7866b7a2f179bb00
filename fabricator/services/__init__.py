# Services module
from fabricator.services.openai import (
    OpenAIService,
    RateLimitedError,
    UnauthorizedError,
    UpstreamError,
)
from fabricator.services.synthesizer import EndpointSynthesizer

__all__ = [
    "OpenAIService",
    "RateLimitedError",
    "UnauthorizedError",
    "UpstreamError",
    "EndpointSynthesizer",
]
