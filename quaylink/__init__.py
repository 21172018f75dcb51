"""Request descriptions and stream decoders for the Docker Engine API."""

__version__ = "0.1.0"

__all__ = ["network", "read", "secret", "service", "system", "uri", "volume"]