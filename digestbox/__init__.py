"""Message digests, HMAC and a pure-Python MD6, with in-memory digest tables."""

__version__ = "0.1.0"