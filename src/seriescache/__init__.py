"""`seriescache` - bounded, validated, multi-series caches.

Keeps "the last N good observations" per named series, rejecting or
quarantining bad data automatically.

Subpackages:
- schemas: Series options, defaults, compiled policies
- contracts: Fail-fast invariants and exceptions
- core: Container, admission engine, derived operations
- pipeline: Thread-safe holder for shared containers
"""

__version__ = "0.1.0"
