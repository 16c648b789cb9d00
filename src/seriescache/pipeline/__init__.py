"""Pipeline modules.

- holder: lock-guarded single writer for a shared Container
"""

from seriescache.pipeline.holder import ContainerHolder

__all__ = [
    "ContainerHolder",
]
