# Where: glowc.shared
# What: Types shared across feature slices.
# Why: Avoid import cycles between cache, templating and build.

from .events import BuildEvent

__all__ = ["BuildEvent"]
