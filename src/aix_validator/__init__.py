"""aix-validator core package.

Checks `.aix` source bundles for publishing readiness: archive layout,
descriptor documents against their JSON schemas, and the source icon.
"""

__version__ = "0.1.0"

__all__ = [
    "core",
]
