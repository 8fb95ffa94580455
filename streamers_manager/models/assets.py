"""Bundled asset data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmbeddedAsset:
    """A resource file shipped with the package and written out at runtime."""
    name: str
    content: bytes
