"""
Configuration for schema serialization.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SerializerConfig:
    """Configuration options for JSON encoding."""

    # Indent nested structures instead of emitting compact JSON
    pretty: bool = False

    # Indent width used when pretty is set
    indent: int = 4

    # Escape non-ASCII characters as \uXXXX
    ensure_ascii: bool = True

    @staticmethod
    def from_dict(d: dict) -> SerializerConfig:
        """Create a config from a dictionary."""
        config = SerializerConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "pretty": self.pretty,
            "indent": self.indent,
            "ensure_ascii": self.ensure_ascii,
        }
