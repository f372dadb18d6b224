"""Edge keys and node IDs.

An edge key joins a source and a destination node ID with the edge
delimiter (``"a|b"``). A node ID carries a scope, typically the host the
probe runs on, followed by the scope delimiter and a topology-specific
remainder (``"host1;10.0.0.1:80"``).

Topology validation only needs the parsing half of this module, through
the IDCodec protocol, so callers with other conventions can supply their
own codec.
"""

from dataclasses import dataclass
from typing import Protocol
import threading

from topomerge.config import (
    DEFAULT_EDGE_DELIMITER,
    DEFAULT_SCOPE_DELIMITER,
    TopomergeConfig,
)
from topomerge.exceptions import InvalidIDError


class IDCodec(Protocol):
    """Protocol for parsing the identifiers a topology is keyed by."""

    def parse_edge_id(self, edge_id: str) -> tuple[str, str] | None:
        """Split an edge key into (source ID, destination ID), or None."""
        ...

    def parse_node_id(self, node_id: str) -> tuple[str, str] | None:
        """Split a node ID into (scope, remainder), or None."""
        ...


@dataclass(frozen=True)
class DelimitedIDCodec:
    """IDCodec built on two delimiter strings."""

    edge_delimiter: str = DEFAULT_EDGE_DELIMITER
    scope_delimiter: str = DEFAULT_SCOPE_DELIMITER

    @classmethod
    def from_config(cls, config: TopomergeConfig) -> "DelimitedIDCodec":
        config.validate()
        return cls(
            edge_delimiter=config.ids.edge_delimiter,
            scope_delimiter=config.ids.scope_delimiter,
        )

    def make_edge_id(self, src_id: str, dst_id: str) -> str:
        return f"{src_id}{self.edge_delimiter}{dst_id}"

    def parse_edge_id(self, edge_id: str) -> tuple[str, str] | None:
        src_id, sep, dst_id = edge_id.partition(self.edge_delimiter)
        if not sep:
            return None
        return src_id, dst_id

    def make_node_id(self, scope: str, remainder: str) -> str:
        return f"{scope}{self.scope_delimiter}{remainder}"

    def parse_node_id(self, node_id: str) -> tuple[str, str] | None:
        scope, sep, remainder = node_id.partition(self.scope_delimiter)
        if not sep:
            return None
        return scope, remainder


# =============================================================================
# Default codec
# =============================================================================

_id_codec: DelimitedIDCodec | None = None
_id_codec_lock = threading.Lock()


def get_id_codec() -> DelimitedIDCodec:
    """Get the default codec, built from environment configuration.

    Thread-safe: Uses double-checked locking to ensure only one
    instance is created even when called from multiple threads.
    """
    global _id_codec

    if _id_codec is not None:
        return _id_codec

    with _id_codec_lock:
        if _id_codec is None:
            _id_codec = DelimitedIDCodec.from_config(TopomergeConfig.from_env())
        return _id_codec


def reset_id_codec() -> None:
    """Forget the default codec so the next call rebuilds it (for testing)."""
    global _id_codec
    with _id_codec_lock:
        _id_codec = None


def make_edge_id(src_id: str, dst_id: str) -> str:
    """Build an edge key with the default codec."""
    return get_id_codec().make_edge_id(src_id, dst_id)


def parse_edge_id(edge_id: str) -> tuple[str, str] | None:
    """Parse an edge key with the default codec."""
    return get_id_codec().parse_edge_id(edge_id)


def make_node_id(scope: str, remainder: str) -> str:
    """Build a node ID with the default codec."""
    return get_id_codec().make_node_id(scope, remainder)


def parse_node_id(node_id: str) -> tuple[str, str] | None:
    """Parse a node ID with the default codec."""
    return get_id_codec().parse_node_id(node_id)


def split_edge_id(edge_id: str) -> tuple[str, str]:
    """Like parse_edge_id, but raises on malformed input.

    Raises:
        InvalidIDError: If the key has no edge delimiter
    """
    parsed = parse_edge_id(edge_id)
    if parsed is None:
        raise InvalidIDError(f"invalid edge ID {edge_id!r}", identifier=edge_id)
    return parsed


def split_node_id(node_id: str) -> tuple[str, str]:
    """Like parse_node_id, but raises on malformed input.

    Raises:
        InvalidIDError: If the ID has no scope delimiter
    """
    parsed = parse_node_id(node_id)
    if parsed is None:
        raise InvalidIDError(f"invalid node ID {node_id!r}", identifier=node_id)
    return parsed
