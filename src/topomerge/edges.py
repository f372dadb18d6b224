"""Edge metadata and the edge collection of a topology.

EdgeMetadata holds the directional counters probes can collect about one
edge. Each counter is optional; None means "not measured". Two kinds of
combination exist:

- merge: the same edge observed over two different time windows. Traffic
  counters are summed and the TCP connection high-water mark takes the max.
- flatten: two different edges observed over the same time window, e.g.
  when collapsing endpoint edges into a coarser host edge. Everything is
  summed, including the high-water mark.
"""

from dataclasses import dataclass, fields
from typing import Any

from topomerge.counters import Reducer, maximum, merge_counter, summed
from topomerge.exceptions import SerializationError


@dataclass
class EdgeMetadata:
    """A superset of the metadata probes can collect about a directed edge.

    Example:
        observed = EdgeMetadata(egress_packet_count=10, max_conn_count_tcp=4)
        later = EdgeMetadata(egress_packet_count=5, max_conn_count_tcp=6)
        total = observed.merge(later)
        # total.egress_packet_count == 15, total.max_conn_count_tcp == 6
    """

    egress_packet_count: int | None = None
    ingress_packet_count: int | None = None
    egress_byte_count: int | None = None   # Transport layer
    ingress_byte_count: int | None = None  # Transport layer
    max_conn_count_tcp: int | None = None

    def copy(self) -> "EdgeMetadata":
        return EdgeMetadata(
            egress_packet_count=self.egress_packet_count,
            ingress_packet_count=self.ingress_packet_count,
            egress_byte_count=self.egress_byte_count,
            ingress_byte_count=self.ingress_byte_count,
            max_conn_count_tcp=self.max_conn_count_tcp,
        )

    def merge(self, other: "EdgeMetadata") -> "EdgeMetadata":
        """Fold a later observation of the same edge into this one.

        Neither operand is modified.
        """
        return self._combine(other, conn_reducer=maximum)

    def flatten(self, other: "EdgeMetadata") -> "EdgeMetadata":
        """Sum this edge with a different edge from the same time window.

        Neither operand is modified.
        """
        # Summing two maximums doesn't always give the true maximum, but
        # it's a best effort.
        return self._combine(other, conn_reducer=summed)

    def _combine(self, other: "EdgeMetadata", conn_reducer: Reducer) -> "EdgeMetadata":
        return EdgeMetadata(
            egress_packet_count=merge_counter(
                self.egress_packet_count, other.egress_packet_count, summed
            ),
            ingress_packet_count=merge_counter(
                self.ingress_packet_count, other.ingress_packet_count, summed
            ),
            egress_byte_count=merge_counter(
                self.egress_byte_count, other.egress_byte_count, summed
            ),
            ingress_byte_count=merge_counter(
                self.ingress_byte_count, other.ingress_byte_count, summed
            ),
            max_conn_count_tcp=merge_counter(
                self.max_conn_count_tcp, other.max_conn_count_tcp, conn_reducer
            ),
        )

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary, omitting counters that were not measured."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EdgeMetadata":
        """Create from dictionary.

        Raises:
            SerializationError: If a counter is not a non-negative integer
        """
        if not isinstance(data, dict):
            raise SerializationError(f"edge metadata must be a mapping, got {type(data).__name__}")

        values = {}
        for f in fields(cls):
            value = data.get(f.name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise SerializationError(
                    f"{f.name} must be a non-negative integer, got {value!r}"
                )
            values[f.name] = value
        return cls(**values)


class EdgeMetadatas(dict[str, EdgeMetadata]):
    """Metadata about each edge in a topology, keyed by edge ID.

    Merging deep-merges entries that share a key; entries present on only
    one side pass through unchanged.
    """

    def copy(self) -> "EdgeMetadatas":
        return EdgeMetadatas((k, v.copy()) for k, v in self.items())

    def merge(self, other: "EdgeMetadatas") -> "EdgeMetadatas":
        """Return a new collection with ``other`` merged into this one.

        Neither operand is modified.
        """
        result = self.copy()
        for edge_id, emd in other.items():
            existing = result.get(edge_id)
            result[edge_id] = emd.copy() if existing is None else existing.merge(emd)
        return result

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {k: v.to_dict() for k, v in self.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EdgeMetadatas":
        if not isinstance(data, dict):
            raise SerializationError(f"edge metadatas must be a mapping, got {type(data).__name__}")
        return cls((k, EdgeMetadata.from_dict(v)) for k, v in data.items())
