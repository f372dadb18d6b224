"""Node metadata and the node collection of a topology.

NodeMetadata has three parts, each with its own merge rule:
- metadata: free-form string labels; the other (right-hand) side wins
- counters: integer counts; values for the same key are summed
- adjacency: IDs of nodes this node has an edge towards; union

NodeMetadatas, the collection, does NOT apply those rules. Merging two
collections only copies in node IDs the receiver does not have yet; a node
already present on the receiver is kept exactly as it is.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from topomerge.exceptions import SerializationError
from topomerge.idlist import IDList


@dataclass
class NodeMetadata:
    """A superset of the metadata probes can collect about a node.

    ``metadata`` may be None, meaning the label map was never initialized.
    Topology validation reports such nodes. Use ``make_node_metadata`` to
    get an initialized, empty value.

    Example:
        nmd = make_node_metadata({"role": "db"}).with_adjacent("host;b")
    """

    metadata: dict[str, str] | None = field(default_factory=dict)
    counters: dict[str, int] = field(default_factory=dict)
    adjacency: IDList = field(default_factory=IDList)

    def __post_init__(self):
        """Accept any iterable of node IDs as adjacency."""
        if not isinstance(self.adjacency, IDList):
            self.adjacency = IDList.from_iterable(self.adjacency)

    def copy(self) -> "NodeMetadata":
        return NodeMetadata(
            metadata=dict(self.metadata) if self.metadata is not None else None,
            counters=dict(self.counters),
            adjacency=self.adjacency.copy(),
        )

    def merge(self, other: "NodeMetadata") -> "NodeMetadata":
        """Merge two node metadatas together and return the result.

        In case of a label conflict, the other (right-hand) side wins.
        Counters are added and adjacency is unioned. Neither operand is
        modified.
        """
        result = self.copy()
        if result.metadata is None:
            result.metadata = {}
        if other.metadata:
            result.metadata.update(other.metadata)  # other takes precedence
        for key, value in other.counters.items():
            result.counters[key] = result.counters.get(key, 0) + value
        result.adjacency = result.adjacency.merge(other.adjacency)
        return result

    def with_metadata(self, metadata: Mapping[str, str] | None) -> "NodeMetadata":
        """Return a copy with the label map replaced."""
        result = self.copy()
        result.metadata = dict(metadata) if metadata is not None else None
        return result

    def with_counters(self, counters: Mapping[str, int]) -> "NodeMetadata":
        """Return a copy with the counters replaced."""
        result = self.copy()
        result.counters = dict(counters)
        return result

    def with_adjacency(self, adjacency: IDList) -> "NodeMetadata":
        """Return a copy with the adjacency replaced."""
        result = self.copy()
        result.adjacency = adjacency.copy()
        return result

    def with_adjacent(self, node_id: str) -> "NodeMetadata":
        """Return a copy with ``node_id`` added to the adjacency."""
        result = self.copy()
        result.adjacency = result.adjacency.add(node_id)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for transport."""
        return {
            "metadata": dict(self.metadata) if self.metadata is not None else None,
            "counters": dict(self.counters),
            "adjacency": list(self.adjacency),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeMetadata":
        """Create from dictionary.

        A missing or null ``metadata`` entry stays None so validation can
        still report it.

        Raises:
            SerializationError: If a section has the wrong shape
        """
        if not isinstance(data, dict):
            raise SerializationError(f"node metadata must be a mapping, got {type(data).__name__}")

        metadata = data.get("metadata")
        if metadata is not None:
            if not isinstance(metadata, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in metadata.items()
            ):
                raise SerializationError("metadata must map strings to strings")

        counters = data.get("counters") or {}
        if not isinstance(counters, dict) or not all(
            isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool)
            for k, v in counters.items()
        ):
            raise SerializationError("counters must map strings to integers")

        adjacency = data.get("adjacency") or []
        if not isinstance(adjacency, list) or not all(isinstance(i, str) for i in adjacency):
            raise SerializationError("adjacency must be a list of node IDs")

        return cls(
            metadata=dict(metadata) if metadata is not None else None,
            counters=dict(counters),
            adjacency=IDList.from_iterable(adjacency),
        )


def make_node_metadata(metadata: Mapping[str, str] | None = None) -> NodeMetadata:
    """Create a NodeMetadata with the given labels and nothing else.

    Args:
        metadata: Initial labels (an empty map if None)

    Returns:
        NodeMetadata with empty counters and adjacency
    """
    return NodeMetadata(metadata=dict(metadata or {}))


class NodeMetadatas(dict[str, NodeMetadata]):
    """Metadata about each node in a topology, keyed by node ID."""

    def copy(self) -> "NodeMetadatas":
        return NodeMetadatas((k, v.copy()) for k, v in self.items())

    def merge(self, other: "NodeMetadatas") -> "NodeMetadatas":
        """Return a new collection with the nodes of ``other`` added.

        Nodes the receiver already has are not overwritten and not
        merged; only new node IDs are copied in. Neither operand is
        modified.
        """
        result = self.copy()
        for node_id, nmd in other.items():
            if node_id not in result:  # don't overwrite
                result[node_id] = nmd.copy()
        return result

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {k: v.to_dict() for k, v in self.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeMetadatas":
        if not isinstance(data, dict):
            raise SerializationError(f"node metadatas must be a mapping, got {type(data).__name__}")
        return cls((k, NodeMetadata.from_dict(v)) for k, v in data.items())
