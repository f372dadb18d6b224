"""Topology - one view of a network, merged from partial probe reports.

A Topology pairs EdgeMetadatas with NodeMetadatas. Edges are directional
and are embedded twice: as an edge key in EdgeMetadatas and as an entry in
the source node's adjacency. Callers must keep the two in step; validate()
reports where they are not, in either direction.

Every operation returns a fresh Topology. Inputs are never modified, so a
Topology can be shared between threads without locking; only the variable
holding the "current" topology needs synchronization when it is replaced.

Example:
    topology = Topology()
    topology = topology.with_node("host;a", make_node_metadata({"role": "db"}))
    combined = topology.merge(report)
    combined.validate()
"""

from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Iterable
import logging

from topomerge.edges import EdgeMetadatas
from topomerge.exceptions import SerializationError, TopologyValidationError
from topomerge.ids import IDCodec, get_id_codec
from topomerge.nodes import NodeMetadata, NodeMetadatas

logger = logging.getLogger(__name__)


@dataclass
class Topology:
    """A specific view of a network: nodes, edges and their metadata."""

    edge_metadatas: EdgeMetadatas = field(default_factory=EdgeMetadatas)
    node_metadatas: NodeMetadatas = field(default_factory=NodeMetadatas)

    def __post_init__(self):
        """Accept plain dicts for either collection."""
        if not isinstance(self.edge_metadatas, EdgeMetadatas):
            self.edge_metadatas = EdgeMetadatas(self.edge_metadatas)
        if not isinstance(self.node_metadatas, NodeMetadatas):
            self.node_metadatas = NodeMetadatas(self.node_metadatas)

    def with_node(self, node_id: str, nmd: NodeMetadata) -> "Topology":
        """Return a new topology with ``nmd`` stored under ``node_id``.

        If a node already exists for this ID, the result is
        ``nmd.merge(existing)``: labels from ``nmd`` lose to existing labels
        on conflict, while counters are added and adjacency unioned.
        """
        existing = self.node_metadatas.get(node_id)
        if existing is not None:
            nmd = nmd.merge(existing)
            logger.debug(f"Merged node {node_id} into existing metadata")
        else:
            nmd = nmd.copy()
            logger.debug(f"Added node {node_id}")

        result = self.copy()
        result.node_metadatas[node_id] = nmd
        return result

    def copy(self) -> "Topology":
        return Topology(
            edge_metadatas=self.edge_metadatas.copy(),
            node_metadatas=self.node_metadatas.copy(),
        )

    def merge(self, other: "Topology") -> "Topology":
        """Merge ``other`` into this topology and return the result.

        Edge metadata is deep-merged per edge. Node metadata is only added
        for node IDs this topology does not already have. Neither operand
        is modified.
        """
        logger.debug(
            f"Merging topology ({len(other.node_metadatas)} nodes, "
            f"{len(other.edge_metadatas)} edges) into "
            f"({len(self.node_metadatas)} nodes, {len(self.edge_metadatas)} edges)"
        )
        return Topology(
            edge_metadatas=self.edge_metadatas.merge(other.edge_metadatas),
            node_metadatas=self.node_metadatas.merge(other.node_metadatas),
        )

    # =========================================================================
    # Validation
    # =========================================================================

    def violations(self, codec: IDCodec | None = None) -> list[str]:
        """Check the topology for inconsistencies.

        Args:
            codec: Parser for edge keys and node IDs (default codec if None)

        Returns:
            Every violation found, in a stable order; empty if consistent
        """
        codec = codec or get_id_codec()
        errs: list[str] = []
        edges: set[tuple[str, str]] = set()

        # Every edge key must parse, and its source node must exist and be
        # adjacent to the destination.
        for edge_id in sorted(self.edge_metadatas):
            parsed = codec.parse_edge_id(edge_id)
            if parsed is None:
                errs.append(f"invalid edge ID {edge_id!r}")
                continue
            edges.add(parsed)
            src_id, dst_id = parsed
            src = self.node_metadatas.get(src_id)
            if src is None:
                errs.append(f"node {src_id} metadatas missing for edge {edge_id!r}")
            elif not src.adjacency.contains(dst_id):
                errs.append(
                    f"adjacency destination missing for destination node ID {dst_id!r} "
                    f"(from edge {edge_id!r})"
                )

        # Every node needs a label map and a parseable ID, and everything it
        # is adjacent to must exist and have edge metadata.
        for node_id in sorted(self.node_metadatas):
            nmd = self.node_metadatas[node_id]
            if nmd.metadata is None:
                errs.append(f"node ID {node_id!r} has nil metadata")
            if codec.parse_node_id(node_id) is None:
                errs.append(f"invalid node ID {node_id!r}")
            for dst_id in nmd.adjacency:
                if dst_id not in self.node_metadatas:
                    errs.append(
                        f"node metadata missing from adjacency {node_id!r} -> {dst_id!r}"
                    )
                if (node_id, dst_id) not in edges:
                    errs.append(
                        f"edge metadata missing for adjacency {node_id!r} -> {dst_id!r}"
                    )

        return errs

    def validate(self, codec: IDCodec | None = None) -> None:
        """Raise if the topology is inconsistent.

        Raises:
            TopologyValidationError: Carrying every violation found
        """
        errs = self.violations(codec)
        if errs:
            logger.warning(f"Topology failed validation with {len(errs)} error(s), first: {errs[0]}")
            raise TopologyValidationError(errs)

    def is_valid(self, codec: IDCodec | None = None) -> bool:
        return not self.violations(codec)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for transport."""
        return {
            "edge_metadatas": self.edge_metadatas.to_dict(),
            "node_metadatas": self.node_metadatas.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Topology":
        """Create from dictionary. Missing sections are treated as empty."""
        if not isinstance(data, dict):
            raise SerializationError(f"topology must be a mapping, got {type(data).__name__}")
        return cls(
            edge_metadatas=EdgeMetadatas.from_dict(data.get("edge_metadatas") or {}),
            node_metadatas=NodeMetadatas.from_dict(data.get("node_metadatas") or {}),
        )


def merge_topologies(topologies: Iterable[Topology]) -> Topology:
    """Merge a batch of topologies, left to right, into one.

    Args:
        topologies: Reports to combine, earliest first

    Returns:
        The combined topology (empty if there were none)
    """
    return reduce(Topology.merge, topologies, Topology())
