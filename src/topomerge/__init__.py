"""topomerge - conflict-free merging of partial network topologies.

Probes each see a fragment of a distributed system and emit partial
snapshots. topomerge combines any number of them, in any order, into one
topology:
- Traffic counters on the same edge are summed, high-water marks maxed
- Node labels, counters and adjacency follow their own merge rules
- Nothing is ever modified in place; every operation returns a new value
- validate() reports edges and adjacencies that are out of step

Example:
    from topomerge import Topology, EdgeMetadata, make_node_metadata, make_edge_id

    report = Topology(
        edge_metadatas={make_edge_id("h;a", "h;b"): EdgeMetadata(egress_packet_count=10)},
    )
    report = report.with_node("h;a", make_node_metadata({"role": "web"}).with_adjacent("h;b"))
    report = report.with_node("h;b", make_node_metadata())

    current = current.merge(report)
    current.validate()
"""

__version__ = "0.1.0"

# Configuration
from topomerge.config import (
    TopomergeConfig,
    IDConfig,
    load_config,
)

# Counters
from topomerge.counters import (
    merge_counter,
    summed,
    maximum,
)

# Identifiers
from topomerge.idlist import IDList
from topomerge.ids import (
    IDCodec,
    DelimitedIDCodec,
    get_id_codec,
    reset_id_codec,
    make_edge_id,
    parse_edge_id,
    make_node_id,
    parse_node_id,
    split_edge_id,
    split_node_id,
)

# Topology
from topomerge.edges import EdgeMetadata, EdgeMetadatas
from topomerge.nodes import NodeMetadata, NodeMetadatas, make_node_metadata
from topomerge.topology import Topology, merge_topologies

# Exceptions
from topomerge.exceptions import (
    TopomergeError,
    ConfigurationError,
    TopologyError,
    TopologyValidationError,
    InvalidIDError,
    SerializationError,
)

__all__ = [
    "__version__",
    # Configuration
    "TopomergeConfig",
    "IDConfig",
    "load_config",
    # Counters
    "merge_counter",
    "summed",
    "maximum",
    # Identifiers
    "IDList",
    "IDCodec",
    "DelimitedIDCodec",
    "get_id_codec",
    "reset_id_codec",
    "make_edge_id",
    "parse_edge_id",
    "make_node_id",
    "parse_node_id",
    "split_edge_id",
    "split_node_id",
    # Topology
    "EdgeMetadata",
    "EdgeMetadatas",
    "NodeMetadata",
    "NodeMetadatas",
    "make_node_metadata",
    "Topology",
    "merge_topologies",
    # Exceptions
    "TopomergeError",
    "ConfigurationError",
    "TopologyError",
    "TopologyValidationError",
    "InvalidIDError",
    "SerializationError",
]
