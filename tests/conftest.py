"""Pytest configuration for topomerge tests."""

import pytest

from topomerge import (
    EdgeMetadata,
    Topology,
    make_edge_id,
    make_node_metadata,
    reset_id_codec,
)


# Node IDs used throughout the tests; all share one scope.
NODE_A = "host1;a"
NODE_B = "host1;b"
NODE_C = "host1;c"


@pytest.fixture(autouse=True)
def reset_codec():
    """Reset the default ID codec before and after each test."""
    reset_id_codec()
    yield
    reset_id_codec()


@pytest.fixture
def edge_ab() -> str:
    return make_edge_id(NODE_A, NODE_B)


@pytest.fixture
def clean_topology(edge_ab) -> Topology:
    """A consistent topology: A -> B with edge metadata, B -> nothing."""
    topology = Topology(
        edge_metadatas={edge_ab: EdgeMetadata(egress_packet_count=10, max_conn_count_tcp=4)},
    )
    topology = topology.with_node(
        NODE_A, make_node_metadata({"role": "web"}).with_adjacent(NODE_B)
    )
    return topology.with_node(NODE_B, make_node_metadata({"role": "db"}))
