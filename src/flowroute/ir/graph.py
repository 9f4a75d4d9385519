"""Diagram graph: wraps the node/connection lists in a networkx DiGraph.

This module owns the topology view used by auto-layout: insertion order of
nodes and connections is preserved by the DiGraph adjacency, which is what
keeps layering deterministic.
"""

from __future__ import annotations

import networkx as nx

from flowroute.ir.model import Diagram


class DiagramGraph:
    """Topology of a diagram, keyed by node id."""

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph
        self._order: dict[str, int] = {node_id: i for i, node_id in enumerate(digraph.nodes)}

    @classmethod
    def from_diagram(cls, diagram: Diagram) -> DiagramGraph:
        """Build the graph; self-loops are skipped, parallel connections collapse."""
        digraph: nx.DiGraph = nx.DiGraph()
        for node in diagram.nodes:
            digraph.add_node(node.id)
        for conn in diagram.connections:
            if conn.from_id == conn.to_id:
                continue
            if conn.from_id not in digraph or conn.to_id not in digraph:
                continue
            if not digraph.has_edge(conn.from_id, conn.to_id):
                digraph.add_edge(conn.from_id, conn.to_id)
        return cls(digraph)

    def node_ids(self) -> list[str]:
        return list(self.digraph.nodes)

    def insertion_index(self, node_id: str) -> int:
        return self._order[node_id]

    def successors(self, node_id: str) -> list[str]:
        return list(self.digraph.successors(node_id))

    def predecessors(self, node_id: str) -> list[str]:
        return list(self.digraph.predecessors(node_id))

    def roots(self) -> list[str]:
        """Nodes with no incoming connection, in insertion order."""
        return [node_id for node_id in self.digraph.nodes if self.digraph.in_degree(node_id) == 0]

    def edges(self) -> list[tuple[str, str]]:
        """Distinct (from, to) pairs, grouped by source in node order."""
        return list(self.digraph.edges)
