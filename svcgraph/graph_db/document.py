"""In-memory graph document: node and edge collections plus their invariants.

The document does no I/O. Mutating methods check their preconditions and
raise before touching either collection, so a failed call leaves the
document exactly as it was. Invariants kept after every successful call:

* every edge's source and target name a node in the document
* at most one edge per ordered (source, target) pair
* node ids are unique, edge ids are unique
* removing a node removes every edge touching it
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from svcgraph.models.graph import Edge, Node
from svcgraph.utils.exceptions import Conflict, DuplicateId, InvalidArgument, NotFound


def require_text(value: str | None, message: str, field: str) -> str:
    if not value or not value.strip():
        raise InvalidArgument(message, field=field)
    return value


def _fallback_edge_id(edge: dict[str, Any], taken: set[str]) -> str:
    base = f"edge-{edge.get('source')}-{edge.get('target')}"
    candidate, n = base, 1
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


class GraphDocument(BaseModel):
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _assign_missing_edge_ids(cls, data: Any) -> Any:
        """Older snapshots may hold edges without an ``id``; derive a stable one."""
        if not isinstance(data, dict) or not isinstance(data.get("edges"), list):
            return data
        edges = data["edges"]
        if all(not isinstance(e, dict) or e.get("id") for e in edges):
            return data

        taken = {e.get("id") if isinstance(e, dict) else getattr(e, "id", None) for e in edges}
        taken.discard(None)
        filled = []
        for edge in edges:
            if isinstance(edge, dict) and not edge.get("id"):
                edge = {**edge, "id": _fallback_edge_id(edge, taken)}
                taken.add(edge["id"])
            filled.append(edge)
        return {**data, "edges": filled}

    @classmethod
    def empty(cls) -> GraphDocument:
        return cls()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> GraphDocument:
        return cls.model_validate(payload)

    def to_payload(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_payload() for node in self.nodes],
            "edges": [edge.to_payload() for edge in self.edges],
        }

    def clone(self) -> GraphDocument:
        return self.model_copy(deep=True)

    # ── Lookups ──────────────────────────────────────────────────────

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def edge_ids(self) -> set[str]:
        return {edge.id for edge in self.edges}

    def has_node(self, node_id: str) -> bool:
        return any(node.id == node_id for node in self.nodes)

    def get_node(self, node_id: str) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise NotFound("Node not found", nodeId=node_id)

    def find_edge(self, source: str, target: str) -> Edge | None:
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge
        return None

    def edges_touching(self, node_id: str) -> list[Edge]:
        return [e for e in self.edges if e.source == node_id or e.target == node_id]

    # ── Node mutations ───────────────────────────────────────────────

    def add_node(self, node: Node) -> None:
        if self.has_node(node.id):
            raise DuplicateId("Node id already exists", nodeId=node.id)
        self.nodes.append(node)

    def update_node(self, node_id: str, changes: dict[str, Any]) -> Node:
        """Shallow-merge ``changes`` into the stored node; ``id`` never changes."""
        current = self.get_node(node_id)
        changes = {k: v for k, v in changes.items() if k != "id"}
        merged = {**current.model_dump(), **changes, "id": node_id}
        try:
            updated = Node.model_validate(merged)
        except ValidationError as exc:
            raise InvalidArgument("Invalid node fields", nodeId=node_id, reason=str(exc)) from exc

        index = next(i for i, node in enumerate(self.nodes) if node.id == node_id)
        self.nodes[index] = updated
        return updated

    def remove_node(self, node_id: str) -> list[Edge]:
        """Remove a node and cascade to its edges. Returns the removed edges."""
        if not self.has_node(node_id):
            raise NotFound("Node not found", nodeId=node_id)
        removed = self.edges_touching(node_id)
        self.nodes = [node for node in self.nodes if node.id != node_id]
        self.edges = [e for e in self.edges if e.source != node_id and e.target != node_id]
        return removed

    # ── Edge mutations ───────────────────────────────────────────────

    def check_edge_endpoints(self, source: str, target: str) -> None:
        if not self.has_node(source):
            raise NotFound("Source node does not exist", field="source", source=source, target=target)
        if not self.has_node(target):
            raise NotFound("Target node does not exist", field="target", source=source, target=target)
        if self.find_edge(source, target) is not None:
            raise Conflict("Edge already exists", source=source, target=target)

    def add_edge(self, edge: Edge) -> None:
        self.check_edge_endpoints(edge.source, edge.target)
        if edge.id in self.edge_ids():
            raise DuplicateId("Edge id already exists", edgeId=edge.id)
        self.edges.append(edge)

    def remove_edge(self, source: str, target: str) -> Edge:
        edge = self.find_edge(source, target)
        if edge is None:
            raise NotFound("Edge not found", source=source, target=target)
        self.edges = [e for e in self.edges if e is not edge]
        return edge

    # ── Queries ──────────────────────────────────────────────────────

    def search_nodes(self, query: str) -> list[Node]:
        require_text(query, "Search query is required", field="q")
        needle = query.lower()
        return [node for node in self.nodes if needle in node.name.lower()]

    def filter_nodes(self, node_type: str) -> list[Node]:
        require_text(node_type, "Type parameter is required", field="type")
        wanted = node_type.lower()
        return [node for node in self.nodes if node.type.lower() == wanted]

    # ── Integrity ────────────────────────────────────────────────────

    def integrity_violations(self) -> list[str]:
        """Describe every broken invariant; empty when the document is sound."""
        problems: list[str] = []
        node_ids = [node.id for node in self.nodes]
        if len(node_ids) != len(set(node_ids)):
            problems.append("duplicate node ids")
        edge_ids = [edge.id for edge in self.edges]
        if len(edge_ids) != len(set(edge_ids)):
            problems.append("duplicate edge ids")

        known = set(node_ids)
        seen_pairs: set[tuple[str, str]] = set()
        for edge in self.edges:
            if edge.source not in known:
                problems.append(f"edge {edge.id} has unknown source {edge.source}")
            if edge.target not in known:
                problems.append(f"edge {edge.id} has unknown target {edge.target}")
            if edge.key in seen_pairs:
                problems.append(f"duplicate edge {edge.source}->{edge.target}")
            seen_pairs.add(edge.key)
        return problems
