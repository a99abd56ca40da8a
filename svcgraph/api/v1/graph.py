"""Graph API endpoints — retrieve and export the service topology."""

from __future__ import annotations

import json
from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from svcgraph.api.dependencies import get_graph_service
from svcgraph.graph_db.document import GraphDocument
from svcgraph.services.graph_service import GraphService

router = APIRouter(prefix="/graph", tags=["graph"])


@router.get("", response_model=GraphDocument)
async def get_graph(service: GraphService = Depends(get_graph_service)) -> GraphDocument:
    """Get every node and edge (D3-compatible)."""
    return await service.list_graph()


@router.get("/export")
async def export_graph(
    format: Literal["json", "graphml"] = "json",
    service: GraphService = Depends(get_graph_service),
) -> Response:
    """Export the topology in JSON or GraphML format."""
    document = await service.list_graph()

    if format == "json":
        content = json.dumps(document.to_payload(), indent=2)
        return Response(
            content=content,
            media_type="application/json",
            headers={"Content-Disposition": "attachment; filename=topology.json"},
        )

    return Response(
        content=to_graphml(document),
        media_type="application/xml",
        headers={"Content-Disposition": "attachment; filename=topology.graphml"},
    )


def to_graphml(document: GraphDocument) -> str:
    """Render nodes and edges as GraphML XML."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<graphml xmlns="http://graphml.graphdrawing.org/xmlns">',
        '  <key id="label" for="node" attr.name="label" attr.type="string"/>',
        '  <key id="latency" for="node" attr.name="latency" attr.type="double"/>',
        '  <key id="protocol" for="edge" attr.name="protocol" attr.type="string"/>',
        '  <key id="rps" for="edge" attr.name="rps" attr.type="double"/>',
        '  <graph id="G" edgedefault="directed">',
    ]

    for node in document.nodes:
        lines.append(f'    <node id="{_xml_escape(node.id)}">')
        lines.append(f'      <data key="label">{_xml_escape(node.name)} ({_xml_escape(node.type)})</data>')
        lines.append(f'      <data key="latency">{node.latency}</data>')
        lines.append("    </node>")

    for edge in document.edges:
        lines.append(
            f'    <edge id="{_xml_escape(edge.id)}" '
            f'source="{_xml_escape(edge.source)}" target="{_xml_escape(edge.target)}">'
        )
        lines.append(f'      <data key="protocol">{_xml_escape(edge.protocol)}</data>')
        lines.append(f'      <data key="rps">{edge.rps}</data>')
        lines.append("    </edge>")

    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


def _xml_escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")
