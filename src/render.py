"""Render contract: the plain data handed to the drawing layer after every layout pass."""

from models import PERSON, UNION, LaidOutNode, LayoutResult, Person
from view_state import ViewState


def person_payload(person: Person) -> dict:
    return {
        "id": person.id,
        "name": person.name,
        "birthYear": person.birth_year,
        "deathYear": person.death_year,
        "subtitle": person.subtitle,
        "location": person.location,
        "photo": person.photo,
        "notes": person.notes,
        "status": person.status,
        "years": person.years,
    }


def node_payload(node: LaidOutNode, focused_id: str | None = None) -> dict:
    payload = {
        "id": node.id,
        "kind": node.kind,
        "x": node.x,
        "y": node.y,
        "depth": node.depth,
        "generation": node.generation,
        "collapsed": node.collapsed,
        "hasChildren": node.has_children,
        "focused": node.id == focused_id,
    }
    if node.kind == UNION:
        payload["partners"] = [person_payload(p) for p in node.partners]
    elif node.kind == PERSON:
        payload["person"] = person_payload(node.person)
    else:
        raise ValueError(f"Unknown node kind: {node.kind!r}")
    return payload


def build_render_contract(result: LayoutResult, view: ViewState | None = None) -> dict:
    """
    Everything the renderer needs for one pass.

    Nodes and edges are identified by entity id; the renderer diffs against
    its previous draw by id, never by object identity.
    """
    focused_id = view.focused_id if view is not None else None
    contract = {
        "nodes": [node_payload(n, focused_id) for n in result.nodes.values()],
        "edges": [{"source": e.source, "target": e.target} for e in result.edges],
        "unions": [
            {"id": n.id, "partnerIds": [p.id for p in n.partners]}
            for n in result.nodes.values()
            if n.kind == UNION
        ],
        "focusedId": focused_id,
    }
    if view is not None:
        t = view.transform
        contract["transform"] = {"x": t.x, "y": t.y, "k": t.k}
    return contract
