import pytest

from conftest import make_people
from config import LayoutConfig
from errors import DuplicateIdError, UnknownNodeError
from session import FamilyTreeSession

VIEWPORT = (800, 600)


def snapshot(result):
    nodes = {n.id: (n.kind, n.x, n.y, n.collapsed) for n in result.nodes.values()}
    return nodes, result.edge_keys()


@pytest.fixture
def session(lineage):
    s = FamilyTreeSession(LayoutConfig(anchor_id="R"))
    s.load(lineage)
    return s


def test_load_lays_out_near_relatives(session):
    assert set(session.result.nodes) == {"R", "K1", "K2", "GK"}
    assert session.view.is_expanded("R")
    assert not session.view.is_expanded("GK")


def test_toggle_round_trip_is_lossless(session):
    before = snapshot(session.result)

    expanded = session.toggle("GK")
    assert "GGK" in expanded.nodes
    assert ("GK", "GGK") in expanded.edge_keys()

    restored = session.toggle("GK")
    assert snapshot(restored) == before


def test_collapsing_an_ancestor_keeps_descendant_state(session):
    session.toggle("GK")
    with_ggk = snapshot(session.result)

    collapsed = session.toggle("K1")
    assert "GK" not in collapsed.nodes
    assert "GGK" not in collapsed.nodes

    assert snapshot(session.toggle("K1")) == with_ggk


def test_toggle_unknown_node(session):
    with pytest.raises(UnknownNodeError):
        session.toggle("nobody")


def test_focus_expands_hidden_ancestors_and_centers_node(session):
    transform = session.focus("GGK", VIEWPORT)

    node = session.result.nodes["GGK"]
    assert session.view.focused_id == "GGK"
    assert session.view.is_expanded("GK")
    assert transform.k == pytest.approx(0.85)
    assert transform.apply(node.x, node.y) == pytest.approx((400, 300))


def test_focus_leaves_node_own_state_alone(session):
    session.toggle("K1")  # collapse

    session.focus("K1", VIEWPORT)

    assert not session.view.is_expanded("K1")
    assert "GK" not in session.result.nodes


def test_activation_gestures(session):
    session.activate("GK", 2, VIEWPORT)
    assert "GGK" in session.result.nodes
    assert session.view.focused_id is None

    session.activate("K2", 1, VIEWPORT)
    assert session.view.focused_id == "K2"


def test_search_and_focus(session):
    assert session.search_and_focus("great", VIEWPORT) == "GGK"
    assert "GGK" in session.result.nodes
    assert session.search_and_focus("nobody", VIEWPORT) is None


def test_search_finds_partner_of_top_level_couple(couple):
    s = FamilyTreeSession(LayoutConfig(anchor_id="X"))
    s.load(couple)
    assert "Y" not in s.result.nodes

    assert s.search_and_focus("Yvonne", VIEWPORT) == "X+Y"

    union = s.result.nodes["X+Y"]
    assert s.view.focused_id == "X+Y"
    assert s.view.transform.apply(union.x, union.y) == pytest.approx((400, 300))


def test_married_in_spouse_is_focused_through_hidden_union():
    s = FamilyTreeSession(LayoutConfig(anchor_id="R"))
    s.load(
        make_people(
            [
                {"id": "R", "name": "Root"},
                {"id": "Z", "name": "Zack", "parentIds": ["R"], "spouseIds": ["W"]},
                {"id": "W", "name": "Wanda"},
                {"id": "K", "name": "Kim", "parentIds": ["Z", "W"]},
            ]
        )
    )
    s.toggle("Z")  # collapse
    assert "Z+W" not in s.result.nodes

    assert s.search_and_focus("wanda", VIEWPORT) == "Z+W"
    assert s.view.is_expanded("Z")
    assert "Z+W" in s.result.nodes

    s.reset_view()
    s.focus("W", VIEWPORT)
    assert s.view.focused_id == "Z+W"


def test_expand_and_collapse_all(session):
    assert set(session.expand_all().nodes) == {"R", "K1", "K2", "GK", "GGK"}
    assert set(session.collapse_all().nodes) == {"R", "K1", "K2"}


def test_reload_discards_view_state(session, lineage):
    session.toggle("GK")
    session.focus("GGK", VIEWPORT)

    session.load(lineage)

    assert not session.view.is_expanded("GK")
    assert session.view.focused_id is None
    assert "GGK" not in session.result.nodes


def test_reset_view(session):
    session.focus("K2", VIEWPORT)

    transform = session.reset_view()

    assert (transform.x, transform.y, transform.k) == (40, 40, 0.85)
    assert session.view.focused_id is None


def test_lone_person_is_centered():
    s = FamilyTreeSession(LayoutConfig(anchor_id="solo"))
    s.load(make_people([{"id": "solo", "name": "Only One"}]))

    transform = s.frame_initial(VIEWPORT)
    node = s.result.nodes["solo"]

    assert transform.apply(node.x, node.y) == pytest.approx((400, 300))


def test_duplicate_ids_abort_load():
    s = FamilyTreeSession()

    with pytest.raises(DuplicateIdError):
        s.load(make_people([{"id": "a"}, {"id": "a"}]))


def test_cyclic_data_still_renders():
    s = FamilyTreeSession(LayoutConfig(anchor_id="R"))
    result = s.load(
        make_people(
            [{"id": "R"}, {"id": "A", "parentIds": ["R", "C"]}, {"id": "C", "parentIds": ["A"]}]
        )
    )

    assert set(result.nodes) == {"R", "A", "C"}
    assert any("Cycle detected" in w for w in s.warnings)


def test_details(session):
    assert session.details("K1")["children"] == ["Grandkid"]
    with pytest.raises(UnknownNodeError):
        session.details("nobody")


def test_layout_before_load():
    with pytest.raises(RuntimeError):
        FamilyTreeSession().layout()
