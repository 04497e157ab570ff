from conftest import make_people
from graph import build_index
from models import union_key
from unions import primary_union, synthesize_unions, unions_of


def test_union_key_is_order_independent():
    assert union_key("X", "Y") == union_key("Y", "X") == "X+Y"


def test_single_union_for_shared_child(couple):
    unions = synthesize_unions(build_index(couple))

    assert list(unions) == ["X+Y"]
    assert unions["X+Y"].children_ids == ("Z",)
    assert unions["X+Y"].partner_ids == ("X", "Y")


def test_reciprocal_spouse_lists_create_the_union_once():
    people = make_people(
        [
            {"id": "X", "spouseIds": ["Y"]},
            {"id": "Y", "spouseIds": ["X"]},
            {"id": "Z", "parentIds": ["X", "Y"]},
        ]
    )

    unions = synthesize_unions(build_index(people))

    assert len(unions) == 1
    assert unions["X+Y"].children_ids == ("Z",)


def test_union_is_the_same_from_either_side():
    from_x = synthesize_unions(
        build_index(make_people([{"id": "X", "spouseIds": ["Y"]}, {"id": "Y"}, {"id": "Z", "parentIds": ["Y", "X"]}]))
    )
    from_y = synthesize_unions(
        build_index(make_people([{"id": "X"}, {"id": "Y", "spouseIds": ["X"]}, {"id": "Z", "parentIds": ["X", "Y"]}]))
    )

    assert from_x == from_y


def test_children_with_only_one_of_the_partners_are_excluded():
    people = make_people(
        [
            {"id": "P", "spouseIds": ["Q", "R"]},
            {"id": "Q"},
            {"id": "R"},
            {"id": "c1", "name": "b", "parentIds": ["P", "Q"]},
            {"id": "c2", "name": "a", "parentIds": ["P", "Q"]},
            {"id": "c3", "parentIds": ["P", "R"]},
            {"id": "c4", "parentIds": ["P"]},
        ]
    )
    index = build_index(people)
    unions = synthesize_unions(index)

    assert unions["P+Q"].children_ids == ("c2", "c1")
    assert unions["P+R"].children_ids == ("c3",)
    assert primary_union(index, unions, "P").id == "P+Q"
    assert primary_union(index, unions, "c4") is None
    assert [u.id for u in unions_of(unions, "P")] == ["P+Q", "P+R"]
