import logging

import pytest

from conftest import make_people
from errors import DuplicateIdError
from graph import build_index


def test_one_entry_per_person_and_children_match_parent_ids(two_families):
    index = build_index(two_families)

    assert len(index) == len(two_families)
    for person in two_families:
        expected = {p.id for p in two_families if person.id in p.parent_ids}
        assert index.children_of(person.id) == expected


def test_duplicate_id_is_fatal():
    people = make_people([{"id": "a"}, {"id": "a"}])

    with pytest.raises(DuplicateIdError, match="'a'"):
        build_index(people)


def test_dangling_parent_is_dropped_and_logged(caplog):
    people = make_people([{"id": "c", "parentIds": ["ghost", "p"]}, {"id": "p"}])

    with caplog.at_level(logging.WARNING, logger="graph"):
        index = build_index(people)

    assert index.parents_of("c") == ["p"]
    assert index.children_of("p") == {"c"}
    assert index.children_of("ghost") == set()
    assert "ghost" in caplog.text
    assert len(index.warnings) == 1


def test_dangling_spouse_is_dropped():
    index = build_index(make_people([{"id": "a", "spouseIds": ["nobody", "b"]}, {"id": "b"}]))

    assert index.spouses_of("a") == ("b",)
    assert index.primary_spouse("a") == "b"


def test_one_sided_spouse_link_is_visible_from_both_sides(couple):
    index = build_index(couple)

    assert index.spouses_of("X") == ("Y",)
    assert index.spouses_of("Y") == ("X",)


def test_more_than_two_parents_keeps_first_two():
    people = make_people(
        [{"id": "a"}, {"id": "b"}, {"id": "c"}, {"id": "k", "parentIds": ["a", "b", "c"]}]
    )

    index = build_index(people)

    assert index.parents_of("k") == ["a", "b"]
    assert index.children_of("c") == set()


def test_sorted_children_uses_order_hint_then_name():
    people = make_people(
        [
            {"id": "p"},
            {"id": "x", "name": "Zed", "parentIds": ["p"]},
            {"id": "y", "name": "Amy", "parentIds": ["p"]},
            {"id": "z", "name": "Bob", "parentIds": ["p"], "order": -1},
        ]
    )
    index = build_index(people)

    assert index.sorted_children(index.children_of("p")) == ["z", "y", "x"]


def test_search_and_details(three_generations):
    index = build_index(three_generations)

    assert index.search("an") == ["A"]
    assert index.search("  ") == []

    details = index.person_details("A")
    assert details["parents"] == ["Parent"]
    assert details["children"] == ["Child"]
    assert details["years"] == "1960"
