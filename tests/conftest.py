import pytest

from config import LayoutConfig
from parsing import person_from_record


def make_people(records):
    return [person_from_record(r) for r in records]


@pytest.fixture
def config():
    return LayoutConfig(anchor_id="A")


@pytest.fixture
def three_generations():
    """P -> A -> C, anchored on A."""
    return make_people(
        [
            {"id": "P", "name": "Parent", "birthYear": 1930},
            {"id": "A", "name": "Anchor", "birthYear": 1960, "parentIds": ["P"]},
            {"id": "C", "name": "Child", "birthYear": 1990, "parentIds": ["A"]},
        ]
    )


@pytest.fixture
def couple():
    """X and Y are partners (listed on X's side only) with one child Z."""
    return make_people(
        [
            {"id": "X", "name": "Xavier", "spouseIds": ["Y"]},
            {"id": "Y", "name": "Yvonne"},
            {"id": "Z", "name": "Zoe", "parentIds": ["X", "Y"]},
        ]
    )


@pytest.fixture
def two_families():
    """
    Two top-level couples whose children marry each other:

        A+B        D+E
         |          |
         C ---+---- F
              |
              G
    """
    return make_people(
        [
            {"id": "A", "name": "Albert", "spouseIds": ["B"]},
            {"id": "B", "name": "Beatrice", "spouseIds": ["A"]},
            {"id": "C", "name": "Carl", "parentIds": ["A", "B"], "spouseIds": ["F"]},
            {"id": "D", "name": "Dmitri", "spouseIds": ["E"]},
            {"id": "E", "name": "Elena", "spouseIds": ["D"]},
            {"id": "F", "name": "Fiona", "parentIds": ["D", "E"], "spouseIds": ["C"]},
            {"id": "G", "name": "Greta", "parentIds": ["C", "F"]},
        ]
    )


@pytest.fixture
def lineage():
    """R -> (K1, K2); K1 -> GK -> GGK. No spouses."""
    return make_people(
        [
            {"id": "R", "name": "Root"},
            {"id": "K1", "name": "Kid One", "parentIds": ["R"], "order": 1},
            {"id": "K2", "name": "Kid Two", "parentIds": ["R"], "order": 2},
            {"id": "GK", "name": "Grandkid", "parentIds": ["K1"]},
            {"id": "GGK", "name": "Great-grandkid", "parentIds": ["GK"]},
        ]
    )
