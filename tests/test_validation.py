from conftest import make_people
from graph import build_index
from validation import validate_index


def test_clean_data_has_no_warnings(three_generations):
    assert validate_index(build_index(three_generations)) == []


def test_cycle_is_reported():
    people = make_people([{"id": "A", "parentIds": ["B"]}, {"id": "B", "parentIds": ["A"]}])

    warnings = validate_index(build_index(people))

    assert len(warnings) == 1
    assert warnings[0].startswith("Cycle detected")


def test_date_problems_are_reported():
    people = make_people(
        [
            {"id": "p", "name": "Pat", "birthYear": 1950},
            {"id": "c", "name": "Chris", "birthYear": 1940, "parentIds": ["p"]},
            {"id": "y", "name": "Young", "birthYear": 1955, "parentIds": ["p"]},
            {"id": "d", "name": "Dee", "birthYear": 1900, "deathYear": 1890},
        ]
    )

    warnings = validate_index(build_index(people))

    assert "Impossible: Chris born before parent Pat" in warnings
    assert "Suspicious: Pat was less than 12 years old when Young was born" in warnings
    assert "Impossible: Dee died before being born" in warnings
