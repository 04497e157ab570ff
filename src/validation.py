"""Dataset validation for family tree data."""

import networkx as nx

from graph import GraphIndex


def validate_index(index: GraphIndex) -> list[str]:
    """
    Validate the indexed family data for:
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Death before birth

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    people = index.people

    # Check for cycles
    try:
        cycle = nx.find_cycle(index.lineage, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    # Check for impossible ages (child born before parent)
    for parent_id, child_id in index.lineage.edges():
        parent = people[parent_id]
        child = people[child_id]

        if parent.birth_year is None or child.birth_year is None:
            continue
        if child.birth_year < parent.birth_year:
            warnings.append(f"Impossible: {child.name} born before parent {parent.name}")
        elif child.birth_year - parent.birth_year < 12:
            # Parent too young (< 12 years old)
            warnings.append(
                f"Suspicious: {parent.name} was less than 12 years old when {child.name} was born"
            )

    # Check death before birth
    for person in people.values():
        if (
            person.birth_year is not None
            and person.death_year is not None
            and person.death_year < person.birth_year
        ):
            warnings.append(f"Impossible: {person.name} died before being born")

    return warnings
