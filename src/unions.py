"""Synthesis of union (partnership) entities from spousal references."""

import logging

from graph import GraphIndex
from models import Union, union_key

logger = logging.getLogger(__name__)


def synthesize_unions(index: GraphIndex) -> dict[str, Union]:
    """
    Create one Union per partnership referenced from any spouse list.

    A partnership listed by only one of the partners still yields a union,
    and a partnership listed by both yields it once. Children are the people
    whose parents include both partners, ordered like siblings.

    Returns:
        Mapping of union id to Union, in order of first reference.
    """
    unions: dict[str, Union] = {}

    for person in index.people.values():
        for spouse_id in index.spouses_of(person.id):
            key = union_key(person.id, spouse_id)
            if key in unions:
                continue

            shared = index.children_of(person.id) & index.children_of(spouse_id)
            unions[key] = Union(
                id=key,
                partner_ids=tuple(sorted((person.id, spouse_id))),
                children_ids=tuple(index.sorted_children(shared)),
            )

    logger.debug("Synthesized %d unions", len(unions))
    return unions


def primary_union(index: GraphIndex, unions: dict[str, Union], person_id: str) -> Union | None:
    """The union of a person with their first resolvable spouse, if any."""
    spouse_id = index.primary_spouse(person_id)
    if spouse_id is None:
        return None
    return unions.get(union_key(person_id, spouse_id))


def unions_of(unions: dict[str, Union], person_id: str) -> list[Union]:
    return [u for u in unions.values() if person_id in u.partner_ids]
