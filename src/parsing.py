"""Conversion of raw person records (the loader's JSON document) into Person objects."""

from pathlib import Path
import json
import logging
import re

from errors import MalformedRecordError
from models import Person

logger = logging.getLogger(__name__)


# camelCase field name in the document -> Person attribute
FIELD_ALIASES = {
    "birthYear": "birth_year",
    "deathYear": "death_year",
    "parentIds": "parent_ids",
    "spouseIds": "spouse_ids",
}


def parse_year(value) -> int | None:
    """
    Parse a birth/death year into an integer.
    Returns None for missing values.

    Handles:
    - 1954
    - "1954"
    - "ABT 1905", "about 1905", "(Abt.  1798)"
    - "(1789?)"
    - "25 NOV 1954" (trailing year is kept)
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise MalformedRecordError(f"Invalid year: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, str):
        raise MalformedRecordError(f"Invalid year: {value!r}")

    s = value.strip().strip("()").rstrip("?").strip()
    # Remove qualifiers (ABT, ABOUT, BEF, AFT, EST, CAL, CIRCA, ...) - with optional colon
    s = re.sub(
        r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|CIRCA|CA\.?|C\.|AROUND):?\s*",
        "",
        s,
        flags=re.IGNORECASE,
    )

    match = re.match(r"^-?\d+$", s)
    if match:
        return int(s)

    match = re.search(r"(\d{4})$", s)
    if match:
        return int(match.group(1))

    raise MalformedRecordError(f"Invalid year: {value!r}")


def _id_list(record: dict, key: str, person_id: str) -> tuple[str, ...]:
    """Read a list of person ids, dropping blanks, duplicates and self-references."""
    raw = record.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise MalformedRecordError(f"{person_id!r}: {key} must be a list, got {type(raw).__name__}")

    ids: list[str] = []
    for item in raw:
        if item is None or item == "":
            continue
        item = str(item)
        if item == person_id:
            logger.warning("%r lists itself in %s; ignoring", person_id, key)
            continue
        if item not in ids:
            ids.append(item)
    return tuple(ids)


def _optional_text(record: dict, key: str) -> str | None:
    value = record.get(key)
    if value is None or value == "":
        return None
    return str(value)


def person_from_record(record: dict) -> Person:
    """Build a Person from one record of the input document. Absent optional fields are left unset."""
    if not isinstance(record, dict):
        raise MalformedRecordError(f"Person record must be an object, got {type(record).__name__}")

    record = {FIELD_ALIASES.get(k, k): v for k, v in record.items()}

    raw_id = record.get("id")
    if raw_id is None or isinstance(raw_id, bool) or str(raw_id).strip() == "":
        raise MalformedRecordError(f"Person record without id: {record!r}")
    person_id = str(raw_id).strip()

    order = record.get("order", 0)
    if order is None:
        order = 0
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        raise MalformedRecordError(f"{person_id!r}: order must be a number, got {order!r}")

    try:
        birth_year = parse_year(record.get("birth_year"))
        death_year = parse_year(record.get("death_year"))
    except MalformedRecordError as e:
        raise MalformedRecordError(f"{person_id!r}: {e}") from e

    return Person(
        id=person_id,
        name=_optional_text(record, "name") or "Unknown",
        birth_year=birth_year,
        death_year=death_year,
        subtitle=_optional_text(record, "subtitle"),
        location=_optional_text(record, "location"),
        photo=_optional_text(record, "photo"),
        notes=_optional_text(record, "notes"),
        parent_ids=_id_list(record, "parent_ids", person_id),
        spouse_ids=_id_list(record, "spouse_ids", person_id),
        order=int(order),
    )


def parse_document(document) -> list[Person]:
    """Parse a `{"people": [...]}` document (or a bare list of records)."""
    if isinstance(document, dict):
        records = document.get("people")
        if records is None:
            raise MalformedRecordError("Document has no 'people' list")
    else:
        records = document

    if not isinstance(records, list):
        raise MalformedRecordError(f"'people' must be a list, got {type(records).__name__}")

    return [person_from_record(r) for r in records]


def load_people(filepath: Path) -> list[Person]:
    """Read a JSON family document and return its people in document order."""
    with open(filepath, encoding="utf-8") as f:
        document = json.load(f)
    people = parse_document(document)
    logger.info("Loaded %d people from %s", len(people), filepath)
    return people
