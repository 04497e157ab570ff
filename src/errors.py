"""Exceptions raised while building or laying out a family tree."""


class FamilyTreeError(ValueError):
    """Base class for family tree errors."""


class MalformedRecordError(FamilyTreeError):
    """A person record does not have the expected structure."""


class DuplicateIdError(FamilyTreeError):
    def __init__(self, person_id: str):
        super().__init__(f"Duplicate person id: {person_id!r}")
        self.person_id = person_id


class DanglingReferenceError(FamilyTreeError):
    """A parent or spouse reference points at a person that is not in the dataset.

    Never raised by the index itself; dangling references are dropped and
    reported through the log. Kept so callers can format the message the
    same way.
    """

    def __init__(self, person_id: str, missing_id: str, relation: str = "parent"):
        super().__init__(f"{person_id!r} references unknown {relation} {missing_id!r}")
        self.person_id = person_id
        self.missing_id = missing_id
        self.relation = relation


class MissingAnchorError(FamilyTreeError):
    def __init__(self, anchor_id: str | None):
        super().__init__(f"Anchor person {anchor_id!r} not found; generations default to 0")
        self.anchor_id = anchor_id


class CyclicAncestryError(FamilyTreeError):
    def __init__(self, path: list[str]):
        super().__init__(f"Cycle detected in ancestry: {' -> '.join(path)}")
        self.path = path


class UnknownNodeError(FamilyTreeError, KeyError):
    def __init__(self, node_id: str):
        super().__init__(f"Unknown node id: {node_id!r}")
        self.node_id = node_id

    def __str__(self) -> str:
        return self.args[0]
