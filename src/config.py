"""Layout configuration."""

from dataclasses import dataclass, fields
import logging
import re

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    anchor_id: str | None = None

    # Node box and gaps (pixels)
    node_width: float = 180
    node_height: float = 64
    node_sep_x: float = 32
    node_sep_y: float = 90

    left_margin: float = 40
    top_margin: float = 40
    forest_gap: float = 140

    # Generation bands below each forest root that start expanded
    expanded_bands: int = 2

    min_zoom: float = 0.2
    max_zoom: float = 3.0
    reset_translate: tuple[float, float] = (40, 40)
    reset_scale: float = 0.85

    def __post_init__(self):
        for name in ("node_width", "node_height", "node_sep_x", "node_sep_y"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.forest_gap < 0:
            raise ValueError(f"forest_gap must not be negative, got {self.forest_gap}")
        if not 0 < self.min_zoom <= self.max_zoom:
            raise ValueError(f"Invalid zoom extent [{self.min_zoom}, {self.max_zoom}]")

    @property
    def row_height(self) -> float:
        return self.node_height + self.node_sep_y

    @property
    def column_width(self) -> float:
        return self.node_width + self.node_sep_x

    @classmethod
    def from_mapping(cls, mapping: dict) -> "LayoutConfig":
        """
        Build a config from a mapping with camelCase or snake_case keys.

        Unknown keys are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = _snake_case(key)
            if name not in known:
                logger.warning("Ignoring unknown layout option %r", key)
                continue
            if name == "reset_translate":
                value = tuple(value)
            kwargs[name] = value
        return cls(**kwargs)


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()
