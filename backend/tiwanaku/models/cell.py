"""Cell data model and its serialized form."""
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Any, Dict, Optional

from .coord import Coord


class Terrain(str, Enum):
    """Terrain (field) type of a cell."""
    FOREST = "forest"
    DESERT = "desert"
    MOUNTAIN = "mountain"
    VALLEY = "valley"


class Crop(IntEnum):
    """Crop marker placed on a cell."""
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5


class BoardSize(str, Enum):
    """Board presets exposed to callers."""
    SMALL = "small"
    STANDARD = "standard"


MAX_CROP = max(Crop)


@dataclass(frozen=True)
class Cell:
    """
    A single board cell.

    During generation any of group_id, terrain and crop may be unset (None).
    A cell is complete once all three are set.
    """
    group_id: Optional[int]
    coordinates: Coord
    terrain: Optional[Terrain] = None
    crop: Optional[Crop] = None
    field_hidden: bool = True
    crop_hidden: bool = True

    @classmethod
    def empty(cls, x: int, y: int) -> "Cell":
        """Create an unset, fully hidden cell."""
        return cls(group_id=None, coordinates=Coord(x, y))

    @property
    def is_complete(self) -> bool:
        return self.group_id is not None and self.terrain is not None and self.crop is not None

    def copy_with(self, **changes: Any) -> "Cell":
        """
        Copy the cell, replacing only the given fields.

        Passing ``None`` for a field explicitly unsets it; fields not passed
        keep their current value. Coordinates cannot be changed.
        """
        if "coordinates" in changes and changes["coordinates"] != self.coordinates:
            raise ValueError("Cell coordinates cannot be changed")
        return replace(self, **changes)

    def serialize(self) -> Dict[str, Any]:
        """Convert to the plain wire format."""
        return {
            "field": self.terrain.value if self.terrain is not None else None,
            "crop": int(self.crop) if self.crop is not None else None,
            "coordinates": self.coordinates.serialize(),
            "groupId": self.group_id,
            "hiddenField": self.field_hidden,
            "hiddenCrop": self.crop_hidden,
        }

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> "Cell":
        """
        Create a cell from its wire format.

        Missing and null values for field, crop and groupId both mean unset.

        Raises:
            ValueError: On unknown terrain, out-of-range crop, a non-integer
                group id, or missing or non-boolean hidden flags.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Cell must be an object, got {type(data).__name__}")
        if "coordinates" not in data:
            raise ValueError("Cell is missing 'coordinates'")

        raw_field = data.get("field")
        terrain = None
        if raw_field is not None:
            try:
                terrain = Terrain(raw_field)
            except ValueError:
                raise ValueError(f"Invalid field: {raw_field!r}") from None

        raw_crop = data.get("crop")
        crop = None
        if raw_crop is not None:
            if not isinstance(raw_crop, int) or isinstance(raw_crop, bool):
                raise ValueError(f"Invalid crop: {raw_crop!r}")
            try:
                crop = Crop(raw_crop)
            except ValueError:
                raise ValueError(f"Crop out of range (1-{MAX_CROP}): {raw_crop!r}") from None

        group_id = data.get("groupId")
        if group_id is not None and (not isinstance(group_id, int) or isinstance(group_id, bool)):
            raise ValueError(f"Invalid groupId: {group_id!r}")

        for key in ("hiddenField", "hiddenCrop"):
            if key not in data:
                raise ValueError(f"Cell is missing '{key}'")
        hidden_field = data["hiddenField"]
        hidden_crop = data["hiddenCrop"]
        if not isinstance(hidden_field, bool) or not isinstance(hidden_crop, bool):
            raise ValueError("hiddenField and hiddenCrop must be booleans")

        return cls(
            group_id=group_id,
            coordinates=Coord.deserialize(data["coordinates"]),
            terrain=terrain,
            crop=crop,
            field_hidden=hidden_field,
            crop_hidden=hidden_crop,
        )
