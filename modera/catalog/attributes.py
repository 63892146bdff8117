"""Enumerated model, pose and shot attributes."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Mapping


class Gender(str, Enum):
    FEMALE = "Female"
    MALE = "Male"
    NON_BINARY = "Non-Binary"


class AgeGroup(str, Enum):
    YOUNG_ADULT = "Young Adult (18-25)"
    ADULT = "Adult (26-35)"
    MATURE = "Mature (36-50)"
    SENIOR = "Senior (50+)"


class SkinTone(str, Enum):
    FAIR = "Fair"
    MEDIUM = "Medium"
    OLIVE = "Olive"
    BROWN = "Brown"
    DARK = "Dark"


class FashionStyle(str, Enum):
    INDIAN_CLASSIC = "Indian Classic (Ethnic)"
    MODERN_CHIC = "Modern Chic"
    FESTIVE = "Festive & Wedding"
    WESTERN_CASUAL = "Western Casual"
    PROFESSIONAL = "Corporate Professional"
    STREETWEAR = "Streetwear"


class ModelPose(str, Enum):
    STANDING_CONFIDENT = "Standing Confident"
    WALKING = "Walking Motion"
    HANDS_ON_WAIST = "Hands on Waist"
    LEANING = "Leaning against wall"
    STUDIO_CLOSE_UP = "Studio Portrait (Waist Up)"


class CameraView(str, Enum):
    FRONT = "Front View"
    BACK = "Back View"
    LEFT = "Left Side Profile"
    RIGHT = "Right Side Profile"


@dataclass(slots=True, frozen=True)
class AttributeSet:
    """Snapshot of the subject and shot configuration for one generation."""

    gender: Gender = Gender.FEMALE
    age_group: AgeGroup = AgeGroup.YOUNG_ADULT
    skin_tone: SkinTone = SkinTone.MEDIUM
    style: FashionStyle = FashionStyle.MODERN_CHIC
    pose: ModelPose = ModelPose.STANDING_CONFIDENT
    view: CameraView = CameraView.FRONT

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "AttributeSet":
        """Build a set from stored string values, defaulting missing fields.

        Raises ``ValueError`` when a value is not one of the field's variants.
        """

        kwargs = {}
        for name, enum_cls in ATTRIBUTE_FIELDS.items():
            raw = values.get(name)
            if raw is not None:
                kwargs[name] = enum_cls(raw)
        return cls(**kwargs)

    def as_dict(self) -> dict[str, str]:
        return {item.name: getattr(self, item.name).value for item in fields(self)}


ATTRIBUTE_FIELDS: dict[str, type[Enum]] = {
    "gender": Gender,
    "age_group": AgeGroup,
    "skin_tone": SkinTone,
    "style": FashionStyle,
    "pose": ModelPose,
    "view": CameraView,
}

ATTRIBUTE_LABELS = {
    "gender": "Gender",
    "age_group": "Age group",
    "skin_tone": "Skin tone",
    "style": "Fashion style",
    "pose": "Pose",
    "view": "Camera view",
}

DEFAULT_ATTRIBUTES = AttributeSet()


def attribute_choices(name: str) -> list[str]:
    """Return the allowed string values for an attribute field."""

    return [member.value for member in ATTRIBUTE_FIELDS[name]]


def parse_choice(name: str, raw: str) -> Enum | None:
    """Match free text against an attribute's variants, ignoring case."""

    normalized = raw.strip().lower()
    for member in ATTRIBUTE_FIELDS[name]:
        if member.value.lower() == normalized:
            return member
    return None
