"""Attribute catalog for generated shots."""

from .attributes import (
    ATTRIBUTE_FIELDS,
    ATTRIBUTE_LABELS,
    DEFAULT_ATTRIBUTES,
    AgeGroup,
    AttributeSet,
    CameraView,
    FashionStyle,
    Gender,
    ModelPose,
    SkinTone,
    attribute_choices,
    parse_choice,
)

__all__ = [
    "ATTRIBUTE_FIELDS",
    "ATTRIBUTE_LABELS",
    "DEFAULT_ATTRIBUTES",
    "AgeGroup",
    "AttributeSet",
    "CameraView",
    "FashionStyle",
    "Gender",
    "ModelPose",
    "SkinTone",
    "attribute_choices",
    "parse_choice",
]
