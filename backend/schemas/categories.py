"""
schemas/categories.py
──────────────────────
Display labels and colour tokens for the closed enumerations.

Each mapping is checked against its enum when this module is imported, so
adding a new category without a label or colour fails at startup rather
than rendering a blank badge.
"""

from enum import Enum
from typing import Dict, Mapping, Type

from schemas.entities import BusinessCategory, Gender, ResourceCategory, ResourceType


def _exhaustive(enum_cls: Type[Enum], mapping: Mapping[Enum, str], concern: str) -> Dict[Enum, str]:
    missing = [m.value for m in enum_cls if m not in mapping]
    extra = [k for k in mapping if not isinstance(k, enum_cls)]
    if missing or extra:
        raise TypeError(
            f"{concern} mapping for {enum_cls.__name__} is not exhaustive "
            f"(missing={missing}, unexpected={extra})"
        )
    return dict(mapping)


BUSINESS_CATEGORY_LABELS = _exhaustive(BusinessCategory, {
    BusinessCategory.agriculture: "🌾 Agriculture",
    BusinessCategory.food: "🍱 Food",
    BusinessCategory.environment: "🌿 Environment",
    BusinessCategory.sustainability: "♻️ Sustainability",
    BusinessCategory.other: "💡 Other",
}, "label")

# Compact labels used on dashboard progress cards.
BUSINESS_CATEGORY_SHORT_LABELS = _exhaustive(BusinessCategory, {
    BusinessCategory.agriculture: "🌾 Agri",
    BusinessCategory.food: "🍱 Food",
    BusinessCategory.environment: "🌿 Env",
    BusinessCategory.sustainability: "♻️ Sustain",
    BusinessCategory.other: "💡 Other",
}, "short label")

BUSINESS_CATEGORY_COLORS = _exhaustive(BusinessCategory, {
    BusinessCategory.agriculture: "saffron",
    BusinessCategory.food: "amber",
    BusinessCategory.environment: "forest",
    BusinessCategory.sustainability: "teal",
    BusinessCategory.other: "muted",
}, "colour")

RESOURCE_CATEGORY_LABELS = _exhaustive(ResourceCategory, {
    ResourceCategory.agriculture: "🌾 Agriculture",
    ResourceCategory.food: "🍱 Food",
    ResourceCategory.environment: "🌿 Environment",
    ResourceCategory.sustainability: "♻️ Sustainability",
    ResourceCategory.general: "📖 General",
}, "label")

RESOURCE_TYPE_LABELS = _exhaustive(ResourceType, {
    ResourceType.video: "🎬 Video",
    ResourceType.tool: "🔧 Tool",
    ResourceType.guide: "📋 Guide",
    ResourceType.course: "🎓 Course",
}, "label")

RESOURCE_TYPE_COLORS = _exhaustive(ResourceType, {
    ResourceType.video: "red",
    ResourceType.tool: "amber",
    ResourceType.guide: "forest",
    ResourceType.course: "saffron",
}, "colour")

GENDER_LABELS = _exhaustive(Gender, {
    Gender.male: "Male",
    Gender.female: "Female",
    Gender.other: "Other",
}, "label")


# ── Lookup helpers ────────────────────────────────────────────────────────────


def category_label(category: BusinessCategory, short: bool = False) -> str:
    """Human-readable label for a business category."""
    table = BUSINESS_CATEGORY_SHORT_LABELS if short else BUSINESS_CATEGORY_LABELS
    return table[BusinessCategory(category)]


def category_color(category: BusinessCategory) -> str:
    """Colour token for a business category badge."""
    return BUSINESS_CATEGORY_COLORS[BusinessCategory(category)]


def resource_category_label(category: ResourceCategory) -> str:
    return RESOURCE_CATEGORY_LABELS[ResourceCategory(category)]


def resource_type_label(resource_type: ResourceType) -> str:
    return RESOURCE_TYPE_LABELS[ResourceType(resource_type)]


def resource_type_color(resource_type: ResourceType) -> str:
    return RESOURCE_TYPE_COLORS[ResourceType(resource_type)]


def gender_label(gender: Gender) -> str:
    return GENDER_LABELS[Gender(gender)]
