"""
tests/test_schemas.py
──────────────────────
Write-model validation and category display mappings.
"""

from enum import Enum

import pytest
from pydantic import ValidationError

from schemas.categories import (
    BUSINESS_CATEGORY_COLORS,
    BUSINESS_CATEGORY_LABELS,
    BUSINESS_CATEGORY_SHORT_LABELS,
    GENDER_LABELS,
    RESOURCE_CATEGORY_LABELS,
    RESOURCE_TYPE_COLORS,
    RESOURCE_TYPE_LABELS,
    _exhaustive,
    category_label,
    resource_type_color,
    resource_type_label,
)
from schemas.entities import (
    BusinessCategory,
    CommunityPostCreate,
    EntrepreneurCreate,
    Gender,
    ResourceCategory,
    ResourceType,
    SuccessStoryCreate,
)


def _registration(**overrides):
    fields = {
        "id": "abc-123",
        "full_name": "Asha Patil",
        "age": 22,
        "gender": "female",
        "contact_info": "asha@example.org",
        "village": "Rampur",
        "panchayat": "Rampur Gram",
        "district": "Nashik",
        "state": "Maharashtra",
        "business_category": "agriculture",
        "skills": ["farming"],
        "bio": "Millet farmer.",
    }
    fields.update(overrides)
    return fields


class TestEntrepreneurCreate:
    @pytest.mark.parametrize("age", [14, 40])
    def test_age_bounds_inclusive(self, age: int) -> None:
        assert EntrepreneurCreate(**_registration(age=age)).age == age

    @pytest.mark.parametrize("age", [13, 41])
    def test_age_out_of_range(self, age: int) -> None:
        with pytest.raises(ValidationError):
            EntrepreneurCreate(**_registration(age=age))

    def test_text_fields_stripped(self) -> None:
        payload = EntrepreneurCreate(**_registration(full_name="  Asha  ", id=" abc-123 "))
        assert payload.full_name == "Asha"
        assert payload.id == "abc-123"

    def test_skills_cleaned_in_order(self) -> None:
        payload = EntrepreneurCreate(**_registration(skills=[" dairy", "farming", "dairy ", ""]))
        assert payload.skills == ["dairy", "farming"]

    def test_to_entity(self) -> None:
        entity = EntrepreneurCreate(**_registration()).to_entity()
        assert entity.gender is Gender.female
        assert entity.business_category is BusinessCategory.agriculture

    def test_entities_are_frozen(self) -> None:
        entity = EntrepreneurCreate(**_registration()).to_entity()
        with pytest.raises(ValidationError):
            entity.age = 30


class TestTimestampDefaults:
    def test_story_date_defaults_to_now(self) -> None:
        story = SuccessStoryCreate(
            title="t", content="c", author_name="a", village="v", category="food"
        ).to_entity()
        assert story.date > 1_600_000_000 * 10**9
        assert story.id is None

    def test_explicit_timestamp_kept(self) -> None:
        post = CommunityPostCreate(
            village="v", panchayat="p", message="m", category="other", timestamp=42
        ).to_entity()
        assert post.timestamp == 42
        assert post.author == "2vxsx-fae"

    def test_negative_timestamp_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CommunityPostCreate(village="v", panchayat="p", message="m", category="other", timestamp=-1)


class TestCategoryMappings:
    @pytest.mark.parametrize(
        "enum_cls, mapping",
        [
            (BusinessCategory, BUSINESS_CATEGORY_LABELS),
            (BusinessCategory, BUSINESS_CATEGORY_SHORT_LABELS),
            (BusinessCategory, BUSINESS_CATEGORY_COLORS),
            (ResourceCategory, RESOURCE_CATEGORY_LABELS),
            (ResourceType, RESOURCE_TYPE_LABELS),
            (ResourceType, RESOURCE_TYPE_COLORS),
            (Gender, GENDER_LABELS),
        ],
    )
    def test_every_member_mapped(self, enum_cls, mapping) -> None:
        assert set(mapping) == set(enum_cls)

    def test_missing_member_fails(self) -> None:
        class Colour(Enum):
            red = "red"
            blue = "blue"

        with pytest.raises(TypeError, match="blue"):
            _exhaustive(Colour, {Colour.red: "Red"}, "label")

    def test_lookups_accept_raw_values(self) -> None:
        assert category_label("food") == "🍱 Food"
        assert category_label(BusinessCategory.environment, short=True) == "🌿 Env"
        assert resource_type_label("guide") == "📋 Guide"
        assert resource_type_color(ResourceType.video) == "red"
