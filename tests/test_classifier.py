"""Tests for tag and relationship classification."""

import pytest

from taggerlink.models.tagger import (
    ClassifiedEntry,
    Orientation,
    RelationshipType,
    TaggerPayload,
    TagType,
)
from taggerlink.services.classifier import (
    FLIPPED_TYPES,
    RELATIONSHIP_SYMBOLS,
    REVERSED_TYPES,
    TAG_GROUPS,
    TAG_SYMBOLS,
    classify,
    classify_relationships,
    classify_tags,
    orientation_for,
    relationship_symbol,
)


def _relationship(
    foreign_key: str = "oracleId",
    related_id: str = "not-oracle-id",
    classifier: str = "BETTER_THAN",
    classifier_inverse: str = "WORSE_THAN",
) -> dict[str, str]:
    return {
        "foreignKey": foreign_key,
        "relatedId": related_id,
        "contentName": "Content Name",
        "relatedName": "Related Name",
        "classifier": classifier,
        "classifierInverse": classifier_inverse,
    }


class TestClassify:
    def test_collects_tags_in_groups(self, lookup_result: TaggerPayload) -> None:
        """Art gets illustration tags, printing tags, then art relationships."""
        tags = classify(lookup_result)

        assert [(e.name, e.type, e.is_tag) for e in tags.art] == [
            ("Tag 1", "ILLUSTRATION_TAG", True),
            ("Tag 3", "PRINTING_TAG", True),
            ("Depicted Relationship", "DEPICTED_IN", False),
        ]
        assert [(e.name, e.type, e.is_tag) for e in tags.oracle] == [
            ("Tag 2", "ORACLE_CARD_TAG", True),
            ("Worse Than Relationship", "WORSE_THAN", False),
        ]

    def test_tag_entries_carry_symbols(self, lookup_result: TaggerPayload) -> None:
        tags = classify(lookup_result)

        assert tags.art[0].symbol == "illustration"
        assert tags.art[1].symbol == "printing"
        assert tags.oracle[0].symbol == "card"
        assert all(e.orientation is Orientation.NONE for e in tags.art if e.is_tag)

    def test_ignores_unknown_tag_types(self, lookup_result: TaggerPayload) -> None:
        """Tags of type NONE are dropped without raising."""
        lookup_result["taggings"].append({"tag": {"name": "bad type", "type": "NONE"}})

        tags = classify(lookup_result)

        assert len(tags.art) == 3
        assert len(tags.oracle) == 2
        assert "bad type" not in [e.name for e in tags.art + tags.oracle]

    def test_skips_unknown_foreign_keys(self, lookup_result: TaggerPayload) -> None:
        lookup_result["relationships"].append(_relationship(foreign_key="unknown"))

        tags = classify(lookup_result)

        assert len(tags.art) == 3
        assert len(tags.oracle) == 2

    def test_foreign_key_matching_other_payload_field_is_dropped(
        self, lookup_result: TaggerPayload
    ) -> None:
        """Only illustrationId and oracleId place relationships."""
        lookup_result["relationships"] = [
            _relationship(foreign_key="taggings", related_id="whatever")
        ]

        tags = classify(lookup_result)

        assert [e for e in tags.art + tags.oracle if not e.is_tag] == []

    def test_missing_sections_produce_empty_buckets(self) -> None:
        tags = classify({"illustrationId": "a", "oracleId": "b"})

        assert tags.art == []
        assert tags.oracle == []
        assert tags.is_empty

    def test_null_sections_produce_empty_buckets(self) -> None:
        tags = classify({"taggings": None, "relationships": None})  # type: ignore[typeddict-item]

        assert tags.is_empty


class TestRelationshipDirection:
    def test_uses_content_name_when_card_is_related_entity(
        self, lookup_result: TaggerPayload
    ) -> None:
        lookup_result["relationships"] = [_relationship(related_id="oracle-id")]

        tags = classify(lookup_result)

        assert tags.oracle[1] == ClassifiedEntry(
            name="Content Name",
            symbol="better-than",
            is_tag=False,
            orientation=Orientation.REVERSED,
            type="BETTER_THAN",
        )

    def test_uses_related_name_otherwise(self, lookup_result: TaggerPayload) -> None:
        lookup_result["relationships"] = [_relationship(related_id="not-oracle-id")]

        tags = classify(lookup_result)

        assert tags.oracle[1] == ClassifiedEntry(
            name="Related Name",
            symbol="better-than",
            is_tag=False,
            orientation=Orientation.NONE,
            type="WORSE_THAN",
        )

    def test_same_edge_reads_differently_from_each_end(self) -> None:
        """One stored edge, two cards: each sees the other side's label."""
        edge = _relationship(
            foreign_key="illustrationId",
            related_id="illustration-a",
            classifier="DEPICTS",
            classifier_inverse="DEPICTED_IN",
        )

        from_a = classify({"illustrationId": "illustration-a", "relationships": [edge]})
        from_b = classify({"illustrationId": "illustration-b", "relationships": [edge]})

        assert from_a.art[0].type == "DEPICTS"
        assert from_a.art[0].orientation is Orientation.REVERSED
        assert from_b.art[0].type == "DEPICTED_IN"
        assert from_b.art[0].orientation is Orientation.NONE

    def test_unknown_classifier_keeps_entry_without_symbol(self) -> None:
        payload: TaggerPayload = {
            "oracleId": "oracle-id",
            "relationships": [
                _relationship(classifier="BRAND_NEW", classifier_inverse="BRAND_NEW_INVERSE")
            ],
        }

        tags = classify(payload)

        assert len(tags.oracle) == 1
        assert tags.oracle[0].name == "Related Name"
        assert tags.oracle[0].symbol == ""
        assert tags.oracle[0].orientation is Orientation.NONE


class TestClassifyGroups:
    def test_classify_tags_returns_every_group(self) -> None:
        groups = classify_tags({})

        assert {group.value for group in groups} == {"art", "oracle", "print"}

    def test_classify_relationships_returns_every_bucket(self) -> None:
        buckets = classify_relationships({})

        assert {bucket.value for bucket in buckets} == {"art", "oracle"}

    def test_tags_keep_input_order(self) -> None:
        payload: TaggerPayload = {
            "taggings": [
                {"tag": {"name": "zebra", "type": "ILLUSTRATION_TAG"}},
                {"tag": {"name": "apple", "type": "ILLUSTRATION_TAG"}},
            ]
        }

        tags = classify(payload)

        assert [e.name for e in tags.art] == ["zebra", "apple"]


class TestMappingTables:
    def test_every_tag_type_is_mapped(self) -> None:
        assert set(TAG_GROUPS) == set(TagType)
        assert set(TAG_SYMBOLS) == set(TagType)

    def test_every_relationship_type_has_a_symbol(self) -> None:
        assert set(RELATIONSHIP_SYMBOLS) == set(RelationshipType)

    def test_orientation_sets_are_disjoint(self) -> None:
        assert FLIPPED_TYPES.isdisjoint(REVERSED_TYPES)

    @pytest.mark.parametrize(
        ("classifier", "expected"),
        [
            ("WITHOUT_BODY", Orientation.FLIPPED),
            ("COMES_BEFORE", Orientation.REVERSED),
            ("DEPICTS", Orientation.REVERSED),
            ("REFERENCES_TO", Orientation.REVERSED),
            ("BETTER_THAN", Orientation.REVERSED),
            ("WITH_BODY", Orientation.NONE),
            ("WORSE_THAN", Orientation.NONE),
            ("SOMETHING_ELSE", Orientation.NONE),
        ],
    )
    def test_orientation_for(self, classifier: str, expected: Orientation) -> None:
        assert orientation_for(classifier) is expected

    def test_inverse_pairs_share_symbols(self) -> None:
        assert relationship_symbol("COMES_AFTER") == relationship_symbol("COMES_BEFORE")
        assert relationship_symbol("WITH_BODY") == relationship_symbol("WITHOUT_BODY")
        assert relationship_symbol("REFERENCED_BY") == "depicts"

    def test_css_classes(self) -> None:
        flipped = ClassifiedEntry("a", "", False, Orientation.FLIPPED)
        reversed_ = ClassifiedEntry("a", "", False, Orientation.REVERSED)
        plain = ClassifiedEntry("a", "", True)

        assert flipped.css_class == "icon-upside-down"
        assert reversed_.css_class == "icon-flipped"
        assert plain.css_class == ""
