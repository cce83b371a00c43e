"""
Tag and relationship classification.

Turns a tagger payload into the two preview buckets:

    art    = illustration tags + printing tags + illustration relationships
    oracle = oracle tags + oracle relationships

Input order is kept within each group; sorting happens in the presenter.

Relationships are stored once but read from either end. When this card is
the edge's related entity, the edge is shown by its content name and
classifier; otherwise by its related name and inverse classifier. That is
why "Depicts X" on one card reads "Depicted in Y" on the other.

Unknown tag types, unknown classifiers and unknown foreign keys are not
errors. The tagger vocabulary is remote and grows; entries that cannot be
placed are dropped, and entries whose classifier has no icon keep an empty
symbol.
"""

from taggerlink.models.tagger import (
    Bucket,
    ClassifiedEntry,
    ClassifiedTags,
    Orientation,
    RelationshipType,
    Symbol,
    TaggerPayload,
    TagGroup,
    TagType,
)

# Every TagType / RelationshipType member must appear in these tables
TAG_GROUPS: dict[TagType, TagGroup] = {
    TagType.ILLUSTRATION_TAG: TagGroup.ART,
    TagType.ORACLE_CARD_TAG: TagGroup.ORACLE,
    TagType.PRINTING_TAG: TagGroup.PRINT,
}

TAG_SYMBOLS: dict[TagType, Symbol] = {
    TagType.ILLUSTRATION_TAG: Symbol.ILLUSTRATION,
    TagType.ORACLE_CARD_TAG: Symbol.CARD,
    TagType.PRINTING_TAG: Symbol.PRINTING,
}

RELATIONSHIP_SYMBOLS: dict[RelationshipType, Symbol] = {
    RelationshipType.BETTER_THAN: Symbol.BETTER_THAN,
    RelationshipType.COLORSHIFTED: Symbol.COLORSHIFTED,
    RelationshipType.COMES_AFTER: Symbol.SEEN_BEFORE,
    RelationshipType.COMES_BEFORE: Symbol.SEEN_BEFORE,
    RelationshipType.DEPICTED_IN: Symbol.DEPICTS,
    RelationshipType.DEPICTS: Symbol.DEPICTS,
    RelationshipType.MIRRORS: Symbol.MIRRORS,
    RelationshipType.REFERENCED_BY: Symbol.DEPICTS,
    RelationshipType.REFERENCES_TO: Symbol.DEPICTS,
    RelationshipType.RELATED_TO: Symbol.RELATED_TO,
    RelationshipType.SIMILAR_TO: Symbol.SIMILAR_TO,
    RelationshipType.WITHOUT_BODY: Symbol.CREATURE_BODY,
    RelationshipType.WITH_BODY: Symbol.CREATURE_BODY,
    RelationshipType.WORSE_THAN: Symbol.BETTER_THAN,
}

# Disjoint: a classifier is flipped, reversed, or left alone
FLIPPED_TYPES = frozenset({RelationshipType.WITHOUT_BODY})
REVERSED_TYPES = frozenset(
    {
        RelationshipType.COMES_BEFORE,
        RelationshipType.DEPICTS,
        RelationshipType.REFERENCES_TO,
        RelationshipType.BETTER_THAN,
    }
)

FOREIGN_KEY_BUCKETS: dict[str, Bucket] = {
    "illustrationId": Bucket.ART,
    "oracleId": Bucket.ORACLE,
}

# Raised by classify() on payloads missing required fields or of the wrong shape
MALFORMED_PAYLOAD_ERRORS = (KeyError, TypeError, AttributeError)


def tag_group(tag_type: TagType) -> TagGroup:
    return TAG_GROUPS[tag_type]


def tag_symbol(tag_type: TagType) -> Symbol:
    return TAG_SYMBOLS[tag_type]


def relationship_symbol(classifier: str) -> str:
    """Icon for a classifier, or "" if the classifier is unknown."""
    relationship_type = RelationshipType.parse(classifier)
    if relationship_type is None:
        return ""
    return RELATIONSHIP_SYMBOLS[relationship_type].value


def orientation_for(classifier: str) -> Orientation:
    relationship_type = RelationshipType.parse(classifier)
    if relationship_type in FLIPPED_TYPES:
        return Orientation.FLIPPED
    if relationship_type in REVERSED_TYPES:
        return Orientation.REVERSED
    return Orientation.NONE


def bucket_for_foreign_key(foreign_key: str) -> Bucket | None:
    return FOREIGN_KEY_BUCKETS.get(foreign_key)


def classify_tags(payload: TaggerPayload) -> dict[TagGroup, list[ClassifiedEntry]]:
    """
    Group taggings by destination.

    Args:
        payload: Tagger lookup response

    Returns:
        Dict with an entry list for every TagGroup (possibly empty).
    """
    groups: dict[TagGroup, list[ClassifiedEntry]] = {group: [] for group in TagGroup}

    for tagging in payload.get("taggings") or []:
        tag = tagging["tag"]
        tag_type = TagType.parse(tag.get("type"))
        if tag_type is None:
            continue

        groups[tag_group(tag_type)].append(
            ClassifiedEntry(
                name=tag["name"],
                symbol=tag_symbol(tag_type).value,
                is_tag=True,
                orientation=Orientation.NONE,
                type=tag_type.value,
            )
        )

    return groups


def classify_relationships(payload: TaggerPayload) -> dict[Bucket, list[ClassifiedEntry]]:
    """
    Resolve each relationship from this card's side of the edge.

    Args:
        payload: Tagger lookup response

    Returns:
        Dict with an entry list for every Bucket (possibly empty).
    """
    buckets: dict[Bucket, list[ClassifiedEntry]] = {bucket: [] for bucket in Bucket}

    for relationship in payload.get("relationships") or []:
        foreign_key = relationship.get("foreignKey", "")
        bucket = bucket_for_foreign_key(foreign_key)
        if bucket is None:
            continue

        if payload.get(foreign_key) == relationship.get("relatedId"):  # type: ignore[misc]
            name = relationship["contentName"]
            classifier = relationship["classifier"]
        else:
            name = relationship["relatedName"]
            classifier = relationship["classifierInverse"]

        buckets[bucket].append(
            ClassifiedEntry(
                name=name,
                symbol=relationship_symbol(classifier),
                is_tag=False,
                orientation=orientation_for(classifier),
                type=classifier,
            )
        )

    return buckets


def classify(payload: TaggerPayload) -> ClassifiedTags:
    """
    Build the art and oracle buckets for a lookup response.

    Tag groups come first, then relationships.
    """
    tags = classify_tags(payload)
    relationships = classify_relationships(payload)

    return ClassifiedTags(
        art=tags[TagGroup.ART] + tags[TagGroup.PRINT] + relationships[Bucket.ART],
        oracle=tags[TagGroup.ORACLE] + relationships[Bucket.ORACLE],
    )
