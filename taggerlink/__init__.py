"""Tag previews from Scryfall Tagger for card search results."""
