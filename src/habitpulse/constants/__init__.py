"""Static vocabularies."""
