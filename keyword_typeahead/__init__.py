"""
keyword_typeahead

Inline keyword autocompletion ("from:<user>") for a search box, with a
chip-scoped secondary lookup once a keyword value is committed.
"""

__version__ = "0.1.0"
