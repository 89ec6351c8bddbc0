"""
String normalization helpers (casing, whitespace, accents, slugs).
"""
