"""Routing — pattern classification, declarations, and the canonical route tree.

The tree is built once from a declaration and is immutable after
validation.
"""
