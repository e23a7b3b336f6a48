"""
Field Semantics
===============

Field-name classification and the Faker-backed runtime value selector.
"""
