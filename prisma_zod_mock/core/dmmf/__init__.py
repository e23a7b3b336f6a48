"""
DMMF Input
==========

Parsing and structural validation of generator option documents.
"""
