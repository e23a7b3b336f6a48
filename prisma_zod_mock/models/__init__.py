"""
Data Models
===========

Pydantic data models for the DMMF input and internal data structures.

Models:
- schemas: DMMF datamodel, generator options, parse results and generated files
"""
