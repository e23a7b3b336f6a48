"""
Core Components
===============

Code generation, field semantics, runtime mocks, DMMF parsing and output writers.
"""
