"""
Runtime Mock Data
=================

Python-side mock instances built from the datamodel.
"""
