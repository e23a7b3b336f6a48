"""
Test Suite
==========

Test suite matching the prisma_zod_mock/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: End-to-end generation and CLI tests
"""
