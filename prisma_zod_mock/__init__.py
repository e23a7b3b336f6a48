"""
Prisma Zod Mock Generator
=========================

Generate Zod validation schemas and Faker-backed mock factories from a
Prisma data model (DMMF).

This package provides:
- TypeScript code generation for Zod schemas and mock factories
- Field-name semantic inference and @mock annotation support
- Depth-bounded relation mocks
- Python-side mock instances backed by Faker
"""

__version__ = "1.0.0"
__author__ = "Prisma Zod Mock Team"
