"""
TypeScript Code Generation
==========================

Components:
- annotations: @mock directive parsing
- zod_schema: Zod schemas and enum constants
- mock_factory: Faker-backed mock factories
- renderer: Jinja2 file templates
"""
