"""
Output Writers
==============

Components:
- single_file: index.ts layout with optional separate mocks.ts
- multiple_files: per-model schema and mock files with a barrel
- output: async file writing
"""
