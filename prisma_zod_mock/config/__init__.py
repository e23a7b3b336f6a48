"""
Configuration Management
=======================

Components:
- settings: Process-level settings and environment configuration
- logging: Structured logging configuration
- generator_config: Generation toggles parsed from the Prisma generator block
"""
