"""Test suite for glowline.

Test Structure:
- unit/: Unit tests, one directory per package under glowline.core plus cli/
- fixtures/: Sample roofline files
- conftest.py: Shared fixtures (rooflines, configs)
"""
