"""
Test suite for fixed-point arithmetic engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
