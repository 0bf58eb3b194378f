"""
Test suite for fixdec

Contains:
- tests/unit/ : Unit tests for individual modules
"""
