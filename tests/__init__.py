"""
Test suite for the jammed traffic simulation.
"""
