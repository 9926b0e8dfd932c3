"""
Utils module for advancedconfig core functionality.

This module contains the shared logging utilities.
"""
