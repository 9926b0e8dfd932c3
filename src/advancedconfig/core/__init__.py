"""
Core modules for advancedconfig.

- config: Field registry, backing document, comment-aware writer and the store
- utils: Logging utilities
"""
