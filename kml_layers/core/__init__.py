"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Namespaces, element names, URL prefixes
- exceptions: Custom exception hierarchy
"""
