"""Core utilities and shared infrastructure.

- config: HTTP transport settings loaded from the environment
- constants: Named defaults for descriptor fallback and heuristics
- exceptions: Custom exception hierarchy
"""
