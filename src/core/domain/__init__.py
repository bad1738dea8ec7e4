"""Domain models and diagnostic codes.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about files, the CLI or rendering.
"""
