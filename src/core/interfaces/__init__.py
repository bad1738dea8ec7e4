"""Core interfaces.

Why:
- Defines the contracts (Protocol) that adapters implement.
- The core depends on abstractions, not on `pathlib` directly.
"""
