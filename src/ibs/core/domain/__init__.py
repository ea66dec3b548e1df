"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2).
- The domain knows nothing about subprocesses, the CLI or the filesystem layout.
"""
