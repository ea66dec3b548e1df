"""Core: domain models, settings and workflows.

Why:
- Workflows only depend on the `CommandRunner` contract, never on
  `subprocess` directly, so tests can record argument lists.
"""
