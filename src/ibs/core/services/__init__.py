"""Workflows behind the `setup`, `build` and `deploy` commands."""
