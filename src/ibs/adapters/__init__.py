"""Infrastructure adapters: subprocesses, templates and filesystem lookups."""
