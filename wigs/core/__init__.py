"""Cross-cutting infrastructure: database base classes and logging."""
