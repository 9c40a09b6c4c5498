"""I/O adapters (HTTP, file export)."""
