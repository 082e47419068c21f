"""Infrastructure adapters for taskman."""
