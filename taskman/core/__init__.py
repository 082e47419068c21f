"""Core retry policy, classification and execution for taskman."""
