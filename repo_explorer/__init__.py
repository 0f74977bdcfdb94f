"""Search GitHub repositories with structured filters."""
