"""User-facing interfaces for note."""
