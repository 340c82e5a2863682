"""Core engine pieces: configuration, definition store, encryption and scoring."""
