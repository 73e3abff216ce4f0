"""Infrastructure technique : persistance SQLite du catalogue."""
