"""Infrastructure : persistance SQLite via SQLModel."""
