"""Export Microsoft To Do style SQLite task stores into Markdown trees."""

__version__ = "0.1.0"
