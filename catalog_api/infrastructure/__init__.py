"""Infrastructure: configuration, database, logging and file storage."""
