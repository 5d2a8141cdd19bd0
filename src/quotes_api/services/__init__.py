"""Business services for authors, quotes and pair analytics."""
