"""Hub adapters for webhook management and item retrieval."""
