"""Network adapters for discovering local addresses."""
