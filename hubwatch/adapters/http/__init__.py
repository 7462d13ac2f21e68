"""HTTP server adapters exposing hub callback routes."""
