"""Test suite for the hub watcher.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - httpx MockTransport for the hub client
   - aiohttp test client for the callback server

3. fakes/: Port implementations for testing
   - In-memory implementations of HubPort, RouteRegistrarPort, etc.
   - Used by core unit tests
"""
