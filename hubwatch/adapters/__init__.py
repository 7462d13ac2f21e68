"""External adapters for the hub watcher.

This package contains all external dependencies (hub HTTP API, HTTP
server, network interfaces) and provides implementations of the core
port interfaces.

Adapter Organization:

- hub/: Hub REST client (httpx)
- http/: Callback HTTP server (aiohttp)
- network/: Local interface enumeration (psutil)
"""
