"""Hub watcher: subscribe an HTTP server to hub channels via webhooks."""

__version__ = "0.1.0"
