"""Network infrastructure manager: RouterOS integration, subscriber sync and WAN monitoring."""

__version__ = "0.1.0"
