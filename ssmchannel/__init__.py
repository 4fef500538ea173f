"""Binary client messages, handshake payloads and retry strategies for session data channels."""

__version__ = "0.1.0"
__all__ = ["binary", "clientmessage", "protocol", "retry", "sdkretry", "service"]