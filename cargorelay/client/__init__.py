"""HTTP plumbing shared by the webhook forwarder and the relay client.

Security notes:
- Treat server responses as untrusted input.
- TLS verification is never disabled.
"""

from .http import CargoRelayHttpClient, HttpResponse, TransportError, post_json  # noqa: F401
