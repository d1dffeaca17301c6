"""HTTP adapter – observable outbound API calls over httpx."""
from extcall.adapters.http.client import build_http_client, build_webhook_http_client
from extcall.adapters.http.descriptor import CallDescriptor, NoContent, UncategorizedRequest
from extcall.adapters.http.dispatcher import ApiHttpClient, provider_from_url
from extcall.adapters.http.interceptor import RedactingTransport

__all__ = [
    "ApiHttpClient",
    "CallDescriptor",
    "NoContent",
    "RedactingTransport",
    "UncategorizedRequest",
    "build_http_client",
    "build_webhook_http_client",
    "provider_from_url",
]
