"""
extcall – observable outbound API calls.

Import path convention::

    from extcall.adapters.http import ApiHttpClient, CallDescriptor, build_http_client
    from extcall.observability.external_api import ApiType, ExternalApiLogger
    from extcall.application.masking import sanitize_body, sanitize_headers, sanitize_url
    from extcall.config.settings import ApiLoggingSettings, EnvSettingsLoader
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
