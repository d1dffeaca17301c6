"""Config settings – ApiLoggingSettings."""
from __future__ import annotations

import dataclasses
import enum
import logging
from typing import ClassVar

from extcall.config.settings.base import Settings
from extcall.config.validation import InvalidSettingValueError
from extcall.kernel.types import ApiType


class LogLevel(str, enum.Enum):
    """Level used for routine outbound-call records."""

    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"

    def to_logging(self) -> int:
        return _LEVELS[self]


_LEVELS: dict[LogLevel, int] = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


@dataclasses.dataclass
class ApiLoggingSettings(Settings):
    """Toggles for outbound API call logging (env prefix ``API_LOGGING``)."""

    _prefix: ClassVar[str] = "API_LOGGING"

    enabled: bool = True
    level: LogLevel = LogLevel.INFO
    include_payload: bool = True
    include_headers: bool = True
    max_payload_length: int = 1000
    include_timing: bool = True
    include_quota_info: bool = True
    sanitize_sensitive_data: bool = True

    detailed_machine_translation: bool = True
    detailed_authentication: bool = True
    detailed_webhooks: bool = True
    detailed_content_delivery: bool = False
    detailed_telemetry: bool = False
    detailed_llm_providers: bool = True
    detailed_file_storage: bool = False
    detailed_email_services: bool = False

    def _validate(self) -> None:
        if self.max_payload_length <= 0:
            raise InvalidSettingValueError(
                "max_payload_length", self.max_payload_length, "must be positive"
            )

    @property
    def log_level(self) -> int:
        return self.level.to_logging()

    def detailed_for(self, api_type: ApiType) -> bool:
        """Whether payload-level detail is logged for calls of *api_type*.

        Categories without a dedicated toggle are always detailed.
        """
        toggle = _DETAIL_TOGGLES.get(api_type)
        if toggle is None:
            return True
        return bool(getattr(self, toggle))


_DETAIL_TOGGLES: dict[ApiType, str] = {
    ApiType.MACHINE_TRANSLATION: "detailed_machine_translation",
    ApiType.OAUTH_AUTHENTICATION: "detailed_authentication",
    ApiType.WEBHOOK: "detailed_webhooks",
    ApiType.CONTENT_DELIVERY: "detailed_content_delivery",
    ApiType.TELEMETRY: "detailed_telemetry",
    ApiType.LLM_PROVIDER: "detailed_llm_providers",
    ApiType.FILE_STORAGE: "detailed_file_storage",
    ApiType.EMAIL_SERVICE: "detailed_email_services",
}


__all__ = ["ApiLoggingSettings", "LogLevel"]
