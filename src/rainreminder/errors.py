from __future__ import annotations


class RainReminderError(Exception):
    """Base class for failures that abort an invocation."""


class NetworkError(RainReminderError):
    """A forecast request failed or its body could not be read."""


class ConfigurationError(RainReminderError):
    """Settings or the time-zone database are unusable."""


class EmailTransportError(RainReminderError):
    """SES send failed for a reason we do not recognise."""


class EmailProviderError(RainReminderError):
    def __init__(self, code: str, cause: Exception) -> None:
        self.code = code
        super().__init__(f"{code}: {cause}")
