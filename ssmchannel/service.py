"""Request sent to open a data channel."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OpenDataChannelInput:
    """Parameters of an open-data-channel request."""

    message_schema_version: str | None = None
    request_id: str | None = None
    token_value: str | None = None
    client_id: str | None = None

    _RULES = (
        ("MessageSchemaVersion", "message_schema_version", 1),
        ("RequestId", "request_id", 16),
        ("TokenValue", "token_value", 1),
        ("ClientId", "client_id", 1),
    )

    def validate(self) -> None:
        """Raise ValueError listing every missing or too short required field."""
        problems = []
        for json_name, attribute, minimum in self._RULES:
            value = getattr(self, attribute)
            if value is None:
                problems.append(f"missing required field, OpenDataChannelInput.{json_name}.")
            elif len(value) < minimum:
                problems.append(
                    f"minimum field size of {minimum}, OpenDataChannelInput.{json_name}."
                )
        if problems:
            raise ValueError("invalid OpenDataChannelInput: " + " ".join(problems))

    def to_dict(self) -> dict:
        return {
            "MessageSchemaVersion": self.message_schema_version,
            "RequestId": self.request_id,
            "TokenValue": self.token_value,
            "ClientId": self.client_id,
        }