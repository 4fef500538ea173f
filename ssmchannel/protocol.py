"""Data channel message types, payload records and wire header layout."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Any


class MessageType(str, Enum):
    """Message types exchanged over the data channel."""

    INPUT_STREAM = "input_stream_data"
    OUTPUT_STREAM = "output_stream_data"
    ACKNOWLEDGE = "acknowledge"
    CHANNEL_CLOSED = "channel_closed"
    START_PUBLICATION = "start_publication"
    PAUSE_PUBLICATION = "pause_publication"


class PayloadType(IntEnum):
    """Kinds of payload a client message can carry."""

    OUTPUT = 1
    ERROR = 2
    SIZE = 3
    PARAMETER = 4
    HANDSHAKE_REQUEST = 5
    HANDSHAKE_RESPONSE = 6
    HANDSHAKE_COMPLETE = 7
    ENC_CHALLENGE_REQUEST = 8
    ENC_CHALLENGE_RESPONSE = 9
    FLAG = 10


class PayloadTypeFlag(IntEnum):
    """Values carried by a FLAG payload."""

    DISCONNECT_TO_PORT = 1
    TERMINATE_SESSION = 2
    CONNECT_TO_PORT_ERROR = 3


class ActionType(str, Enum):
    """Actions the agent may request during the handshake."""

    KMS_ENCRYPTION = "KMSEncryption"
    SESSION_TYPE = "SessionType"


class ActionStatus(IntEnum):
    """Outcome of a processed handshake action."""

    SUCCESS = 1
    FAILED = 2
    UNSUPPORTED = 3


# Field lengths of the binary client message header.
HL_LENGTH = 4
MESSAGE_TYPE_LENGTH = 32
SCHEMA_VERSION_LENGTH = 4
CREATED_DATE_LENGTH = 8
SEQUENCE_NUMBER_LENGTH = 8
FLAGS_LENGTH = 8
MESSAGE_ID_LENGTH = 16
PAYLOAD_DIGEST_LENGTH = 32
PAYLOAD_TYPE_LENGTH = 4
PAYLOAD_LENGTH_LENGTH = 4

# Field offsets of the binary client message header.
HL_OFFSET = 0
MESSAGE_TYPE_OFFSET = HL_OFFSET + HL_LENGTH
SCHEMA_VERSION_OFFSET = MESSAGE_TYPE_OFFSET + MESSAGE_TYPE_LENGTH
CREATED_DATE_OFFSET = SCHEMA_VERSION_OFFSET + SCHEMA_VERSION_LENGTH
SEQUENCE_NUMBER_OFFSET = CREATED_DATE_OFFSET + CREATED_DATE_LENGTH
FLAGS_OFFSET = SEQUENCE_NUMBER_OFFSET + SEQUENCE_NUMBER_LENGTH
MESSAGE_ID_OFFSET = FLAGS_OFFSET + FLAGS_LENGTH
PAYLOAD_DIGEST_OFFSET = MESSAGE_ID_OFFSET + MESSAGE_ID_LENGTH
PAYLOAD_TYPE_OFFSET = PAYLOAD_DIGEST_OFFSET + PAYLOAD_DIGEST_LENGTH
PAYLOAD_LENGTH_OFFSET = PAYLOAD_TYPE_OFFSET + PAYLOAD_TYPE_LENGTH
PAYLOAD_OFFSET = PAYLOAD_LENGTH_OFFSET + PAYLOAD_LENGTH_LENGTH


def _mapping(data: Any, name: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"cannot decode {name} from {type(data).__name__}")
    return data


def _str(data: Mapping, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key} must be a string, got {type(value).__name__}")
    return value


def _int(data: Mapping, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key} must be an integer, got {type(value).__name__}")
    return value


def _bool(data: Mapping, key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key} must be a boolean, got {type(value).__name__}")
    return value


def _bytes(data: Mapping, key: str) -> bytes:
    value = data.get(key)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise ValueError(f"field {key} must be base64 text, got {type(value).__name__}")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"field {key} is not valid base64: {exc}") from exc


def _list(data: Mapping, key: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"field {key} must be a list, got {type(value).__name__}")
    return value


def _b64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


@dataclass
class AcknowledgeContent:
    """Tells the sender of a message that it has been received."""

    message_type: str = ""
    message_id: str = ""
    sequence_number: int = 0
    is_sequential_message: bool = False

    def to_dict(self) -> dict:
        return {
            "AcknowledgedMessageType": self.message_type,
            "AcknowledgedMessageId": self.message_id,
            "AcknowledgedMessageSequenceNumber": self.sequence_number,
            "IsSequentialMessage": self.is_sequential_message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> AcknowledgeContent:
        data = _mapping(data, cls.__name__)
        return cls(
            message_type=_str(data, "AcknowledgedMessageType"),
            message_id=_str(data, "AcknowledgedMessageId"),
            sequence_number=_int(data, "AcknowledgedMessageSequenceNumber"),
            is_sequential_message=_bool(data, "IsSequentialMessage"),
        )


@dataclass
class ChannelClosed:
    """Tells the client to close the channel."""

    message_id: str = ""
    created_date: str = ""
    destination_id: str = ""
    session_id: str = ""
    message_type: str = ""
    schema_version: int = 0
    output: str = ""

    def to_dict(self) -> dict:
        return {
            "MessageId": self.message_id,
            "CreatedDate": self.created_date,
            "DestinationId": self.destination_id,
            "SessionId": self.session_id,
            "MessageType": self.message_type,
            "SchemaVersion": self.schema_version,
            "Output": self.output,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ChannelClosed:
        data = _mapping(data, cls.__name__)
        return cls(
            message_id=_str(data, "MessageId"),
            created_date=_str(data, "CreatedDate"),
            destination_id=_str(data, "DestinationId"),
            session_id=_str(data, "SessionId"),
            message_type=_str(data, "MessageType"),
            schema_version=_int(data, "SchemaVersion"),
            output=_str(data, "Output"),
        )


@dataclass
class SizeData:
    """Terminal dimensions."""

    cols: int = 0
    rows: int = 0

    def to_dict(self) -> dict:
        return {"cols": self.cols, "rows": self.rows}


@dataclass
class KMSEncryptionRequest:
    """Sent by the agent to initialise KMS encryption."""

    kms_key_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> KMSEncryptionRequest:
        data = _mapping(data, cls.__name__)
        return cls(kms_key_id=_str(data, "KMSKeyId"))


@dataclass
class KMSEncryptionResponse:
    """Returned to the agent to set up KMS encryption."""

    kms_cipher_text_key: bytes = b""
    kms_cipher_text_hash: bytes = b""

    def to_dict(self) -> dict:
        return {
            "KMSCipherTextKey": _b64(self.kms_cipher_text_key),
            "KMSCipherTextHash": _b64(self.kms_cipher_text_hash),
        }


@dataclass
class SessionTypeRequest:
    """Type of session to launch and the properties for it."""

    session_type: str = ""
    properties: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> SessionTypeRequest:
        data = _mapping(data, cls.__name__)
        return cls(session_type=_str(data, "SessionType"), properties=data.get("Properties"))


@dataclass
class RequestedClientAction:
    """An action the agent asks the client to perform."""

    action_type: str = ""
    action_parameters: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> RequestedClientAction:
        data = _mapping(data, cls.__name__)
        return cls(
            action_type=_str(data, "ActionType"),
            action_parameters=data.get("ActionParameters"),
        )


@dataclass
class HandshakeRequestPayload:
    """Handshake sent by the agent to the client."""

    agent_version: str = ""
    requested_client_actions: list[RequestedClientAction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> HandshakeRequestPayload:
        data = _mapping(data, cls.__name__)
        return cls(
            agent_version=_str(data, "AgentVersion"),
            requested_client_actions=[
                RequestedClientAction.from_dict(item)
                for item in _list(data, "RequestedClientActions")
            ],
        )


@dataclass
class ProcessedClientAction:
    """Result of processing one requested action."""

    action_type: str
    action_status: ActionStatus
    action_result: Any = None
    error: str = ""

    def to_dict(self) -> dict:
        return {
            "ActionType": self.action_type,
            "ActionStatus": int(self.action_status),
            "ActionResult": _jsonable(self.action_result),
            "Error": self.error,
        }


@dataclass
class HandshakeResponsePayload:
    """Client's answer to a handshake request."""

    client_version: str = ""
    processed_client_actions: list[ProcessedClientAction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ClientVersion": self.client_version,
            "ProcessedClientActions": [a.to_dict() for a in self.processed_client_actions],
            "Errors": list(self.errors),
        }


@dataclass
class EncryptionChallengeRequest:
    """Encrypted challenge sent by the agent."""

    challenge: bytes = b""

    @classmethod
    def from_dict(cls, data: Any) -> EncryptionChallengeRequest:
        data = _mapping(data, cls.__name__)
        return cls(challenge=_bytes(data, "Challenge"))


@dataclass
class EncryptionChallengeResponse:
    """Challenge re-encrypted by the client."""

    challenge: bytes = b""

    def to_dict(self) -> dict:
        return {"Challenge": _b64(self.challenge)}


@dataclass
class HandshakeCompletePayload:
    """Signals that the handshake is complete."""

    handshake_time_to_complete: timedelta = field(default_factory=timedelta)
    customer_message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> HandshakeCompletePayload:
        data = _mapping(data, cls.__name__)
        nanoseconds = _int(data, "HandshakeTimeToComplete")
        return cls(
            handshake_time_to_complete=timedelta(microseconds=nanoseconds / 1000),
            customer_message=_str(data, "CustomerMessage"),
        )