"""Binary client message: serialization, validation and payload decoding."""

from __future__ import annotations

import base64
import hashlib
import json
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from ssmchannel import binary
from ssmchannel.binary import WireFormatError
from ssmchannel.protocol import (
    CREATED_DATE_OFFSET,
    FLAGS_OFFSET,
    HL_OFFSET,
    MESSAGE_ID_OFFSET,
    MESSAGE_TYPE_LENGTH,
    MESSAGE_TYPE_OFFSET,
    PAYLOAD_DIGEST_LENGTH,
    PAYLOAD_DIGEST_OFFSET,
    PAYLOAD_LENGTH_LENGTH,
    PAYLOAD_LENGTH_OFFSET,
    PAYLOAD_OFFSET,
    PAYLOAD_TYPE_OFFSET,
    SCHEMA_VERSION_OFFSET,
    SEQUENCE_NUMBER_OFFSET,
    AcknowledgeContent,
    ChannelClosed,
    HandshakeCompletePayload,
    HandshakeRequestPayload,
    MessageType,
    PayloadType,
)

_T = TypeVar("_T")

_NO_VALIDATION_TYPES = frozenset(
    {MessageType.START_PUBLICATION.value, MessageType.PAUSE_PUBLICATION.value}
)


class MessageError(ValueError):
    """Raised when a client message is invalid or cannot be encoded or decoded."""


def _read(field_name: str, reader: Callable[..., _T], *args: Any) -> _T:
    try:
        return reader(*args)
    except WireFormatError as exc:
        raise MessageError(f"Could not deserialize field {field_name} with error: {exc}") from exc


def _write(field_name: str, writer: Callable[..., None], *args: Any) -> None:
    try:
        writer(*args)
    except WireFormatError as exc:
        raise MessageError(f"Could not serialize {field_name} with error: {exc}") from exc


def _decode_json(payload: bytes, factory: Callable[[Any], _T]) -> _T:
    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MessageError(f"Could not deserialize rawMessage: {exc}") from exc
    try:
        return factory(document)
    except ValueError as exc:
        raise MessageError(f"Could not deserialize rawMessage: {exc}") from exc


@dataclass
class ClientMessage:
    """A message exchanged with the service over the data channel."""

    message_type: str = ""
    schema_version: int = 0
    created_date: int = 0
    sequence_number: int = 0
    flags: int = 0
    message_id: uuid.UUID | None = None
    payload_digest: bytes = b""
    payload_type: int = 0
    payload_length: int = 0
    payload: bytes = b""
    header_length: int = 0

    def validate(self) -> None:
        """Raise MessageError if the message is not well formed."""
        if self.message_type in _NO_VALIDATION_TYPES:
            return
        if self.header_length == 0:
            raise MessageError("HeaderLength cannot be zero")
        if self.message_type == "":
            raise MessageError("MessageType is missing")
        if self.created_date == 0:
            raise MessageError("CreatedDate is missing")
        if self.payload_length != 0:
            if hashlib.sha256(self.payload).digest() != bytes(self.payload_digest):
                raise MessageError("payload Hash is not valid")

    def serialize(self) -> bytes:
        """Encode the message; also records the payload length on the message."""
        payload = bytes(self.payload)
        payload_length = len(payload)
        header_length = PAYLOAD_LENGTH_OFFSET
        self.payload_length = payload_length

        buffer = bytearray(header_length + PAYLOAD_LENGTH_LENGTH + payload_length)

        _write("HeaderLength", binary.put_uinteger, buffer, HL_OFFSET, header_length)
        _write(
            "MessageType",
            binary.put_string,
            buffer,
            MESSAGE_TYPE_OFFSET,
            MESSAGE_TYPE_OFFSET + MESSAGE_TYPE_LENGTH - 1,
            str(self.message_type),
        )
        _write("SchemaVersion", binary.put_uinteger, buffer, SCHEMA_VERSION_OFFSET,
               self.schema_version)
        _write("CreatedDate", binary.put_ulong, buffer, CREATED_DATE_OFFSET, self.created_date)
        _write("SequenceNumber", binary.put_long, buffer, SEQUENCE_NUMBER_OFFSET,
               self.sequence_number)
        _write("Flags", binary.put_ulong, buffer, FLAGS_OFFSET, self.flags)
        _write("MessageId", binary.put_uuid, buffer, MESSAGE_ID_OFFSET, self.message_id)
        _write(
            "PayloadDigest",
            binary.put_bytes,
            buffer,
            PAYLOAD_DIGEST_OFFSET,
            PAYLOAD_DIGEST_OFFSET + PAYLOAD_DIGEST_LENGTH - 1,
            hashlib.sha256(payload).digest(),
        )
        _write("PayloadType", binary.put_uinteger, buffer, PAYLOAD_TYPE_OFFSET,
               int(self.payload_type))
        _write("PayloadLength", binary.put_uinteger, buffer, PAYLOAD_LENGTH_OFFSET,
               payload_length)
        _write(
            "Payload",
            binary.put_bytes,
            buffer,
            PAYLOAD_OFFSET,
            PAYLOAD_OFFSET + payload_length - 1,
            payload,
        )
        return bytes(buffer)

    @classmethod
    def deserialize(cls, data: bytes | bytearray) -> ClientMessage:
        """Decode a message from its wire form."""
        message = cls(
            message_type=_read("MessageType", binary.get_string, data,
                               MESSAGE_TYPE_OFFSET, MESSAGE_TYPE_LENGTH),
            schema_version=_read("SchemaVersion", binary.get_uinteger, data,
                                 SCHEMA_VERSION_OFFSET),
            created_date=_read("CreatedDate", binary.get_ulong, data, CREATED_DATE_OFFSET),
            sequence_number=_read("SequenceNumber", binary.get_long, data,
                                  SEQUENCE_NUMBER_OFFSET),
            flags=_read("Flags", binary.get_ulong, data, FLAGS_OFFSET),
            message_id=_read("MessageId", binary.get_uuid, data, MESSAGE_ID_OFFSET),
            payload_digest=_read("PayloadDigest", binary.get_bytes, data,
                                 PAYLOAD_DIGEST_OFFSET, PAYLOAD_DIGEST_LENGTH),
            payload_type=_read("PayloadType", binary.get_uinteger, data, PAYLOAD_TYPE_OFFSET),
            payload_length=_read("PayloadLength", binary.get_uinteger, data,
                                 PAYLOAD_LENGTH_OFFSET),
        )
        header_length = _read("HeaderLength", binary.get_uinteger, data, HL_OFFSET)
        payload_start = header_length + PAYLOAD_LENGTH_LENGTH
        if payload_start > len(data):
            raise MessageError(
                f"HeaderLength {header_length} points outside the message of {len(data)} bytes"
            )
        message.header_length = header_length
        message.payload = bytes(data[payload_start:])
        return message

    def deserialize_acknowledge_content(self) -> AcknowledgeContent:
        """Decode the payload of an acknowledge message."""
        if self.message_type != MessageType.ACKNOWLEDGE.value:
            raise MessageError(
                "ClientMessage is not of type AcknowledgeMessage. "
                f"Found message type: {self.message_type}"
            )
        return _decode_json(self.payload, AcknowledgeContent.from_dict)

    def deserialize_channel_closed(self) -> ChannelClosed:
        """Decode the payload of a channel-closed message."""
        if self.message_type != MessageType.CHANNEL_CLOSED.value:
            raise MessageError(
                "ClientMessage is not of type ChannelClosed. "
                f"Found message type: {self.message_type}"
            )
        return _decode_json(self.payload, ChannelClosed.from_dict)

    def deserialize_handshake_request(self) -> HandshakeRequestPayload:
        """Decode a handshake request payload."""
        if self.payload_type != PayloadType.HANDSHAKE_REQUEST:
            raise MessageError(
                "ClientMessage PayloadType is not of type HandshakeRequestPayloadType. "
                f"Found payload type: {self.payload_type}"
            )
        return _decode_json(self.payload, HandshakeRequestPayload.from_dict)

    def deserialize_handshake_complete(self) -> HandshakeCompletePayload:
        """Decode a handshake complete payload."""
        if self.payload_type != PayloadType.HANDSHAKE_COMPLETE:
            raise MessageError(
                "ClientMessage PayloadType is not of type HandshakeCompletePayloadType. "
                f"Found payload type: {self.payload_type}"
            )
        return _decode_json(self.payload, HandshakeCompletePayload.from_dict)


def _json_default(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_payload(obj: Any) -> bytes:
    """Encode a session payload object as compact JSON."""
    try:
        return json.dumps(obj, default=_json_default, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise MessageError(f"Could not serialize message with err: {exc}") from exc


def serialize_acknowledge(content: AcknowledgeContent) -> bytes:
    """Build and encode an acknowledge message carrying the given content."""
    message = ClientMessage(
        message_type=MessageType.ACKNOWLEDGE.value,
        schema_version=1,
        created_date=time.time_ns() // 1_000_000,
        sequence_number=0,
        flags=3,
        message_id=uuid.uuid4(),
        payload=serialize_payload(content),
    )
    return message.serialize()