# ssmchannel

`ssmchannel` handles the messages a client exchanges with a remote agent over a
session data channel. It covers the fixed-layout binary frame, the JSON
payloads carried inside frames, and the retry strategies used when an
operation such as a reconnect has to be tried again. It uses only the Python
standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `ssmchannel.protocol`: the enums `MessageType`, `PayloadType`,
  `PayloadTypeFlag`, `ActionType` and `ActionStatus`; the header field lengths
  and offsets (`MESSAGE_TYPE_OFFSET`, `PAYLOAD_OFFSET`, …); and the payload
  dataclasses `AcknowledgeContent`, `ChannelClosed`, `SizeData`,
  `KMSEncryptionRequest`, `KMSEncryptionResponse`, `SessionTypeRequest`,
  `RequestedClientAction`, `HandshakeRequestPayload`, `ProcessedClientAction`,
  `HandshakeResponsePayload`, `EncryptionChallengeRequest`,
  `EncryptionChallengeResponse` and `HandshakeCompletePayload`. Payloads that
  are received have a `from_dict` class method; payloads that are sent have a
  `to_dict` method. Byte fields travel as base64 text, and
  `HandshakeTimeToComplete` (nanoseconds) is decoded into a `timedelta`.
- `ssmchannel.binary`: big-endian readers and writers for the fixed-width
  fields of a frame: `get_string`, `get_integer`, `get_uinteger`, `get_long`,
  `get_ulong`, `get_uuid`, `get_bytes`, `put_string`, `put_bytes`,
  `put_integer`, `put_uinteger`, `put_long`, `put_ulong`, `put_uuid`, plus
  `bytes_to_integer`, `bytes_to_long`, `integer_to_bytes` and
  `long_to_bytes`. A bad offset, a value that does not fit, or a nil UUID
  raises `WireFormatError` (a `ValueError`). UUIDs are stored as their low
  eight bytes followed by their high eight bytes.
- `ssmchannel.clientmessage`: the `ClientMessage` dataclass with
  `serialize`, `deserialize` (class method) and `validate`, and the payload
  decoders `deserialize_acknowledge_content`, `deserialize_channel_closed`,
  `deserialize_handshake_request` and `deserialize_handshake_complete`.
  `serialize_payload` encodes an object as compact JSON, and
  `serialize_acknowledge` builds a complete acknowledge frame with a fresh
  random message id and the current time. Problems raise `MessageError`
  (a `ValueError`).
- `ssmchannel.retry`: `retry(attempts, sleep, fn)` calls `fn` up to
  `attempts` times, sleeping `sleep` seconds after a failure and doubling the
  sleep each time; it returns `fn`'s result or re-raises the last error.
  `RepeatableExponentialRetryer` retries with an exponential delay
  (`next_sleep_time` returns a `timedelta`) that starts over from the initial
  delay once it would exceed `max_delay_in_milli`; `call` re-raises the error
  once `max_attempts` retries have failed.
- `ssmchannel.sdkretry`: `SsmCliRetryer.retry_rules(operation_name, error,
  retry_count)` returns the delay before a service request is retried:
  100 ms for a `GetMessages` call that failed with a `Client.Timeout` error,
  otherwise `2 ** retry_count` times a random 1000–1499 ms.
- `ssmchannel.service`: `OpenDataChannelInput`, the request that opens a
  data channel. `validate` raises `ValueError` naming every missing or too
  short field; `to_dict` gives its JSON form.

## Example

```python
import uuid

from ssmchannel.clientmessage import ClientMessage
from ssmchannel.protocol import MessageType, PayloadType

message = ClientMessage(
    message_type=MessageType.INPUT_STREAM.value,
    schema_version=1,
    created_date=1503434274948,
    sequence_number=1,
    flags=2,
    message_id=uuid.uuid4(),
    payload_type=PayloadType.OUTPUT,
    payload=b"ls -la\n",
)

frame = message.serialize()
received = ClientMessage.deserialize(frame)
received.validate()
assert received.payload == b"ls -la\n"
```

Retrying an operation with exponential back-off:

```python
from ssmchannel.retry import RepeatableExponentialRetryer


def connect():
    ...  # open the connection; raise on failure


retryer = RepeatableExponentialRetryer(
    callable_func=connect,
    geometric_ratio=2.0,
    initial_delay_in_milli=100,
    max_delay_in_milli=5000,
    max_attempts=5,
)
retryer.call()
```

## What it does not do

`ssmchannel` is a library of message and retry building blocks. It does not
open network connections or websockets, does not start or run interactive
shell or port-forwarding sessions, does not create service API sessions or
send requests, and has no command-line program. The caller supplies the
transport and decides what to do with each decoded message.