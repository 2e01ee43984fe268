"""Encrypted chat packets and the link that sends them over a radio transport."""

from __future__ import annotations

import logging
import secrets
from abc import ABC, abstractmethod
from collections import deque

from Crypto.Cipher import ChaCha20

from lorachat.messages import ChatMessage
from lorachat.participants import (
    UnknownParticipantError,
    get_participant_id,
    get_participant_name,
)

logger = logging.getLogger(__name__)

KEY_SIZE = 32
IV_SIZE = 8
AUTHOR_SIZE = 1
# One unencrypted trailing byte follows the ciphertext on the wire.
TRAILER_SIZE = 1
MAX_PACKET_SIZE = 251
RECEIVE_TIMEOUT = 0.1
MIN_TRANSMIT_POWER = 5
MAX_TRANSMIT_POWER = 23
DEFAULT_TRANSMIT_POWER = 13
TEXT_ENCODING = "latin-1"


def _check_key(key: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")


def new_iv() -> bytes:
    """Return a fresh random nonce."""
    return secrets.token_bytes(IV_SIZE)


def encrypt(msg: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt ``msg`` with ChaCha20 and return the nonce followed by the ciphertext."""
    _check_key(key)
    if len(iv) != IV_SIZE:
        raise ValueError(f"iv must be {IV_SIZE} bytes, got {len(iv)}")
    cipher = ChaCha20.new(key=key, nonce=iv)
    return iv + cipher.encrypt(msg)


def decrypt(packet: bytes, key: bytes) -> bytes:
    """Decrypt a packet whose first bytes are the nonce."""
    _check_key(key)
    if len(packet) < IV_SIZE:
        raise ValueError("packet is shorter than its nonce")
    cipher = ChaCha20.new(key=key, nonce=packet[:IV_SIZE])
    return cipher.decrypt(packet[IV_SIZE:])


def encode_chat(msg: ChatMessage, key: bytes, iv: bytes) -> bytes:
    """Build the wire packet for ``msg``: nonce, encrypted author id and text, trailer."""
    author_id = get_participant_id(msg.author)
    payload = bytes([author_id]) + msg.message.encode(TEXT_ENCODING)
    return encrypt(payload, key, iv) + bytes(TRAILER_SIZE)


def decode_chat(packet: bytes, key: bytes) -> ChatMessage:
    """Parse a wire packet back into a chat message."""
    if len(packet) < IV_SIZE + AUTHOR_SIZE + TRAILER_SIZE:
        raise ValueError("packet too short to hold a chat message")
    body = decrypt(packet[:-TRAILER_SIZE], key)
    author = get_participant_name(body[0])
    text = body[AUTHOR_SIZE:].split(b"\0", 1)[0]
    return ChatMessage(author, text.decode(TEXT_ENCODING))


def check_transmit_power(transmit_power: int) -> int:
    """Return ``transmit_power`` if it is an allowed dBm value."""
    if not MIN_TRANSMIT_POWER <= transmit_power <= MAX_TRANSMIT_POWER:
        raise ValueError(
            f"transmit power must be {MIN_TRANSMIT_POWER}-{MAX_TRANSMIT_POWER} dBm, "
            f"got {transmit_power}"
        )
    return transmit_power


class Transport(ABC):
    """A packet radio that can send and receive raw packets."""

    @abstractmethod
    def send(self, packet: bytes) -> None:
        """Transmit ``packet`` and wait until it has gone out."""

    @abstractmethod
    def receive(self, timeout: float) -> bytes | None:
        """Return the next packet, or None if none arrives within ``timeout`` seconds."""


class LoopbackTransport(Transport):
    """A transport whose sent packets come straight back, in order."""

    def __init__(self) -> None:
        self._queue: deque[bytes] = deque()

    def send(self, packet: bytes) -> None:
        if len(packet) > MAX_PACKET_SIZE:
            raise ValueError(f"packet of {len(packet)} bytes exceeds {MAX_PACKET_SIZE}")
        self._queue.append(bytes(packet))

    def receive(self, timeout: float) -> bytes | None:
        """Return the oldest queued packet; never waits, whatever ``timeout`` is."""
        return self._queue.popleft() if self._queue else None


class ChatLink:
    """Sends and receives encrypted chat messages over a transport."""

    def __init__(
        self,
        transport: Transport,
        key: bytes,
        transmit_power: int = DEFAULT_TRANSMIT_POWER,
    ) -> None:
        _check_key(key)
        self.transport = transport
        self.key = bytes(key)
        self.transmit_power = check_transmit_power(transmit_power)

    def send_chat(self, msg: ChatMessage) -> bytes:
        """Encrypt and transmit ``msg``; return the packet that was sent."""
        packet = encode_chat(msg, self.key, new_iv())
        self.transport.send(packet)
        logger.debug("sent %s: %r", msg.author, msg.message)
        return packet

    def receive_chat(self) -> ChatMessage | None:
        """Return the next received chat message, or None if there is none to use."""
        packet = self.transport.receive(RECEIVE_TIMEOUT)
        if not packet:
            return None
        try:
            msg = decode_chat(packet, self.key)
        except UnknownParticipantError as exc:
            logger.info("ignoring message: %s", exc)
            return None
        except ValueError as exc:
            logger.info("ignoring malformed packet: %s", exc)
            return None
        logger.debug("> %s: %r", msg.author, msg.message)
        return msg