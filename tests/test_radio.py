import pytest

from lorachat.messages import ChatMessage
from lorachat.participants import UnknownParticipantError
from lorachat.radio import (
    IV_SIZE,
    ChatLink,
    LoopbackTransport,
    check_transmit_power,
    decode_chat,
    decrypt,
    encode_chat,
    encrypt,
    new_iv,
)

KEY = bytes(range(32))
IV = bytes(range(8))


def test_new_iv_length_and_randomness():
    ivs = {new_iv() for _ in range(20)}
    assert all(len(iv) == IV_SIZE for iv in ivs)
    assert len(ivs) > 1


def test_encrypt_prefixes_iv():
    packet = encrypt(b"hello", KEY, IV)
    assert packet[:IV_SIZE] == IV
    assert len(packet) == IV_SIZE + 5


def test_encrypt_decrypt_round_trip():
    packet = encrypt(b"hello world", KEY, IV)
    assert decrypt(packet, KEY) == b"hello world"


def test_chacha20_known_keystream():
    packet = encrypt(bytes(8), bytes(32), bytes(8))
    assert packet[IV_SIZE:] == bytes.fromhex("76b8e0ada0f13d90")


def test_decrypt_with_wrong_key_differs():
    wrong_key = bytes(32)
    packet = encrypt(b"hello world", KEY, IV)
    garbled = decrypt(packet, wrong_key)
    assert len(garbled) == len(b"hello world")
    assert garbled != b"hello world"
    assert encrypt(garbled, wrong_key, IV) == packet


def test_encrypt_rejects_bad_key_and_iv():
    with pytest.raises(ValueError):
        encrypt(b"x", bytes(16), IV)
    with pytest.raises(ValueError):
        encrypt(b"x", KEY, bytes(4))


def test_decrypt_rejects_short_packet():
    with pytest.raises(ValueError):
        decrypt(bytes(3), KEY)


def test_encode_chat_layout():
    msg = ChatMessage("The Peddler", "hi there")
    packet = encode_chat(msg, KEY, IV)
    assert packet[:IV_SIZE] == IV
    assert len(packet) == IV_SIZE + 1 + len("hi there") + 1
    assert packet[-1] == 0
    assert decrypt(packet[:-1], KEY) == bytes([0]) + b"hi there"


def test_encode_decode_round_trip():
    msg = ChatMessage("The Other", "meet at noon?")
    assert decode_chat(encode_chat(msg, KEY, IV), KEY) == msg


def test_encode_unknown_author_raises():
    with pytest.raises(UnknownParticipantError):
        encode_chat(ChatMessage("Me", "hi"), KEY, IV)


def test_decode_unknown_author_raises():
    packet = encrypt(bytes([7]) + b"hi", KEY, IV) + b"\0"
    with pytest.raises(UnknownParticipantError):
        decode_chat(packet, KEY)


def test_decode_stops_at_nul():
    packet = encrypt(bytes([1]) + b"hi\0junk", KEY, IV) + b"\0"
    assert decode_chat(packet, KEY) == ChatMessage("The Other", "hi")


def test_decode_short_packet_raises():
    with pytest.raises(ValueError):
        decode_chat(bytes(IV_SIZE + 1), KEY)


@pytest.mark.parametrize("power", [5, 13, 23])
def test_transmit_power_accepted(power):
    assert check_transmit_power(power) == power


@pytest.mark.parametrize("power", [4, 24, -1])
def test_transmit_power_rejected(power):
    with pytest.raises(ValueError):
        check_transmit_power(power)


def test_loopback_is_fifo():
    transport = LoopbackTransport()
    transport.send(b"one")
    transport.send(b"two")
    assert transport.receive(0.1) == b"one"
    assert transport.receive(0.1) == b"two"
    assert transport.receive(0.1) is None


def test_loopback_rejects_oversized_packet():
    with pytest.raises(ValueError):
        LoopbackTransport().send(bytes(300))


def test_chat_link_round_trip():
    link = ChatLink(LoopbackTransport(), KEY, 20)
    msg = ChatMessage("The Peddler", "hello")
    packet = link.send_chat(msg)
    assert decode_chat(packet, KEY) == msg
    assert link.receive_chat() == msg
    assert link.receive_chat() is None


def test_chat_link_uses_fresh_iv_per_message():
    link = ChatLink(LoopbackTransport(), KEY)
    msg = ChatMessage("The Other", "same text")
    first = link.send_chat(msg)
    second = link.send_chat(msg)
    assert first[:IV_SIZE] != second[:IV_SIZE]
    assert first[IV_SIZE:] != second[IV_SIZE:]


def test_chat_link_ignores_unknown_author():
    transport = LoopbackTransport()
    link = ChatLink(transport, KEY)
    transport.send(encrypt(bytes([9]) + b"hi", KEY, IV) + b"\0")
    assert link.receive_chat() is None


def test_chat_link_ignores_malformed_packet():
    transport = LoopbackTransport()
    link = ChatLink(transport, KEY)
    transport.send(b"\x01\x02")
    assert link.receive_chat() is None


def test_chat_link_validates_arguments():
    with pytest.raises(ValueError):
        ChatLink(LoopbackTransport(), bytes(16))
    with pytest.raises(ValueError):
        ChatLink(LoopbackTransport(), KEY, 30)