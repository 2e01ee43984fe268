# lorachat

A library for an encrypted chat between a fixed roster of participants over
a packet radio link, together with a model of a touchscreen chat screen with
an on-screen keyboard.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Modules

- `lorachat.geometry`: `Point` (with a `z` pressure value), `Translation`
  and `Box`, plus `translate`, `inverse_translate` and `box_intersect`.
  Boxes are half-open: the right and bottom edges are outside the box.
- `lorachat.keyboard`: `Key` and `Keyboard`, and the two layouts `REGULAR`
  (letters) and `NUMERIC` (digits and symbols). Keys are `KEY_WIDTH` (30)
  pixels square per key unit; the space bar is 7 units and backspace (`<`)
  is 2. `check_keypress(p, board)` returns the key under a point given in
  the keyboard's own coordinates, or `None`.
- `lorachat.participants`: the fixed roster `PARTICIPANTS`
  (`"The Peddler"`, `"The Other"`). `get_participant_name(participant_id)`
  and `get_participant_id(name)` convert between wire ids and names; an
  unknown id or name raises `UnknownParticipantError` (a `LookupError`).
- `lorachat.messages`: `ChatMessage`, a frozen author/message pair that
  truncates the author to 25 characters and the message to 52, and
  `ChatHistory`, a bounded store of recent messages (6 by default) that
  drops the oldest when full and iterates newest first.
- `lorachat.radio`:
  - `new_iv()` returns a random 8-byte nonce; `encrypt(msg, key, iv)`
    returns the nonce followed by the ChaCha20 ciphertext, and
    `decrypt(packet, key)` reverses it. Keys must be 32 bytes.
  - `encode_chat(msg, key, iv)` builds a chat packet: nonce, the encrypted
    author id byte and Latin-1 message text, then one zero trailer byte.
    `decode_chat(packet, key)` parses one back into a `ChatMessage`,
    raising `ValueError` for a short packet and `UnknownParticipantError`
    for an unknown author id.
  - `check_transmit_power(transmit_power)` accepts 5 to 23 dBm and raises
    `ValueError` otherwise.
  - `Transport` is the abstract packet radio (`send`, `receive(timeout)`);
    `LoopbackTransport` hands sent packets straight back in order and
    rejects packets over 251 bytes.
  - `ChatLink(transport, key, transmit_power=13)` sends a `ChatMessage`
    with `send_chat` (returning the packet sent) and reads one with
    `receive_chat`, which returns `None` when nothing arrived or the packet
    was malformed or from an unknown participant.
- `lorachat.ui`:
  - `Canvas` is the abstract drawing surface; `RecordingCanvas` keeps every
    drawing call in its `operations` list.
  - `Calibration` holds raw touch readings at the screen edges;
    `TSC2007_CALIBRATION` and `STMPE_CALIBRATION` are provided.
    `scale(value, in_min, in_max, out_min, out_max)` maps a reading
    linearly, truncating toward zero.
  - `ChatScreen(participant, canvas, calibration, char_width, char_height)`
    lays out the history area, send button, two-line text area and
    keyboard. `setup()` draws the screen, `draw_keyboard()` redraws the
    keys, and `update_chat_history()` redraws the history.
    `touch(raw_x, raw_y, pressure, now_ms)` handles one raw reading: it
    ignores readings with pressure below 10 or at (0, 0), debounces
    touches within 200 ms, types the key pressed, handles backspace,
    switches layouts with `#` and `A`, and when the send button is pressed
    with text entered, records the message in `history` and returns it.

## Example

```python
from lorachat.messages import ChatMessage
from lorachat.radio import ChatLink, LoopbackTransport

key = bytes(32)  # placeholder key; use your own shared 32-byte secret
link = ChatLink(LoopbackTransport(), key, 13)

link.send_chat(ChatMessage("The Peddler", "hello"))
received = link.receive_chat()
print(received.author, received.message)
```

```python
from lorachat.ui import ChatScreen, RecordingCanvas

screen = ChatScreen("The Peddler", RecordingCanvas(320, 480))
screen.setup()
sent = screen.touch(2000, 2000, 50, now_ms=1000)
```

## What it does not do

The package has no driver for a real radio or a real display and touch
controller: `LoopbackTransport` and `RecordingCanvas` are the only concrete
`Transport` and `Canvas`, and connecting to hardware means writing your own
subclasses. There is no command-line program; the package is used as a
library.