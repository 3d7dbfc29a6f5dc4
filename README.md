# cplayproto

Pure-Python implementations of protocol pieces used on small
microcontroller boards. The package needs only the standard library.

- `cplayproto.firmata` has `Firmata`, a byte-level Firmata parser and
  message writer. `cplayproto.firmata_constants` has the `Command`,
  `SysexCommand` and `PinMode` enums and the protocol version numbers.
- `cplayproto.irdecode` decodes infrared timings. It has `IRDecoder`,
  `RCDecoder`, `RCLevel`, `match` and `abs_match`.
- `cplayproto.irsend` has `IRSender`, which builds infrared frames as
  lists of timed marks and spaces.
- `cplayproto.ircodecs` has senders and decoders for RC5, NECx and DirecTV.
- `cplayproto.irprotocols` has the `Protocol` numbers, `protocol_name`,
  `REPEAT_CODE` and `TOPBIT`.
- `cplayproto.talkie` is an LPC speech synthesiser for TMS5220-style
  bitstreams. It has `synthesize`, `write_wav` and `BitReader`.

## Installation

```
pip install .
```

## Firmata

`Firmata(stream=None, total_pins=128)` writes messages to any object with
`write(bytes)`. `process_input()` reads one byte with `read(1)` and parses
it. You can also feed bytes directly to `parse(byte)`.

```python
import io
from cplayproto.firmata import Firmata
from cplayproto.firmata_constants import Command

stream = io.BytesIO()
firmata = Firmata(stream, total_pins=32)
firmata.attach(Command.ANALOG_MESSAGE, lambda pin, value: print(pin, value))
for byte in (0xE3, 0x10, 0x01):
    firmata.parse(byte)          # prints: 3 144
firmata.send_analog(2, 1023)
```

Callbacks are attached per command:

- Channel messages (analog, digital, report analog/digital, set pin mode,
  set pin value) call `callback(channel_or_pin, value)`.
- `Command.SYSTEM_RESET` calls `callback()`.
- `SysexCommand.STRING_DATA` calls `callback(text)`.
- Any other command sets the generic sysex callback, which is called as
  `callback(command, data)`.

`detach(command)` removes a callback. For the generic sysex callback, pass
`Command.START_SYSEX`.

Other methods:

- `begin(stream)` attaches a stream and sends the protocol version. It also
  sends the firmware version if one has been set with
  `set_firmware_name_and_version(name, major, minor)`.
- Output: `send_digital_port`, `send_sysex(command, data)`,
  `send_string(string)` and `write(byte)`.
- Pin bookkeeping: `get_pin_mode`, `set_pin_mode`, `get_pin_state` and
  `set_pin_state`. A pin set to `PinMode.IGNORE` keeps that mode.

## Infrared

Senders do not drive an output pin. They record what they would send in
`pulses`, a list of `(mark, usec)` pairs. They also keep:

- `extent`, the microseconds sent since the protocol last reset it;
- `carrier_khz`, the carrier frequency.

Decoders take a sequence of timings in microseconds:

- entry 0 is the gap before the frame;
- entries 1 and 2 are the header mark and space;
- the entries after that alternate mark, space, mark and so on.

The trailing space that ends a frame is not part of a decoded frame. At
most 100 timings fit in one frame.

```python
from cplayproto.ircodecs import NECxSender, NECxDecoder

sender = NECxSender()
sender.send(0xE0E040BF)
timings = [10000] + [pulse.usec for pulse in sender.pulses[:-1]]
decoder = NECxDecoder(timings)
if decoder.decode():
    print(hex(decoder.value), decoder.bits)   # 0xe0e040bf 32
```

### Codecs in `ircodecs`

| Protocol | Sender | Decoder |
| --- | --- | --- |
| RC5 | `RC5Sender.send(data, n_bits=13, khz=36)` | `RC5Decoder` |
| NECx | `NECxSender.send(data)` | `NECxDecoder` |
| DirecTV | `DirecTVSender(long_lead_out=True).send(data, first=True, khz=38)` | `DirecTVDecoder` |

- **NECx:** sending `REPEAT_CODE` produces the short repeat sequence.
  Decoding a repeat sequence gives `REPEAT_CODE` with zero bits.
- **DirecTV:** the decoder sets `address` to 1 for a first frame and 0 for
  a repeat.

Every decoder's `decode()` returns True on success. It also fills in
`protocol_num`, `value`, `address` and `bits`.

### Other protocols

`IRDecoder.decode_generic(...)` and `IRSender.send_generic(...)` handle
frames built from fixed marks and variable-length spaces.
`IRDecoder.dump_results(verbose=True)` returns a text report of a decode.

## Speech

```python
from cplayproto.talkie import synthesize, write_wav

samples = synthesize(speech_bytes)   # bytes: 8 kHz, unsigned 8-bit levels
count = write_wav(speech_bytes, "word.wav")
```

`speech_bytes` stands for your encoded speech data. Synthesis stops at the
stop frame. `EOFError` is raised if the data runs out before that.

## What the package does not do

The package works on bytes and timing lists only.

- It does not open serial ports.
- It does not capture infrared signals from a receiver, and does not drive
  an infrared LED.
- It does not play sound.

To use it with hardware, connect it to your own I/O code, for example a
serial stream passed to `Firmata`.

## Tests

```
pip install .[test]
pytest
```