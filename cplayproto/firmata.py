"""A Firmata protocol endpoint: parses host messages and writes replies."""

from .firmata_constants import (
    MAX_DATA_BYTES,
    PROTOCOL_MAJOR_VERSION,
    PROTOCOL_MINOR_VERSION,
    Command,
    PinMode,
    SysexCommand,
)

DEFAULT_TOTAL_PINS = 128

_TWO_BYTE_COMMANDS = frozenset(
    {
        Command.ANALOG_MESSAGE,
        Command.DIGITAL_MESSAGE,
        Command.SET_PIN_MODE,
        Command.SET_DIGITAL_PIN_VALUE,
    }
)
_ONE_BYTE_COMMANDS = frozenset({Command.REPORT_ANALOG, Command.REPORT_DIGITAL})
_MESSAGE_COMMANDS = _TWO_BYTE_COMMANDS | _ONE_BYTE_COMMANDS


class Firmata:
    """Firmata message parser and writer bound to a binary stream.

    The stream needs ``write(bytes)`` for output and ``read(1)`` for
    :meth:`process_input`, returning an empty result when no data waits.

    Callbacks are attached per command:

    * channel messages (analog, digital, report, pin mode, pin value):
      ``callback(channel_or_pin, value)``
    * ``Command.SYSTEM_RESET``: ``callback()``
    * ``SysexCommand.STRING_DATA``: ``callback(text)``
    * any other command: the generic sysex callback,
      ``callback(command, data)`` with ``data`` as bytes.
    """

    def __init__(self, stream=None, total_pins=DEFAULT_TOTAL_PINS):
        if total_pins <= 0:
            raise ValueError(f"total_pins must be positive, not {total_pins}")
        self._stream = stream
        self._firmware = None  # (major, minor, name bytes)
        self._pin_config = [PinMode.INPUT] * total_pins
        self._pin_state = [0] * total_pins
        self._message_callbacks = {}
        self._reset_callback = None
        self._string_callback = None
        self._sysex_callback = None
        self.system_reset()

    # -- output helpers ---------------------------------------------------

    def _emit(self, *values):
        if self._stream is None:
            raise RuntimeError("no stream attached; call begin() first")
        self._stream.write(bytes(v & 0xFF for v in values))

    def write(self, byte):
        """Write a single byte to the stream."""
        self._emit(byte)

    def send_value_as_two_7bit_bytes(self, value):
        """Write ``value`` as its low and then its next 7 bits."""
        self._emit(value & 0x7F, (value >> 7) & 0x7F)

    def start_sysex(self):
        """Write the byte that opens a sysex message."""
        self._emit(Command.START_SYSEX)

    def end_sysex(self):
        """Write the byte that closes a sysex message."""
        self._emit(Command.END_SYSEX)

    # -- setup and version reporting --------------------------------------

    def begin(self, stream):
        """Attach a stream and announce protocol and firmware versions on it."""
        self._stream = stream
        self.print_version()
        self.print_firmware_version()

    def print_version(self):
        """Send the protocol version."""
        self._emit(Command.REPORT_VERSION, PROTOCOL_MAJOR_VERSION, PROTOCOL_MINOR_VERSION)

    def print_firmware_version(self):
        """Send the firmware version and name, if one has been set."""
        if self._firmware is None:
            return
        major, minor, name = self._firmware
        self.start_sysex()
        self._emit(SysexCommand.REPORT_FIRMWARE, major, minor)
        for char in name:
            self.send_value_as_two_7bit_bytes(char)
        self.end_sysex()

    def set_firmware_name_and_version(self, name, major, minor):
        """Set the firmware name and version.

        A directory prefix and a ``.cpp`` suffix, as left by a source file
        path, are stripped from ``name``.
        """
        if "/" in name:
            base = name.rsplit("/", 1)[1]
        elif "\\" in name:
            base = name.rsplit("\\", 1)[1]
        else:
            base = name
        extension = base.find(".cpp")
        if extension >= 0:
            base = base[:extension]
        self._firmware = (major & 0xFF, minor & 0xFF, base.encode("latin-1"))

    @property
    def firmware_name(self):
        """The firmware name that was set, or None."""
        return None if self._firmware is None else self._firmware[2].decode("latin-1")

    # -- input --------------------------------------------------------------

    def process_input(self):
        """Read one byte from the stream and parse it; return whether one was read."""
        data = self._stream.read(1)
        if not data:
            return False
        self.parse(data[0])
        return True

    def is_parsing_message(self):
        """Return True while a message is only partly received."""
        return self._wait_for_data > 0 or self._parsing_sysex

    def parse(self, byte):
        """Feed one received byte to the parser."""
        byte &= 0xFF
        if self._parsing_sysex:
            if byte == Command.END_SYSEX:
                self._parsing_sysex = False
                self._process_sysex_message()
            elif len(self._sysex_data) < MAX_DATA_BYTES:
                self._sysex_data.append(byte)
        elif self._wait_for_data > 0 and byte < 0x80:
            self._wait_for_data -= 1
            self._stored[self._wait_for_data] = byte
            if self._wait_for_data == 0 and self._pending_command:
                self._dispatch_message(self._pending_command)
                self._pending_command = 0
        else:
            if byte < 0xF0:
                command = byte & 0xF0
                self._channel = byte & 0x0F
            else:
                command = byte
            if command in _TWO_BYTE_COMMANDS:
                self._wait_for_data = 2
                self._pending_command = command
            elif command in _ONE_BYTE_COMMANDS:
                self._wait_for_data = 1
                self._pending_command = command
            elif command == Command.START_SYSEX:
                self._parsing_sysex = True
                self._sysex_data = bytearray()
            elif command == Command.SYSTEM_RESET:
                self.system_reset()
            elif command == Command.REPORT_VERSION:
                self.print_version()

    def _dispatch_message(self, command):
        callback = self._message_callbacks.get(command)
        if callback is None:
            return
        first, second = self._stored[1], self._stored[0]
        if command in (Command.ANALOG_MESSAGE, Command.DIGITAL_MESSAGE):
            callback(self._channel, (second << 7) + first)
        elif command in (Command.SET_PIN_MODE, Command.SET_DIGITAL_PIN_VALUE):
            callback(first, second)
        else:
            callback(self._channel, second)

    def _process_sysex_message(self):
        if not self._sysex_data:
            return
        command = self._sysex_data[0]
        payload = bytes(self._sysex_data[1:])
        if command == SysexCommand.REPORT_FIRMWARE:
            self.print_firmware_version()
        elif command == SysexCommand.STRING_DATA:
            if self._string_callback is not None:
                pairs = zip(payload[0::2], payload[1::2])
                raw = bytes((lsb + (msb << 7)) & 0xFF for lsb, msb in pairs)
                self._string_callback(raw.split(b"\0", 1)[0].decode("latin-1"))
        elif self._sysex_callback is not None:
            self._sysex_callback(command, payload)

    # -- output messages ----------------------------------------------------

    def send_analog(self, pin, value):
        """Send an analog value (up to 14 bits) for pin 0-15."""
        self._emit(Command.ANALOG_MESSAGE | (pin & 0x0F))
        self.send_value_as_two_7bit_bytes(value)

    def send_digital_port(self, port_number, port_data):
        """Send the 8 pin values of a digital port."""
        self._emit(
            Command.DIGITAL_MESSAGE | (port_number & 0x0F),
            port_data & 0x7F,
            port_data >> 7,
        )

    def send_sysex(self, command, data):
        """Send a sysex message with every data byte split into two 7-bit bytes."""
        self.start_sysex()
        self._emit(command)
        for value in bytes(data):
            self.send_value_as_two_7bit_bytes(value)
        self.end_sysex()

    def send_string(self, string, command=SysexCommand.STRING_DATA):
        """Send a string; nothing is sent unless ``command`` is STRING_DATA."""
        if command != SysexCommand.STRING_DATA:
            return
        encoded = string.encode("latin-1").split(b"\0", 1)[0]
        self.send_sysex(command, encoded)

    # -- callbacks ------------------------------------------------------------

    def attach(self, command, callback):
        """Attach a callback for a command (see the class description)."""
        if command in _MESSAGE_COMMANDS:
            self._message_callbacks[Command(command)] = callback
        elif command == Command.SYSTEM_RESET:
            self._reset_callback = callback
        elif command == SysexCommand.STRING_DATA:
            self._string_callback = callback
        else:
            self._sysex_callback = callback

    def detach(self, command):
        """Remove the callback attached for a command."""
        if command == Command.SYSTEM_RESET:
            self._reset_callback = None
        elif command == SysexCommand.STRING_DATA:
            self._string_callback = None
        elif command == Command.START_SYSEX:
            self._sysex_callback = None
        elif command in _MESSAGE_COMMANDS:
            self._message_callbacks.pop(Command(command), None)

    # -- pin configuration ------------------------------------------------------

    def _check_pin(self, pin):
        if not 0 <= pin < len(self._pin_config):
            raise IndexError(f"pin {pin} out of range 0-{len(self._pin_config) - 1}")

    def get_pin_mode(self, pin):
        """Return the configured mode of a pin."""
        self._check_pin(pin)
        return self._pin_config[pin]

    def set_pin_mode(self, pin, config):
        """Set a pin's mode; pins set to IGNORE keep that mode."""
        self._check_pin(pin)
        if self._pin_config[pin] == PinMode.IGNORE:
            return
        try:
            self._pin_config[pin] = PinMode(config)
        except ValueError:
            self._pin_config[pin] = config & 0xFF

    def get_pin_state(self, pin):
        """Return the recorded state of a pin."""
        self._check_pin(pin)
        return self._pin_state[pin]

    def set_pin_state(self, pin, state):
        """Record the state of a pin."""
        self._check_pin(pin)
        self._pin_state[pin] = state

    # -- reset --------------------------------------------------------------------

    def system_reset(self):
        """Clear the parser state and call the reset callback, if any."""
        self._wait_for_data = 0
        self._pending_command = 0
        self._channel = 0
        self._stored = [0, 0]
        self._parsing_sysex = False
        self._sysex_data = bytearray()
        if self._reset_callback is not None:
            self._reset_callback()