"""Message bytes, sysex commands and pin modes of the Firmata protocol."""

from enum import IntEnum

PROTOCOL_MAJOR_VERSION = 2
PROTOCOL_MINOR_VERSION = 5
PROTOCOL_BUGFIX_VERSION = 1

FIRMWARE_MAJOR_VERSION = 2
FIRMWARE_MINOR_VERSION = 5
FIRMWARE_BUGFIX_VERSION = 3

MAX_DATA_BYTES = 64
TOTAL_PIN_MODES = 13


class Command(IntEnum):
    """Message command bytes (0x80-0xFF)."""

    DIGITAL_MESSAGE = 0x90
    ANALOG_MESSAGE = 0xE0
    REPORT_ANALOG = 0xC0
    REPORT_DIGITAL = 0xD0
    SET_PIN_MODE = 0xF4
    SET_DIGITAL_PIN_VALUE = 0xF5
    REPORT_VERSION = 0xF9
    SYSTEM_RESET = 0xFF
    START_SYSEX = 0xF0
    END_SYSEX = 0xF7


class SysexCommand(IntEnum):
    """Extended commands carried inside a sysex message (0x00-0x7F)."""

    SERIAL_MESSAGE = 0x60
    ENCODER_DATA = 0x61
    SERVO_CONFIG = 0x70
    STRING_DATA = 0x71
    STEPPER_DATA = 0x72
    ONEWIRE_DATA = 0x73
    SHIFT_DATA = 0x75
    I2C_REQUEST = 0x76
    I2C_REPLY = 0x77
    I2C_CONFIG = 0x78
    EXTENDED_ANALOG = 0x6F
    PIN_STATE_QUERY = 0x6D
    PIN_STATE_RESPONSE = 0x6E
    CAPABILITY_QUERY = 0x6B
    CAPABILITY_RESPONSE = 0x6C
    ANALOG_MAPPING_QUERY = 0x69
    ANALOG_MAPPING_RESPONSE = 0x6A
    REPORT_FIRMWARE = 0x79
    SAMPLING_INTERVAL = 0x7A
    SCHEDULER_DATA = 0x7B
    SYSEX_NON_REALTIME = 0x7E
    SYSEX_REALTIME = 0x7F
    # Older names kept as aliases.
    FIRMATA_STRING = 0x71
    SYSEX_I2C_REQUEST = 0x76
    SYSEX_I2C_REPLY = 0x77
    SYSEX_SAMPLING_INTERVAL = 0x7A


class PinMode(IntEnum):
    """The function a pin is configured for."""

    INPUT = 0x00
    OUTPUT = 0x01
    ANALOG = 0x02
    PWM = 0x03
    SERVO = 0x04
    SHIFT = 0x05
    I2C = 0x06
    ONEWIRE = 0x07
    STEPPER = 0x08
    ENCODER = 0x09
    SERIAL = 0x0A
    PULLUP = 0x0B
    IGNORE = 0x7F