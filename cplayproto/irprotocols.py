"""Identifiers and display names of the supported infrared protocols."""

from enum import IntEnum

TOPBIT = 0x80000000
REPEAT_CODE = 0xFFFFFFFF

_HIGHEST_SUPPORTED_NUMBER = 89


class Protocol(IntEnum):
    """Protocol numbers reported by the decoders."""

    UNKNOWN = 0
    NEC = 1
    SONY = 2
    RC5 = 3
    RC6 = 4
    PANASONIC_OLD = 5
    JVC = 6
    NECX = 7
    SAMSUNG36 = 8
    GICABLE = 9
    DIRECTV = 10
    RCMM = 11
    CYKM = 12


LAST_PROTOCOL = max(Protocol)

_NAMES = (
    "Unknown",
    "NEC",
    "Sony",
    "RC5",
    "RC6",
    "Panasonic Old",
    "JVC",
    "NECx",
    "Samsung36",
    "G.I.Cable",
    "DirecTV",
    "rcmm",
    "CYKM",
)


def protocol_name(protocol_num):
    """Return the display name for a protocol number (0-255).

    Numbers above 89 are "Unsup"; numbers between the last known protocol
    and 89 are reported as "Unknown".
    """
    num = int(protocol_num)
    if not 0 <= num <= 0xFF:
        raise ValueError(f"protocol number out of byte range: {protocol_num}")
    if num > _HIGHEST_SUPPORTED_NUMBER:
        return "Unsup"
    if num > LAST_PROTOCOL:
        num = Protocol.UNKNOWN
    return _NAMES[num]