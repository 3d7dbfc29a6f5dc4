"""Decoding of recorded infrared mark/space timings.

A frame is a sequence of durations in microseconds. Entry 0 is the gap
before the frame, entries 1 and 2 the header mark and space, and the
entries after that alternate mark, space, mark, and so on.
"""

from enum import Enum

from .irprotocols import LAST_PROTOCOL, Protocol, protocol_name

RECV_BUF_LENGTH = 100
PERCENT_TOLERANCE = 25
DEFAULT_ABS_TOLERANCE = 75

_UNSUPPORTED_ABOVE = 89


def _int16(value):
    value = int(value) & 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def match(val, expected):
    """Return True if ``val`` lies within the percent tolerance of ``expected``.

    Both arguments are taken as signed 16-bit values.
    """
    val = _int16(val)
    expected = _int16(expected)
    low = int(expected * (1.0 - PERCENT_TOLERANCE / 100.0)) & 0xFFFF
    high = int(expected * (1.0 + PERCENT_TOLERANCE / 100.0)) & 0xFFFF
    return low <= val <= high


def abs_match(val, expected, tolerance):
    """Return True if ``val`` lies within ``tolerance`` of ``expected``."""
    val = _int16(val)
    expected = _int16(expected)
    tolerance = _int16(tolerance)
    return expected - tolerance <= val <= expected + tolerance


class RCLevel(Enum):
    """Signal level returned while walking phase-encoded frames."""

    MARK = 0
    SPACE = 1
    ERROR = 2


class IRDecoder:
    """Holds one recorded frame and the result of decoding it."""

    def __init__(self, timings=(), ignore_header=False):
        self.ignore_header = ignore_header
        self.did_auto_resume = False
        self.offset = 0
        self.timings = timings
        self.reset_decoder()

    @property
    def timings(self):
        """The recorded durations of the frame, gap first."""
        return self._timings

    @timings.setter
    def timings(self, values):
        values = tuple(int(v) for v in values)
        if len(values) > RECV_BUF_LENGTH:
            raise ValueError(
                f"frame holds {len(values)} timings; at most {RECV_BUF_LENGTH} fit"
            )
        for value in values:
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"timing out of 16-bit range: {value}")
        self._timings = values

    @property
    def decode_length(self):
        """Number of timings in the frame."""
        return len(self._timings)

    def reset_decoder(self):
        """Clear the result of any previous decode."""
        self.protocol_num = Protocol.UNKNOWN
        self.value = 0
        self.address = 0
        self.bits = 0

    def decode_generic(self, expected_length, head_mark, head_space,
                       mark_data, space_one, space_zero):
        """Decode a frame of fixed marks and variable-length spaces.

        A zero ``expected_length``, ``head_mark`` or ``head_space`` skips
        that check; ``ignore_header`` also skips the header mark check.
        Up to 48 bits are decoded: the low 32 go to ``value`` and the
        next 16 to ``address``. Returns True on success.
        """
        self.reset_decoder()
        buf = self._timings
        data = 0
        last = self.decode_length - 1
        if expected_length and self.decode_length != expected_length:
            return False
        if not self.ignore_header and head_mark and not match(buf[1], head_mark):
            return False
        if head_space and not match(buf[2], head_space):
            return False
        self.offset = 3
        while self.offset < last:
            if not match(buf[self.offset], mark_data):
                return False
            self.offset += 1
            if match(buf[self.offset], space_one):
                data = ((data << 1) | 1) & 0xFFFFFFFFFFFFFFFF
            elif match(buf[self.offset], space_zero):
                data = (data << 1) & 0xFFFFFFFFFFFFFFFF
            else:
                return False
            self.offset += 1
        self.bits = ((self.offset - 1) // 2 - 1) & 0xFF
        self.value = data & 0xFFFFFFFF
        self.address = (data >> 32) & 0xFFFF
        return True

    def dump_results(self, verbose=True):
        """Return a text report of the decode result and, if verbose, the timings."""
        lines = []
        line = ""
        num = int(self.protocol_num)
        if num > _UNSUPPORTED_ABOVE or num <= LAST_PROTOCOL:
            line += (
                f"Decoded {protocol_name(num)}({num}): "
                f"Value:{self.value:X} Adrs:{self.address:X}"
            )
        line += f" ({self.bits} bits) "
        if self.did_auto_resume:
            line += "Auto Resumed"
        lines.append(line)
        if not verbose:
            return "\n".join(lines) + "\n"

        buf = self._timings
        if len(buf) < 3:
            raise ValueError("a verbose dump needs at least the gap and header timings")
        lines.append(f"Raw samples({len(buf)}): Gap:{buf[0]}")
        lines.append(f"  Head: m{buf[1]}  s{buf[2]}")
        low_space = low_mark = 32767
        high_space = high_mark = 0
        extent = buf[1] + buf[2]
        line = ""
        for i, interval in enumerate(buf[3:], start=3):
            extent += interval
            if i % 2:
                low_mark = min(low_mark, interval)
                high_mark = max(high_mark, interval)
                line += f"{i // 2 - 1}:m"
            else:
                if interval > 0:
                    low_space = min(low_space, interval)
                high_space = max(high_space, interval)
                line += " s"
            line += str(interval)
            j = i - 1
            if j % 2 == 1:
                line += "\t"
            if j % 4 == 1:
                line += "\t "
            if j % 8 == 1:
                lines.append(line)
                line = ""
            if j % 32 == 1:
                lines.append(line)
                line = ""
        lines.append(line)
        lines.append(f"Extent={extent & 0xFFFFFFFF}")
        lines.append(f"Mark  min:{low_mark}\t max:{high_mark}")
        lines.append(f"Space min:{low_space}\t max:{high_space}")
        lines.append("")
        return "\n".join(lines) + "\n"


class RCDecoder(IRDecoder):
    """Base for phase-encoded protocols that walk the frame one time unit at a time."""

    def __init__(self, timings=(), ignore_header=False):
        super().__init__(timings, ignore_header)
        self.n_bits = 0
        self.used = 0
        self.data = 0

    def get_rc_level(self, t1):
        """Return the level of the next ``t1``-long time unit of the frame.

        Durations of one, two or three units are accepted; anything else
        gives ``RCLevel.ERROR``. Past the end of the frame the level is SPACE.
        """
        buf = self._timings
        if self.offset >= len(buf):
            return RCLevel.SPACE
        width = buf[self.offset]
        level = RCLevel.MARK if self.offset % 2 else RCLevel.SPACE
        if match(width, t1):
            avail = 1
        elif match(width, 2 * t1):
            avail = 2
        elif match(width, 3 * t1):
            avail = 3
        elif self.ignore_header and self.offset == 1 and width < t1:
            avail = 1
        else:
            return RCLevel.ERROR
        self.used = (self.used + 1) & 0xFF
        if self.used >= avail:
            self.used = 0
            self.offset += 1
        return level