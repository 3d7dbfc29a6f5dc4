"""Sending of infrared signals as timed marks and spaces.

A sender records what it would put on the output pin: a list of pulses,
each a ``(mark, usec)`` pair where ``mark`` is True while the carrier is
on and False during a space.
"""

from collections import namedtuple

from .irprotocols import TOPBIT

_Pulse = namedtuple("_Pulse", "mark usec")

_UINT16 = 0xFFFF
_UINT32 = 0xFFFFFFFF


class IRSender:
    """Base for protocol senders; records the marks and spaces it emits.

    ``enable_ir_out`` begins a new transmission: it sets the carrier
    frequency and clears the recorded pulses. ``extent`` counts the
    microseconds of marks and spaces sent since the protocol last reset it.
    """

    def __init__(self):
        self.pulses = []
        self.extent = 0
        self.carrier_khz = None
        self.did_ir_out = False

    def enable_ir_out(self, khz):
        """Set the carrier frequency in kHz and start a new transmission."""
        khz = int(khz) & 0xFF
        if khz == 0:
            raise ValueError("carrier frequency must be at least 1 kHz")
        self.carrier_khz = khz
        self.did_ir_out = True
        self.pulses = []

    def _record(self, is_mark, usec):
        if usec:
            self.pulses.append(_Pulse(is_mark, usec))

    def mark(self, usec):
        """Turn the carrier on for ``usec`` microseconds (16-bit)."""
        usec = int(usec) & _UINT16
        self._record(True, usec)
        self.extent = (self.extent + usec) & _UINT32

    def space(self, usec):
        """Turn the carrier off for ``usec`` microseconds (16-bit)."""
        usec = int(usec) & _UINT16
        self._record(False, usec)
        self.extent = (self.extent + usec) & _UINT32

    def delay(self, msec):
        """Stay silent for ``msec`` milliseconds without counting it in the extent."""
        msec = int(msec)
        if msec < 0:
            raise ValueError(f"delay cannot be negative: {msec}")
        self._record(False, msec * 1000)

    def send_generic(self, data, num_bits, head_mark, head_space, mark_one,
                     mark_zero, space_one, space_zero, khz, use_stop,
                     max_extent=0):
        """Send ``num_bits`` of ``data``, most significant bit first.

        A zero ``head_mark`` or ``head_space`` leaves that part of the
        header out. ``use_stop`` adds a closing one-mark. With a non-zero
        ``max_extent`` the frame is padded with a space to that total
        length; otherwise it ends with a ``space_one`` space.
        """
        num_bits = int(num_bits)
        if not 0 <= num_bits <= 32:
            raise ValueError(f"can send 0 to 32 bits, not {num_bits}")
        self.extent = 0
        data = (int(data) << (32 - num_bits)) & _UINT32
        self.enable_ir_out(khz)
        if head_mark:
            self.mark(head_mark)
        if head_space:
            self.space(head_space)
        for _ in range(num_bits):
            if data & TOPBIT:
                self.mark(mark_one)
                self.space(space_one)
            else:
                self.mark(mark_zero)
                self.space(space_zero)
            data = (data << 1) & _UINT32
        if use_stop:
            self.mark(mark_one)
        if max_extent:
            self.space((int(max_extent) - self.extent) & _UINT32)
        else:
            self.space(space_one)