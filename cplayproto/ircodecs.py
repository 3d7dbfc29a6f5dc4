"""Senders and decoders for the RC5, NECx and DirecTV infrared protocols."""

from .irdecode import IRDecoder, RCDecoder, RCLevel, match
from .irprotocols import REPEAT_CODE, TOPBIT, Protocol
from .irsend import IRSender

RC5_T1 = 889
RC5_FRAME_EXTENT = 114000
RC5_DEFAULT_BITS = 13
RC5_DEFAULT_KHZ = 36

NECX_UNIT = 564
NECX_KHZ = 38

DIRECTV_UNIT = 600
DIRECTV_DEFAULT_KHZ = 38

_UINT32 = 0xFFFFFFFF


class RC5Sender(IRSender):
    """Sends phase-encoded RC5 frames: a one is space then mark, a zero mark then space."""

    def send(self, data, n_bits=RC5_DEFAULT_BITS, khz=RC5_DEFAULT_KHZ):
        """Send ``n_bits`` of ``data``; zero for either argument picks the default."""
        n_bits = int(n_bits) or RC5_DEFAULT_BITS
        khz = int(khz) or RC5_DEFAULT_KHZ
        if not 1 <= n_bits <= 32:
            raise ValueError(f"can send 1 to 32 bits, not {n_bits}")
        self.enable_ir_out(khz)
        data = (int(data) << (32 - n_bits)) & _UINT32
        self.extent = 0
        self.mark(RC5_T1)
        for _ in range(n_bits):
            if data & TOPBIT:
                self.space(RC5_T1)
                self.mark(RC5_T1)
            else:
                self.mark(RC5_T1)
                self.space(RC5_T1)
            data = (data << 1) & _UINT32
        self.space(RC5_FRAME_EXTENT - self.extent)


class RC5Decoder(RCDecoder):
    """Decodes RC5 frames of any bit count."""

    def decode(self):
        """Decode the frame; return True and fill the result on success."""
        self.reset_decoder()
        if self.decode_length < 13:
            return False
        self.offset = 1
        self.data = 0
        self.used = 0
        if self.get_rc_level(RC5_T1) != RCLevel.MARK:
            return False
        self.n_bits = 0
        while self.offset < self.decode_length:
            level_a = self.get_rc_level(RC5_T1)
            level_b = self.get_rc_level(RC5_T1)
            if level_a == RCLevel.SPACE and level_b == RCLevel.MARK:
                self.data = ((self.data << 1) | 1) & _UINT32
            elif level_a == RCLevel.MARK and level_b == RCLevel.SPACE:
                self.data = (self.data << 1) & _UINT32
            else:
                return False
            self.n_bits = (self.n_bits + 1) & 0xFF
        self.bits = self.n_bits
        self.value = self.data
        self.protocol_num = Protocol.RC5
        return True


class NECxSender(IRSender):
    """Sends 32-bit NECx frames and the NECx repeat sequence."""

    def send(self, data):
        """Send ``data``; REPEAT_CODE sends the short repeat sequence."""
        if data == REPEAT_CODE:
            self.enable_ir_out(NECX_KHZ)
            self.mark(NECX_UNIT * 8)
            self.space(NECX_UNIT * 8)
            self.mark(NECX_UNIT)
            self.space(NECX_UNIT)
            self.mark(NECX_UNIT)
            self.space(412)
            self.delay(98)
        else:
            self.send_generic(data, 32, NECX_UNIT * 8, NECX_UNIT * 8,
                              NECX_UNIT, NECX_UNIT, NECX_UNIT * 3, NECX_UNIT,
                              NECX_KHZ, True)


class NECxDecoder(IRDecoder):
    """Decodes NECx frames and repeat sequences."""

    def decode(self):
        """Decode the frame; a repeat sequence gives REPEAT_CODE with zero bits."""
        self.reset_decoder()
        buf = self.timings
        if (
            self.decode_length == 6
            and match(buf[1], NECX_UNIT * 8)
            and match(buf[2], NECX_UNIT * 8)
            and match(buf[3], NECX_UNIT)
            and match(buf[5], NECX_UNIT)
        ):
            self.bits = 0
            self.value = REPEAT_CODE
            self.protocol_num = Protocol.NECX
            return True
        if not self.decode_generic(68, NECX_UNIT * 8, NECX_UNIT * 8,
                                   NECX_UNIT, NECX_UNIT * 3, NECX_UNIT):
            return False
        self.protocol_num = Protocol.NECX
        return True


class DirecTVSender(IRSender):
    """Sends 16-bit DirecTV frames, one bit in every mark and every space."""

    def __init__(self, long_lead_out=True):
        super().__init__()
        self.long_lead_out = long_lead_out

    def send(self, data, first=True, khz=DIRECTV_DEFAULT_KHZ):
        """Send the low 16 bits of ``data``; ``first`` False marks a repeat frame."""
        data = int(data) & _UINT32
        self.enable_ir_out(khz)
        self.mark(6000 if first else 3000)
        self.space(2 * DIRECTV_UNIT)
        for _ in range(8):
            self.mark(2 * DIRECTV_UNIT if data & 0x8000 else DIRECTV_UNIT)
            data = (data << 1) & _UINT32
            self.space(2 * DIRECTV_UNIT if data & 0x8000 else DIRECTV_UNIT)
            data = (data << 1) & _UINT32
        self.mark(DIRECTV_UNIT)
        self.space((50 if self.long_lead_out else 15) * DIRECTV_UNIT)


class DirecTVDecoder(IRDecoder):
    """Decodes DirecTV frames; ``address`` is 1 for a first frame, 0 for a repeat."""

    def _bit(self, width):
        if match(width, 2 * DIRECTV_UNIT):
            return 1
        if match(width, DIRECTV_UNIT):
            return 0
        return None

    def decode(self):
        """Decode the frame; return True and fill the result on success."""
        self.reset_decoder()
        if self.decode_length != 20:
            return False
        buf = self.timings
        if not self.ignore_header:
            if match(buf[1], 3000):
                self.address = 0
            elif match(buf[1], 6000):
                self.address = 1
            else:
                return False
        if not match(buf[2], 2 * DIRECTV_UNIT):
            return False
        data = 0
        self.offset = 3
        while self.offset < 18:
            for _ in range(2):
                bit = self._bit(buf[self.offset])
                if bit is None:
                    return False
                data = ((data << 1) | bit) & _UINT32
                self.offset += 1
        self.bits = 16
        self.value = data
        self.protocol_num = Protocol.DIRECTV
        return True