"""LPC speech synthesis for TMS5220-style encoded speech data.

Speech data is turned into a stream of unsigned 8-bit samples at
8000 samples per second, the levels a PWM output would be driven with.
"""

import wave

SAMPLE_RATE = 8000
TICKS_PER_FRAME = SAMPLE_RATE // 40
IDLE_LEVEL = 0x7F

_K1 = (
    0x82C0, 0x8380, 0x83C0, 0x8440, 0x84C0, 0x8540, 0x8600, 0x8780,
    0x8880, 0x8980, 0x8AC0, 0x8C00, 0x8D40, 0x8F00, 0x90C0, 0x92C0,
    0x9900, 0xA140, 0xAB80, 0xB840, 0xC740, 0xD8C0, 0xEBC0, 0x0000,
    0x1440, 0x2740, 0x38C0, 0x47C0, 0x5480, 0x5EC0, 0x6700, 0x6D40,
)
_K2 = (
    0xAE00, 0xB480, 0xBB80, 0xC340, 0xCB80, 0xD440, 0xDDC0, 0xE780,
    0xF180, 0xFBC0, 0x0600, 0x1040, 0x1A40, 0x2400, 0x2D40, 0x3600,
    0x3E40, 0x45C0, 0x4CC0, 0x5300, 0x5880, 0x5DC0, 0x6240, 0x6640,
    0x69C0, 0x6CC0, 0x6F80, 0x71C0, 0x73C0, 0x7580, 0x7700, 0x7E80,
)
_K3 = (0x92, 0x9F, 0xAD, 0xBA, 0xC8, 0xD5, 0xE3, 0xF0,
       0xFE, 0x0B, 0x19, 0x26, 0x34, 0x41, 0x4F, 0x5C)
_K4 = (0xAE, 0xBC, 0xCA, 0xD8, 0xE6, 0xF4, 0x01, 0x0F,
       0x1D, 0x2B, 0x39, 0x47, 0x55, 0x63, 0x71, 0x7E)
_K5 = (0xAE, 0xBA, 0xC5, 0xD1, 0xDD, 0xE8, 0xF4, 0xFF,
       0x0B, 0x17, 0x22, 0x2E, 0x39, 0x45, 0x51, 0x5C)
_K6 = (0xC0, 0xCB, 0xD6, 0xE1, 0xEC, 0xF7, 0x03, 0x0E,
       0x19, 0x24, 0x2F, 0x3A, 0x45, 0x50, 0x5B, 0x66)
_K7 = (0xB3, 0xBF, 0xCB, 0xD7, 0xE3, 0xEF, 0xFB, 0x07,
       0x13, 0x1F, 0x2B, 0x37, 0x43, 0x4F, 0x5A, 0x66)
_K8 = (0xC0, 0xD8, 0xF0, 0x07, 0x1F, 0x37, 0x4F, 0x66)
_K9 = (0xC0, 0xD4, 0xE8, 0xFC, 0x10, 0x25, 0x39, 0x4D)
_K10 = (0xCD, 0xDF, 0xF1, 0x04, 0x16, 0x20, 0x3B, 0x4D)
_CHIRP = (
    0x00, 0x2A, 0xD4, 0x32, 0xB2, 0x12, 0x25, 0x14,
    0x02, 0xE1, 0xC5, 0x02, 0x5F, 0x5A, 0x05, 0x0F,
    0x26, 0xFC, 0xA5, 0xA5, 0xD6, 0xDD, 0xDC, 0xFC,
    0x25, 0x2B, 0x22, 0x21, 0x0F, 0xFF, 0xF8, 0xEE,
    0xED, 0xEF, 0xF7, 0xF6, 0xFA, 0x00, 0x03, 0x02, 0x01,
)
_ENERGY = (0x00, 0x02, 0x03, 0x04, 0x05, 0x07, 0x0A, 0x0F,
           0x14, 0x20, 0x29, 0x39, 0x51, 0x72, 0xA1, 0xFF)
_PERIOD = (
    0x00, 0x10, 0x11, 0x12, 0x13, 0x14, 0x15, 0x16,
    0x17, 0x18, 0x19, 0x1A, 0x1B, 0x1C, 0x1D, 0x1E,
    0x1F, 0x20, 0x21, 0x22, 0x23, 0x24, 0x25, 0x26,
    0x27, 0x28, 0x29, 0x2A, 0x2B, 0x2D, 0x2F, 0x31,
    0x33, 0x35, 0x36, 0x39, 0x3B, 0x3D, 0x3F, 0x42,
    0x45, 0x47, 0x49, 0x4D, 0x4F, 0x51, 0x55, 0x57,
    0x5C, 0x5F, 0x63, 0x66, 0x6A, 0x6E, 0x73, 0x77,
    0x7B, 0x80, 0x85, 0x8A, 0x8F, 0x95, 0x9A, 0xA0,
)

_STOP_CODE = 0xF
_REST_CODE = 0x0


def _int8(value):
    value &= 0xFF
    return value - 0x100 if value & 0x80 else value


def _int16(value):
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _reverse_byte(value):
    value = ((value >> 4) | (value << 4)) & 0xFF
    value = ((value & 0xCC) >> 2) | ((value & 0x33) << 2)
    value = ((value & 0xAA) >> 1) | ((value & 0x55) << 1)
    return value


class BitReader:
    """Reads bit fields from speech data, least significant bit of each byte first."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0
        self._buf = 0
        self._buffered = 0

    def read(self, bits):
        """Return the next ``bits`` (1 to 8) bits as an unsigned integer."""
        if not 1 <= bits <= 8:
            raise ValueError(f"can read 1 to 8 bits at a time, not {bits}")
        if bits > self._buffered:
            if self._pos >= len(self._data):
                raise EOFError("speech data exhausted")
            byte = _reverse_byte(self._data[self._pos])
            self._buf = (self._buf | (byte << (8 - self._buffered))) & 0xFFFF
            self._buffered += 8
            self._pos += 1
        value = self._buf >> (16 - bits)
        self._buf = (self._buf << bits) & 0xFFFF
        self._buffered -= bits
        return value


def synthesize(data):
    """Render encoded speech data to unsigned 8-bit samples at SAMPLE_RATE.

    Synthesis ends at a stop frame; data that runs out before one raises EOFError.
    """
    reader = BitReader(data)
    state = [0] * 10
    coeffs = [0] * 10  # k1..k10
    shifts = (15, 15, 7, 7, 7, 7, 7, 7, 7, 7)
    energy = 0
    rand = 1
    period = 0
    period_counter = 0
    next_pwm = IDLE_LEVEL
    tick = TICKS_PER_FRAME
    samples = bytearray()

    while True:
        samples.append(next_pwm)

        tick += 1
        if tick >= TICKS_PER_FRAME:
            code = reader.read(4)
            if code == _STOP_CODE:
                break
            if code == _REST_CODE:
                energy = 0
            else:
                energy = _ENERGY[code]
                repeat = reader.read(1)
                period = _PERIOD[reader.read(6)]
                if not repeat:
                    coeffs[0] = _int16(_K1[reader.read(5)])
                    coeffs[1] = _int16(_K2[reader.read(5)])
                    coeffs[2] = _int8(_K3[reader.read(4)])
                    coeffs[3] = _int8(_K4[reader.read(4)])
                    if period:
                        coeffs[4] = _int8(_K5[reader.read(4)])
                        coeffs[5] = _int8(_K6[reader.read(4)])
                        coeffs[6] = _int8(_K7[reader.read(4)])
                        coeffs[7] = _int8(_K8[reader.read(3)])
                        coeffs[8] = _int8(_K9[reader.read(3)])
                        coeffs[9] = _int8(_K10[reader.read(3)])
            tick = 0

        if period:
            period_counter += 1
            if period_counter >= period:
                period_counter = 0
            if period_counter >= len(_CHIRP):
                u0 = 0
            else:
                u0 = _int16((_CHIRP[period_counter] * energy) >> 8)
        else:
            rand = (rand >> 1) ^ (0xB800 if rand & 1 else 0)
            u0 = _int16(energy if rand & 1 else -energy)

        u0 = _int16(u0 - ((coeffs[9] * state[9] + coeffs[8] * state[8]) >> 7))
        state[9] = _int16(state[8] + ((coeffs[8] * u0) >> 7))
        for i in range(7, -1, -1):
            u0 = _int16(u0 - ((coeffs[i] * state[i]) >> shifts[i]))
            state[i + 1] = _int16(state[i] + ((coeffs[i] * u0) >> shifts[i]))

        u0 = max(-512, min(511, u0))
        state[0] = u0
        next_pwm = ((u0 >> 2) + 0x80) & 0xFF

    return bytes(samples)


def write_wav(data, path):
    """Synthesize speech data into an 8-bit mono WAV file; return the sample count."""
    samples = synthesize(data)
    with wave.open(str(path), "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(1)
        out.setframerate(SAMPLE_RATE)
        out.writeframes(samples)
    return len(samples)