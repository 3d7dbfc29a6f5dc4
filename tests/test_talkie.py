import wave

import pytest

from cplayproto.talkie import (
    IDLE_LEVEL,
    SAMPLE_RATE,
    TICKS_PER_FRAME,
    BitReader,
    synthesize,
    write_wav,
)


def _pack(fields):
    """Pack (value, width) fields MSB-first into bytes read LSB-first per byte."""
    bits = []
    for value, width in fields:
        bits.extend((value >> (width - 1 - i)) & 1 for i in range(width))
    while len(bits) % 8:
        bits.append(0)
    out = bytearray()
    for start in range(0, len(bits), 8):
        chunk = bits[start:start + 8]
        out.append(sum(bit << i for i, bit in enumerate(chunk)))
    return bytes(out)


STOP = (0xF, 4)
REST = (0x0, 4)
VOICED_FRAME = [
    (5, 4), (0, 1), (1, 6),
    (10, 5), (20, 5),
    (3, 4), (9, 4), (5, 4), (6, 4), (7, 4),
    (2, 3), (4, 3), (6, 3),
]
UNVOICED_FRAME = [
    (8, 4), (0, 1), (0, 6),
    (12, 5), (7, 5),
    (4, 4), (11, 4),
]


def test_single_bits_are_read_lsb_first():
    data = bytes([0x01, 0xA5, 0x3C])
    reader = BitReader(data)
    got = [reader.read(1) for _ in range(8 * len(data))]
    expected = [(b >> i) & 1 for b in data for i in range(8)]
    assert got == expected


def test_split_reads_match_whole_read():
    data = bytes([0x5A, 0xC3])
    whole = BitReader(data)
    split = BitReader(data)
    for _ in range(2):
        high = split.read(3)
        low = split.read(5)
        assert (high << 5) | low == whole.read(8)


def test_reader_raises_when_exhausted():
    reader = BitReader(b"\x00")
    reader.read(8)
    with pytest.raises(EOFError):
        reader.read(1)


@pytest.mark.parametrize("bits", [0, 9])
def test_reader_rejects_bad_width(bits):
    with pytest.raises(ValueError):
        BitReader(b"\xff").read(bits)


def test_pack_helper_round_trips_through_reader():
    fields = [(5, 4), (1, 1), (33, 6), (17, 5)]
    reader = BitReader(_pack(fields))
    assert [reader.read(w) for _, w in fields] == [v for v, _ in fields]


def test_immediate_stop_gives_idle_level():
    assert synthesize(_pack([STOP])) == bytes([IDLE_LEVEL])


def test_rest_frames_are_silent():
    samples = synthesize(_pack([REST, REST, STOP]))
    assert len(samples) == 2 * TICKS_PER_FRAME + 1
    assert samples[0] == IDLE_LEVEL
    assert set(samples[1:]) == {0x80}


def test_voiced_frame_produces_sound():
    samples = synthesize(_pack(VOICED_FRAME + [STOP]))
    assert len(samples) == TICKS_PER_FRAME + 1
    assert any(s != 0x80 for s in samples[1:])


def test_unvoiced_frame_produces_sound():
    samples = synthesize(_pack(UNVOICED_FRAME + [STOP]))
    assert len(samples) == TICKS_PER_FRAME + 1
    assert any(s != 0x80 for s in samples[1:])


def test_repeat_frame_reuses_coefficients():
    repeat = [(5, 4), (1, 1), (1, 6)]
    samples = synthesize(_pack(VOICED_FRAME + repeat + [STOP]))
    assert len(samples) == 2 * TICKS_PER_FRAME + 1


def test_voiced_then_unvoiced_frames_length():
    samples = synthesize(_pack(VOICED_FRAME + UNVOICED_FRAME + [STOP]))
    assert len(samples) == 2 * TICKS_PER_FRAME + 1
    assert samples[0] == IDLE_LEVEL


def test_missing_stop_frame_raises():
    with pytest.raises(EOFError):
        synthesize(_pack([REST]))


def test_write_wav(tmp_path):
    data = _pack(VOICED_FRAME + [STOP])
    path = tmp_path / "speech.wav"
    count = write_wav(data, path)
    expected = synthesize(data)
    assert count == len(expected)
    with wave.open(str(path), "rb") as wav:
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 1
        assert wav.getframerate() == SAMPLE_RATE
        assert wav.readframes(wav.getnframes()) == expected