import pytest

from cplayproto.ircodecs import (
    RC5_T1,
    DirecTVDecoder,
    DirecTVSender,
    NECxDecoder,
    NECxSender,
    RC5Decoder,
    RC5Sender,
)
from cplayproto.irprotocols import REPEAT_CODE, Protocol


def _frame(pulses, gap=10000):
    merged = []
    for is_mark, usec in pulses:
        if merged and merged[-1][0] == is_mark:
            merged[-1][1] += usec
        else:
            merged.append([is_mark, usec])
    if merged and not merged[-1][0]:
        merged.pop()
    return [gap] + [usec for _, usec in merged]


@pytest.mark.parametrize("data", [0x0000, 0x1FFF, 0x1ABC, 0x0555, 0x1001])
def test_rc5_round_trip(data):
    sender = RC5Sender()
    sender.send(data)
    decoder = RC5Decoder(_frame(sender.pulses))
    assert decoder.decode() is True
    assert decoder.value == data
    assert decoder.bits == 13
    assert decoder.protocol_num == Protocol.RC5


def test_rc5_defaults_and_fourteen_bits():
    sender = RC5Sender()
    sender.send(0x2ABC, 14, 57)
    assert sender.carrier_khz == 57
    decoder = RC5Decoder(_frame(sender.pulses))
    assert decoder.decode() is True
    assert decoder.value == 0x2ABC
    assert decoder.bits == 14
    sender.send(1, 0, 0)
    assert sender.carrier_khz == 36
    assert sender.pulses[0] == (True, RC5_T1)


def test_rc5_rejects_short_frame():
    decoder = RC5Decoder([10000, RC5_T1, RC5_T1, RC5_T1])
    assert decoder.decode() is False
    assert decoder.protocol_num == Protocol.UNKNOWN


def test_rc5_rejects_bad_timing():
    sender = RC5Sender()
    sender.send(0x1ABC)
    frame = _frame(sender.pulses)
    frame[4] = 5000
    assert RC5Decoder(frame).decode() is False


@pytest.mark.parametrize("data", [0x00000000, 0x12345678, 0xFFFF00FF, 0x80000001])
def test_necx_round_trip(data):
    sender = NECxSender()
    sender.send(data)
    frame = _frame(sender.pulses)
    assert len(frame) == 68
    decoder = NECxDecoder(frame)
    assert decoder.decode() is True
    assert decoder.value == data
    assert decoder.bits == 32
    assert decoder.protocol_num == Protocol.NECX


def test_necx_header_timing():
    sender = NECxSender()
    sender.send(0x1234)
    assert sender.pulses[:2] == [(True, 564 * 8), (False, 564 * 8)]
    assert sender.carrier_khz == 38


def test_necx_repeat_round_trip():
    sender = NECxSender()
    sender.send(REPEAT_CODE)
    frame = _frame(sender.pulses)
    assert len(frame) == 6
    decoder = NECxDecoder(frame)
    assert decoder.decode() is True
    assert decoder.value == REPEAT_CODE
    assert decoder.bits == 0
    assert decoder.protocol_num == Protocol.NECX


def test_necx_rejects_wrong_length():
    sender = NECxSender()
    sender.send(0x12345678)
    frame = _frame(sender.pulses)[:-2]
    decoder = NECxDecoder(frame)
    assert decoder.decode() is False
    assert decoder.protocol_num == Protocol.UNKNOWN


@pytest.mark.parametrize("data", [0x0000, 0xFFFF, 0xA55A, 0x1234])
@pytest.mark.parametrize("first", [True, False])
def test_directv_round_trip(data, first):
    sender = DirecTVSender()
    sender.send(data, first)
    frame = _frame(sender.pulses)
    assert len(frame) == 20
    decoder = DirecTVDecoder(frame)
    assert decoder.decode() is True
    assert decoder.value == data
    assert decoder.bits == 16
    assert decoder.address == int(first)
    assert decoder.protocol_num == Protocol.DIRECTV


def test_directv_lead_out():
    sender = DirecTVSender()
    sender.send(0x1234)
    assert sender.pulses[-1] == (False, 30000)
    short = DirecTVSender(long_lead_out=False)
    short.send(0x1234, True, 40)
    assert short.pulses[-1] == (False, 9000)
    assert short.carrier_khz == 40


def test_directv_ignore_header_leaves_address_zero():
    sender = DirecTVSender()
    sender.send(0xBEEF, True)
    decoder = DirecTVDecoder(_frame(sender.pulses), ignore_header=True)
    assert decoder.decode() is True
    assert decoder.address == 0
    assert decoder.value == 0xBEEF


def test_directv_rejects_wrong_length():
    decoder = DirecTVDecoder([10000, 6000, 1200, 600])
    assert decoder.decode() is False