import pytest

from cplayproto.irsend import IRSender


def test_mark_and_space_are_recorded_and_counted():
    sender = IRSender()
    sender.mark(100)
    sender.space(200)
    assert sender.pulses == [(True, 100), (False, 200)]
    assert sender.extent == 300


def test_durations_are_sixteen_bit():
    sender = IRSender()
    sender.mark(0x10000 + 5)
    assert sender.pulses == [(True, 5)]
    assert sender.extent == 5


def test_enable_ir_out_starts_new_transmission():
    sender = IRSender()
    sender.mark(100)
    sender.enable_ir_out(38)
    assert sender.pulses == []
    assert sender.carrier_khz == 38
    assert sender.did_ir_out is True


def test_enable_ir_out_rejects_zero_frequency():
    with pytest.raises(ValueError):
        IRSender().enable_ir_out(0)


def test_delay_is_silent_and_not_in_extent():
    sender = IRSender()
    sender.mark(50)
    sender.delay(3)
    assert sender.pulses[-1] == (False, 3000)
    assert sender.extent == 50


def test_send_generic_bit_pattern():
    sender = IRSender()
    sender.send_generic(0b101, 3, 900, 450, 10, 20, 30, 40, 38, True)
    assert sender.pulses == [
        (True, 900), (False, 450),
        (True, 10), (False, 30),
        (True, 20), (False, 40),
        (True, 10), (False, 30),
        (True, 10),
        (False, 30),
    ]
    assert sender.carrier_khz == 38


def test_send_generic_skips_missing_header():
    sender = IRSender()
    sender.send_generic(0, 2, 0, 0, 10, 20, 30, 40, 36, False)
    assert sender.pulses[0] == (True, 20)
    assert all(usec != 0 for _, usec in sender.pulses)


def test_send_generic_pads_to_max_extent():
    sender = IRSender()
    sender.send_generic(0xA5, 8, 900, 450, 50, 50, 150, 50, 38, True, 20000)
    assert sum(usec for _, usec in sender.pulses) == 20000
    assert sender.extent == 20000
    assert sender.pulses[-1][0] is False


def test_send_generic_alternates_levels():
    sender = IRSender()
    sender.send_generic(0x1234, 16, 900, 450, 50, 60, 150, 70, 38, True)
    levels = [mark for mark, _ in sender.pulses]
    assert levels == [i % 2 == 0 for i in range(len(levels))]


def test_send_generic_rejects_too_many_bits():
    with pytest.raises(ValueError):
        IRSender().send_generic(0, 33, 1, 1, 1, 1, 1, 1, 38, False)