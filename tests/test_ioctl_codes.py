import pytest

from sketchquiz import ioctl_codes
from sketchquiz.ioctl_codes import io, iow


def test_io_known_value():
    assert io("k", 4) == 0x6B04


def test_magic_character_and_code_agree():
    assert io("k", 6) == io(ord("k"), 6)


def test_iow_field_layout():
    code = iow("k", 2, 4)
    assert code >> 30 == ioctl_codes.IOC_WRITE
    assert (code >> 16) & 0x3FFF == 4
    assert (code >> 8) & 0xFF == ord("k")
    assert code & 0xFF == 2


def test_io_has_no_direction_or_size():
    code = io("k", 7)
    assert code >> 16 == 0
    assert code & 0xFF == 7


def test_device_commands_match_their_numbers():
    plain_commands = [
        ioctl_codes.MY_IOCTL_CMD_ONE,
        ioctl_codes.MY_IOCTL_CMD_THREE,
        ioctl_codes.MY_IOCTL_CMD_LED_ON,
        ioctl_codes.MY_IOCTL_CMD_LED_OFF,
        ioctl_codes.MY_IOCTL_CMD_LED_BLINK,
        ioctl_codes.MY_IOCTL_CMD_BTN_CLEAR,
    ]
    built = [io("k", number) for number in (1, 3, 4, 5, 6, 7)]
    assert plain_commands == built
    assert ioctl_codes.MY_IOCTL_CMD_TWO == iow("k", 2, 4)
    assert len(set(built) | {iow("k", 2, 4)}) == 7


def test_led_commands_use_device_magic():
    assert ioctl_codes.MY_IOCTL_CMD_LED_BLINK == io(ioctl_codes.MY_IOCTL_MAGIC, 6)


@pytest.mark.parametrize(
    "call",
    [
        lambda: io("kk", 1),
        lambda: io("k", 256),
        lambda: io(300, 1),
        lambda: iow("k", 1, 1 << 14),
        lambda: io("k", -1),
    ],
)
def test_out_of_range_arguments_rejected(call):
    with pytest.raises(ValueError):
        call()