"""Request codes understood by the button/LED control device."""

from __future__ import annotations

import struct

_NR_BITS = 8
_TYPE_BITS = 8
_SIZE_BITS = 14

_NR_SHIFT = 0
_TYPE_SHIFT = _NR_SHIFT + _NR_BITS
_SIZE_SHIFT = _TYPE_SHIFT + _TYPE_BITS
_DIR_SHIFT = _SIZE_SHIFT + _SIZE_BITS

IOC_NONE = 0
IOC_WRITE = 1
IOC_READ = 2


def _magic_code(magic: int | str) -> int:
    if isinstance(magic, str):
        if len(magic) != 1:
            raise ValueError(f"magic must be a single character, got {magic!r}")
        return ord(magic)
    return int(magic)


def _ioc(direction: int, magic: int | str, number: int, size: int) -> int:
    code = _magic_code(magic)
    if not 0 <= code < 1 << _TYPE_BITS:
        raise ValueError(f"magic out of range: {code}")
    if not 0 <= number < 1 << _NR_BITS:
        raise ValueError(f"command number out of range: {number}")
    if not 0 <= size < 1 << _SIZE_BITS:
        raise ValueError(f"argument size out of range: {size}")
    return (
        (direction << _DIR_SHIFT)
        | (size << _SIZE_SHIFT)
        | (code << _TYPE_SHIFT)
        | (number << _NR_SHIFT)
    )


def io(magic: int | str, number: int) -> int:
    """Encode a request that carries no argument."""
    return _ioc(IOC_NONE, magic, number, 0)


def iow(magic: int | str, number: int, size: int) -> int:
    """Encode a request that writes an argument of ``size`` bytes."""
    return _ioc(IOC_WRITE, magic, number, size)


MY_IOCTL_MAGIC = "k"
MY_IOCTL_CMD_ONE = io(MY_IOCTL_MAGIC, 1)
MY_IOCTL_CMD_TWO = iow(MY_IOCTL_MAGIC, 2, struct.calcsize("i"))
MY_IOCTL_CMD_THREE = io(MY_IOCTL_MAGIC, 3)
MY_IOCTL_CMD_LED_ON = io(MY_IOCTL_MAGIC, 4)
MY_IOCTL_CMD_LED_OFF = io(MY_IOCTL_MAGIC, 5)
MY_IOCTL_CMD_LED_BLINK = io(MY_IOCTL_MAGIC, 6)
MY_IOCTL_CMD_BTN_CLEAR = io(MY_IOCTL_MAGIC, 7)