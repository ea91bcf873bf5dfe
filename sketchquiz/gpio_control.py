"""Drive the answer LEDs through the control device."""

from __future__ import annotations

import contextlib
import fcntl
import os
import time
from enum import IntEnum

from sketchquiz.ioctl_codes import (
    MY_IOCTL_CMD_BTN_CLEAR,
    MY_IOCTL_CMD_LED_BLINK,
    MY_IOCTL_CMD_LED_OFF,
    MY_IOCTL_CMD_LED_ON,
)

DEFAULT_DEVICE_PATH = "/dev/mydev"
CORRECT_LED_SECONDS = 2.0


class RequestType(IntEnum):
    """Actions the device can be asked to perform."""

    LED_CORRECT = 0
    LED_WRONG = 1
    BTN_CLEAR = 2


def _ioctl(fd: int, command: int) -> None:
    # The device's answer is not acted upon; a refused request is not fatal.
    with contextlib.suppress(OSError):
        fcntl.ioctl(fd, command)


def handle_device_control_request(
    request_type: RequestType | int, device_path: str = DEFAULT_DEVICE_PATH
) -> None:
    """Open the device and issue the requests for ``request_type``.

    Raises OSError if the device cannot be opened.
    """
    fd = os.open(device_path, os.O_RDWR)
    try:
        if request_type == RequestType.LED_CORRECT:
            _ioctl(fd, MY_IOCTL_CMD_LED_ON)
            time.sleep(CORRECT_LED_SECONDS)
            _ioctl(fd, MY_IOCTL_CMD_LED_OFF)
        elif request_type == RequestType.LED_WRONG:
            _ioctl(fd, MY_IOCTL_CMD_LED_BLINK)
        elif request_type == RequestType.BTN_CLEAR:
            _ioctl(fd, MY_IOCTL_CMD_BTN_CLEAR)
    finally:
        os.close(fd)


def gpio_led_correct(device_path: str = DEFAULT_DEVICE_PATH) -> None:
    """Light the LEDs to signal a correct answer."""
    handle_device_control_request(RequestType.LED_CORRECT, device_path)


def gpio_led_wrong(device_path: str = DEFAULT_DEVICE_PATH) -> None:
    """Blink the LEDs to signal a wrong answer."""
    handle_device_control_request(RequestType.LED_WRONG, device_path)