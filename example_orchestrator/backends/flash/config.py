"""Configuration for the hardware flasher backend."""

from pydantic import BaseModel


class FlashConfig(BaseModel):
    """Configuration for the hardware flasher backend."""

    program: str = "espflash"
    device_path: str = "/dev/tty.usbmodem1101"
