"""Configuration for the emulator backend."""

from pydantic import BaseModel


class EmulateConfig(BaseModel):
    """Configuration for the emulator backend."""

    program: str = "qemu-system-riscv32"
