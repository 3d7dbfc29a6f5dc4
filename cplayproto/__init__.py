"""Firmata messaging, infrared remote codecs and LPC speech synthesis."""

__version__ = "0.1.0"
__all__ = ["firmata", "firmata_constants", "irprotocols", "irdecode", "irsend", "ircodecs", "talkie"]