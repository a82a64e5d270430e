"""Generate byte-order reversal functions for C/C++ structs."""

from .emitter import generate
from .errors import ConfigError, StructSwapError, UnsupportedBitFieldError

__version__ = '0.1.0'

__all__ = ['generate', 'ConfigError', 'StructSwapError', 'UnsupportedBitFieldError', '__version__']
