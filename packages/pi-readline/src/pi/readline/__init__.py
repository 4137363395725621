"""pi-readline: async line editing with history for raw terminals."""

# Configuration
from pi.readline.config import DEFAULT_PROMPT, ReadlineConfig, load_config

# Errors
from pi.readline.errors import HistoryError, ReadError, ReadlineError

# History
from pi.readline.history import HistoryStore

# Key decoding
from pi.readline.keys import ByteSource, KeyDecoder, KeyEvent, KeyName, decode, read_key

# Line editing
from pi.readline.line_buffer import LineBuffer

# Read loop
from pi.readline.readline import InterruptEvent, LineEvent, Readline, ReadlineEvent

# Rendering
from pi.readline.renderer import Renderer, cursor_column

# Terminal
from pi.readline.terminal import (
    ProcessTerminal,
    StdinReader,
    Terminal,
    disable_raw_mode,
    enable_raw_mode,
    raw_mode,
)

# Utilities
from pi.readline.utils import visible_width

__all__ = [
    # Config
    "DEFAULT_PROMPT",
    "ReadlineConfig",
    "load_config",
    # Errors
    "HistoryError",
    "ReadError",
    "ReadlineError",
    # History
    "HistoryStore",
    # Keys
    "ByteSource",
    "KeyDecoder",
    "KeyEvent",
    "KeyName",
    "decode",
    "read_key",
    # Line buffer
    "LineBuffer",
    # Read loop
    "InterruptEvent",
    "LineEvent",
    "Readline",
    "ReadlineEvent",
    # Renderer
    "Renderer",
    "cursor_column",
    # Terminal
    "ProcessTerminal",
    "StdinReader",
    "Terminal",
    "disable_raw_mode",
    "enable_raw_mode",
    "raw_mode",
    # Utilities
    "visible_width",
]
