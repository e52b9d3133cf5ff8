"""Arithmetic-coded text messages carried as fixed-point ledger amounts."""

from .amounts import (
    AmountFormatError,
    format_amount,
    from_decimal_string,
    to_real,
    to_units,
)
from .config import CoderConfig, ConfigurationError, load_coder_config
from .decoder import DecodedChunk, MessageDecoder, decode_amounts
from .encoder import ChunkUnencodableError, MessageEncoder, encode_message
from .model import (
    DEFAULT_FREQUENCY_TABLE,
    DEFAULT_RANGE_TABLE,
    FrequencyTable,
    FrequencyTableError,
    RangeTable,
    SymbolRange,
    build_range_table,
)
from .plan import MessagePlan, ReceivedPayment, decode_received, plan_message
from .text import InvalidInputSymbolError, sanitize_message, validate_message

__all__ = [
    "AmountFormatError",
    "format_amount",
    "from_decimal_string",
    "to_real",
    "to_units",
    "CoderConfig",
    "ConfigurationError",
    "load_coder_config",
    "DecodedChunk",
    "MessageDecoder",
    "decode_amounts",
    "ChunkUnencodableError",
    "MessageEncoder",
    "encode_message",
    "DEFAULT_FREQUENCY_TABLE",
    "DEFAULT_RANGE_TABLE",
    "FrequencyTable",
    "FrequencyTableError",
    "RangeTable",
    "SymbolRange",
    "build_range_table",
    "MessagePlan",
    "ReceivedPayment",
    "decode_received",
    "plan_message",
    "InvalidInputSymbolError",
    "sanitize_message",
    "validate_message",
]
