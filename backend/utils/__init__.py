from .parsing import locate_json_span, decode_json_object
from .validation import InputValidator

__all__ = [
    "locate_json_span",
    "decode_json_object",
    "InputValidator",
]
