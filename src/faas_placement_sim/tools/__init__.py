"""tools package"""

from .pretty_json import pretty_json_dump

__all__ = [
    "pretty_json_dump",
]
