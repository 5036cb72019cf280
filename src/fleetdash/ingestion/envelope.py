"""Collection envelope decoding.

The fleet API wraps collections in one of several shapes.  Each response
is classified exactly once into an :class:`EnvelopeKind` and the record
list is pulled out; an unrecognized shape yields no records rather than
an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

_logger = logging.getLogger(__name__)


class EnvelopeKind(StrEnum):
    ARRAY = "array"
    ITEMS = "items"
    DATA = "data"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True, slots=True)
class Envelope:
    kind: EnvelopeKind
    records: list[Any] = field(default_factory=list)


def decode_envelope(value: Any) -> Envelope:
    """Classify *value* and extract its record list.

    Resolution order: bare list, then ``items``, then ``data``.
    """
    if isinstance(value, list):
        envelope = Envelope(EnvelopeKind.ARRAY, list(value))
    elif isinstance(value, Mapping) and isinstance(value.get("items"), list):
        envelope = Envelope(EnvelopeKind.ITEMS, list(value["items"]))
    elif isinstance(value, Mapping) and isinstance(value.get("data"), list):
        envelope = Envelope(EnvelopeKind.DATA, list(value["data"]))
    else:
        envelope = Envelope(EnvelopeKind.UNRECOGNIZED)
    _logger.debug("Decoded %s envelope with %d records", envelope.kind, len(envelope.records))
    return envelope
