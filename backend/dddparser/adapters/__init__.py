# Decoder-Adapter Modul
# Austauschbare Decoder für Karten- und VU-Daten

from .base import BaseDecoderAdapter
from .framing_adapter import FramingAdapter
