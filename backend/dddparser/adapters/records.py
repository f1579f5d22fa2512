"""
Datensätze des Framing-Adapters
"""

from pydantic import BaseModel
from typing import List, Optional


class CardBlock(BaseModel):
    """Ein TLV-Block einer Kartendatei"""
    tag: str                      # z.B. "0x0520"
    file: Optional[str] = None    # Name der Elementardatei, falls bekannt
    generation: int = 1           # 1 = Gen1, 2 = Gen2 (Smart Tacho)
    kind: str = "data"            # data, signature
    length: int = 0
    data: str = ""                # Hex


class CardRecord(BaseModel):
    """Strukturell zerlegte Fahrerkarten-Datei"""
    generation: int = 1
    block_count: int = 0
    blocks: List[CardBlock] = []


class VuRecord(BaseModel):
    """Strukturell erkannter VU-Download"""
    trep: str                     # Transfer Response Parameter, z.B. "0x01"
    transfer: str                 # overview, activities, ...
    generation: int = 1
    size: int = 0
    data: str = ""                # Hex, ohne Kopf (0x76 + TREP)
