from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .layout import MAGIC_PART, MAGIC_EXEC


@dataclass(frozen=True)
class SegmentHeader:
    """En-tête fixe (56 octets) d'un segment, tel que lu dans le flux."""
    magic: bytes
    name: str
    mem_addr: int
    index: int
    base_addr: int
    entry_addr: int
    data_size: int
    part_size: int

    @property
    def executable(self) -> bool:
        return self.magic == MAGIC_EXEC


@dataclass(frozen=True)
class Segment:
    header: SegmentHeader
    data: bytes
    crc_claim: int
    crc_calc: int
    offset: int

    @property
    def crc_valid(self) -> bool:
        return self.crc_claim == self.crc_calc

    @property
    def name(self) -> str:
        return self.header.name

    def to_spec(self) -> "SegmentSpec":
        """Re-express this decoded segment as an encoder input."""
        h = self.header
        return SegmentSpec(
            name=h.name,
            index=h.index,
            base_addr=h.base_addr,
            part_size=h.part_size,
            mem_addr=h.mem_addr,
            entry_addr=h.entry_addr,
            data=self.data,
            magic=h.magic,
        )


@dataclass(frozen=True)
class Signature:
    """Terminal signature block.

    `covered` is the end offset of the byte range whose CRC matched the claim
    (``offset`` or ``offset + 12``), or None when neither matched.
    `rsa_valid` is None when no RSA block is present or no key was supplied.
    """
    magic: bytes
    offset: int
    crc_claim: int
    covered: Optional[int] = None
    rsa_block: Optional[bytes] = None
    rsa_valid: Optional[bool] = None

    @property
    def crc_valid(self) -> bool:
        return self.covered is not None

    @property
    def has_rsa(self) -> bool:
        return self.rsa_block is not None

    @property
    def valid(self) -> bool:
        return self.crc_valid and self.rsa_valid is not False


@dataclass(frozen=True)
class Container:
    version: str
    segments: Tuple[Segment, ...]
    signature: Signature
    header_offset: int = 0
    header_crc: int = 0

    @property
    def signature_valid(self) -> bool:
        return self.signature.valid

    @property
    def all_valid(self) -> bool:
        return self.signature_valid and all(s.crc_valid for s in self.segments)

    def summary(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "header_offset": self.header_offset,
            "segments": [
                {
                    "name": s.name,
                    "magic": s.header.magic.decode("ascii"),
                    "index": s.header.index,
                    "size": s.header.data_size,
                    "part_size": s.header.part_size,
                    "crc_valid": s.crc_valid,
                }
                for s in self.segments
            ],
            "signature_valid": self.signature_valid,
            "rsa": self.signature.rsa_valid if self.signature.has_rsa else "absent",
        }


@dataclass(eq=True)
class SegmentSpec:
    """Entrée de layout (ce que l'encodeur consomme)."""
    name: str
    data: bytes = field(default_factory=bytes)
    index: int = 0
    base_addr: int = 0
    part_size: int = 0
    mem_addr: int = 0
    entry_addr: int = 0
    magic: bytes = MAGIC_PART
    filename: Optional[str] = None
