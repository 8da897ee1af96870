# packages/ubfwcodec/src/ubfwcodec/config.py
from __future__ import annotations
from dataclasses import dataclass

from .container.layout import MAGIC_END, SIGNATURE_MAGICS

__all__ = ["CodecConfig", "FIELD_OVERFLOW_POLICIES"]

FIELD_OVERFLOW_POLICIES = ("truncate", "error")


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** de l'encodeur de conteneurs.

    Consommée par `ubfwcodec.container.encode.encode_container` et par la
    façade `ubfwcodec.codec.build_firmware`. Le décodeur n'en a pas besoin :
    il accepte tout ce que le format autorise.

    Champs
    ------
    field_overflow : str, default="truncate"
        Politique pour un nom (> 15 octets) ou une version (> 255 octets) trop
        longs. "truncate" coupe silencieusement (perte d'information),
        "error" lève `FieldOverflowError`.
    signature_magic : bytes, default=b"END."
        Magic terminal écrit par l'encodeur. Doit être "END." ou "ENDS".
    default_version : str, default="UNKNOWN"
        Version écrite quand l'appelant n'en fournit pas.

    Notes
    -----
    - Dataclass **immuable** : mêmes cfg + mêmes segments ⇒ mêmes octets.
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    """

    field_overflow: str = "truncate"
    signature_magic: bytes = MAGIC_END
    default_version: str = "UNKNOWN"

    def __post_init__(self) -> None:
        if self.field_overflow not in FIELD_OVERFLOW_POLICIES:
            raise ValueError(f"CodecConfig.field_overflow must be one of {FIELD_OVERFLOW_POLICIES}")
        if self.signature_magic not in SIGNATURE_MAGICS:
            raise ValueError("CodecConfig.signature_magic must be b'END.' or b'ENDS'")
        if not isinstance(self.default_version, str):
            raise ValueError("CodecConfig.default_version must be a string")
