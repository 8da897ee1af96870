# packages/ubfwcodec/src/ubfwcodec/codec.py
from __future__ import annotations

from typing import Callable, Optional, Sequence

from cryptography.hazmat.primitives.asymmetric import rsa

from .config import CodecConfig
from .container import (
    Container,
    Segment,
    SegmentSpec,
    decode_container,
    encode_container,
    locate_header,
)

__all__ = ["CodecConfig", "parse_firmware", "build_firmware"]

#: on_segment(i, total, item) ; total vaut None au décodage (inconnu d'avance)
SegmentHook = Callable[[int, Optional[int], object], None]


# ---------------------------------------------------------------------------
# DECODE
# ---------------------------------------------------------------------------

def parse_firmware(
    buf: bytes,
    public_key: Optional[rsa.RSAPublicKey] = None,
    on_segment: Optional[SegmentHook] = None,
) -> Container:
    """
    Localise le header puis décode le conteneur complet.

    Paramètres
    ----------
    buf : bytes
        Image brute ; peut contenir un wrapper constructeur avant le header.
    public_key : RSAPublicKey | None
        Clé de vérification du bloc RSA optionnel. Sans clé, `rsa_valid`
        reste None et n'influe pas sur `signature_valid`.
    on_segment : callable | None
        Hook cosmétique `(i, None, Segment)` appelé après chaque segment.

    Retour
    ------
    Container
        Vue immuable ; les validités (CRC, signature) sont des drapeaux.

    Exceptions
    ----------
    HeaderNotFoundError, TruncatedInputError, UnknownSegmentMagicError,
    BadSignatureMagicError (erreurs structurelles uniquement).
    """
    buf = bytes(buf)
    observe = None
    if on_segment is not None:
        seen = [0]

        def observe(seg: Segment) -> None:
            on_segment(seen[0], None, seg)
            seen[0] += 1

    return decode_container(buf, locate_header(buf), public_key, observe)


# ---------------------------------------------------------------------------
# ENCODE
# ---------------------------------------------------------------------------

def build_firmware(
    specs: Sequence[SegmentSpec],
    version: Optional[str] = None,
    cfg: Optional[CodecConfig] = None,
    on_segment: Optional[SegmentHook] = None,
) -> bytes:
    """
    Sérialise `specs` (ordre conservé) en conteneur.

    Paramètres
    ----------
    specs : Sequence[SegmentSpec]
        Segments dans l'ordre du flux ; `index` n'est que de la méta.
    version : str | None
        Texte de version (≤ 255 octets UTF-8) ; `cfg.default_version` si None.
    cfg : CodecConfig | None
        Politique de débordement des champs texte, magic de signature.
    on_segment : callable | None
        Hook cosmétique `(i, total, SegmentSpec)` ; n'altère jamais les octets.

    Retour
    ------
    bytes
        Conteneur valide (CRC segments + signature), sans bloc RSA.
    """
    specs = list(specs)
    total = len(specs)
    observe = None
    if on_segment is not None:
        def observe(i: int, spec: SegmentSpec) -> None:
            on_segment(i, total, spec)

    return encode_container(specs, version, cfg or CodecConfig(), observe)
