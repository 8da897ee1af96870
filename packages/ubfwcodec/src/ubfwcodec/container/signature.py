# packages/ubfwcodec/src/ubfwcodec/container/signature.py
# -----------------------------------------------------------------------------
# Bloc signature terminal : CRC (deux couvertures acceptées) + RSA optionnel.
# Vérification uniquement, aucune clé privée ici.
from __future__ import annotations
import struct
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ubfwcore.errors import BadSignatureMagicError, TruncatedInputError
from ..checksum import crc32
from .layout import RSA_BLOCK_SIZES, SIGNATURE_FMT, SIGNATURE_MAGICS, SIGNATURE_SIZE
from .records import Signature

__all__ = ["load_public_key", "verify_rsa", "decode_signature"]


def load_public_key(pem: bytes) -> rsa.RSAPublicKey:
    """
    Charge une clé publique RSA au format PEM.

    Exceptions
    ----------
    ValueError si le PEM est illisible ou si la clé n'est pas RSA.
    """
    key = serialization.load_pem_public_key(bytes(pem))
    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError(f"public key must be RSA, got {type(key).__name__}")
    return key


def verify_rsa(public_key: rsa.RSAPublicKey, signature: bytes, message: bytes) -> bool:
    """RSA PKCS#1 v1.5 over SHA-1. False on mismatch, never raises for a bad signature."""
    try:
        public_key.verify(bytes(signature), bytes(message), padding.PKCS1v15(), hashes.SHA1())
    except InvalidSignature:
        return False
    return True


def decode_signature(buf: bytes, offset: int,
                     public_key: Optional[rsa.RSAPublicKey] = None) -> Signature:
    """
    Décode le bloc signature situé à `offset`.

    Paramètres
    ----------
    buf : bytes
        Buffer complet (les couvertures CRC partent de l'offset absolu 0).
    offset : int
        Début du bloc (magic "END." / "ENDS").
    public_key : RSAPublicKey | None
        Si fournie et qu'un bloc RSA de 256/512 octets suit, la signature est
        vérifiée et son résultat entre dans `Signature.valid`.

    Exceptions
    ----------
    TruncatedInputError si les 12 octets du bloc ne tiennent pas.
    BadSignatureMagicError si le magic n'est pas terminal.
    """
    if offset + SIGNATURE_SIZE > len(buf):
        raise TruncatedInputError(offset, SIGNATURE_SIZE, max(0, len(buf) - offset), "signature")
    magic, crc_claim = struct.unpack_from(SIGNATURE_FMT, buf, offset)
    if magic not in SIGNATURE_MAGICS:
        raise BadSignatureMagicError(magic, offset)

    end = offset + SIGNATURE_SIZE
    covered = None
    # two firmware generations, two conventions; neither is canonical
    for stop in (offset, end):
        if crc32(buf[:stop]) == crc_claim:
            covered = stop
            break

    rsa_block = None
    rsa_valid = None
    tail = len(buf) - end
    if tail in RSA_BLOCK_SIZES:
        rsa_block = bytes(buf[end:])
        if public_key is not None:
            rsa_valid = verify_rsa(public_key, rsa_block, buf[:end])

    return Signature(
        magic=bytes(magic),
        offset=int(offset),
        crc_claim=int(crc_claim),
        covered=covered,
        rsa_block=rsa_block,
        rsa_valid=rsa_valid,
    )
