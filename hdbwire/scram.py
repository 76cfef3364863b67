"""Salted challenge response authentication (SCRAM) methods."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Optional

from .auth_methods import (
    MO_SCRAMPBKDF2SHA256,
    MO_SCRAMSHA256,
    MT_SCRAMPBKDF2SHA256,
    MT_SCRAMSHA256,
    AuthDecoder,
    AuthError,
    Prms,
    _check_method_type,
)

CLIENT_CHALLENGE_SIZE = 64
SERVER_CHALLENGE_SIZE = 48
SALT_SIZE = 16
CLIENT_PROOF_SIZE = 32


def _check_size(name: str, value: bytes, expected: int) -> None:
    if len(value) != expected:
        raise AuthError(f"invalid {name} size {len(value)} - expected {expected}")


def client_challenge() -> bytes:
    """Return a new random client challenge."""
    return secrets.token_bytes(CLIENT_CHALLENGE_SIZE)


_new_client_challenge = client_challenge


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def client_proof(key: bytes, salt: bytes, server_challenge: bytes, client_challenge: bytes) -> bytes:
    """Compute the client proof from the derived key and the exchanged challenges."""
    sig = hmac.new(_sha256(key), salt + server_challenge + client_challenge, hashlib.sha256).digest()
    return bytes(s ^ k for s, k in zip(sig, key))


def scramsha256_key(password: bytes, salt: bytes) -> bytes:
    return _sha256(hmac.new(password, salt, hashlib.sha256).digest())


def scrampbkdf2sha256_key(password: bytes, salt: bytes, rounds: int) -> bytes:
    return _sha256(hashlib.pbkdf2_hmac("sha256", password, salt, rounds, CLIENT_PROOF_SIZE))


class _Scram:
    """State and helpers shared by the SCRAM methods."""

    typ = ""
    order = 0

    def __init__(self, username: str, password: str, client_challenge: Optional[bytes] = None) -> None:
        self.username = username
        self.password = password
        self.client_challenge = (
            client_challenge if client_challenge is not None else _new_client_challenge()
        )
        self.salt = b""
        self.server_challenge = b""
        self.client_proof: Optional[bytes] = None
        self.server_proof: Optional[bytes] = None

    def __str__(self) -> str:
        return f"method type {self.typ} clientChallenge {list(self.client_challenge)}"

    def _add_init_prms(self, prms: Prms) -> None:
        prms.add_string(self.typ)
        prms.add_bytes(self.client_challenge)

    def _decode_salt_and_challenge(self, d: AuthDecoder) -> None:
        self.salt = d.bytes()
        self.server_challenge = d.bytes()
        _check_size("salt", self.salt, SALT_SIZE)
        _check_size("server challenge", self.server_challenge, SERVER_CHALLENGE_SIZE)

    def _add_final_prms(self, prms: Prms, key: bytes) -> None:
        proof = client_proof(key, self.salt, self.server_challenge, self.client_challenge)
        _check_size("client proof", proof, CLIENT_PROOF_SIZE)
        self.client_proof = proof
        prms.add_cesu8_string(self.username)
        prms.add_string(self.typ)
        prms.add_prms().add_bytes(proof)


class SCRAMSHA256(_Scram):
    """SCRAM authentication with a SHA-256 keyed password."""

    typ = MT_SCRAMSHA256
    order = MO_SCRAMSHA256

    def prepare_init_req(self, prms: Prms) -> None:
        self._add_init_prms(prms)

    def init_rep_decode(self, d: AuthDecoder) -> None:
        d.sub_size()
        d.num_prm(2)
        self._decode_salt_and_challenge(d)

    def prepare_final_req(self, prms: Prms) -> None:
        key = scramsha256_key(self.password.encode("utf-8"), self.salt)
        self._add_final_prms(prms, key)

    def final_rep_decode(self, d: AuthDecoder) -> None:
        d.num_prm(2)
        _check_method_type(d.string(), self.typ)
        if d.sub_size() == 0:
            return
        d.num_prm(1)
        self.server_proof = d.bytes()


class SCRAMPBKDF2SHA256(_Scram):
    """SCRAM authentication with a PBKDF2 derived password key."""

    typ = MT_SCRAMPBKDF2SHA256
    order = MO_SCRAMPBKDF2SHA256

    def __init__(self, username: str, password: str, client_challenge: Optional[bytes] = None) -> None:
        super().__init__(username, password, client_challenge)
        self.rounds = 0

    def prepare_init_req(self, prms: Prms) -> None:
        self._add_init_prms(prms)

    def init_rep_decode(self, d: AuthDecoder) -> None:
        d.sub_size()
        d.num_prm(3)
        self._decode_salt_and_challenge(d)
        self.rounds = d.big_uint32()

    def prepare_final_req(self, prms: Prms) -> None:
        key = scrampbkdf2sha256_key(self.password.encode("utf-8"), self.salt, self.rounds)
        self._add_final_prms(prms, key)

    def final_rep_decode(self, d: AuthDecoder) -> None:
        d.num_prm(2)
        _check_method_type(d.string(), self.typ)
        d.sub_size()
        d.num_prm(1)
        self.server_proof = d.bytes()