import io

import pytest

from hdbwire.auth_methods import (
    MT_SCRAMPBKDF2SHA256,
    MT_SCRAMSHA256,
    AuthDecoder,
    AuthError,
    Prms,
)
from hdbwire.encoding import Decoder, Encoder
from hdbwire.scram import (
    SCRAMPBKDF2SHA256,
    SCRAMSHA256,
    client_challenge,
    client_proof,
    scrampbkdf2sha256_key,
    scramsha256_key,
)

SHA256_VECTOR = {
    "method": MT_SCRAMSHA256,
    "salt": bytes([214, 199, 255, 118, 92, 174, 94, 190, 197, 225, 57, 154, 157, 109, 119, 245]),
    "server_challenge": bytes([224, 22, 242, 18, 237, 99, 6, 28, 162, 248, 96, 7, 115, 152, 134, 65, 141, 65, 168, 126, 168, 86, 87, 72, 16, 119, 12, 91, 227, 123, 51, 194, 203, 168, 56, 133, 70, 236, 230, 214, 89, 167, 130, 123, 132, 178, 211, 186]),
    "rounds": 0,
    "client_challenge": bytes([219, 141, 27, 200, 255, 90, 182, 125, 133, 151, 127, 36, 26, 106, 213, 31, 57, 89, 50, 201, 237, 11, 158, 110, 8, 13, 2, 71, 9, 235, 213, 27, 64, 43, 181, 181, 147, 140, 10, 63, 156, 133, 133, 165, 171, 67, 187, 250, 41, 145, 176, 164, 137, 54, 72, 42, 47, 112, 252, 77, 102, 152, 220, 223]),
    "password": bytes([65, 100, 109, 105, 110, 49, 50, 51, 52]),
    "client_proof": bytes([23, 243, 209, 70, 117, 54, 25, 92, 21, 173, 194, 108, 63, 25, 188, 185, 230, 61, 124, 190, 73, 80, 225, 126, 191, 119, 32, 112, 231, 72, 184, 199]),
    "server_proof": None,
}

PBKDF2_VECTOR = {
    "method": MT_SCRAMPBKDF2SHA256,
    "salt": bytes([51, 178, 213, 213, 92, 82, 194, 40, 80, 120, 197, 91, 166, 67, 23, 63]),
    "server_challenge": bytes([32, 91, 165, 18, 158, 77, 134, 69, 128, 157, 69, 209, 47, 33, 171, 164, 56, 172, 229, 0, 153, 3, 65, 29, 239, 210, 186, 134, 81, 32, 29, 137, 239, 167, 39, 1, 171, 117, 85, 138, 109, 38, 42, 77, 43, 42, 82, 70]),
    "rounds": 15000,
    "client_challenge": bytes([137, 156, 182, 60, 158, 138, 93, 103, 80, 202, 54, 191, 210, 78, 142, 207, 210, 176, 157, 129, 128, 19, 135, 0, 127, 26, 58, 197, 188, 216, 121, 26, 120, 196, 34, 138, 5, 8, 58, 32, 36, 240, 199, 126, 164, 112, 64, 35, 46, 102, 255, 249, 126, 250, 24, 103, 198, 152, 33, 75, 6, 179, 187, 230]),
    "password": bytes([84, 111, 111, 114, 49, 50, 51, 52]),
    "client_proof": bytes([253, 181, 101, 0, 214, 222, 25, 99, 98, 253, 141, 106, 38, 255, 16, 153, 34, 74, 211, 70, 21, 91, 71, 223, 170, 36, 249, 124, 1, 135, 176, 37]),
    "server_proof": bytes([228, 2, 183, 82, 29, 218, 234, 242, 40, 50, 142, 158, 142, 153, 185, 189, 130, 51, 176, 155, 23, 179, 58, 19, 126, 144, 139, 229, 116, 3, 242, 197]),
}


def _encode(prms):
    buf = io.BytesIO()
    prms.encode(Encoder(buf))
    return buf.getvalue()


def _decoder(data):
    return AuthDecoder(Decoder(io.BytesIO(data)))


def _init_reply(vector, salt=None, server_challenge=None):
    sub = Prms()
    sub.add_bytes(vector["salt"] if salt is None else salt)
    sub.add_bytes(vector["server_challenge"] if server_challenge is None else server_challenge)
    if vector["rounds"]:
        sub.add_bytes(vector["rounds"].to_bytes(4, "big"))
    buf = io.BytesIO()
    enc = Encoder(buf)
    enc.byte(sub.size())
    sub.encode(enc)
    return buf.getvalue()


@pytest.mark.parametrize("vector", [SHA256_VECTOR, PBKDF2_VECTOR], ids=["sha256", "pbkdf2"])
def test_client_proof_vectors(vector):
    if vector["method"] == MT_SCRAMSHA256:
        key = scramsha256_key(vector["password"], vector["salt"])
    else:
        key = scrampbkdf2sha256_key(vector["password"], vector["salt"], vector["rounds"])
    proof = client_proof(key, vector["salt"], vector["server_challenge"], vector["client_challenge"])
    assert proof == vector["client_proof"]


def test_client_challenge_is_random():
    first, second = client_challenge(), client_challenge()
    assert len(first) == 64
    assert first != second


@pytest.mark.parametrize(
    "cls, vector",
    [(SCRAMSHA256, SHA256_VECTOR), (SCRAMPBKDF2SHA256, PBKDF2_VECTOR)],
    ids=["sha256", "pbkdf2"],
)
def test_full_exchange(cls, vector):
    password = vector["password"].decode()
    a = cls("user", password, client_challenge=vector["client_challenge"])

    init = Prms()
    a.prepare_init_req(init)
    d = _decoder(_encode(init))
    d.num_prm(2)
    assert d.string() == vector["method"]
    assert d.bytes() == vector["client_challenge"]

    a.init_rep_decode(_decoder(_init_reply(vector)))
    assert a.salt == vector["salt"]
    assert a.server_challenge == vector["server_challenge"]

    final = Prms()
    a.prepare_final_req(final)
    data = _encode(final)
    assert len(data) == final.size()
    assert a.client_proof == vector["client_proof"]
    d = _decoder(data)
    d.num_prm(3)
    assert d.cesu8_string() == "user"
    assert d.string() == vector["method"]
    d.sub_size()
    d.num_prm(1)
    assert d.bytes() == vector["client_proof"]


def test_pbkdf2_rounds_decoded():
    password = PBKDF2_VECTOR["password"].decode()
    a = SCRAMPBKDF2SHA256("user", password)
    a.init_rep_decode(_decoder(_init_reply(PBKDF2_VECTOR)))
    assert a.rounds == 15000


def test_pbkdf2_final_reply_server_proof():
    password = "password"
    a = SCRAMPBKDF2SHA256("user", password)
    reply = Prms()
    reply.add_string(MT_SCRAMPBKDF2SHA256)
    reply.add_prms().add_bytes(PBKDF2_VECTOR["server_proof"])
    a.final_rep_decode(_decoder(_encode(reply)))
    assert a.server_proof == PBKDF2_VECTOR["server_proof"]


def test_sha256_final_reply_without_server_proof():
    password = "password"
    a = SCRAMSHA256("user", password)
    buf = io.BytesIO()
    enc = Encoder(buf)
    enc.int16(2)
    enc.li_string(MT_SCRAMSHA256)
    enc.byte(0)
    a.final_rep_decode(_decoder(buf.getvalue()))
    assert a.server_proof is None


def test_sha256_final_reply_with_server_proof():
    password = "password"
    a = SCRAMSHA256("user", password)
    reply = Prms()
    reply.add_string(MT_SCRAMSHA256)
    reply.add_prms().add_bytes(PBKDF2_VECTOR["server_proof"])
    a.final_rep_decode(_decoder(_encode(reply)))
    assert a.server_proof == PBKDF2_VECTOR["server_proof"]


def test_invalid_salt_size_raises():
    password = "password"
    a = SCRAMSHA256("user", password)
    with pytest.raises(AuthError):
        a.init_rep_decode(_decoder(_init_reply(SHA256_VECTOR, salt=bytes(15))))


def test_invalid_server_challenge_size_raises():
    password = "password"
    a = SCRAMPBKDF2SHA256("user", password)
    with pytest.raises(AuthError):
        a.init_rep_decode(_decoder(_init_reply(PBKDF2_VECTOR, server_challenge=bytes(47))))


def test_wrong_parameter_count_raises():
    password = "password"
    a = SCRAMSHA256("user", password)
    with pytest.raises(AuthError):
        a.init_rep_decode(_decoder(_init_reply(PBKDF2_VECTOR)))


def test_final_reply_wrong_method_raises():
    password = "password"
    a = SCRAMSHA256("user", password)
    reply = Prms()
    reply.add_string(MT_SCRAMPBKDF2SHA256)
    reply.add_prms().add_bytes(bytes(32))
    with pytest.raises(AuthError):
        a.final_rep_decode(_decoder(_encode(reply)))