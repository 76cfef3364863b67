"""Client side authentication handshake built from the available methods."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from .auth_methods import (
    JWT,
    MT_JWT,
    MT_SCRAMPBKDF2SHA256,
    MT_SCRAMSHA256,
    MT_SESSION_COOKIE,
    AuthDecoder,
    AuthError,
    Prms,
    SessionCookie,
)
from .encoding import Decoder, Encoder
from .scram import SCRAMPBKDF2SHA256, SCRAMSHA256

Method = Union[JWT, SessionCookie, SCRAMSHA256, SCRAMPBKDF2SHA256]


class Auth:
    """Holds the authentication methods offered to the server and the one it selects."""

    def __init__(self, logonname: str) -> None:
        self.logonname = logonname
        self._methods: Dict[str, Method] = {}
        self._method: Optional[Method] = None

    def __str__(self) -> str:
        return f"logonname {self.logonname}"

    @property
    def method(self) -> Optional[Method]:
        """The method selected by the server, or None before the init reply."""
        return self._method

    def _ordered_methods(self) -> List[Method]:
        return sorted(self._methods.values(), key=lambda m: m.order)

    def _set_method(self, mt: str) -> None:
        try:
            self._method = self._methods[mt]
        except KeyError:
            raise AuthError(f"invalid method type: {mt}") from None

    def _selected(self) -> Method:
        if self._method is None:
            raise AuthError("no authentication method selected")
        return self._method

    def add_session_cookie(self, cookie: bytes, logonname: str, client_id: str) -> None:
        self._methods[MT_SESSION_COOKIE] = SessionCookie(cookie, logonname, client_id)

    def add_basic(self, username: str, password: str) -> None:
        """Add both password based SCRAM methods."""
        self._methods[MT_SCRAMPBKDF2SHA256] = SCRAMPBKDF2SHA256(username, password)
        self._methods[MT_SCRAMSHA256] = SCRAMSHA256(username, password)

    def add_jwt(self, token: str) -> None:
        self._methods[MT_JWT] = JWT(token)

    def init_request(self) -> "AuthInitRequest":
        prms = Prms()
        prms.add_cesu8_string(self.logonname)
        for method in self._ordered_methods():
            method.prepare_init_req(prms)
        return AuthInitRequest(prms)

    def init_reply(self) -> "AuthInitReply":
        return AuthInitReply(self)

    def final_request(self) -> "AuthFinalRequest":
        prms = Prms()
        self._selected().prepare_final_req(prms)
        return AuthFinalRequest(prms)

    def final_reply(self) -> "AuthFinalReply":
        return AuthFinalReply(self._selected())


class AuthInitRequest:
    """The initial authentication request part."""

    def __init__(self, prms: Prms) -> None:
        self.prms = prms

    def __str__(self) -> str:
        return repr(self.prms)

    def size(self) -> int:
        return self.prms.size()

    def encode(self, enc: Encoder) -> None:
        self.prms.encode(enc)


class AuthInitReply:
    """The initial authentication reply part; decoding selects the method."""

    def __init__(self, auth: Auth) -> None:
        self._auth = auth

    def __str__(self) -> str:
        return str(self._auth)

    def decode(self, dec: Decoder) -> None:
        d = AuthDecoder(dec)
        d.num_prm(2)
        mt = d.string()
        self._auth._set_method(mt)
        self._auth._selected().init_rep_decode(d)


class AuthFinalRequest:
    """The final authentication request part."""

    def __init__(self, prms: Prms) -> None:
        self.prms = prms

    def __str__(self) -> str:
        return repr(self.prms)

    def size(self) -> int:
        return self.prms.size()

    def encode(self, enc: Encoder) -> None:
        self.prms.encode(enc)


class AuthFinalReply:
    """The final authentication reply part."""

    def __init__(self, method: Method) -> None:
        self._method = method

    def __str__(self) -> str:
        return str(self._method)

    def decode(self, dec: Decoder) -> None:
        self._method.final_rep_decode(AuthDecoder(dec))