"""Firebase ID token verification with a locally signed RS256 token."""

import time
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID
from jose import jwt

from app.domain.exceptions import AuthenticationException
from app.infrastructure.security import FirebaseTokenVerifier
from app.infrastructure.security.jwt import claims_from_payload

PROJECT = "test-project"
CERTS_URL = "https://certs.test/x509"


@pytest.fixture(scope="module")
def signing_key() -> tuple[str, str]:
    """(private key PEM, self-signed certificate PEM)."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "securetoken")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    return private_pem, cert.public_bytes(serialization.Encoding.PEM).decode()


def _token(private_pem: str, kid: str = "k1", **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": f"https://securetoken.google.com/{PROJECT}",
        "aud": PROJECT,
        "sub": "uid-1",
        "iat": now,
        "exp": now + 600,
        "auth_time": now,
        "email": "a@example.com",
        "name": "Asha",
        "picture": "https://img/a.png",
    }
    claims.update(overrides)
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": kid})


def _verifier(certs: dict[str, str], calls: list | None = None) -> FirebaseTokenVerifier:
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(200, json=certs, headers={"Cache-Control": "public, max-age=600"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FirebaseTokenVerifier(PROJECT, http, certs_url=CERTS_URL)


async def test_valid_token_yields_claims(signing_key) -> None:
    private_pem, cert_pem = signing_key
    calls: list = []
    verifier = _verifier({"k1": cert_pem}, calls)

    claims = await verifier.verify(_token(private_pem))
    await verifier.verify(_token(private_pem))

    assert claims.uid == "uid-1"
    assert claims.email == "a@example.com"
    assert claims.display_name == "Asha"
    assert claims.photo_url == "https://img/a.png"
    assert len(calls) == 1


async def test_unknown_kid_refetches_once_then_fails(signing_key) -> None:
    private_pem, cert_pem = signing_key
    calls: list = []
    verifier = _verifier({"k1": cert_pem}, calls)
    await verifier.verify(_token(private_pem))

    with pytest.raises(AuthenticationException, match="key"):
        await verifier.verify(_token(private_pem, kid="rotated"))
    assert len(calls) == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "other-project"},
        {"iss": "https://securetoken.google.com/other-project"},
        {"exp": int(time.time()) - 60},
    ],
)
async def test_wrong_audience_issuer_or_expiry(signing_key, overrides) -> None:
    private_pem, cert_pem = signing_key
    with pytest.raises(AuthenticationException):
        await _verifier({"k1": cert_pem}).verify(_token(private_pem, **overrides))


async def test_non_rs256_token_rejected() -> None:
    token = jwt.encode({"sub": "uid-1"}, "secret", algorithm="HS256")
    with pytest.raises(AuthenticationException, match="algorithm"):
        await _verifier({}).verify(token)


async def test_garbage_token_rejected() -> None:
    with pytest.raises(AuthenticationException):
        await _verifier({}).verify("not-a-jwt")


def test_claims_require_subject() -> None:
    with pytest.raises(AuthenticationException):
        claims_from_payload({"sub": ""})
    assert claims_from_payload({"sub": "u", "auth_time": 12.0}).auth_time == 12
