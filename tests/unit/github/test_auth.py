"""Unit tests for GitHub token providers."""

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from goalsync.github import AuthenticationError, GitHubAppAuth, StaticTokenAuth


@pytest.fixture(scope="module")
def key_pair() -> tuple[str, str]:
    """Generate an RSA key pair as PEM strings."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()
    public_pem = (
        key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )
    return private_pem, public_pem


@pytest.fixture
def app_auth(key_pair: tuple[str, str]) -> GitHubAppAuth:
    """Create App auth with a generated key."""
    return GitHubAppAuth(app_id="12345", installation_id="678", private_key=key_pair[0])


@pytest.mark.unit
class TestStaticTokenAuth:
    """Tests for StaticTokenAuth."""

    @pytest.mark.asyncio
    async def test_returns_token(self) -> None:
        """The configured token is returned unchanged."""
        assert await StaticTokenAuth("ghp_x").get_token() == "ghp_x"


@pytest.mark.unit
class TestCreateJwt:
    """Tests for GitHubAppAuth.create_jwt."""

    def test_signed_with_app_claims(
        self, app_auth: GitHubAppAuth, key_pair: tuple[str, str]
    ) -> None:
        """JWT is RS256 signed with backdated iat and 10 minute expiry."""
        token = app_auth.create_jwt(now=1_700_000_000)

        claims = jwt.decode(
            token,
            key_pair[1],
            algorithms=["RS256"],
            options={"verify_exp": False, "verify_iat": False},
        )
        assert claims == {"iat": 1_699_999_940, "exp": 1_700_000_600, "iss": "12345"}

    def test_invalid_key_raises(self) -> None:
        """A malformed key raises AuthenticationError."""
        auth = GitHubAppAuth(app_id="1", installation_id="2", private_key="not a key")

        with pytest.raises(AuthenticationError):
            auth.create_jwt()


@pytest.mark.unit
class TestInstallationToken:
    """Tests for GitHubAppAuth.get_token."""

    @pytest.mark.asyncio
    async def test_exchanges_jwt_for_token(self, app_auth: GitHubAppAuth) -> None:
        """Posts to the installation endpoint with the App JWT."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(201, json={"token": "ghs_installation"})

        app_auth._transport = httpx.MockTransport(handler)

        token = await app_auth.get_token()

        assert token == "ghs_installation"
        assert seen["url"] == "https://api.github.com/app/installations/678/access_tokens"
        assert seen["auth"].startswith("Bearer ey")

    @pytest.mark.asyncio
    async def test_failure_raises(self, app_auth: GitHubAppAuth) -> None:
        """A non-201 answer raises AuthenticationError."""
        app_auth._transport = httpx.MockTransport(
            lambda request: httpx.Response(404, json={"message": "Not Found"})
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await app_auth.get_token()

        assert "404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error_raises(self, app_auth: GitHubAppAuth) -> None:
        """Transport failures raise AuthenticationError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        app_auth._transport = httpx.MockTransport(handler)

        with pytest.raises(AuthenticationError) as exc_info:
            await app_auth.get_token()

        assert "ConnectTimeout" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, app_auth: GitHubAppAuth) -> None:
        """A 201 answer without a JSON object raises AuthenticationError."""
        app_auth._transport = httpx.MockTransport(
            lambda request: httpx.Response(201, text="not json")
        )

        with pytest.raises(AuthenticationError):
            await app_auth.get_token()
