"""HTTP clients for the LLM, Firebase Auth and FCM, driven through httpx.MockTransport."""

import asyncio
import json

import httpx
import pytest

from firestore_fake import FakeCredentials

from app.application.dtos.notification import PushMessage
from app.domain.exceptions import (
    AuthenticationException,
    ReauthenticationRequiredException,
    SuggestionServiceException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.infrastructure.exceptions import ExternalServiceError
from app.infrastructure.external.llm import LLMSuggestionClient
from app.infrastructure.firebase import messaging
from app.infrastructure.firebase.auth import FirebaseAuthClient
from app.infrastructure.firebase.messaging import DEFAULT_TITLE, FCMClient, build_message


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestLLMSuggestionClient:
    def _client(self, handler) -> LLMSuggestionClient:
        return LLMSuggestionClient(
            _http(handler),
            api_url="https://llm.test/v1/chat/completions",
            api_key="k",
            model="test-model",
            site_url="https://fitmyphone.test",
        )

    async def test_parses_suggestions(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_completion(json.dumps({
                "suggestedMatches": ["Galaxy S23"],
                "alternativeSearchTerms": ["Samsung S23"],
                "recommendFollowUp": False,
            })))

        result = await self._client(handler).suggest("galaxy s23 glass")

        assert result.suggested_matches == ["Galaxy S23"]
        assert result.alternative_search_terms == ["Samsung S23"]
        assert result.recommend_follow_up is False
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer k"
        assert request.headers["HTTP-Referer"] == "https://fitmyphone.test"
        assert request.headers["X-Title"] == "fitmyphone"
        body = json.loads(request.content)
        assert body["model"] == "test-model"
        assert body["response_format"] == {"type": "json_object"}
        assert "galaxy s23 glass" in body["messages"][1]["content"]

    @pytest.mark.parametrize(
        "response, reason",
        [
            (httpx.Response(500, text="boom"), "status 500"),
            (httpx.Response(200, json={"choices": []}), "missing content"),
            (httpx.Response(200, json=_completion("")), "missing content"),
            (httpx.Response(200, json=_completion("not json")), "invalid JSON"),
            (httpx.Response(200, json=_completion('{"suggestedMatches": "x"}')), "invalid shape"),
        ],
    )
    async def test_failures_raise_service_exception(self, response, reason) -> None:
        with pytest.raises(SuggestionServiceException) as exc_info:
            await self._client(lambda request: response).suggest("x")
        assert exc_info.value.details == {"reason": reason}

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SuggestionServiceException) as exc_info:
            await self._client(handler).suggest("x")
        assert exc_info.value.details == {"reason": "transport error"}


class TestFirebaseAuthClient:
    async def test_sign_up_sets_display_name(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            assert request.url.params["key"] == "api-key"
            if request.url.path.endswith("accounts:signUp"):
                return httpx.Response(200, json={
                    "localId": "u1", "idToken": "id", "refreshToken": "r",
                    "expiresIn": "3600", "email": "a@example.com",
                })
            return httpx.Response(200, json={})

        session = await FirebaseAuthClient("api-key", _http(handler)).sign_up("a@example.com", "secret1", "Asha")

        assert (session.uid, session.id_token, session.expires_in) == ("u1", "id", 3600)
        assert calls == ["/v1/accounts:signUp", "/v1/accounts:update"]

    async def test_refresh_reads_secure_token_fields(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert b"grant_type=refresh_token" in request.content
            return httpx.Response(200, json={
                "user_id": "u1", "id_token": "id2", "refresh_token": "r2", "expires_in": "3600",
            })

        session = await FirebaseAuthClient("api-key", _http(handler)).refresh("r1")
        assert (session.uid, session.id_token, session.refresh_token) == ("u1", "id2", "r2")

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("EMAIL_EXISTS", UserAlreadyExistsException),
            ("INVALID_LOGIN_CREDENTIALS", AuthenticationException),
            ("CREDENTIAL_TOO_OLD_LOGIN_AGAIN", ReauthenticationRequiredException),
            ("WEAK_PASSWORD : Password should be at least 6 characters", ValidationException),
            ("QUOTA_EXCEEDED", ExternalServiceError),
        ],
    )
    async def test_error_mapping(self, message, expected) -> None:
        client = FirebaseAuthClient(
            "api-key", _http(lambda request: httpx.Response(400, json={"error": {"message": message}}))
        )
        with pytest.raises(expected):
            await client.sign_in("a@example.com", "secret1")


class TestFCM:
    def test_build_message_web_push_presentation(self) -> None:
        body = build_message("tok", PushMessage(title="", body="New models", url="/search"), "https://fitmyphone.test/")
        message = body["message"]
        assert message["token"] == "tok"
        assert message["notification"] == {"title": DEFAULT_TITLE, "body": "New models"}
        assert message["data"] == {"url": "/search"}
        assert message["webpush"]["fcm_options"]["link"] == "https://fitmyphone.test/search"
        assert message["webpush"]["notification"]["requireInteraction"] is True
        assert message["webpush"]["notification"]["actions"][0]["title"] == "Open App"

    def test_build_message_with_image_and_default_url(self) -> None:
        body = build_message("tok", PushMessage(title="T", body="B", image="https://img"), "https://fitmyphone.test")
        assert body["message"]["notification"]["image"] == "https://img"
        assert body["message"]["webpush"]["fcm_options"]["link"] == "https://fitmyphone.test/"

    @pytest.mark.parametrize(
        "response, outcome",
        [
            (httpx.Response(200, json={"name": "projects/p/messages/1"}), "sent"),
            (httpx.Response(404, json={"error": {"status": "NOT_FOUND"}}), "unregistered"),
            (
                httpx.Response(400, json={"error": {
                    "status": "INVALID_ARGUMENT",
                    "details": [{"errorCode": "UNREGISTERED"}],
                }}),
                "unregistered",
            ),
            (httpx.Response(500, json={"error": {"status": "INTERNAL"}}), "failed"),
        ],
    )
    async def test_send_outcomes(self, response, outcome) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return response

        client = FCMClient("p", FakeCredentials(), _http(handler), base_url="https://fitmyphone.test")

        assert await client.send("tok", PushMessage("T", "B")) == outcome
        assert seen[0].url.path == "/v1/projects/p/messages:send"
        assert seen[0].headers["Authorization"] == "Bearer test-token"

    async def test_send_many_shares_one_access_token_and_bounds_concurrency(self, monkeypatch) -> None:
        class ExpiringCredentials:
            valid = False
            token = "fresh-token"
            refreshes = 0

            def refresh(self, request) -> None:
                self.refreshes += 1

        in_flight = peak = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            assert request.headers["Authorization"] == "Bearer fresh-token"
            return httpx.Response(200, json={"name": "projects/p/messages/1"})

        monkeypatch.setattr(messaging, "MAX_CONCURRENT_SENDS", 3)
        credentials = ExpiringCredentials()
        client = FCMClient("p", credentials, _http(handler), base_url="https://fitmyphone.test")

        outcomes = await client.send_many([f"tok-{i}" for i in range(10)], PushMessage("T", "B"))

        assert outcomes == ["sent"] * 10
        assert credentials.refreshes == 1
        assert peak <= 3
        assert await client.send_many([], PushMessage("T", "B")) == []
