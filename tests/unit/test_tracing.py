"""Span helpers: argument allowlist and the @traced decorator."""

import inspect

import pytest

from app.domain.exceptions import ValidationException
from app.shared.telemetry.tracing import span_attributes, traced


async def _approve(self, contribution_id: str, reviewer_uid: str, points: int | None = None, id_token: str = ""):
    return contribution_id


def test_positional_and_keyword_calls_record_the_same_attributes() -> None:
    signature = inspect.signature(_approve)
    positional = span_attributes(signature, (object(), "c1", "admin"), {"id_token": "secret"})
    keyword = span_attributes(signature, (object(),), {"contribution_id": "c1", "reviewer_uid": "admin"})
    assert positional == keyword == {
        "fitmyphone.contribution_id": "c1",
        "fitmyphone.reviewer_uid": "admin",
    }


def test_unbindable_call_records_nothing() -> None:
    assert span_attributes(inspect.signature(_approve), (), {"unknown": 1}) == {}


class _Service:
    @traced("test.ok")
    async def ok(self, term: str) -> str:
        return term.upper()

    @traced("test.fails")
    async def fails(self) -> None:
        raise ValidationException("bad", field="term")


async def test_traced_passes_results_and_errors_through() -> None:
    service = _Service()
    assert await service.ok("pixel") == "PIXEL"
    assert service.ok.__name__ == "ok"
    with pytest.raises(ValidationException):
        await service.fails()
