import pytest
from dataclasses import FrozenInstanceError

from optres.config import Settings
from optres.primitives.errors import (
    DomainError,
    ErrorLike,
    ResultError,
    UnwrapError,
    error_message,
    is_error_like,
)

pytestmark = [pytest.mark.unit]


class LooksLikeError:
    def __init__(self, message: str) -> None:
        self.message = message


# ──────────────────────────────────────────────────────────────
# 오류 능력 판별
# ──────────────────────────────────────────────────────────────
class TestErrorCapability:
    @pytest.mark.parametrize(
        "value",
        [ValueError("x"), KeyboardInterrupt(), ResultError("x"), DomainError("c", "m"), LooksLikeError("m")],
    )
    def test_error_like_values(self, value):
        assert is_error_like(value) is True

    @pytest.mark.parametrize(
        "value",
        [None, 0, "message", {"message": "m"}, ValueError, LooksLikeError, LooksLikeError(123)],  # type: ignore[arg-type]
    )
    def test_plain_values(self, value):
        """GIVEN 일반 데이터, 클래스 객체, message가 문자열이 아닌 객체
           WHEN is_error_like를 호출하면
           THEN False를 반환한다
        """
        assert is_error_like(value) is False

    def test_protocol_is_runtime_checkable(self):
        assert isinstance(DomainError("c", "m"), ErrorLike)

    def test_error_message(self):
        assert error_message(DomainError("c", "m")) == "m"
        assert error_message(ValueError("boom")) == "boom"


class TestDomainError:
    def test_is_frozen_value(self):
        e = DomainError("not_found", "no such user")
        assert e == DomainError("not_found", "no such user")
        with pytest.raises(FrozenInstanceError):
            e.code = "other"  # type: ignore[misc]


# ──────────────────────────────────────────────────────────────
# 실패 타입
# ──────────────────────────────────────────────────────────────
class TestResultError:
    def test_from_error_like_passes_exceptions_through(self):
        error = ValueError("x")
        assert ResultError.from_error_like(error) is error

    def test_from_error_like_wraps_values(self):
        domain = DomainError("c", "m")
        wrapped = ResultError.from_error_like(domain)
        assert isinstance(wrapped, ResultError)
        assert wrapped.message == "m"
        assert wrapped.payload is domain


class TestUnwrapError:
    def test_plain_message_without_cause(self):
        assert str(UnwrapError("nothing here")) == "nothing here"

    def test_non_error_cause_is_not_rendered(self):
        assert str(UnwrapError("bad", cause=42)) == "bad"

    def test_multiline_cause_is_indented(self):
        e = UnwrapError("outer", cause=LooksLikeError("line1\nline2"))
        assert str(e) == "outer:\n\tline1\n\tline2"

    def test_custom_indent(self, monkeypatch):
        monkeypatch.setattr("optres.config._settings", Settings(trace_indent="    "))
        e = UnwrapError("outer", cause=DomainError("c", "inner"))
        assert str(e) == "outer:\n    inner"

    def test_traceback_can_be_left_out(self, monkeypatch):
        """GIVEN chain_traceback=False 설정과 실제로 발생한 예외
           WHEN UnwrapError를 문자열로 만들면
           THEN 트레이스 없이 원래 메시지만 포함된다
        """
        monkeypatch.setattr("optres.config._settings", Settings(chain_traceback=False))
        try:
            raise ValueError("boom")
        except ValueError as err:
            cause = err
        assert str(UnwrapError("outer", cause=cause)) == "outer:\n\tValueError: boom"

    def test_is_a_result_error(self):
        assert issubclass(UnwrapError, ResultError)
        assert UnwrapError("m").message == "m"
