"""Result/Option을 위한 오류 능력(capability)과 오용 실패 타입.

개요:
    `Err`에 담기는 값은 특정 기반 클래스를 상속할 필요가 없습니다. 다음 중 하나를
    만족하면 **오류로 취급**합니다.

    * `BaseException` 인스턴스
    * 클래스가 아닌 객체이면서 `message` 속성이 `str`인 값 (예: `DomainError`)

    라이브러리가 직접 던지는 실패는 `ResultError`/`UnwrapError` 두 종류뿐입니다.

예시:
    >>> is_error_like(ValueError("boom"))
    True
    >>> is_error_like(DomainError("not_found", "no such user"))
    True
    >>> is_error_like({"message": "dict is data"})
    False
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Protocol, TypeGuard, Union, runtime_checkable

from optres.config import get_settings

__all__ = [
    "ErrorLike",
    "ErrorValue",
    "DomainError",
    "ResultError",
    "UnwrapError",
    "is_error_like",
    "error_message",
]


# ──────────────────────────────────────────────────────────────
# 능력(capability)
# ──────────────────────────────────────────────────────────────
@runtime_checkable
class ErrorLike(Protocol):
    """오류로 인식되기 위한 최소 구조(`message` 필드)."""

    message: str


ErrorValue = Union[ErrorLike, BaseException]


def is_error_like(value: Any) -> TypeGuard[ErrorValue]:
    """값이 오류 능력을 만족하는지 구조적으로 판별합니다.

    Args:
        value: 검사할 임의 값.

    Returns:
        bool: 예외 인스턴스이거나 `message: str` 속성을 가진 객체면 True.
    """
    if isinstance(value, BaseException):
        return True
    if isinstance(value, type):
        return False
    return isinstance(getattr(value, "message", None), str)


def error_message(error: ErrorValue) -> str:
    """오류 값의 설명 문자열을 반환합니다."""
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return str(error)


# ──────────────────────────────────────────────────────────────
# 값 기반 오류
# ──────────────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class DomainError:
    """예외가 아닌 **값**으로 표현되는 오류.

    `Err(DomainError(...))`처럼 실패를 데이터로 전달할 때 사용합니다.
    `message` 필드를 가지므로 `is_error_like()`를 만족합니다.

    Attributes:
        code: 오류 코드(snake_case 권장). 예: ``"not_found"``.
        message: 사용자 또는 로그 출력용 메시지.
    """

    code: str
    message: str


# ──────────────────────────────────────────────────────────────
# 라이브러리 실패
# ──────────────────────────────────────────────────────────────
class ResultError(Exception):
    """라이브러리가 합성하는 일반 오류.

    `Err("text")`는 문자열을 이 타입으로 감싸 저장합니다.

    Attributes:
        message: 오류 설명.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def from_error_like(cls, error: ErrorValue) -> BaseException:
        """오류 값을 `raise` 가능한 실패로 바꿉니다.

        예외 인스턴스는 그대로 돌려주고, `DomainError` 같은 값은 메시지를
        보존한 `ResultError`로 감쌉니다.
        """
        if isinstance(error, BaseException):
            return error
        wrapped = cls(error_message(error))
        wrapped.payload = error  # type: ignore[attr-defined]
        return wrapped


class UnwrapError(ResultError):
    """잘못된 변형(variant)에 unwrap 계열 연산을 호출했을 때의 실패.

    원래 오류의 맥락을 잃지 않도록, 문자열 표현은 새 메시지 아래에 원래 오류의
    트레이스(없으면 메시지)를 들여써서 덧붙입니다.

    Attributes:
        message: 호출자가 준(또는 생성된) 설명.
        cause: 원래 담겨 있던 값. 없으면 None.

    Examples:
        >>> str(UnwrapError("lookup failed", cause=DomainError("nf", "no row")))
        'lookup failed:\\n\\tno row'
    """

    def __init__(self, message: str, *, cause: Any = None) -> None:
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None or not is_error_like(self.cause):
            return self.message
        settings = get_settings()
        nested = _describe(self.cause, with_trace=settings.chain_traceback)
        indent = settings.trace_indent
        body = "\n".join(indent + line for line in nested.splitlines())
        return f"{self.message}:\n{body}"


def _describe(error: ErrorValue, *, with_trace: bool) -> str:
    if with_trace and isinstance(error, BaseException) and error.__traceback__ is not None:
        return "".join(traceback.format_exception(error)).rstrip()
    if isinstance(error, BaseException) and not hasattr(error, "message"):
        return f"{type(error).__name__}: {error}"
    return error_message(error)
