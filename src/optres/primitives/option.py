# src/optres/primitives/option.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterator, Optional, TypeVar, cast

from optres.primitives.result import Err, Result, _classify
from optres.primitives.errors import ErrorValue, UnwrapError

TValue = TypeVar("TValue")
TNewValue = TypeVar("TNewValue")


class _Absent:
    """값의 부재를 나타내는 프로세스 전역 유일 토큰.

    `None`을 포함한 어떤 정상 페이로드와도 충돌하지 않습니다. 복사/피클링해도
    동일 객체가 유지됩니다.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict) -> "_Absent":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


class Option(Generic[TValue], ABC):
    """값의 존재/부재를 표현하는 컨테이너.

    제공 기능:
    - 상태 질의: is_some(), is_none()
    - 구조 분해: expect(), unwrap(), unwrap_or(), unwrap_or_else()
    - 변환: map(), map_or(), flatten()
    - 체이닝: and_then() (flatMap), or_()
    - 경계: peek(), ok_or() (→ Result), to_optional(), 이터레이션
    - 어댑터: from_call(), from_async(), from_optional()

    부재는 `None`이 아니라 `ABSENT` 토큰으로 표현되므로, `Some(None)`은 정상적인
    "값이 있음" 상태입니다.

    Type Parameters:
        TValue: 존재하는 값의 타입.
    """

    @abstractmethod
    def is_some(self) -> bool:
        """값이 존재하는지 여부.

        Returns:
            bool: Some이면 True, Nothing이면 False.
        """
        ...

    def is_none(self) -> bool:
        """값이 부재인지 여부.

        Returns:
            bool: Nothing이면 True, 아니면 False.
        """
        return not self.is_some()

    @abstractmethod
    def expect(self, message: str) -> TValue:
        """값을 꺼냅니다.

        Args:
            message: 값이 없을 때 던질 실패의 설명.

        Raises:
            UnwrapError: Nothing일 때.
        """
        ...

    @abstractmethod
    def unwrap(self) -> TValue:
        """값을 꺼냅니다.

        Raises:
            UnwrapError: Nothing일 때.
        """
        ...

    @abstractmethod
    def unwrap_or(self, default: TValue) -> TValue:
        """값을 꺼내거나 기본값을 반환합니다.

        Args:
            default: 비어있을 때 반환할 기본값.

        Returns:
            TValue: 값 또는 기본값.
        """
        ...

    @abstractmethod
    def unwrap_or_else(self, f: Callable[[], TValue]) -> TValue:
        """값을 꺼내거나, 비어있으면 `f()`의 결과를 반환합니다.

        Args:
            f: 0-인자 함수. Some이면 호출되지 않습니다.
        """
        ...

    @abstractmethod
    def map(self, f: Callable[[TValue], TNewValue]) -> "Option[TNewValue]":
        """값이 있을 때만 변환합니다.

        Args:
            f: TValue → TNewValue 함수.

        Returns:
            Option[TNewValue]: 변환된 option, 값이 없으면 Nothing.
        """
        ...

    @abstractmethod
    def map_or(self, default: TNewValue, f: Callable[[TValue], TNewValue]) -> TNewValue:
        """값이 있으면 `f(value)`를, 없으면 `default`를 반환합니다."""
        ...

    @abstractmethod
    def and_then(self, f: Callable[[TValue], "Option[TNewValue]"]) -> "Option[TNewValue]":
        """값이 있을 때만 Option을 반환하는 계산을 연결합니다.

        Args:
            f: TValue → Option[TNewValue] 함수.

        Returns:
            Option[TNewValue]: 함수의 반환값 또는 Nothing.
        """
        ...

    @abstractmethod
    def or_(self, alternative: "Option[TValue]") -> "Option[TValue]":
        """Some이면 자신을, Nothing이면 `alternative`를 반환합니다."""
        ...

    @abstractmethod
    def flatten(self) -> "Option[Any]":
        """값이 다시 Option이면 한 단계 중첩을 풉니다."""
        ...

    @abstractmethod
    def peek(self) -> Any:
        """분기에서 비교하기 위한 원시 값을 반환합니다. Nothing이면 `ABSENT`."""
        ...

    @abstractmethod
    def ok_or(self, error: ErrorValue | str) -> Result[TValue, Any]:
        """`Result`로 변환합니다. Some(v)→Ok(v), Nothing→Err(error).

        `v`가 오류 능력을 만족하면 Some(v)는 Err(v)가 됩니다.

        Args:
            error: 오류 값 또는 메시지 문자열.
        """
        ...

    def to_optional(self) -> Optional[TValue]:
        """Optional로 변환합니다.

        Returns:
            Optional[TValue]: Some(v) → v, Nothing → None.
        """
        return cast(Optional[TValue], self.unwrap_or(cast(TValue, None)))

    def __iter__(self) -> Iterator[TValue]:
        """Some이면 값을 한 번, Nothing이면 한 번도 내보내지 않습니다."""
        if self.is_some():
            yield self.unwrap()

    @staticmethod
    def from_optional(value: Optional[TValue]) -> "Option[TValue]":
        """옵셔널 값을 Option으로 승격합니다.

        Args:
            value: 옵셔널 값.

        Returns:
            Option[TValue]: 값이 있으면 Some(value), 없으면 Nothing().
        """
        return Nothing() if value is None or value is ABSENT else Some(value)

    @staticmethod
    def from_call(fn: Callable[[], Optional[TValue]]) -> "Option[TValue]":
        """0-인자 계산을 실행하고, `None`/`ABSENT` 반환을 Nothing으로 바꿉니다.

        Note:
            `Result.from_call`과 달리 예외를 **포착하지 않습니다**. Option은 부재를
            다루고 실패는 다루지 않으므로, 발생한 예외는 그대로 전파됩니다.
            실패까지 데이터로 다루려면 `Result.from_call(fn).map(...)`을 사용하세요.

        Examples:
            >>> Option.from_call(lambda: None)
            Nothing()
            >>> Option.from_call(lambda: 5)
            Some(value=5)
        """
        return Option.from_optional(fn())

    @staticmethod
    async def from_async(fn: Callable[[], Awaitable[Optional[TValue]]]) -> "Option[TValue]":
        """비동기 계산을 기다린 뒤 `from_call`과 같은 규칙으로 Option을 만듭니다.

        예외는 포착하지 않습니다.
        """
        return Option.from_optional(await fn())


@dataclass(frozen=True, slots=True)
class Some(Option[TValue]):
    """값이 존재함을 나타내는 `Option`의 변형.

    `Some`은 불변(`frozen=True`)이고 `__slots__`를 사용합니다. `None`을 포함해
    `ABSENT`를 제외한 어떤 값이든 담을 수 있습니다.

    Attributes:
        value: 담긴 실제 값.

    Examples:
        기본 사용:
            >>> Some(21).map(lambda x: x * 2)
            Some(value=42)

        체이닝(and_then):
            >>> def non_empty(s: str) -> Option[str]:
            ...     return Some(s) if s else Nothing()
            >>> Some("").and_then(non_empty)
            Nothing()

    Notes:
        - 값 존재 여부 분기는 `is_some()`/`is_none()` 또는 `isinstance(o, Some)`을 사용하세요.
    """

    value: TValue

    def __post_init__(self) -> None:
        if self.value is ABSENT:
            raise TypeError("Some cannot hold ABSENT; use Nothing() instead")

    def is_some(self) -> bool:
        return True

    def expect(self, message: str) -> TValue:
        return self.value

    def unwrap(self) -> TValue:
        return self.value

    def unwrap_or(self, default: TValue) -> TValue:
        return self.value

    def unwrap_or_else(self, f: Callable[[], TValue]) -> TValue:
        return self.value

    def map(self, f: Callable[[TValue], TNewValue]) -> "Option[TNewValue]":
        value = f(self.value)
        return Nothing() if value is ABSENT else Some(value)

    def map_or(self, default: TNewValue, f: Callable[[TValue], TNewValue]) -> TNewValue:
        return f(self.value)

    def and_then(self, f: Callable[[TValue], "Option[TNewValue]"]) -> "Option[TNewValue]":
        return f(self.value)

    def or_(self, alternative: "Option[TValue]") -> "Option[TValue]":
        return self

    def flatten(self) -> "Option[Any]":
        if isinstance(self.value, Option):
            return self.value
        return self

    def peek(self) -> Any:
        return self.value

    def ok_or(self, error: ErrorValue | str) -> Result[TValue, Any]:
        return _classify(self.value)


@dataclass(frozen=True, slots=True)
class Nothing(Option[Any]):
    """값의 부재를 나타내는 `Option`의 변형.

    호출할 때마다 새 인스턴스를 만들지만 모든 `Nothing()`은 서로 같다고 비교됩니다.
    `map`/`and_then`은 계산을 수행하지 않고, `unwrap_or(default)`는 항상 `default`를
    반환합니다.

    Examples:
        >>> Nothing() == Nothing()
        True
        >>> Nothing().map(lambda x: x * 2)
        Nothing()
        >>> Nothing().peek() is ABSENT
        True
    """

    def is_some(self) -> bool:
        return False

    def expect(self, message: str) -> Any:
        raise UnwrapError(message)

    def unwrap(self) -> Any:
        raise UnwrapError("unwrap called on Nothing")

    def unwrap_or(self, default: Any) -> Any:
        return default

    def unwrap_or_else(self, f: Callable[[], Any]) -> Any:
        return f()

    def map(self, f: Callable[[Any], Any]) -> "Option[Any]":
        return Nothing()

    def map_or(self, default: TNewValue, f: Callable[[Any], TNewValue]) -> TNewValue:
        return default

    def and_then(self, f: Callable[[Any], "Option[TNewValue]"]) -> "Option[TNewValue]":
        return Nothing()

    def or_(self, alternative: "Option[Any]") -> "Option[Any]":
        return alternative

    def flatten(self) -> "Option[Any]":
        return self

    def peek(self) -> Any:
        return ABSENT

    def ok_or(self, error: ErrorValue | str) -> Result[Any, Any]:
        return Err(error)
