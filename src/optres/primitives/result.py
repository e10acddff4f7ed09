from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Iterator,
    NoReturn,
    Optional,
    Tuple,
    TypeVar,
    cast,
)

from optres.config import get_settings
from optres.primitives.batch import Partition, partition as _partition
from optres.primitives.errors import ErrorValue, ResultError, UnwrapError, is_error_like

if TYPE_CHECKING:
    from optres.primitives.option import Option

logger = logging.getLogger(__name__)

TValue = TypeVar("TValue")
TNewValue = TypeVar("TNewValue")
TError = TypeVar("TError")
TNewError = TypeVar("TNewError")


class Result(Generic[TValue, TError], ABC):
    """성공(`Ok`) 또는 실패(`Err`)를 값으로 표현하는 컨테이너.

    제공 기능:
    - 상태 질의: is_ok(), is_err()
    - 구조 분해: expect(), expect_err(), unwrap(), unwrap_err(), unwrap_or(), unwrap_or_else()
    - 변환: map(), map_err(), map_or(), flatten()
    - 체이닝: and_then() (flatMap), or_()
    - 경계: peek(), throw(), ok() (→ Option), 이터레이션
    - 어댑터: from_call(), from_async(), from_optional(), partition()

    변형은 생성 시점에 고정되며 이후 바뀌지 않습니다. 모든 변환은 **새 인스턴스**를
    반환합니다. `isinstance(r, Ok)`는 항상 `r.is_ok()`와 같습니다.

    raise하는 연산은 unwrap 계열(expect/expect_err/unwrap/unwrap_err)과 명시적
    경계인 throw()뿐입니다.

    Type Parameters:
        TValue: 성공 값의 타입.
        TError: 에러 페이로드의 타입(오류 능력을 만족해야 함).
    """

    # ── 상태 질의 ─────────────────────────────────────────────────────────────
    @abstractmethod
    def is_ok(self) -> bool:
        """`Ok` 여부를 반환합니다."""
        ...

    def is_err(self) -> bool:
        """`Err` 여부를 반환합니다."""
        return not self.is_ok()

    # ── 구조 분해 ─────────────────────────────────────────────────────────────
    @abstractmethod
    def expect(self, message: str) -> TValue:
        """성공 값을 꺼냅니다.

        Args:
            message: `Err`일 때 던질 실패의 설명.

        Raises:
            UnwrapError: `Err`일 때. 원래 오류가 체인으로 연결됩니다.
        """
        ...

    @abstractmethod
    def expect_err(self, message: str) -> TError:
        """에러 값을 꺼냅니다. `Ok`이면 `message`로 UnwrapError를 던집니다."""
        ...

    @abstractmethod
    def unwrap(self) -> TValue:
        """성공 값을 꺼냅니다. `Err`이면 오류 종류를 명시한 UnwrapError를 던집니다."""
        ...

    @abstractmethod
    def unwrap_err(self) -> TError:
        """에러 값을 꺼냅니다. `Ok`이면 UnwrapError를 던집니다."""
        ...

    @abstractmethod
    def unwrap_or(self, default: TValue) -> TValue:
        """성공 값을 꺼내거나 기본값을 반환합니다."""
        ...

    @abstractmethod
    def unwrap_or_else(self, f: Callable[[TError], TValue]) -> TValue:
        """성공 값을 꺼내거나, 에러 값으로 `f`를 호출한 결과를 반환합니다."""
        ...

    # ── 변환 ──────────────────────────────────────────────────────────────────
    @abstractmethod
    def map(self, f: Callable[[TValue], TNewValue]) -> "Result[TNewValue, TError]":
        """성공 값이 있을 때만 값을 변환합니다. `Err`는 그대로 통과합니다.

        `f`가 오류 능력을 만족하는 값을 돌려주면 결과는 `Err`가 됩니다.
        """
        ...

    @abstractmethod
    def map_err(self, f: Callable[[TError], TNewError]) -> "Result[TValue, TNewError]":
        """실패 값이 있을 때만 에러를 변환합니다.

        `f`가 돌려준 값이 문자열이거나 오류 능력을 만족하면 `Err`, 그 밖의 값이면 `Ok`가 됩니다.
        """
        ...

    @abstractmethod
    def map_or(self, default: TNewValue, f: Callable[[TValue], TNewValue]) -> TNewValue:
        """`Ok`이면 `f(value)`를, 아니면 `default`를 맨 값으로 반환합니다."""
        ...

    @abstractmethod
    def and_then(self, f: Callable[[TValue], "Result[TNewValue, TError]"]) -> "Result[TNewValue, TError]":
        """성공 값이 있을 때만 `Result`를 반환하는 계산을 연결합니다."""
        ...

    @abstractmethod
    def or_(self, alternative: "Result[TValue, TError]") -> "Result[TValue, TError]":
        """`Ok`이면 자신을, `Err`이면 `alternative`를 반환합니다."""
        ...

    @abstractmethod
    def flatten(self) -> "Result[Any, TError]":
        """성공 값이 다시 `Result`이면 한 단계 중첩을 풉니다. 아니면 자신을 반환합니다."""
        ...

    @abstractmethod
    def peek(self) -> Any:
        """분기(`if`/`match`)에서 비교하기 위한 원시 페이로드를 반환합니다.

        최종 값으로 쓰지 말고 분기 조건으로만 사용하세요.
        """
        ...

    @abstractmethod
    def throw(self) -> None:
        """`Err`이면 담긴 오류를 실제 예외로 던집니다. `Ok`이면 아무것도 하지 않습니다."""
        ...

    def ok(self) -> "Option[TValue]":
        """`Result`를 `Option`으로 변환합니다. Ok(v)→Some(v), Err(_)→Nothing()."""
        from .option import Nothing, Some  # 순환 참조 회피
        return Some(self.unwrap()) if self.is_ok() else Nothing()

    def __iter__(self) -> Iterator[TValue]:
        """`Ok`이면 값을 한 번, `Err`이면 한 번도 내보내지 않습니다."""
        if self.is_ok():
            yield self.unwrap()

    # ── 어댑터 ────────────────────────────────────────────────────────────────
    @staticmethod
    def from_call(fn: Callable[[], TValue], *exc_types: type[BaseException]) -> "Result[TValue, Exception]":
        """0-인자 계산을 실행하고 결과를 `Result`로 감쌉니다.

        정상 종료하면 `Ok(반환값)`, 지정한 예외가 발생하면 `Err(예외)`입니다.
        인자를 비우면 기본으로 `Exception`을 포착합니다. 다른 예외는 그대로 전파됩니다.

        Note:
            `Option.from_call`과 달리 예외를 **포착합니다**.

        Examples:
            >>> Result.from_call(lambda: 1 + 1)
            Ok(value=2)
        """
        etypes = cast(Tuple[type[BaseException], ...], exc_types or (Exception,))
        try:
            value = fn()
        except etypes as e:  # type: ignore[misc]
            _log_captured("from_call", fn, e)
            return Err(e)
        return _classify(value)

    @staticmethod
    async def from_async(
        fn: Callable[[], Awaitable[TValue]], *exc_types: type[BaseException]
    ) -> "Result[TValue, Exception]":
        """비동기 계산을 기다린 뒤 결과를 `Result`로 감쌉니다.

        호출자는 계산이 끝날 때까지 대기하며, 결과는 항상 감싸진 값입니다(거부되지 않음).
        `asyncio.CancelledError`는 `Exception`이 아니므로 기본 설정에서 포착되지 않습니다.
        """
        etypes = cast(Tuple[type[BaseException], ...], exc_types or (Exception,))
        try:
            value = await fn()
        except etypes as e:  # type: ignore[misc]
            _log_captured("from_async", fn, e)
            return Err(e)
        return _classify(value)

    @staticmethod
    def from_optional(value: Optional[TValue], err: ErrorValue | str) -> "Result[TValue, Any]":
        """옵셔널 값을 `Result`로 승격합니다. 값이 None이면 Err(err).

        값이 오류 능력을 만족하면 `Ok` 대신 `Err(value)`가 됩니다.
        """
        return _classify(value) if value is not None else Err(err)

    @staticmethod
    def partition(results: Iterable["Result[TValue, TError]"]) -> Partition[TValue, TError]:
        """`Result` 시퀀스를 성공 값과 에러 값으로 나눕니다. 자세한 내용은 `batch.partition`."""
        return _partition(results)


@dataclass(frozen=True, slots=True)
class Ok(Result[TValue, TError]):
    """성공 결과(불변).

    오류 능력을 만족하는 값으로는 만들 수 없습니다.

    Examples:
        >>> Ok(21).map(lambda x: x * 2)
        Ok(value=42)
        >>> isinstance(Ok(1), Ok)
        True
    """

    value: TValue = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if is_error_like(self.value):
            raise TypeError(f"Ok cannot hold an error value: {self.value!r}; use Err instead")

    def is_ok(self) -> bool:
        return True

    def expect(self, message: str) -> TValue:
        return self.value

    def expect_err(self, message: str) -> TError:
        _fail(message, self.value)

    def unwrap(self) -> TValue:
        return self.value

    def unwrap_err(self) -> TError:
        _fail(f"unwrap_err called on Ok: {self.value!r}")

    def unwrap_or(self, default: TValue) -> TValue:
        return self.value

    def unwrap_or_else(self, f: Callable[[TError], TValue]) -> TValue:
        return self.value

    def map(self, f: Callable[[TValue], TNewValue]) -> "Result[TNewValue, TError]":
        return _classify(f(self.value))

    def map_err(self, f: Callable[[TError], TNewError]) -> "Result[TValue, TNewError]":
        return Ok(self.value)

    def map_or(self, default: TNewValue, f: Callable[[TValue], TNewValue]) -> TNewValue:
        return f(self.value)

    def and_then(self, f: Callable[[TValue], "Result[TNewValue, TError]"]) -> "Result[TNewValue, TError]":
        return f(self.value)

    def or_(self, alternative: "Result[TValue, TError]") -> "Result[TValue, TError]":
        return self

    def flatten(self) -> "Result[Any, TError]":
        if isinstance(self.value, Result):
            return self.value
        return self

    def peek(self) -> Any:
        return self.value

    def throw(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Err(Result[TValue, TError]):
    """실패 결과(불변).

    문자열을 주면 `ResultError(message)`로 감싸 저장하고, 오류 능력을 만족하는 값은
    그대로 저장합니다. 그 밖의 값은 `TypeError`입니다.

    Examples:
        >>> Err("Divided by zero").unwrap_err().message
        'Divided by zero'
    """

    error: TError

    def __post_init__(self) -> None:
        if isinstance(self.error, str):
            object.__setattr__(self, "error", ResultError(self.error))
        elif not is_error_like(self.error):
            raise TypeError(
                f"Err requires an error value or a message, got {type(self.error).__name__}"
            )

    def is_ok(self) -> bool:
        return False

    def expect(self, message: str) -> TValue:
        _fail(message, self.error)

    def expect_err(self, message: str) -> TError:
        return self.error

    def unwrap(self) -> TValue:
        _fail(f"unwrap called on Err({type(self.error).__name__})", self.error)

    def unwrap_err(self) -> TError:
        return self.error

    def unwrap_or(self, default: TValue) -> TValue:
        return default

    def unwrap_or_else(self, f: Callable[[TError], TValue]) -> TValue:
        return f(self.error)

    def map(self, f: Callable[[TValue], TNewValue]) -> "Result[TNewValue, TError]":
        return Err(self.error)

    def map_err(self, f: Callable[[TError], TNewError]) -> "Result[TValue, TNewError]":
        return _classify_error(f(self.error))

    def map_or(self, default: TNewValue, f: Callable[[TValue], TNewValue]) -> TNewValue:
        return default

    def and_then(self, f: Callable[[TValue], "Result[TNewValue, TError]"]) -> "Result[TNewValue, TError]":
        return Err(self.error)

    def or_(self, alternative: "Result[TValue, TError]") -> "Result[TValue, TError]":
        return alternative

    def flatten(self) -> "Result[Any, TError]":
        return self

    def peek(self) -> Any:
        return self.error

    def throw(self) -> None:
        logger.debug("throw() raising %s", type(self.error).__name__)
        raise ResultError.from_error_like(self.error)


def _classify(value: Any) -> Result[Any, Any]:
    # 오류 능력을 만족하는 페이로드는 Err
    return Err(value) if is_error_like(value) else Ok(value)


def _classify_error(value: Any) -> Result[Any, Any]:
    # 문자열은 메시지로 보고 Err
    return Err(value) if isinstance(value, str) else _classify(value)


def _fail(message: str, cause: Any = None) -> NoReturn:
    err = UnwrapError(message, cause=cause)
    if isinstance(cause, BaseException):
        raise err from cause
    raise err


def _log_captured(adapter: str, fn: Callable[..., Any], error: BaseException) -> None:
    if get_settings().log_captured:
        logger.debug(
            "%s captured %s from %s: %s",
            adapter,
            type(error).__name__,
            getattr(fn, "__qualname__", repr(fn)),
            error,
        )
