"""`Result` 묶음(batch) 유틸.

핵심 개념:
    * `partition(results)`: 결과 시퀀스를 성공 값/에러 값 두 버킷으로 나눔
    * 각 버킷 안의 상대 순서는 유지되고, 원래 위치 정보는 버려짐
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, Iterable, Iterator, TypeVar

if TYPE_CHECKING:
    from optres.primitives.result import Result

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Partition", "partition"]


@dataclass(frozen=True, slots=True)
class Partition(Generic[T, E]):
    """`partition()`의 결과 컨테이너.

    `ok, err = partition(results)` 형태의 구조 분해를 지원합니다.

    Attributes:
        ok: 성공 값들의 불변 시퀀스(입력 순서 유지).
        err: 에러 값들의 불변 시퀀스(입력 순서 유지).
    """

    ok: tuple[T, ...]
    err: tuple[E, ...]

    def __iter__(self) -> Iterator[tuple]:
        yield self.ok
        yield self.err


def partition(results: Iterable["Result[T, E]"]) -> Partition[T, E]:
    """`Result`들을 단일 패스로 성공 값과 에러 값으로 나눕니다.

    입력은 유한해야 합니다(모두 소비한 뒤 반환).

    Args:
        results: `Result` 인스턴스들의 이터러블.

    Returns:
        Partition[T, E]: 언랩된 성공 값과 에러 값.

    Examples:
        >>> from optres.primitives.result import Ok, Err
        >>> partition([Ok(2), Ok(16)]).ok
        (2, 16)
    """
    oks: list[T] = []
    errs: list[E] = []
    for r in results:
        if r.is_ok():
            oks.append(r.unwrap())
        else:
            errs.append(r.unwrap_err())
    return Partition(ok=tuple(oks), err=tuple(errs))
