"""라이브러리 동작 설정.

환경 변수로 기본값을 덮어쓸 수 있습니다.

    OPTRES_CHAIN_TRACEBACK  UnwrapError에 원래 예외의 트레이스를 포함 (기본 true)
    OPTRES_TRACE_INDENT     중첩된 원래 오류 텍스트의 들여쓰기 (기본 탭)
    OPTRES_LOG_CAPTURED     from_call/from_async가 포착한 실패를 DEBUG로 기록 (기본 true)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

__all__ = ["Settings", "get_settings", "configure", "reset_settings"]

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True, slots=True)
class Settings:
    """불변 설정 값.

    Attributes:
        chain_traceback: UnwrapError 표현에 원래 예외의 포맷된 트레이스를 넣을지 여부.
            False면 원래 오류의 메시지만 넣습니다.
        trace_indent: 원래 오류 텍스트 각 줄 앞에 붙일 들여쓰기.
        log_captured: 어댑터가 실패를 포착할 때 DEBUG 로그를 남길지 여부.
    """

    chain_traceback: bool = True
    trace_indent: str = "\t"
    log_captured: bool = True

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """환경 변수에서 설정을 읽습니다.

        Args:
            env: 읽을 매핑. 생략하면 `os.environ`.

        Raises:
            ValueError: 불리언 플래그 값을 해석할 수 없을 때.
        """
        env = os.environ if env is None else env
        return cls(
            chain_traceback=_env_flag(env, "OPTRES_CHAIN_TRACEBACK", True),
            trace_indent=env.get("OPTRES_TRACE_INDENT", "\t"),
            log_captured=_env_flag(env, "OPTRES_LOG_CAPTURED", True),
        )


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        logger.warning("ignoring invalid optres environment settings, using defaults: %s", e)
        return Settings()


_settings: Settings = _load_settings()


def get_settings() -> Settings:
    """현재 적용 중인 설정을 반환합니다."""
    return _settings


def configure(**changes: Any) -> Settings:
    """설정 일부를 교체하고 새 설정을 반환합니다.

    Examples:
        >>> configure(chain_traceback=False).chain_traceback
        False
    """
    global _settings
    _settings = replace(_settings, **changes)
    return _settings


def reset_settings() -> Settings:
    """환경 변수 기준으로 설정을 다시 읽습니다."""
    global _settings
    _settings = Settings.from_env()
    return _settings
