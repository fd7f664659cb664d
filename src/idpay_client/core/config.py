"""
Configuration objects and helpers for the IDPay client.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "ConfigError",
    "DEFAULT_BASE_URL",
    "GatewayConfig",
    "GatewayParameters",
    "load_gateway_config",
]

DEFAULT_BASE_URL = "https://api.idpay.ir"

_PARAMETER_TO_ENV_KEY = {
    "api_key": "IDPAY_API_KEY",
    "sandbox": "IDPAY_SANDBOX",
    "base_url": "IDPAY_BASE_URL",
    "payment_path": "IDPAY_PAYMENT_PATH",
    "verify_path": "IDPAY_VERIFY_PATH",
    "inquiry_path": "IDPAY_INQUIRY_PATH",
    "transactions_path": "IDPAY_TRANSACTIONS_PATH",
    "timeout_seconds": "IDPAY_TIMEOUT_SECONDS",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class GatewayParameters:
    """
    Explicit parameter bundle for constructing :class:`GatewayConfig`.

    Anything left as ``None`` falls back to the environment.
    """

    api_key: Optional[str] = None
    sandbox: Optional[bool | str] = None
    base_url: Optional[str] = None
    payment_path: Optional[str] = None
    verify_path: Optional[str] = None
    inquiry_path: Optional[str] = None
    transactions_path: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[GatewayParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - defensive, should not trigger
            raise TypeError(f"Unknown gateway parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _parse_bool(raw: str, field_name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean, got '{raw}'")


def _normalize_path(raw: str, field_name: str) -> str:
    path = raw.strip()
    if not path:
        raise ConfigError(f"{field_name} must not be empty")
    if path.startswith(("http://", "https://")):
        return path
    return path if path.startswith("/") else "/" + path


@dataclass(frozen=True)
class GatewayConfig:
    api_key: str
    sandbox: bool = False
    base_url: str = DEFAULT_BASE_URL
    payment_path: str = "/v1.1/payment"
    verify_path: str = "/v1.1/payment/verify"
    inquiry_path: str = "/v1.1/payment/inquiry"
    transactions_path: str = "/v1.1/payment/transactions"
    timeout_seconds: float = 30

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("IDPAY_API_KEY must not be empty")
        if self.timeout_seconds <= 0:
            raise ConfigError("IDPAY_TIMEOUT_SECONDS must be greater than zero")

        base_url = self.base_url.strip().rstrip("/")
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError(f"IDPAY_BASE_URL must be an http(s) URL, got '{base_url}'")
        object.__setattr__(self, "base_url", base_url)
        for name in ("payment_path", "verify_path", "inquiry_path", "transactions_path"):
            path = _normalize_path(getattr(self, name), _PARAMETER_TO_ENV_KEY[name])
            object.__setattr__(self, name, path)

        headers = {
            "X-API-Key": self.api_key.strip(),
            "Content-Type": "application/json",
        }
        if self.sandbox:
            headers["X-SANDBOX"] = "1"
        object.__setattr__(self, "_headers", MappingProxyType(headers))

    def _url(self, path: str) -> str:
        # Absolute URLs override the base URL.
        if path.startswith(("http://", "https://")):
            return path
        return self.base_url.rstrip("/") + path

    @property
    def payment_url(self) -> str:
        return self._url(self.payment_path)

    @property
    def verify_url(self) -> str:
        return self._url(self.verify_path)

    @property
    def inquiry_url(self) -> str:
        return self._url(self.inquiry_path)

    @property
    def transactions_url(self) -> str:
        return self._url(self.transactions_path)

    def headers(self) -> Mapping[str, str]:
        """Request headers for this configuration, as a read-only mapping."""
        return self._headers  # type: ignore[attr-defined]

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "GatewayConfig":
        api_key = values.get("IDPAY_API_KEY")
        if api_key is None or not api_key.strip():
            raise ConfigError("IDPAY_API_KEY must be provided")

        sandbox = _parse_bool(values.get("IDPAY_SANDBOX", "false"), "IDPAY_SANDBOX")

        timeout_raw = values.get("IDPAY_TIMEOUT_SECONDS", "30")
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigError(
                f"IDPAY_TIMEOUT_SECONDS must be a number, got '{timeout_raw}'"
            ) from exc

        return cls(
            api_key=api_key.strip(),
            sandbox=sandbox,
            base_url=values.get("IDPAY_BASE_URL", DEFAULT_BASE_URL),
            payment_path=values.get("IDPAY_PAYMENT_PATH", cls.payment_path),
            verify_path=values.get("IDPAY_VERIFY_PATH", cls.verify_path),
            inquiry_path=values.get("IDPAY_INQUIRY_PATH", cls.inquiry_path),
            transactions_path=values.get("IDPAY_TRANSACTIONS_PATH", cls.transactions_path),
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[GatewayParameters] = None,
        api_key: Optional[str] = None,
        sandbox: Optional[bool | str] = None,
        base_url: Optional[str] = None,
        payment_path: Optional[str] = None,
        verify_path: Optional[str] = None,
        inquiry_path: Optional[str] = None,
        transactions_path: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "GatewayConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "api_key": api_key,
                "sandbox": sandbox,
                "base_url": base_url,
                "payment_path": payment_path,
                "verify_path": verify_path,
                "inquiry_path": inquiry_path,
                "transactions_path": transactions_path,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_gateway_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[GatewayParameters] = None,
    api_key: Optional[str] = None,
    sandbox: Optional[bool | str] = None,
    base_url: Optional[str] = None,
    payment_path: Optional[str] = None,
    verify_path: Optional[str] = None,
    inquiry_path: Optional[str] = None,
    transactions_path: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> GatewayConfig:
    """
    Convenience wrapper that mirrors :meth:`GatewayConfig.from_env`.

    The configuration can be provided entirely through environment variables,
    a ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return GatewayConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        sandbox=sandbox,
        base_url=base_url,
        payment_path=payment_path,
        verify_path=verify_path,
        inquiry_path=inquiry_path,
        transactions_path=transactions_path,
        timeout_seconds=timeout_seconds,
    )
