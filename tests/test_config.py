"""Configuration loading from mappings, .env files and overrides."""

import pytest

from idpay_client import ConfigError, GatewayConfig, GatewayParameters, load_gateway_config
from idpay_client.core.environment import build_environment, load_env_file


def test_defaults_from_mapping():
    config = GatewayConfig.from_mapping({"IDPAY_API_KEY": " key "})

    assert config.api_key == "key"
    assert config.sandbox is False
    assert config.payment_url == "https://api.idpay.ir/v1.1/payment"
    assert config.verify_url == "https://api.idpay.ir/v1.1/payment/verify"
    assert config.inquiry_url == "https://api.idpay.ir/v1.1/payment/inquiry"
    assert config.transactions_url == "https://api.idpay.ir/v1.1/payment/transactions"
    assert dict(config.headers()) == {"X-API-Key": "key", "Content-Type": "application/json"}


def test_paths_and_base_url_are_configurable():
    config = GatewayConfig.from_mapping(
        {
            "IDPAY_API_KEY": "key",
            "IDPAY_SANDBOX": "yes",
            "IDPAY_BASE_URL": "https://gateway.example/",
            "IDPAY_VERIFY_PATH": "v2/verify",
            "IDPAY_INQUIRY_PATH": "https://other.example/inquiry",
            "IDPAY_TIMEOUT_SECONDS": "12.5",
        }
    )

    assert config.sandbox is True
    assert config.headers()["X-SANDBOX"] == "1"
    assert config.payment_url == "https://gateway.example/v1.1/payment"
    assert config.verify_url == "https://gateway.example/v2/verify"
    assert config.inquiry_url == "https://other.example/inquiry"
    assert config.timeout_seconds == 12.5


def test_direct_construction_normalises_paths_and_base_url():
    config = GatewayConfig(
        api_key="k",
        base_url=" https://gateway.example/ ",
        payment_path="v1/pay",
        verify_path=" /v1/verify ",
    )

    assert config.base_url == "https://gateway.example"
    assert config.payment_url == "https://gateway.example/v1/pay"
    assert config.verify_url == "https://gateway.example/v1/verify"
    assert GatewayConfig(api_key="k", payment_path="v1/pay").payment_url == (
        "https://api.idpay.ir/v1/pay"
    )


@pytest.mark.parametrize(
    "overrides",
    [{"base_url": "api.idpay.ir"}, {"payment_path": "  "}, {"transactions_path": ""}],
)
def test_direct_construction_rejects_bad_urls(overrides):
    with pytest.raises(ConfigError):
        GatewayConfig(api_key="k", **overrides)


@pytest.mark.parametrize(
    "values",
    [
        {},
        {"IDPAY_API_KEY": "  "},
        {"IDPAY_API_KEY": "key", "IDPAY_SANDBOX": "maybe"},
        {"IDPAY_API_KEY": "key", "IDPAY_TIMEOUT_SECONDS": "soon"},
        {"IDPAY_API_KEY": "key", "IDPAY_TIMEOUT_SECONDS": "0"},
        {"IDPAY_API_KEY": "key", "IDPAY_BASE_URL": "api.idpay.ir"},
    ],
)
def test_invalid_configuration(values):
    with pytest.raises(ConfigError):
        GatewayConfig.from_mapping(values)


def test_env_file_and_overrides(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# gateway\nIDPAY_API_KEY='file-key'\nexport IDPAY_SANDBOX=1\nIDPAY_BASE_URL=https://file.example\n",
        encoding="utf-8",
    )

    config = load_gateway_config(
        env_file=str(env_file),
        base={"IDPAY_BASE_URL": "https://env.example"},
        overrides={"IDPAY_SANDBOX": "false"},
    )

    assert config.api_key == "file-key"
    assert config.base_url == "https://env.example"
    assert config.sandbox is False


def test_explicit_parameters_win(tmp_path):
    config = load_gateway_config(
        env_file=str(tmp_path / "missing.env"),
        base={"IDPAY_API_KEY": "env-key"},
        overrides={"IDPAY_API_KEY": "override-key"},
        parameters=GatewayParameters(sandbox=True),
        api_key="explicit-key",
    )

    assert config.api_key == "explicit-key"
    assert config.sandbox is True


def test_build_environment_layers_sources(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n", encoding="utf-8")

    environment = build_environment(
        env_file=str(env_file), base={"A": "base"}, overrides={"B": "override"}
    )

    assert environment.get("A") == "base"
    assert environment.get("B") == "override"
    assert environment.get("C", "default") == "default"


def test_load_env_file_keeps_existing_keys(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("IDPAY_API_KEY=file\nIDPAY_SANDBOX=1\n", encoding="utf-8")
    environ = {"IDPAY_API_KEY": "existing"}

    merged = load_env_file(str(env_file), environ=environ)

    assert merged == {"IDPAY_API_KEY": "existing", "IDPAY_SANDBOX": "1"}
