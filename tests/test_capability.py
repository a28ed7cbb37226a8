"""Tests for the startup payment capability probe."""

import logging
from unittest.mock import Mock

import pytest

from places_mcp.capability import (
    derive_identity,
    is_placeholder_credential,
    probe,
)
from places_mcp.config import Settings
from tests.conftest import BASE_URL, TEST_ADDRESS, TEST_PRIVATE_KEY, fake_identity, plain_transport


@pytest.mark.parametrize(
    "credential",
    [
        None,
        "",
        "   ",
        "<private key>",
        "<Private Key with USDC on Base>",
        "0x<private key>",
    ],
)
def test_placeholder_credentials(credential):
    assert is_placeholder_credential(credential) is True


def test_real_looking_credential_is_not_placeholder():
    assert is_placeholder_credential(TEST_PRIVATE_KEY) is False


@pytest.mark.parametrize("credential", [None, "<private key here>"])
def test_probe_disables_payment_without_deriving(credential):
    derive = Mock()
    wrap = Mock()
    settings = Settings(private_key=credential, resource_server_url=BASE_URL)

    capability = probe(settings, derive=derive, wrap=wrap)

    assert capability.payment_enabled is False
    assert capability.client.payment_transport is False
    assert capability.address is None
    assert capability.failure is None
    derive.assert_not_called()
    wrap.assert_not_called()


def test_probe_enables_payment_with_wrapped_client():
    settings = Settings(private_key="0xkey", resource_server_url=BASE_URL, network="eip155:84532")
    wrap = Mock(side_effect=plain_transport)

    capability = probe(settings, derive=fake_identity, wrap=wrap)

    assert capability.payment_enabled is True
    assert capability.client.payment_transport is True
    assert capability.client.base_url == BASE_URL
    assert capability.address == "0xabc"
    wrap.assert_called_once()
    assert wrap.call_args.args[1] == "eip155:84532"


def test_probe_falls_back_when_derivation_fails(caplog):
    settings = Settings(private_key="not-a-key", resource_server_url=BASE_URL)
    derive = Mock(side_effect=ValueError("Non-hexadecimal digit found"))
    wrap = Mock()

    with caplog.at_level(logging.ERROR):
        capability = probe(settings, derive=derive, wrap=wrap)

    assert capability.payment_enabled is False
    assert capability.client.payment_transport is False
    assert capability.failure == "ValueError: Non-hexadecimal digit found"
    wrap.assert_not_called()
    assert "Failed to initialize payment client" in caplog.text
    assert "not-a-key" not in caplog.text


def test_probe_falls_back_when_wrapping_fails():
    settings = Settings(private_key="0xkey", resource_server_url=BASE_URL)

    capability = probe(settings, derive=fake_identity, wrap=Mock(side_effect=RuntimeError("boom")))

    assert capability.payment_enabled is False
    assert capability.client.payment_transport is False


def test_probe_logs_demo_mode(caplog):
    with caplog.at_level(logging.INFO):
        probe(Settings(resource_server_url=BASE_URL))

    assert "demo mode" in caplog.text


def test_derive_identity_from_private_key():
    account = derive_identity(TEST_PRIVATE_KEY)

    assert account.address == TEST_ADDRESS


def test_derive_identity_rejects_garbage():
    with pytest.raises(Exception):
        derive_identity("0xnot-hex")


def test_probe_with_real_wallet():
    settings = Settings(private_key=TEST_PRIVATE_KEY, resource_server_url=BASE_URL)

    capability = probe(settings)

    assert capability.payment_enabled is True
    assert capability.client.payment_transport is True
    assert capability.address == TEST_ADDRESS
