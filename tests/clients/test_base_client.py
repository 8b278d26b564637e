import pytest
from pydantic import ValidationError

from bbscred.bbs.ciphersuites import BLS12381_SHA256, BLS12381_SHAKE256
from bbscred.clients.base_client import BaseClient
from bbscred.config import BBSConfig


# --- Tests for __init__ -----------------------------------------------------

def test_default_config():
    """Without arguments the client uses BBSConfig defaults"""
    client = BaseClient()
    assert client.ciphersuite is BLS12381_SHAKE256
    assert client.header == b""


def test_shared_config_is_kept():
    config = BBSConfig(ciphersuite="BLS12381_SHA256", header="beef")
    client = BaseClient(config=config)
    assert client.config is config
    assert client.ciphersuite is BLS12381_SHA256
    assert client.header == b"\xbe\xef"


def test_overrides_take_precedence():
    """Keyword overrides replace config fields; None values are ignored"""
    config = BBSConfig(ciphersuite="BLS12381_SHA256", issuer_name="Base")
    client = BaseClient(config=config, ciphersuite="BLS12381_SHAKE256", issuer_name=None)
    assert client.ciphersuite is BLS12381_SHAKE256
    assert client.config.issuer_name == "Base"
    assert config.ciphersuite == "BLS12381_SHA256"


def test_invalid_override_raises():
    with pytest.raises(ValidationError):
        BaseClient(ciphersuite="BLS12381_UNKNOWN")
