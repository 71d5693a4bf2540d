"""Config hash tests."""
from reelspin.config_hash import get_config_hash
from tests.conftest import make_settings


def test_hash_is_16_hex_chars():
    value = get_config_hash(make_settings())
    assert len(value) == 16
    assert all(c in "0123456789abcdef" for c in value)


def test_hash_stable_and_sensitive():
    assert get_config_hash(make_settings()) == get_config_hash(make_settings())
    assert get_config_hash(make_settings()) != get_config_hash(
        make_settings(available_amounts=[5, 10])
    )
