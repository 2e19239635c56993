import pytest

from vim_mode.config import InputProtocol, VimModeConfig


def test_defaults_without_environment() -> None:
    config = VimModeConfig.from_env({})

    assert config == VimModeConfig()
    assert config.protocol is InputProtocol.COMMANDS
    assert config.toggle_key == "ESC"
    assert config.load_defaults is True


def test_reads_prefixed_variables() -> None:
    config = VimModeConfig.from_env(
        {
            "VIM_MODE_PROTOCOL": " Toggle ",
            "VIM_MODE_TOGGLE_KEY": "ctrl+[",
            "VIM_MODE_LOAD_DEFAULTS": "off",
        }
    )

    assert config.protocol is InputProtocol.TOGGLE
    assert config.toggle_key == "ctrl+["
    assert config.load_defaults is False


def test_unknown_protocol_is_rejected() -> None:
    with pytest.raises(ValueError, match="VIM_MODE_PROTOCOL"):
        VimModeConfig.from_env({"VIM_MODE_PROTOCOL": "keystrokes"})


def test_bad_flag_is_rejected() -> None:
    with pytest.raises(ValueError, match="VIM_MODE_LOAD_DEFAULTS"):
        VimModeConfig.from_env({"VIM_MODE_LOAD_DEFAULTS": "maybe"})


def test_protocol_accepts_plain_strings() -> None:
    config = VimModeConfig(protocol="toggle")  # type: ignore[arg-type]

    assert config.protocol is InputProtocol.TOGGLE


def test_empty_toggle_key_is_rejected() -> None:
    with pytest.raises(ValueError):
        VimModeConfig(toggle_key="")


def test_toggle_key_is_normalised_to_key_token() -> None:
    config = VimModeConfig.from_env({"VIM_MODE_TOGGLE_KEY": " Shift+CTRL+x "})

    assert config.toggle_key == "ctrl+shift+x"
    assert VimModeConfig(toggle_key="Ctrl+ESC").toggle_key == "ctrl+ESC"
