import pytest

from teams_push_notify.config import ActionInputs, ConfigError, get_input, load_inputs
from teams_push_notify.utils import parse_bool, split_multiline


def test_get_input_hyphen_and_underscore():
    assert get_input("webhook-url", {"INPUT_WEBHOOK-URL": " https://a "}) == "https://a"
    assert get_input("webhook-url", {"INPUT_WEBHOOK_URL": "https://b"}) == "https://b"
    assert get_input("webhook-url", {}) == ""


def test_split_multiline_keeps_interior_blanks():
    assert split_multiline("Title1\n\nTitle3\n") == ["Title1", "", "Title3"]
    assert split_multiline("") == []
    assert split_multiline("   \n") == []


def test_parse_bool_only_true():
    assert parse_bool("true")
    assert parse_bool("TRUE")
    assert not parse_bool("yes")
    assert not parse_bool("")
    assert not parse_bool(None)


def test_load_inputs_from_env():
    env = {
        "INPUT_WEBHOOK-URL": "https://dummy.url",
        "INPUT_MESSAGE1": "hello",
        "INPUT_ACTION-TITLES": "Docs\nSite",
        "INPUT_ACTION-URLS": "https://docs\nhttps://site",
        "INPUT_VISIBLE-CHANGED-FILES": "true",
    }
    inputs = load_inputs(env=env)
    assert inputs.webhook_url == "https://dummy.url"
    assert inputs.message1 == "hello"
    assert inputs.message2 == ""
    assert inputs.action_titles == ["Docs", "Site"]
    assert inputs.action_urls == ["https://docs", "https://site"]
    assert inputs.visible_changed_files is True
    assert inputs.template is None


def test_malformed_flag_degrades_to_false():
    inputs = load_inputs(env={"INPUT_VISIBLE-CHANGED-FILES": "maybe"})
    assert inputs.visible_changed_files is False


def test_precedence_cli_env_file(tmp_path):
    config = tmp_path / "notify.yml"
    config.write_text(
        "webhook-url: https://from-file\nmessage1: file message\nmessage2: file footer\naction-titles: [A, B]\n",
        encoding="utf-8",
    )
    env = {"INPUT_MESSAGE1": "env message", "INPUT_MESSAGE2": "env footer"}
    inputs = load_inputs(overrides={"message2": "cli footer"}, config_file=str(config), env=env)
    assert inputs.webhook_url == "https://from-file"
    assert inputs.message1 == "env message"
    assert inputs.message2 == "cli footer"
    assert inputs.action_titles == ["A", "B"]
    assert inputs.config_path == config


def test_config_file_from_env_variable(tmp_path):
    config = tmp_path / "notify.yml"
    config.write_text("template: card.json\n", encoding="utf-8")
    inputs = load_inputs(env={"TEAMS_PUSH_NOTIFY_CONFIG": str(config)})
    assert inputs.template == "card.json"


def test_invalid_yaml(tmp_path):
    config = tmp_path / "notify.yml"
    config.write_text("message1: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_inputs(config_file=str(config), env={})


def test_non_mapping_config(tmp_path):
    config = tmp_path / "notify.yml"
    config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_inputs(config_file=str(config), env={})


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        load_inputs(config_file=str(tmp_path / "missing.yml"), env={})


def test_redacted_masks_secrets():
    data = ActionInputs(token="secret", webhook_url="https://hook", message1="hi").redacted()
    assert data["token"] == "***"
    assert data["webhook_url"] == "***"
    assert data["message1"] == "hi"
    assert "config_path" not in data
