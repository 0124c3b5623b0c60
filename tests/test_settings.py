import pytest

from scriptcuro.core.settings import ConverterSettings, load_settings


def test_defaults_without_file():
    assert load_settings(None) == ConverterSettings()


def test_yaml_overrides(tmp_path):
    config = tmp_path / "scriptcuro.yaml"
    config.write_text(
        "spark_app_name: NightlyBatch\n"
        "dataframe_name: events\n"
        "csv_header: false\n"
        "unsupported_commands:\n"
        "  - awk\n"
        "  - sed\n"
    )
    settings = load_settings(config)
    assert settings.spark_app_name == "NightlyBatch"
    assert settings.dataframe_name == "events"
    assert settings.csv_header is False
    assert settings.unsupported_commands == ("awk", "sed")
    assert settings.session_name == "spark"


def test_single_command_and_unknown_keys(tmp_path, caplog):
    config = tmp_path / "scriptcuro.yaml"
    config.write_text("unsupported_commands: perl\ncolour: blue\n")
    settings = load_settings(str(config))
    assert settings.unsupported_commands == ("perl",)
    assert "colour" in caplog.text


def test_empty_file_gives_defaults(tmp_path):
    config = tmp_path / "empty.yaml"
    config.write_text("")
    assert load_settings(config) == ConverterSettings()


def test_missing_file_raises(tmp_path):
    with pytest.raises(RuntimeError):
        load_settings(tmp_path / "nope.yaml")


@pytest.mark.parametrize("content", ["- a\n- b\n", "key: [unclosed\n"])
def test_bad_yaml_raises(tmp_path, content):
    config = tmp_path / "bad.yaml"
    config.write_text(content)
    with pytest.raises(RuntimeError):
        load_settings(config)


@pytest.mark.parametrize("content", [
    "unsupported_commands: 5\n",
    "unsupported_commands: {awk: true}\n",
    "unsupported_commands: [awk, 3]\n",
    'csv_header: "false"\n',
    "csv_header: 0\n",
    "dataframe_name: [a, b]\n",
    "spark_app_name:\n",
])
def test_wrong_value_types_raise(tmp_path, content):
    config = tmp_path / "typed.yaml"
    config.write_text(content)
    with pytest.raises(RuntimeError, match="must be"):
        load_settings(config)


def test_null_command_list_disables_unsupported_rule(tmp_path):
    config = tmp_path / "none.yaml"
    config.write_text("unsupported_commands:\n")
    assert load_settings(config).unsupported_commands == ()
