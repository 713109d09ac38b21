import pytest

from editor_shortcuts.settings import ENV_PREFIX, CodeEditor, Settings


def test_defaults() -> None:
    settings = Settings()

    assert settings.auto_insert_list_prefix is True
    assert settings.emulate is CodeEditor.VSCODE


def test_from_mapping_parses_strings() -> None:
    settings = Settings.from_mapping({"auto_insert_list_prefix": "off", "emulate": "Sublime"})

    assert settings == Settings(auto_insert_list_prefix=False, emulate=CodeEditor.SUBLIME)


@pytest.mark.parametrize(
    "data",
    [
        {"auto_insert_list_prefix": "maybe"},
        {"emulate": "notepad"},
        {"unknown_option": True},
    ],
)
def test_from_mapping_rejects_bad_input(data: dict) -> None:
    with pytest.raises(ValueError):
        Settings.from_mapping(data)


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(f"{ENV_PREFIX}AUTO_INSERT_LIST_PREFIX", "0")
    monkeypatch.setenv(f"{ENV_PREFIX}EMULATE", "sublime")

    settings = Settings.from_env()

    assert settings.auto_insert_list_prefix is False
    assert settings.emulate is CodeEditor.SUBLIME


def test_from_env_with_explicit_mapping_ignores_process_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(f"{ENV_PREFIX}EMULATE", "sublime")

    assert Settings.from_env({}) == Settings()


def test_replace_returns_a_copy() -> None:
    settings = Settings()
    updated = settings.replace(emulate=CodeEditor.SUBLIME)

    assert updated.emulate is CodeEditor.SUBLIME
    assert settings.emulate is CodeEditor.VSCODE
