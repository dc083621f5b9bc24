from chat_core.config.settings import Settings


def test_yaml_config_file(tmp_path, monkeypatch):
    cfg = tmp_path / "widget.yaml"
    cfg.write_text("config_code: CZ_ACCOUNTING\nscroll_threshold: 50\napi_url: https://chat.example.com/\n", encoding="utf-8")
    monkeypatch.setenv("CHAT_CONFIG_FILE", str(cfg))
    monkeypatch.delenv("CHAT_CONFIG_CODE", raising=False)

    s = Settings()

    assert s.config_code == "CZ_ACCOUNTING"
    assert s.scroll_threshold == 50
    assert s.api_url == "https://chat.example.com"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "widget.yaml"
    cfg.write_text("config_code: FROM_YAML\n", encoding="utf-8")
    monkeypatch.setenv("CHAT_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("CHAT_CONFIG_CODE", "FROM_ENV")

    assert Settings().config_code == "FROM_ENV"


def test_defaults():
    s = Settings(_env_file=None)
    assert s.http_timeout is None or s.http_timeout > 0
    assert Settings(config_code="").config_code == "DEFAULT"
