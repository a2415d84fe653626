from core.config import SyncSettings


def test_reads_recognized_variables(monkeypatch):
    monkeypatch.setenv("CRAWLER_USER_ID", "user-1")
    monkeypatch.setenv("CRAWLER_API_KEY", "secret-key")
    monkeypatch.setenv("ALGOLIA_APP_ID", "APP")

    settings = SyncSettings(_env_file=None)

    assert settings.crawler_user_id == "user-1"
    assert settings.crawler_api_key == "secret-key"
    assert settings.algolia_app_id == "APP"
    assert settings.index_name == "logget"


def test_blank_values_count_as_unset(monkeypatch):
    monkeypatch.setenv("CRAWLER_USER_ID", "")
    monkeypatch.setenv("ALGOLIA_API_KEY", "   ")

    settings = SyncSettings(_env_file=None)

    assert settings.crawler_user_id is None
    assert settings.algolia_api_key is None


def test_standard_key_prefers_admin_variable(make_settings):
    settings = make_settings(algolia_api_key="admin", algolia_search_api_key="search")
    assert settings.standard_api_key == "admin"

    settings = make_settings(algolia_search_api_key="search")
    assert settings.standard_api_key == "search"


def test_debug_flag_accepts_any_non_negative_value(monkeypatch):
    monkeypatch.setenv("DEBUG", "*")
    assert SyncSettings(_env_file=None).debug is True

    monkeypatch.setenv("DEBUG", "0")
    assert SyncSettings(_env_file=None).debug is False


def test_values_load_from_dotenv_in_working_directory(tmp_path):
    (tmp_path / ".env").write_text(
        "CRAWLER_USER_ID=from-file\nCRAWLER_API_KEY=file-key-123\n", encoding="utf-8"
    )

    settings = SyncSettings()

    assert settings.crawler_user_id == "from-file"
    assert settings.crawler_api_key == "file-key-123"


def test_site_token_can_be_overridden(monkeypatch):
    monkeypatch.setenv("CRAWLER_SYNC_INDEX_NAME", "other-docs")

    assert SyncSettings(_env_file=None).index_name == "other-docs"


def test_dashboard_url_for_crawler(make_settings):
    settings = make_settings()

    assert settings.crawler_dashboard_url("c1") == "https://www.algolia.com/dashboard/crawlers/c1"


def test_crawler_host_is_not_read_from_environment(monkeypatch):
    monkeypatch.setenv("CRAWLER_API_HOST", "attacker.example")
    monkeypatch.setenv("CRAWLER_API_PREFIX", "/steal")
    monkeypatch.setenv("USER_AGENT", "")

    settings = SyncSettings(_env_file=None)

    assert settings.crawler_api_host == "crawler.algolia.com"
    assert settings.crawler_api_prefix == "/api/1"
    assert settings.user_agent == "crawler-sync/0.1"


def test_operator_urls_are_not_read_from_dotenv(tmp_path):
    (tmp_path / ".env").write_text(
        "DASHBOARD_URL=https://phish.example\n"
        "CRAWLER_SETTINGS_URL=https://phish.example/settings\n",
        encoding="utf-8",
    )

    settings = SyncSettings()

    assert settings.dashboard_url == "https://www.algolia.com/dashboard"
    assert settings.crawler_settings_url == "https://crawler.algolia.com/admin/user/settings/"
    assert settings.crawler_dashboard_url("c1").startswith("https://www.algolia.com/")
