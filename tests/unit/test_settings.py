import pytest

from personal_color.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_upload_dir(self) -> None:
        s = Settings()
        assert s.upload_dir == "uploads"

    def test_default_max_file_size_is_ten_mib(self) -> None:
        s = Settings()
        assert s.max_file_size_bytes == 10485760

    def test_default_allowed_extensions(self) -> None:
        s = Settings()
        assert s.allowed_extensions == [".jpg", ".jpeg", ".png", ".gif", ".bmp"]

    def test_default_pool_sizes(self) -> None:
        s = Settings()
        assert s.analysis_max_workers == 50
        assert s.analysis_queue_capacity == 100

    def test_default_classifier_engine(self) -> None:
        s = Settings()
        assert s.classifier_engine == "placeholder"


class TestSettingsFromEnvironment:
    def test_reads_upload_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_DIR", "/data/uploads")
        assert Settings().upload_dir == "/data/uploads"

    def test_reads_allowed_extensions_as_json(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOWED_EXTENSIONS", '[".png", ".webp"]')
        assert Settings().allowed_extensions == [".png", ".webp"]

    def test_reads_max_file_size(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_FILE_SIZE_BYTES", "2048")
        assert Settings().max_file_size_bytes == 2048
