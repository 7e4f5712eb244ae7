"""
core/constants.py 테스트

모든 경로가 pathlib.Path 타입이고, 상수가 정상적으로 접근 가능한지 확인
"""

from decimal import Decimal
from pathlib import Path

from core.constants import MEMORY_DB, PROJECT_ROOT, Defaults, Labels, Money, Paths


class TestProjectRoot:
    """PROJECT_ROOT 테스트"""

    def test_project_root_is_path(self) -> None:
        """PROJECT_ROOT가 Path 타입인지 확인"""
        assert isinstance(PROJECT_ROOT, Path)

    def test_project_root_is_absolute(self) -> None:
        assert PROJECT_ROOT.is_absolute()

    def test_project_root_contains_core_directory(self) -> None:
        """PROJECT_ROOT에 core 디렉토리가 있는지 확인"""
        assert (PROJECT_ROOT / "core").exists()


class TestPaths:
    """Paths 테스트"""

    def test_all_paths_are_path_objects(self) -> None:
        """모든 경로가 Path 타입"""
        for value in (
            Paths.CONFIG_DIR,
            Paths.DATA_DIR,
            Paths.LOGS_DIR,
            Paths.WEB_LOGS_DIR,
            Paths.SETTINGS_FILE,
            Paths.FILE_DB,
        ):
            assert isinstance(value, Path)

    def test_settings_file_location(self) -> None:
        assert Paths.SETTINGS_FILE.parent == Paths.CONFIG_DIR
        assert Paths.SETTINGS_FILE.name == "settings.yaml"

    def test_file_db_under_data_dir(self) -> None:
        assert Paths.FILE_DB.parent == Paths.DATA_DIR


class TestDefaults:
    """Defaults 테스트"""

    def test_memory_db(self) -> None:
        assert MEMORY_DB == ":memory:"

    def test_page_limits(self) -> None:
        assert Defaults.PAGE == 1
        assert 1 <= Defaults.PAGE_LIMIT <= Defaults.MAX_PAGE_LIMIT

    def test_money_constants(self) -> None:
        assert Money.ZERO == Decimal("0")
        assert isinstance(Money.ZERO, Decimal)

    def test_removed_suffix(self) -> None:
        assert Labels.REMOVED_SUFFIX == " (archived/removed)"
