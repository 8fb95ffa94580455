"""Tests for the configuration service."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import given, settings, strategies as st

from streamers_manager.models import StreamersConfig
from streamers_manager.services import (
    ConfigParseError,
    ConfigurationError,
    ConfigurationService,
    FileSystemError,
    NoSelectionError,
    ValidationError,
    default_config,
)
from streamers_manager.services.config import WIRE_KEYS, serialize_config


# Strategies for generating valid configuration data
streamer_names = st.text(min_size=1, max_size=30)

valid_config_strategy = st.builds(
    StreamersConfig,
    downloader_command=st.text(max_size=40),
    downloader_config_path=st.text(max_size=60),
    auto_reload_config=st.booleans(),
    rate_limit_enabled=st.booleans(),
    rate_limit_seconds=st.integers(min_value=0, max_value=10**6),
    default_export_location=st.text(max_size=60),
    streamers=st.lists(streamer_names, max_size=20),
)


def write_config(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def service(tmp_path: Path) -> ConfigurationService:
    """A service whose default configuration has been saved and loaded."""
    service = ConfigurationService(base_path=tmp_path)
    service.save_config(default_config())
    service.load_config()
    return service


@given(valid_config_strategy)
@settings(deadline=None)  # File IO per example
def test_configuration_round_trip(config: StreamersConfig) -> None:
    """For any valid configuration, saving then loading preserves every field."""
    with tempfile.TemporaryDirectory() as temp_dir:
        service = ConfigurationService(config_path=Path(temp_dir) / "config.json")

        service.save_config(config)
        loaded_config = ConfigurationService(config_path=service.config_path).load_config()

        assert loaded_config == config


def test_configuration_round_trip_example(tmp_path: Path) -> None:
    """Unit test example for configuration round-trip."""
    config = StreamersConfig(
        downloader_command="yt-dlp",
        downloader_config_path="configs/yt-dlp.config",
        auto_reload_config=False,
        rate_limit_enabled=True,
        rate_limit_seconds=30,
        default_export_location="/tmp/streamers.txt",
        streamers=["alice", "bob", "alice"],
    )
    service = ConfigurationService(base_path=tmp_path)

    service.save_config(config)
    loaded_config = service.load_config()

    assert loaded_config.streamers == ["alice", "bob", "alice"]
    assert loaded_config.downloader_command == "yt-dlp"
    assert loaded_config.rate_limit_seconds == 30
    assert loaded_config.auto_reload_config is False


def test_saved_file_uses_wire_keys_in_schema_order(tmp_path: Path) -> None:
    service = ConfigurationService(base_path=tmp_path)
    service.save_config(StreamersConfig(streamers=["alice"]))

    text = service.config_path.read_text(encoding="utf-8")
    data = json.loads(text)

    assert list(data) == list(WIRE_KEYS.values())
    assert data == {
        "youtube-dl_cmd": "youtube-dl",
        "youtube-dl_config": "configs/youtube-dl.config",
        "auto_reload_config": True,
        "rate_limit": True,
        "rate_limit_time": 5,
        "default_export_location": "./list.txt",
        "streamers": ["alice"],
    }
    # Pretty-printed
    assert '\n  "streamers": [' in text


def test_default_path_is_under_configs(tmp_path: Path) -> None:
    service = ConfigurationService(base_path=tmp_path)
    assert service.config_path == tmp_path / "configs" / "config.json"


class TestLoadErrors:
    """Load failures are reported as file system or parse errors."""

    def test_missing_file_raises_file_system_error(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        with pytest.raises(FileSystemError):
            service.load_config()
        assert not service.is_loaded

    def test_malformed_json_raises_parse_error(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        service.config_path.parent.mkdir(parents=True)
        service.config_path.write_text('{"streamers": [', encoding="utf-8")

        with pytest.raises(ConfigParseError):
            service.load_config()

    def test_invalid_utf8_raises_parse_error(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        service.config_path.parent.mkdir(parents=True)
        service.config_path.write_bytes(b'{"streamers": ["\xff\xfe"]}')

        with pytest.raises(ConfigParseError) as exc_info:
            service.load_config()
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
        assert not service.is_loaded

    def test_empty_file_raises_parse_error(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        service.config_path.parent.mkdir(parents=True)
        service.config_path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigParseError):
            service.load_config()

    @pytest.mark.parametrize("document", [[], "streamers", 42, None])
    def test_non_object_document_raises_parse_error(self, tmp_path: Path, document: object) -> None:
        service = ConfigurationService(base_path=tmp_path)
        write_config(service.config_path, document)

        with pytest.raises(ConfigParseError):
            service.load_config()

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("youtube-dl_cmd", 5),
            ("auto_reload_config", "yes"),
            ("rate_limit", 1),
            ("rate_limit_time", "5"),
            ("rate_limit_time", -1),
            ("rate_limit_time", True),
            ("rate_limit_time", 2.5),
            ("streamers", "alice"),
            ("streamers", ["alice", 3]),
        ],
    )
    def test_wrong_types_raise_parse_error(self, tmp_path: Path, key: str, value: object) -> None:
        service = ConfigurationService(base_path=tmp_path)
        data = json.loads(serialize_config(default_config()))
        data[key] = value
        write_config(service.config_path, data)

        with pytest.raises(ConfigParseError) as exc_info:
            service.load_config()
        assert exc_info.value.setting == key

    def test_missing_keys_take_defaults(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        write_config(service.config_path, {"streamers": ["alice"], "extra": 1})

        config = service.load_config()

        assert config == StreamersConfig(streamers=["alice"])

    def test_config_before_load_raises(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        with pytest.raises(ConfigurationError):
            _ = service.config


class TestValidation:
    """Tests for validate_config."""

    @given(valid_config_strategy)
    def test_valid_configs_are_accepted(self, config: StreamersConfig) -> None:
        result = ConfigurationService().validate_config(config)
        assert result.is_valid
        assert result.errors == []

    def test_invalid_values_are_reported(self) -> None:
        config = StreamersConfig(rate_limit_seconds=-5, streamers=["ok", 7])  # type: ignore[list-item]
        result = ConfigurationService().validate_config(config)

        assert not result.is_valid
        assert "rate_limit_seconds must be a non-negative integer" in result.errors
        assert "streamers must contain only strings" in result.errors

    def test_save_rejects_invalid_config(self, tmp_path: Path) -> None:
        service = ConfigurationService(base_path=tmp_path)
        with pytest.raises(ValidationError):
            service.save_config(StreamersConfig(rate_limit_seconds=-1))
        assert not service.config_path.exists()


class TestStreamerList:
    """Streamer list edits are ordered and persisted."""

    def test_add_then_remove(self, service: ConfigurationService) -> None:
        service.add_streamer("alice")
        service.add_streamer("bob")
        assert service.config.streamers == ["alice", "bob"]

        service.remove_streamer(0)
        assert service.config.streamers == ["bob"]

        on_disk = ConfigurationService(config_path=service.config_path).load_config()
        assert on_disk.streamers == ["bob"]

    def test_duplicates_are_kept(self, service: ConfigurationService) -> None:
        service.add_streamer("alice")
        service.add_streamer("alice")
        assert service.config.streamers == ["alice", "alice"]

    @pytest.mark.parametrize("index", [None, 0, -1, 3])
    def test_remove_from_empty_list_reports_no_selection(
        self, service: ConfigurationService, index: int | None
    ) -> None:
        before = service.config_path.read_text(encoding="utf-8")

        with pytest.raises(NoSelectionError) as exc_info:
            service.remove_streamer(index)

        assert exc_info.value.message == "No streamer selected"
        assert service.config.streamers == []
        assert service.config_path.read_text(encoding="utf-8") == before

    def test_remove_out_of_range_keeps_list(self, service: ConfigurationService) -> None:
        service.add_streamer("alice")
        with pytest.raises(NoSelectionError):
            service.remove_streamer(1)
        assert service.config.streamers == ["alice"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_names_are_rejected(self, service: ConfigurationService, name: str) -> None:
        with pytest.raises(ValidationError):
            service.add_streamer(name)
        assert service.config.streamers == []

    @given(st.lists(streamer_names.filter(str.strip), max_size=10), st.data())
    @settings(deadline=None)
    def test_add_and_remove_match_list_semantics(self, names: list[str], data: st.DataObject) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            service = ConfigurationService(base_path=Path(temp_dir))
            service.save_config(default_config())
            expected: list[str] = []

            for name in names:
                service.add_streamer(name)
                expected.append(name)

            if expected:
                index = data.draw(st.integers(min_value=0, max_value=len(expected) - 1))
                service.remove_streamer(index)
                del expected[index]

            assert service.config.streamers == expected
            assert ConfigurationService(config_path=service.config_path).load_config().streamers == expected

    def test_returned_list_cannot_change_the_store(self, service: ConfigurationService) -> None:
        service.config.streamers.append("ghost")
        assert service.config.streamers == []

        loaded = service.load_config()
        loaded.streamers.append("ghost")
        assert service.config.streamers == []

    def test_saved_list_is_copied(self, service: ConfigurationService) -> None:
        streamers = ["alice"]
        service.save_config(StreamersConfig(streamers=streamers))
        streamers.append("ghost")

        assert service.config.streamers == ["alice"]
        assert ConfigurationService(config_path=service.config_path).load_config().streamers == ["alice"]

    def test_failed_save_leaves_memory_unchanged(self, service: ConfigurationService) -> None:
        service.add_streamer("alice")
        before = service.config_path.read_text(encoding="utf-8")

        with patch.object(Path, "replace", side_effect=OSError("No space left on device")):
            with pytest.raises(FileSystemError):
                service.add_streamer("bob")

        assert service.config.streamers == ["alice"]
        assert service.config_path.read_text(encoding="utf-8") == before
        assert not service.config_path.with_suffix(".json.tmp").exists()


class TestUpdates:
    """Tests for field updates."""

    def test_set_export_location(self, service: ConfigurationService) -> None:
        service.set_export_location("/srv/list.txt")

        assert service.config.default_export_location == "/srv/list.txt"
        assert json.loads(service.config_path.read_text(encoding="utf-8"))["default_export_location"] == "/srv/list.txt"

    def test_update_config(self, service: ConfigurationService) -> None:
        service.update_config(rate_limit_enabled=False, rate_limit_seconds=60)

        assert service.config.rate_limit_enabled is False
        assert service.config.rate_limit_seconds == 60

    def test_update_unknown_field_is_rejected(self, service: ConfigurationService) -> None:
        with pytest.raises(ValidationError):
            service.update_config(bitrate=5)

    def test_update_invalid_value_is_rejected(self, service: ConfigurationService) -> None:
        with pytest.raises(ValidationError):
            service.update_config(rate_limit_seconds=-2)
        assert service.config.rate_limit_seconds == 5


class TestExportImport:
    """Tests for exporting and importing the streamer list."""

    def test_export_to_default_location(self, service: ConfigurationService, tmp_path: Path) -> None:
        service.add_streamer("alice")
        service.add_streamer("bob")

        path = service.export_streamers()

        assert path == tmp_path / "list.txt"
        assert path.read_text(encoding="utf-8") == "alice\nbob\n"

    def test_export_to_explicit_location(self, service: ConfigurationService, tmp_path: Path) -> None:
        service.add_streamer("alice")
        target = tmp_path / "out.txt"

        assert service.export_streamers(target) == target
        assert target.read_text(encoding="utf-8") == "alice\n"

    def test_export_failure_raises(self, service: ConfigurationService, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError):
            service.export_streamers(tmp_path / "missing" / "list.txt")

    def test_import_appends_names(self, service: ConfigurationService, tmp_path: Path) -> None:
        service.add_streamer("alice")
        source = tmp_path / "import.txt"
        source.write_text("bob\n\n# comment\n  carol  \n", encoding="utf-8")

        added = service.import_streamers(source)

        assert added == ["bob", "carol"]
        assert service.config.streamers == ["alice", "bob", "carol"]

    def test_import_missing_file_raises(self, service: ConfigurationService, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError):
            service.import_streamers(tmp_path / "nope.txt")
        assert service.config.streamers == []
