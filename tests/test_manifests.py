from pathlib import Path

import pytest

from steam_locator.errors import ManifestParseError
from steam_locator.libraries import Library
from steam_locator.manifests import AppRecord, is_manifest_name, parse_manifest, scan_library

from conftest import write_manifest


def manifest_text(**fields):
    lines = ['"AppState"', '{']
    lines += [f'\t"{key}"\t\t"{value}"' for key, value in fields.items()]
    lines.append('}')
    return "\n".join(lines) + "\n"


MANIFEST = Path("appmanifest_440.acf")


class TestParseManifest:
    def test_valid(self):
        text = manifest_text(appid="440", name="Team Fortress 2", installdir="Team Fortress 2")

        assert parse_manifest(text, MANIFEST, 3) == (440, AppRecord("Team Fortress 2", "Team Fortress 2", 3))

    def test_appid_zero(self):
        text = manifest_text(appid="0", name="Zero", installdir="zero")

        assert parse_manifest(text, MANIFEST, 0) == (0, AppRecord("Zero", "zero", 0))

    def test_key_case_ignored(self):
        text = manifest_text(AppID="620", Name="Portal 2", InstallDir="Portal 2")

        assert parse_manifest(text, MANIFEST, 0) == (620, AppRecord("Portal 2", "Portal 2", 0))

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": "No id", "installdir": "noid"},
            {"appid": "10", "installdir": "noname"},
            {"appid": "10", "name": "No dir"},
            {"appid": "10", "name": "", "installdir": "empty"},
            {"appid": "", "name": "Empty id", "installdir": "empty"},
            {"appid": "ten", "name": "Words", "installdir": "words"},
            {"appid": "-10", "name": "Negative", "installdir": "negative"},
            {"appid": "4294967296", "name": "Too big", "installdir": "big"},
        ]
    )
    def test_invalid_fields(self, fields):
        assert parse_manifest(manifest_text(**fields), MANIFEST, 0) is None

    def test_no_app_state(self):
        assert parse_manifest('"UserConfig"\n{\n\t"name"\t\t"x"\n}\n', MANIFEST, 0) is None

    def test_empty(self):
        assert parse_manifest("", MANIFEST, 0) is None

    def test_corrupted(self):
        with pytest.raises(ManifestParseError) as exc:
            parse_manifest('"AppState"\n{\n\t"appid"\t\t"10"\n', MANIFEST, 0)

        assert exc.value.path == MANIFEST


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("appmanifest_440.acf", True),
        ("appmanifest_.acf", True),
        ("appmanifest_440.acf.tmp", False),
        ("libraryfolders.vdf", False),
        ("workshop_appmanifest_440.acf", False),
    ]
)
def test_is_manifest_name(filename, expected):
    assert is_manifest_name(filename) is expected


class TestScanLibrary:
    def test_scan(self, tmp_path):
        write_manifest(tmp_path, 440, "Team Fortress 2", "Team Fortress 2")
        write_manifest(tmp_path, 220, "Half-Life 2", "Half-Life 2", install=False)
        (tmp_path / "steamapps" / "libraryfolders.vdf").write_text('"libraryfolders"\n{\n}\n')
        (tmp_path / "steamapps" / "appmanifest_1.acf.bak").write_text("garbage")

        found = dict(scan_library(Library(2, tmp_path)))

        assert found == {
            220: AppRecord("Half-Life 2", "Half-Life 2", 2),
            440: AppRecord("Team Fortress 2", "Team Fortress 2", 2),
        }

    def test_missing_library(self, tmp_path):
        assert list(scan_library(Library(0, tmp_path / "nope"))) == []

    def test_unreadable_manifest_skipped(self, tmp_path):
        write_manifest(tmp_path, 440, "Team Fortress 2", "Team Fortress 2")
        (tmp_path / "steamapps" / "appmanifest_1.acf").write_bytes(bytes([255]))
        (tmp_path / "steamapps" / "appmanifest_2.acf").mkdir()

        assert [appid for appid, _ in scan_library(Library(0, tmp_path))] == [440]

    def test_broken_manifest_raises(self, tmp_path):
        write_manifest(tmp_path, 440, "Team Fortress 2", "Team Fortress 2")
        (tmp_path / "steamapps" / "appmanifest_1.acf").write_text("corrupted")

        with pytest.raises(ManifestParseError):
            list(scan_library(Library(0, tmp_path)))

    def test_broken_manifest_skipped(self, tmp_path):
        write_manifest(tmp_path, 440, "Team Fortress 2", "Team Fortress 2")
        (tmp_path / "steamapps" / "appmanifest_1.acf").write_text("corrupted")

        found = list(scan_library(Library(0, tmp_path), skip_broken=True))

        assert [appid for appid, _ in found] == [440]
