import json

import pytest

from hashtab.settings import Settings, SettingsStore, rgb


def test_rgb_packing():
    assert rgb(1, 2, 3) == 0x030201


def test_rgb_rejects_out_of_range():
    with pytest.raises(ValueError):
        rgb(256, 0, 0)


def test_defaults():
    settings = Settings(SettingsStore())
    assert settings.display_uppercase is True
    assert settings.look_for_sumfiles is False
    assert settings.sumfile_unix_endings is True
    assert settings.virustotal_tos is False
    assert settings.error_bg_enabled is False


def test_default_colors():
    settings = Settings(SettingsStore())
    assert settings.match_bg_color == rgb(45, 170, 23)
    assert settings.mismatch_bg_color == rgb(230, 55, 23)
    assert settings.insecure_bg_color == rgb(170, 82, 23)
    assert settings.error_fg_color == rgb(255, 55, 23)


def test_set_persists_to_store():
    store = SettingsStore()
    Settings(store).set("look_for_sumfiles", True)
    assert store.get("LookForSumfiles", 0) == 1
    assert Settings(store).look_for_sumfiles is True


def test_set_color_round_trip():
    store = SettingsStore()
    color = rgb(10, 20, 30)
    Settings(store).set("match_fg_color", color)
    assert Settings(store).match_fg_color == color


def test_assignment_does_not_persist():
    store = SettingsStore()
    settings = Settings(store)
    settings.display_uppercase = False
    assert Settings(store).display_uppercase is True


def test_unknown_setting():
    with pytest.raises(KeyError):
        Settings(SettingsStore()).set("no_such_setting", True)


def test_algorithm_defaults():
    settings = Settings(SettingsStore())
    assert settings.is_algorithm_enabled("MD5") is True
    assert settings.is_algorithm_enabled("SHA-512") is True
    assert settings.is_algorithm_enabled("CRC32") is False


def test_set_algorithm_persists():
    store = SettingsStore()
    Settings(store).set_algorithm("CRC32", True)
    Settings(store).set_algorithm("MD5", False)
    reloaded = Settings(store)
    assert reloaded.is_algorithm_enabled("CRC32") is True
    assert reloaded.is_algorithm_enabled("MD5") is False


def test_store_file_persistence(tmp_path):
    path = tmp_path / "conf" / "settings.json"
    Settings(SettingsStore(path)).set("sumfile_banner", False)
    assert path.exists()
    assert Settings(SettingsStore(path)).sumfile_banner is False


def test_store_wrong_type_falls_back_to_default(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"DisplayUppercase": "no", "SumfileLF": 0}))
    settings = Settings(SettingsStore(path))
    assert settings.display_uppercase is True
    assert settings.sumfile_unix_endings is False


def test_store_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert SettingsStore(path).get("Anything", 7) == 7


def test_store_rejects_out_of_range():
    store = SettingsStore()
    with pytest.raises(ValueError):
        store.set("Key", -1)
    with pytest.raises(ValueError):
        store.set("Key", 1 << 32)


def test_store_get_set():
    store = SettingsStore()
    assert store.get("Key", 5) == 5
    store.set("Key", 9)
    assert store.get("Key", 5) == 9