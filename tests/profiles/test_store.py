import os

import pytest
from awsswitch.errors import ProfileNotFound, StoreUnavailable
from awsswitch.profiles.store import Profile, get_profile, list_profiles, load_profiles


def test_list_profiles_only_directories(store):
    """Test that regular files in the store are not listed."""
    for name in ("a", "b", "c"):
        (store / name).mkdir()
    (store / "notes.txt").write_text("not a profile")

    names = list_profiles(store)

    assert sorted(names) == ["a", "b", "c"]
    assert "notes.txt" not in names


def test_list_profiles_empty_store(store):
    """Test listing an empty store."""
    assert list_profiles(store) == []


def test_list_profiles_missing_root(tmp_path):
    """Test that an absent root lists no profiles."""
    assert list_profiles(tmp_path / "does-not-exist") == []


def test_list_profiles_root_is_file(tmp_path):
    """Test that a root which is a regular file is reported as unavailable."""
    root = tmp_path / "awsconfigs"
    root.write_text("oops")

    with pytest.raises(StoreUnavailable) as excinfo:
        list_profiles(root)

    assert excinfo.value.step == "list profiles"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_list_profiles_skips_symlinks(store, tmp_path):
    """Test that symlinked directories are not treated as profiles."""
    (store / "real").mkdir()
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    os.symlink(str(elsewhere), str(store / "linked"))

    assert list_profiles(store) == ["real"]


def test_load_profiles(profiles, store):
    """Test loading Profile objects for every directory."""
    profiles.create("dev", config="", credentials="")
    profiles.create("prod", config="", credentials="")

    loaded = load_profiles(store)

    assert sorted(p.name for p in loaded) == ["dev", "prod"]
    assert all(p.path.parent == store for p in loaded)


def test_profile_paths(tmp_path):
    """Test the member file paths of a profile."""
    profile = Profile(tmp_path / "staging")

    assert profile.name == "staging"
    assert profile.config_path == tmp_path / "staging" / "config"
    assert profile.credentials_path == tmp_path / "staging" / "credentials"
    assert str(profile) == "staging"


def test_get_profile(profiles, store):
    """Test looking up a profile by name."""
    path = profiles.create("staging")

    profile = get_profile(store, "staging")

    assert profile == Profile(path)


@pytest.mark.parametrize("name", ["missing", "", "..", "../awsconfigs", "a/b"])
def test_get_profile_not_found(profiles, store, name):
    """Test that unknown or path-like names are rejected."""
    profiles.create("a")
    (store / "a" / "b").mkdir()

    with pytest.raises(ProfileNotFound):
        get_profile(store, name)


def test_get_profile_file_is_not_profile(store):
    """Test that a regular file in the store is not a profile."""
    (store / "notes.txt").write_text("x")

    with pytest.raises(ProfileNotFound):
        get_profile(store, "notes.txt")
