"""
Shared test fixtures and configuration.
"""

import pytest
import os
import sys

# Add the parent directory to the path so we can import the awsswitch package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

LIVE_CONFIG = "[default]\nregion = us-east-1\n"
LIVE_CREDENTIALS = "[default]\naws_access_key_id = OLDKEY\naws_secret_access_key = OLDSECRET\n"


class ProfileFactory:
    """Creates profile directories inside a store root."""

    def __init__(self, root):
        self.root = root

    def create(self, name, config=None, credentials=None):
        """
        Create a profile directory.

        Args:
            name: Profile directory name
            config: Text of the config file, or None to leave it out
            credentials: Text of the credentials file, or None to leave it out

        Returns:
            Path of the profile directory
        """
        path = self.root / name
        path.mkdir(parents=True)
        if config is not None:
            (path / "config").write_bytes(config.encode())
        if credentials is not None:
            (path / "credentials").write_bytes(credentials.encode())
        return path


@pytest.fixture
def store(tmp_path):
    """An empty profile store root."""
    root = tmp_path / "awsconfigs"
    root.mkdir()
    return root


@pytest.fixture
def profiles(store):
    """Factory for profiles inside the store fixture."""
    return ProfileFactory(store)


@pytest.fixture
def live(tmp_path):
    """A live ~/.aws directory holding a config and credentials file."""
    aws_dir = tmp_path / "aws"
    aws_dir.mkdir()
    config = aws_dir / "config"
    credentials = aws_dir / "credentials"
    config.write_bytes(LIVE_CONFIG.encode())
    credentials.write_bytes(LIVE_CREDENTIALS.encode())
    return config, credentials


@pytest.fixture
def aws_env(monkeypatch, store, live):
    """Point the store and live paths at the temporary fixtures."""
    config, credentials = live
    monkeypatch.setenv("AWSSWITCH_HOME", str(store))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(config))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(credentials))
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_DEFAULT_PROFILE", raising=False)
    return store, config, credentials
