"""Shared fixtures"""
import pytest

from spotcheck.services import MediaEncoder, PreviewStore


@pytest.fixture
def preview_store(tmp_path):
    """PreviewStore in a temp directory"""
    return PreviewStore(tmp_path / "previews")


@pytest.fixture
def encoder(preview_store):
    return MediaEncoder(preview_store)
