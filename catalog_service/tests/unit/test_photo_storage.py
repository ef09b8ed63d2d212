import pytest

from catalog_service.app.services.photo_storage import LocalPhotoStorage


@pytest.mark.asyncio
async def test_remove_existing_photo(tmp_path):
    photo = tmp_path / "shoe.png"
    photo.write_bytes(b"\x89PNG")
    storage = LocalPhotoStorage(str(tmp_path))

    assert await storage.remove("shoe.png") is True
    assert not photo.exists()


@pytest.mark.asyncio
async def test_remove_missing_photo_is_not_an_error(tmp_path):
    storage = LocalPhotoStorage(str(tmp_path))

    assert await storage.remove("gone.png") is False


@pytest.mark.asyncio
async def test_remove_nothing():
    assert await LocalPhotoStorage().remove(None) is False
    assert await LocalPhotoStorage().remove("") is False


@pytest.mark.asyncio
async def test_absolute_path_ignores_base_dir(tmp_path):
    photo = tmp_path / "abs.png"
    photo.write_bytes(b"data")
    storage = LocalPhotoStorage("/nonexistent-base")

    assert await storage.remove(str(photo)) is True
