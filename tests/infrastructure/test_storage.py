"""Tests for local image storage."""

from catalog_api.infrastructure.storage import ImageStorage


class TestImageStorage:
    """Tests for saving and removing images."""

    def test_save_keeps_known_suffix_only(self, image_storage: ImageStorage) -> None:
        png = image_storage.save("Photo.PNG", b"png")
        other = image_storage.save("../../etc/passwd", b"nope")

        assert png.startswith("/media/") and png.endswith(".png")
        assert "." not in other.rsplit("/", 1)[1]
        assert len(list(image_storage.media_dir.iterdir())) == 2

    def test_delete_removes_saved_file(self, image_storage: ImageStorage) -> None:
        uri = image_storage.save("a.jpg", b"x")

        image_storage.delete(uri)
        image_storage.delete(uri)

        assert list(image_storage.media_dir.iterdir()) == []

    def test_delete_ignores_foreign_uris(self, image_storage: ImageStorage) -> None:
        uri = image_storage.save("a.jpg", b"x")

        image_storage.delete("https://cdn.example.com/a.jpg")
        image_storage.delete("/media/../secrets.txt")

        assert [p.name for p in image_storage.media_dir.iterdir()] == [uri.rsplit("/", 1)[1]]
