import pytest
from unittest.mock import patch
from cloudinary.exceptions import Error as CloudinaryError
from estatehub.core.exceptions import MediaError
from estatehub.modules.media.store import CloudinaryMediaStore, MediaKind


def make_store(**overrides):
    options = {
        "cloud_name": "demo",
        "api_key": "key123",
        "api_secret": "secret456",
    }
    options.update(overrides)
    return CloudinaryMediaStore(**options)


def uploaded(public_id):
    return {
        "secure_url": f"https://res.cloudinary.test/demo/{public_id}.jpg",
        "public_id": public_id,
    }


class TestCloudinaryConfig:
    """Test cases for credential handling"""

    def test_configured(self):
        assert make_store().configured
        assert not make_store(api_secret="").configured


class TestCloudinaryUpload:
    """Test cases for uploads through a patched Cloudinary SDK"""

    @pytest.mark.asyncio
    async def test_upload_image(self):
        with patch("cloudinary.uploader.upload", return_value=uploaded("properties/images/abc")) as upload:
            handle = await make_store().upload_image(b"jpeg-bytes")

        assert handle.url == "https://res.cloudinary.test/demo/properties/images/abc.jpg"
        assert handle.public_id == "properties/images/abc"

        args, kwargs = upload.call_args
        assert args[0].read() == b"jpeg-bytes"
        assert kwargs["folder"] == "properties/images"
        assert kwargs["resource_type"] == "image"
        assert kwargs["transformation"] == [
            {"width": 1200, "height": 800, "crop": "limit"}, {"quality": "auto:good"}
        ]
        assert kwargs["cloud_name"] == "demo"
        assert kwargs["api_key"] == "key123"
        assert kwargs["api_secret"] == "secret456"

    @pytest.mark.asyncio
    async def test_upload_video_options(self):
        with patch("cloudinary.uploader.upload", return_value=uploaded("properties/videos/a")) as upload:
            await make_store().upload_video(b"mp4-bytes")

        kwargs = upload.call_args.kwargs
        assert kwargs["folder"] == "properties/videos"
        assert kwargs["resource_type"] == "video"
        assert kwargs["transformation"][0] == {"width": 1280, "height": 720, "crop": "limit"}

    @pytest.mark.asyncio
    async def test_upload_sdk_error(self):
        with patch("cloudinary.uploader.upload", side_effect=CloudinaryError("Invalid image file")):
            with pytest.raises(MediaError) as exc_info:
                await make_store().upload_image(b"broken")

        assert exc_info.value.message == "Image upload failed"
        assert exc_info.value.detail == "Invalid image file"

    @pytest.mark.asyncio
    async def test_upload_missing_fields(self):
        with patch("cloudinary.uploader.upload", return_value={"public_id": "properties/images/x"}):
            with pytest.raises(MediaError):
                await make_store().upload_image(b"jpeg-bytes")

    @pytest.mark.asyncio
    async def test_upload_not_configured(self):
        with patch("cloudinary.uploader.upload") as upload:
            with pytest.raises(MediaError) as exc_info:
                await make_store(cloud_name="").upload_image(b"jpeg-bytes")

        assert exc_info.value.message == "Media storage is not configured"
        upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_images_releases_partial_batch(self):
        """One failed upload in a batch releases the images that succeeded"""
        results = [
            uploaded("properties/images/1"),
            CloudinaryError("boom"),
            uploaded("properties/images/3"),
        ]

        with patch("cloudinary.uploader.upload", side_effect=results) as upload, \
                patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as destroy:
            with pytest.raises(MediaError):
                await make_store().upload_images([b"a", b"b", b"c"])

        assert upload.call_count == 3
        released = sorted(call.args[0] for call in destroy.call_args_list)
        assert released == ["properties/images/1", "properties/images/3"]


class TestCloudinaryDelete:
    """Test cases for best-effort deletion"""

    @pytest.mark.asyncio
    async def test_destroy_ok(self):
        with patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as destroy:
            result = await make_store().delete_one("properties/images/abc", MediaKind.IMAGE)

        assert result.ok
        assert destroy.call_args.args == ("properties/images/abc",)
        assert destroy.call_args.kwargs["resource_type"] == "image"

    @pytest.mark.asyncio
    async def test_destroy_not_found_counts_as_deleted(self):
        with patch("cloudinary.uploader.destroy", return_value={"result": "not found"}):
            result = await make_store().delete_one("properties/videos/gone", MediaKind.VIDEO)

        assert result.ok

    @pytest.mark.asyncio
    async def test_delete_failure_returns_result(self):
        with patch("cloudinary.uploader.destroy", side_effect=CloudinaryError("connection refused")):
            result = await make_store().delete_one("properties/images/abc", MediaKind.IMAGE)

        assert not result.ok
        assert result.public_id == "properties/images/abc"
        assert result.error

    @pytest.mark.asyncio
    async def test_unexpected_destroy_result(self):
        with patch("cloudinary.uploader.destroy", return_value={"result": "error"}):
            result = await make_store().delete_one("properties/images/abc", MediaKind.IMAGE)

        assert not result.ok

    @pytest.mark.asyncio
    async def test_delete_many_skips_empty_ids(self):
        with patch("cloudinary.uploader.destroy", return_value={"result": "ok"}) as destroy:
            results = await make_store().delete_many(["a", None, "", "b"], MediaKind.IMAGE)

        assert [r.public_id for r in results] == ["a", "b"]
        assert destroy.call_count == 2
