import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from PIL import Image

from asciiconv.controllers.use_cases import ConvertImageUseCase, UploadImageUseCase
from asciiconv.errors import ImageNotFound, ImageTooLarge, InvalidConfiguration, InvalidImageData, UnsupportedFormat
from asciiconv.models.ascii_model import DetailLevel
from asciiconv.models.config_model import ConversionConfig
from asciiconv.models.image_format import ImageFormat
from asciiconv.services.image_service import ImageService
from asciiconv.services.storage_service import AsciiArtRepository, ImageRepository

from conftest import encode


class RecordingImageRepository(ImageRepository):
    def __init__(self):
        super().__init__()
        self.saved = []

    def save(self, entity):
        self.saved.append(entity.id)
        super().save(entity)


@pytest.fixture
def images():
    return RecordingImageRepository()


@pytest.fixture
def arts():
    return AsciiArtRepository()


@pytest.fixture
def upload(images):
    return UploadImageUseCase(images, max_file_size=64 * 1024)


@pytest.fixture
def convert(images, arts):
    return ConvertImageUseCase(images, arts)


def test_upload_stores_image(upload, images, solid_png):
    response = upload.execute("cat.png", "image/png", solid_png(40, 20))
    assert response.format is ImageFormat.PNG
    assert (response.width, response.height) == (40, 20)
    stored = images.find_by_id(response.image_id)
    assert stored is not None
    assert stored.original_filename == "cat.png"


def test_upload_rejects_large_payload(images, solid_png):
    data = solid_png(10, 10)
    use_case = UploadImageUseCase(images, max_file_size=len(data) - 1)
    with pytest.raises(ImageTooLarge) as info:
        use_case.execute("a.png", "image/png", data)
    assert info.value.max_size == len(data) - 1
    assert images.saved == []


def test_upload_rejects_unsupported_type(upload, solid_png):
    with pytest.raises(UnsupportedFormat):
        upload.execute("a.tiff", "image/tiff", solid_png(4, 4))


def test_upload_rejects_undecodable_bytes(upload, images):
    with pytest.raises(InvalidImageData):
        upload.execute("a.png", "image/png", b"\x89PNG not really")
    assert images.saved == []


def test_convert_stores_result(upload, convert, arts, solid_png):
    image_id = upload.execute("a.png", "image/png", solid_png(100, 100)).image_id
    response = convert.execute(image_id, ConversionConfig(width=10, detail_level=DetailLevel.LOW))

    assert (response.width, response.height) == (10, 4)
    art = arts.find_by_id(response.ascii_art_id)
    assert art is not None
    assert art.image_id == image_id
    assert art.content == response.content
    assert art.detail_level is DetailLevel.LOW


def test_convert_unknown_image(convert):
    with pytest.raises(ImageNotFound):
        convert.execute(uuid.uuid4(), ConversionConfig())


def test_convert_checks_config_first(convert):
    with pytest.raises(InvalidConfiguration):
        convert.execute(uuid.uuid4(), ConversionConfig(contrast_factor=10.0))


def test_repository_delete(upload, images, solid_png):
    image_id = upload.execute("a.png", "image/png", solid_png(4, 4)).image_id
    images.delete(image_id)
    assert images.find_by_id(image_id) is None
    images.delete(image_id)  # повторное удаление не ошибка


def test_concurrent_conversions_are_isolated(upload, convert, arts, noise_png):
    image_id = upload.execute("n.png", "image/png", noise_png(60, 40, seed=5)).image_id
    config = ConversionConfig(width=30, blur_sigma=1.5)

    with ThreadPoolExecutor(max_workers=4) as pool:
        responses = list(pool.map(lambda _: convert.execute(image_id, config), range(8)))

    assert len({r.content for r in responses}) == 1
    assert len({r.ascii_art_id for r in responses}) == 8
    assert all(arts.find_by_id(r.ascii_art_id) is not None for r in responses)


def test_upload_rejects_content_that_differs_from_declared_type(upload, images):
    data = encode(Image.new("RGB", (6, 6), color=(1, 2, 3)), fmt="BMP")
    with pytest.raises(InvalidImageData) as info:
        upload.execute("photo.png", "image/png", data)
    assert "BMP" in str(info.value)
    assert images.saved == []


def test_upload_rejects_tiff_declared_as_png(upload, images):
    data = encode(Image.new("RGB", (6, 6)), fmt="TIFF")
    with pytest.raises(InvalidImageData):
        upload.execute("scan.png", "image/png", data)
    assert images.saved == []


def test_upload_accepts_jpg_alias(upload):
    data = encode(Image.new("RGB", (12, 8), color=(200, 100, 0)), fmt="JPEG")
    response = upload.execute("a.jpg", "image/jpg", data)
    assert response.format is ImageFormat.JPEG


def test_read_file_derives_type_from_extension(tmp_path):
    image_path = tmp_path / "Photo.JPEG"
    image_path.write_bytes(b"bytes")
    other_path = tmp_path / "scan.tiff"
    other_path.write_bytes(b"bytes")

    service = ImageService()
    assert service.read_file(image_path) == ("Photo.JPEG", "image/jpeg", b"bytes")
    assert service.read_file(other_path)[1] == "application/octet-stream"
