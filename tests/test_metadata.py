import json
import subprocess

import pytest
from PIL import Image

import photo_grouper.metadata.extract as extract_module
from photo_grouper import config
from photo_grouper.metadata.extract import MetadataReader

ALL = [config.EXPOSURE_BIAS, config.CAMERA_MODEL, config.DATE_TAKEN]


class Tag:
    """Mimics exifread's IfdTag: only str() is used."""
    def __init__(self, printable):
        self.printable = printable

    def __str__(self):
        return self.printable


def test_exifread_properties(monkeypatch, tmp_path):
    img = tmp_path / "IMG_0001.JPG"
    img.write_bytes(b"jpeg")
    tags = {
        'EXIF ExposureBiasValue': Tag("-2"),
        'Image Model': Tag("Canon EOS 5D Mark III "),
        'EXIF DateTimeOriginal': Tag("2015:12:31 10:00:00"),
    }
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: tags)

    props = MetadataReader().read_properties(img, ALL)

    assert props == {
        config.EXPOSURE_BIAS: "-2",
        config.CAMERA_MODEL: "Canon EOS 5D Mark III",
        config.DATE_TAKEN: "\u200e31.12.2015 10:00",
    }


def test_absent_properties_are_left_out(monkeypatch, tmp_path):
    img = tmp_path / "IMG_0001.JPG"
    img.write_bytes(b"jpeg")
    tags = {'Image Model': Tag("X100V"), 'EXIF DateTimeOriginal': Tag("0000:00:00 00:00:00")}
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: tags)

    props = MetadataReader().read_properties(img, ALL)

    assert props == {config.CAMERA_MODEL: "X100V"}


def test_exiftool_fallback(monkeypatch, tmp_path):
    img = tmp_path / "IMG_0001.JPG"
    img.write_bytes(b"jpeg")
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: {})

    def fake_check_output(cmd, **kwargs):
        assert cmd[:3] == ["exiftool", "-j", "-n"]
        return json.dumps([{"ExposureCompensation": 2, "Model": "NIKON D750",
                            "DateTimeOriginal": "2016:02:01 08:15:00"}])

    monkeypatch.setattr(subprocess, "check_output", fake_check_output)

    props = MetadataReader().read_properties(img, ALL)

    assert props == {
        config.EXPOSURE_BIAS: "2",
        config.CAMERA_MODEL: "NIKON D750",
        config.DATE_TAKEN: "\u200e01.02.2016 08:15",
    }


def test_missing_exiftool_gives_empty_mapping(monkeypatch, tmp_path):
    img = tmp_path / "IMG_0001.JPG"
    img.write_bytes(b"jpeg")
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: {})

    def missing(cmd, **kwargs):
        raise FileNotFoundError("exiftool")

    monkeypatch.setattr(subprocess, "check_output", missing)

    assert MetadataReader().read_properties(img, ALL) == {}


def test_unreadable_file_gives_empty_mapping(tmp_path):
    reader = MetadataReader(use_exiftool=False)
    assert reader.read_properties(tmp_path / "missing.jpg", ALL) == {}


def test_real_jpeg(tmp_path):
    img = tmp_path / "IMG_0042.JPG"
    exif = Image.Exif()
    exif[0x0110] = "TestCam"               # Model
    exif[0x0132] = "2020:01:02 03:04:05"   # DateTime
    Image.new("RGB", (16, 16), "white").save(img, exif=exif)

    reader = MetadataReader(use_exiftool=False)

    assert reader.read_property(img, config.CAMERA_MODEL) == "TestCam"
    assert reader.read_property(img, config.DATE_TAKEN) == "\u200e02.01.2020 03:04"
    assert reader.read_property(img, config.EXPOSURE_BIAS) is None


def test_exiftool_garbage_raises_extraction_error(monkeypatch, tmp_path):
    from photo_grouper.exceptions import MetadataExtractionError

    monkeypatch.setattr(subprocess, "check_output", lambda cmd, **kwargs: "not json")

    with pytest.raises(MetadataExtractionError):
        MetadataReader()._from_exiftool(tmp_path / "a.jpg", ALL)
