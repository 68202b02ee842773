from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ellipsis_meta.infra.logging_utils import LOGGER

EXTRACTION_METHOD = "static_catalog"

CAMERA = "camera"
GEOMETRY = "geometry"
CAPTURE = "capture"
GPS = "gps"
LENS = "lens"
IDENTITY = "identity"
COLOR = "color"
THUMBNAIL = "thumbnail"


@dataclass(frozen=True)
class TagSpec:
    name: str
    group: str


def _specs(group: str, names: Iterable[str]) -> List[TagSpec]:
    return [TagSpec(name=name, group=group) for name in names]


TAG_SPECS: Tuple[TagSpec, ...] = tuple(
    _specs(CAMERA, ["Make", "Model", "MakerNote", "ImageDescription", "ExifVersion", "FlashpixVersion", "DeviceSettingDescription"])
    + _specs(
        GEOMETRY,
        [
            "ImageWidth",
            "ImageLength",
            "PixelXDimension",
            "PixelYDimension",
            "Orientation",
            "XResolution",
            "YResolution",
            "ResolutionUnit",
            "BitsPerSample",
            "Compression",
            "PhotometricInterpretation",
            "SamplesPerPixel",
            "PlanarConfiguration",
            "YCbCrSubSampling",
            "YCbCrPositioning",
            "StripOffsets",
            "RowsPerStrip",
            "StripByteCounts",
            "NewSubfileType",
            "SubfileType",
            "DefaultCropSize",
            "FocalPlaneXResolution",
            "FocalPlaneYResolution",
            "FocalPlaneResolutionUnit",
            "SubjectArea",
            "SubjectLocation",
        ],
    )
    + _specs(
        CAPTURE,
        [
            "DateTime",
            "DateTimeOriginal",
            "DateTimeDigitized",
            "SubSecTime",
            "SubSecTimeOriginal",
            "SubSecTimeDigitized",
            "OffsetTime",
            "OffsetTimeOriginal",
            "OffsetTimeDigitized",
            "ExposureTime",
            "FNumber",
            "ExposureProgram",
            "SpectralSensitivity",
            "ISOSpeedRatings",
            "OECF",
            "SensitivityType",
            "StandardOutputSensitivity",
            "RecommendedExposureIndex",
            "ISOSpeed",
            "ShutterSpeedValue",
            "ApertureValue",
            "BrightnessValue",
            "ExposureBiasValue",
            "MaxApertureValue",
            "SubjectDistance",
            "MeteringMode",
            "LightSource",
            "Flash",
            "FlashEnergy",
            "FocalLength",
            "FocalLengthIn35mmFilm",
            "ExposureIndex",
            "ExposureMode",
            "WhiteBalance",
            "DigitalZoomRatio",
            "SceneCaptureType",
            "SceneType",
            "SensingMethod",
            "FileSource",
            "CustomRendered",
            "GainControl",
            "Contrast",
            "Saturation",
            "Sharpness",
            "SubjectDistanceRange",
            "SpatialFrequencyResponse",
        ],
    )
    + _specs(
        GPS,
        [
            "GPSVersionID",
            "GPSLatitudeRef",
            "GPSLatitude",
            "GPSLongitudeRef",
            "GPSLongitude",
            "GPSAltitudeRef",
            "GPSAltitude",
            "GPSTimeStamp",
            "GPSSatellites",
            "GPSStatus",
            "GPSMeasureMode",
            "GPSDOP",
            "GPSSpeedRef",
            "GPSSpeed",
            "GPSTrackRef",
            "GPSTrack",
            "GPSImgDirectionRef",
            "GPSImgDirection",
            "GPSMapDatum",
            "GPSDestLatitudeRef",
            "GPSDestLatitude",
            "GPSDestLongitudeRef",
            "GPSDestLongitude",
            "GPSDestBearingRef",
            "GPSDestBearing",
            "GPSDestDistanceRef",
            "GPSDestDistance",
            "GPSProcessingMethod",
            "GPSAreaInformation",
            "GPSDateStamp",
            "GPSDifferential",
            "GPSHPositioningError",
        ],
    )
    # EXIF 2.3 lens block
    + _specs(LENS, ["LensSpecification", "LensMake", "LensModel", "LensSerialNumber"])
    + _specs(
        IDENTITY,
        ["CameraOwnerName", "BodySerialNumber", "ImageUniqueID", "UserComment", "Artist", "Copyright", "Software", "HostComputer"],
    )
    + _specs(
        COLOR,
        [
            "ColorSpace",
            "WhitePoint",
            "PrimaryChromaticities",
            "YCbCrCoefficients",
            "ReferenceBlackWhite",
            "TransferFunction",
            "ComponentsConfiguration",
            "CompressedBitsPerPixel",
            "Gamma",
            "CFAPattern",
        ],
    )
    + _specs(THUMBNAIL, ["JPEGInterchangeFormat", "JPEGInterchangeFormatLength", "InteroperabilityIndex", "RelatedSoundFile"])
)


def _dedupe(names: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    duplicates: List[str] = []
    for name in names:
        if name in seen:
            duplicates.append(name)
            continue
        seen[name] = None
    if duplicates:
        LOGGER.warning("Duplicate tags in catalog", extra={"extra_data": {"duplicates": duplicates}})
    return list(seen)


def list_all_tags(specs: Iterable[TagSpec] = TAG_SPECS) -> List[str]:
    return _dedupe(spec.name for spec in specs)


def tags_in_group(group: str, specs: Iterable[TagSpec] = TAG_SPECS) -> List[str]:
    return _dedupe(spec.name for spec in specs if spec.group == group)
