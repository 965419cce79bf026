"""Typed configuration shapes for image and video jobs."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

from jsoncut_mcp.domain.errors import InvalidArgumentError


class Shape(StrEnum):
    """Discriminator between image and video configurations."""

    IMAGE = "image"
    VIDEO = "video"

    @classmethod
    def parse(cls, value: object) -> "Shape":
        """Return the shape named by a caller-supplied value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidArgumentError(
            f"Unsupported job type {value!r}; expected 'image' or 'video'",
            field="type",
        )


# Wire names mapped to attribute names, in output order.
_IMAGE_FIELDS = {
    "width": "width",
    "height": "height",
    "layers": "layers",
    "backgroundColor": "background_color",
    "format": "format",
    "quality": "quality",
    "defaults": "defaults",
}

_VIDEO_FIELDS = {
    "width": "width",
    "height": "height",
    "fps": "fps",
    "format": "format",
    "clips": "clips",
    "fast": "fast",
    "audioFilePath": "audio_file_path",
    "loopAudio": "loop_audio",
    "outputVolume": "output_volume",
    "keepSourceAudio": "keep_source_audio",
    "clipsAudioVolume": "clips_audio_volume",
    "audioTracks": "audio_tracks",
    "audioNorm": "audio_norm",
    "defaults": "defaults",
}

# Carried next to the object, never inside it.
_DISCRIMINATOR = "type"


@dataclass(frozen=True)
class ImageConfigFields:
    """Recognized image fields plus unrecognized extras."""

    width: object | None = None
    height: object | None = None
    layers: object | None = None
    background_color: object | None = None
    format: object | None = None
    quality: object | None = None
    defaults: object | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, object]) -> "ImageConfigFields":
        """Split caller arguments into recognized fields and extras."""
        known, extra = _split_fields(arguments, _IMAGE_FIELDS)
        return cls(**known, extra=extra)


@dataclass(frozen=True)
class VideoConfigFields:
    """Recognized video fields plus unrecognized extras."""

    width: object | None = None
    height: object | None = None
    fps: object | None = None
    format: object | None = None
    clips: object | None = None
    fast: object | None = None
    audio_file_path: object | None = None
    loop_audio: object | None = None
    output_volume: object | None = None
    keep_source_audio: object | None = None
    clips_audio_volume: object | None = None
    audio_tracks: object | None = None
    audio_norm: object | None = None
    defaults: object | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, object]) -> "VideoConfigFields":
        """Split caller arguments into recognized fields and extras."""
        known, extra = _split_fields(arguments, _VIDEO_FIELDS)
        return cls(**known, extra=extra)


def _split_fields(
    arguments: Mapping[str, object], names: dict[str, str]
) -> tuple[dict[str, object], dict[str, object]]:
    known: dict[str, object] = {}
    extra: dict[str, object] = {}
    for key, value in arguments.items():
        if key == _DISCRIMINATOR:
            continue
        attribute = names.get(key)
        if attribute is None:
            extra[key] = value
        else:
            known[attribute] = value
    return known, extra
