"""Configuration builder for image and video jobs."""

from collections.abc import Mapping
from dataclasses import dataclass

from jsoncut_mcp.domain.configs import ImageConfigFields, Shape, VideoConfigFields

IMAGE_DEFAULT_WIDTH = 1920
IMAGE_DEFAULT_HEIGHT = 1080
VIDEO_DEFAULT_WIDTH = 1280
VIDEO_DEFAULT_HEIGHT = 720
VIDEO_DEFAULT_FPS = 25
VIDEO_DEFAULT_FORMAT = "mp4"


@dataclass
class ConfigBuilder:
    """Builds normalized configuration objects from caller fields.

    Values are never checked against the schema; the remote validator does
    that. Unrecognized fields are carried through unchanged.
    """

    def build(self, shape: Shape, fields: Mapping[str, object]) -> dict[str, object]:
        """Build a configuration object for the given shape."""
        if shape is Shape.IMAGE:
            return build_image_config(ImageConfigFields.from_arguments(fields))
        return build_video_config(VideoConfigFields.from_arguments(fields))


def build_image_config(fields: ImageConfigFields) -> dict[str, object]:
    """Build an image configuration with canvas defaults applied."""
    config: dict[str, object] = {
        "width": _or_default(fields.width, IMAGE_DEFAULT_WIDTH),
        "height": _or_default(fields.height, IMAGE_DEFAULT_HEIGHT),
        "layers": _or_default(fields.layers, []),
    }
    _copy_present(config, "backgroundColor", fields.background_color)
    _copy_present(config, "format", fields.format)
    _copy_present(config, "quality", fields.quality)
    _copy_present(config, "defaults", fields.defaults)
    config.update(fields.extra)
    return config


def build_video_config(fields: VideoConfigFields) -> dict[str, object]:
    """Build a video configuration with output defaults applied."""
    config: dict[str, object] = {
        "width": _or_default(fields.width, VIDEO_DEFAULT_WIDTH),
        "height": _or_default(fields.height, VIDEO_DEFAULT_HEIGHT),
        "fps": _or_default(fields.fps, VIDEO_DEFAULT_FPS),
        "format": _or_default(fields.format, VIDEO_DEFAULT_FORMAT),
        "clips": _or_default(fields.clips, []),
    }
    _copy_present(config, "fast", fields.fast)
    if fields.audio_file_path:
        config["audioFilePath"] = fields.audio_file_path
    _copy_present(config, "loopAudio", fields.loop_audio)
    _copy_present(config, "outputVolume", fields.output_volume)
    _copy_present(config, "keepSourceAudio", fields.keep_source_audio)
    _copy_present(config, "clipsAudioVolume", fields.clips_audio_volume)
    if isinstance(fields.audio_tracks, list) and fields.audio_tracks:
        config["audioTracks"] = fields.audio_tracks
    if fields.audio_norm:
        config["audioNorm"] = fields.audio_norm
    if fields.defaults:
        config["defaults"] = fields.defaults
    config.update(fields.extra)
    return config


def _or_default(value: object | None, default: object) -> object:
    return default if value is None else value


def _copy_present(config: dict[str, object], key: str, value: object | None) -> None:
    if value is not None:
        config[key] = value
