"""Declarative catalogue of MCP tools and resources."""

from dataclasses import dataclass
from enum import Enum

from jsoncut_mcp.domain.configs import Shape


@dataclass(frozen=True)
class ToolDefinition:
    """Declarative tool definition exposed over MCP."""

    name: str
    description: str
    input_schema: dict[str, object]


@dataclass(frozen=True)
class ResourceDefinition:
    """Declarative read-only resource exposed over MCP."""

    uri: str
    name: str
    description: str
    shape: Shape
    mime_type: str = "application/json"


_CREATE_IMAGE_DESCRIPTION = """\
Create a JSON configuration for image generation based on jsoncut documentation.

Returns a complete configuration object that can be used with the validate_config \
tool or submitted directly to the jsoncut API.

**WORKFLOW:**
1. First get the schema (read resource schema://image or call get_image_schema) to \
understand all available options
2. Create the configuration with this tool
3. Call validate_config to verify the configuration (if user provided media file paths)

**Image Structure:**
- Layer-based system (rendered bottom to top, max 50 layers)
- Canvas with dimensions, background color, and output format
- Support for defaults to avoid repetition

**Layer Types:**
- image: Display uploaded images with fit modes (cover, contain, fill, inside, outside)
- text: Text with custom fonts, alignment, wrapping, and effects
- rectangle: Rectangular shapes with fill, stroke, and rounded corners
- circle: Circular and elliptical shapes
- gradient: Linear or radial color gradients

**Positioning Options:**
- x, y coordinates (pixels from top-left)
- position strings: center, top, bottom, top-left, top-right, center-left, \
center-right, bottom-left, bottom-right
- position objects: { x: 0-1, y: 0-1, originX: left|center|right, \
originY: top|center|bottom }

**Output Formats:**
- png: Lossless with transparency (default)
- jpeg: Lossy compression (use quality parameter)
- webp: Modern format with transparency and compression

**Defaults System:**
- defaults.layer: Properties for all layers
- defaults.layerType.{type}: Properties for specific layer types

File paths should be placeholders like "/image/2024-01-15/userXXX/filename.ext" or \
"/font/2024-01-15/userXXX/font.ttf"."""

_CREATE_VIDEO_DESCRIPTION = """\
Create a JSON configuration for video generation based on jsoncut documentation.

Returns a complete configuration object that can be used with the validate_config \
tool or submitted directly to the jsoncut API.

**WORKFLOW:**
1. First get the schema (read resource schema://video or call get_video_schema) to \
understand all available options
2. Create the configuration with this tool
3. Call validate_config to verify the configuration (if user provided media file paths)

**Video Structure:**
- Built using clips (segments) that play sequentially
- Each clip contains layers (rendered bottom to top)
- Supports transitions between clips
- Comprehensive audio system with multiple options

**Layer Types:**
- video, image, image-overlay: media layers with timing and Ken Burns effects
- title, subtitle, news-title, title-background, slide-in-text: text layers
- audio, detached-audio: audio tied to clips (audio requires keepSourceAudio: true)
- fill-color, linear-gradient, radial-gradient, rainbow-colors: backgrounds
- pause: Black screen pauses

**Audio Options:**
- audioFilePath + loopAudio: Background music throughout video
- audioTracks: Multiple audio tracks with independent timing
- audioNorm: Audio normalization with ducking
- keepSourceAudio: Keep audio from video layers

**Transitions:** 75+ transition effects including fade, wipe, circle, cube, glitch, \
zoom, etc.

File paths should be placeholders like "/input/userXXX/filename.ext"."""

_VALIDATE_DESCRIPTION = """\
Validate a job configuration against the jsoncut API.

This tool sends the configuration to the API's validation endpoint to check:
- Schema compliance
- Resource availability
- Estimated token cost
- Any configuration errors

**WHEN TO USE:**
- ONLY call this tool if the user has provided actual media file paths
- DO NOT validate configurations with placeholder paths like \
"/image/2024-01-15/userXXX/..."
- Always call this after creating a configuration when real file paths are available"""

_GET_SCHEMA_DESCRIPTION = """\
Get the complete JSON schema for {shape} generation.

Returns the full JSON Schema document that defines all possible configuration \
options for {shape} generation jobs.

**NOTE:** This schema is also available as a resource at schema://{shape} which \
can be read directly without a tool call.

**IMPORTANT: Get this schema FIRST when creating {shape} configurations.**"""

_EMPTY_SCHEMA: dict[str, object] = {"type": "object", "properties": {}}


class Operation(Enum):
    """Tools exposed by the registry (single source of truth)."""

    CREATE_IMAGE_CONFIG = ToolDefinition(
        name="create_image_config",
        description=_CREATE_IMAGE_DESCRIPTION,
        input_schema={
            "type": "object",
            "properties": {
                "width": {
                    "type": "number",
                    "description": "Canvas width in pixels (max 4096px)",
                    "default": 1920,
                },
                "height": {
                    "type": "number",
                    "description": "Canvas height in pixels (max 4096px)",
                    "default": 1080,
                },
                "backgroundColor": {
                    "type": "string",
                    "description": "Background color (hex, rgb, or named). "
                    "Default: transparent",
                },
                "format": {
                    "type": "string",
                    "description": "Output format: png (default), jpeg, webp",
                    "enum": ["png", "jpeg", "webp"],
                },
                "quality": {
                    "type": "number",
                    "description": "Quality for JPEG/WebP (1-100, default: 90)",
                },
                "defaults": {
                    "type": "object",
                    "description": "Default properties for layers",
                    "properties": {
                        "layer": {"type": "object"},
                        "layerType": {"type": "object"},
                    },
                },
                "layers": {
                    "type": "array",
                    "description": "Array of layer objects (max 50)",
                    "items": {"type": "object"},
                },
            },
            "required": ["layers"],
        },
    )
    CREATE_VIDEO_CONFIG = ToolDefinition(
        name="create_video_config",
        description=_CREATE_VIDEO_DESCRIPTION,
        input_schema={
            "type": "object",
            "properties": {
                "width": {
                    "type": "number",
                    "description": "Width in pixels (default: 1280)",
                    "default": 1280,
                },
                "height": {
                    "type": "number",
                    "description": "Height in pixels (default: 720)",
                    "default": 720,
                },
                "fps": {
                    "type": "number",
                    "description": "Frames per second (24, 25, 30, 50, 60, 120)",
                    "enum": [24, 25, 30, 50, 60, 120],
                    "default": 25,
                },
                "format": {
                    "type": "string",
                    "description": "Output format: mp4 or mov",
                    "enum": ["mp4", "mov"],
                    "default": "mp4",
                },
                "fast": {
                    "type": "boolean",
                    "description": "Enable fast processing mode (for preview)",
                },
                "audioFilePath": {
                    "type": "string",
                    "description": "Path to background audio file",
                },
                "loopAudio": {
                    "type": "boolean",
                    "description": "Loop background audio if shorter than video",
                },
                "outputVolume": {
                    "type": "number",
                    "description": "Final output volume (0-1)",
                },
                "keepSourceAudio": {
                    "type": "boolean",
                    "description": "Keep audio from video layers",
                },
                "clipsAudioVolume": {
                    "type": "number",
                    "description": "Volume for audio from clips relative to tracks",
                },
                "audioTracks": {
                    "type": "array",
                    "description": "Multiple audio tracks with independent timing",
                    "items": {"type": "object"},
                },
                "audioNorm": {
                    "type": "object",
                    "description": "Audio normalization with ducking",
                },
                "defaults": {
                    "type": "object",
                    "description": "Default properties for clips and layers",
                },
                "clips": {
                    "type": "array",
                    "description": "Array of clip objects with layers, "
                    "duration and transition",
                    "items": {"type": "object"},
                },
            },
            "required": ["clips"],
        },
    )
    VALIDATE_CONFIG = ToolDefinition(
        name="validate_config",
        description=_VALIDATE_DESCRIPTION,
        input_schema={
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "description": "Job type: image or video",
                    "enum": ["image", "video"],
                },
                "config": {
                    "type": ["object", "string"],
                    "description": "The configuration object to validate "
                    "(from create_image_config or create_video_config)",
                },
                "apiKey": {
                    "type": "string",
                    "description": "API key (optional if the session or "
                    "JSONCUT_API_KEY provides one)",
                },
            },
            "required": ["type", "config"],
        },
    )
    GET_IMAGE_SCHEMA = ToolDefinition(
        name="get_image_schema",
        description=_GET_SCHEMA_DESCRIPTION.format(shape="image"),
        input_schema=_EMPTY_SCHEMA,
    )
    GET_VIDEO_SCHEMA = ToolDefinition(
        name="get_video_schema",
        description=_GET_SCHEMA_DESCRIPTION.format(shape="video"),
        input_schema=_EMPTY_SCHEMA,
    )


SCHEMA_RESOURCES = (
    ResourceDefinition(
        uri="schema://image",
        name="Image Generation Schema",
        description="Complete JSON schema for image generation configurations",
        shape=Shape.IMAGE,
    ),
    ResourceDefinition(
        uri="schema://video",
        name="Video Generation Schema",
        description="Complete JSON schema for video generation configurations",
        shape=Shape.VIDEO,
    ),
)


def tool_definitions() -> list[ToolDefinition]:
    """Return every tool definition in declaration order."""
    return [entry.value for entry in Operation]
