"""Message chain elements that carry images, voice clips and files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from qqgroupbot.elements import _BAD_JSON, MessageElement, _optional, _require


def _first_present_equal(ours: tuple[str, ...], theirs: tuple[str, ...]) -> bool:
    """Compare by the first identifier that either side has set.

    Two elements with every identifier empty are equal.
    """
    for mine, other in zip(ours, theirs):
        if mine or other:
            return mine == other
    return True


def _none_if_empty(value: str) -> str | None:
    return value or None


@dataclass(eq=False)
class ImageMessage(MessageElement):
    """An image, identified by id, url, path or base64 data, in that order."""

    TYPE: ClassVar[str] = "Image"
    image_id: str = ""
    url: str = ""
    path: str = ""
    base64: str = ""

    def _keys(self) -> tuple[str, ...]:
        return (self.image_id, self.url, self.path, self.base64)

    def __eq__(self, other):
        if not isinstance(other, ImageMessage):
            return NotImplemented
        return _first_present_equal(self._keys(), other._keys())

    __hash__ = None

    @classmethod
    def _from_fields(cls, data):
        return cls(
            image_id=_optional(data, "imageId", str, ""),
            url=_optional(data, "url", str, ""),
            path=_optional(data, "path", str, ""),
            base64=_optional(data, "base64", str, ""),
        )

    def _payload(self):
        return {
            "imageId": _none_if_empty(self.image_id),
            "url": _none_if_empty(self.url),
            "path": _none_if_empty(self.path),
            "base64": _none_if_empty(self.base64),
        }


@dataclass(eq=False)
class FlashImageMessage(ImageMessage):
    """An image that can be viewed only once."""

    TYPE: ClassVar[str] = "FlashImage"


@dataclass(eq=False)
class VoiceMessage(MessageElement):
    """A voice clip, identified by id, url, path or base64 data, in that order."""

    TYPE: ClassVar[str] = "Voice"
    voice_id: str = ""
    url: str = ""
    path: str = ""
    base64: str = ""
    length: int = 0

    def _keys(self) -> tuple[str, ...]:
        return (self.voice_id, self.url, self.path, self.base64)

    def __eq__(self, other):
        if not isinstance(other, VoiceMessage):
            return NotImplemented
        return _first_present_equal(self._keys(), other._keys())

    __hash__ = None

    @classmethod
    def _from_fields(cls, data):
        return cls(
            voice_id=_optional(data, "voiceId", str, ""),
            url=_optional(data, "url", str, ""),
            path=_optional(data, "path", str, ""),
            base64=_optional(data, "base64", str, ""),
            length=_optional(data, "length", int, 0),
        )

    def _payload(self):
        return {
            "voiceId": _none_if_empty(self.voice_id),
            "url": _none_if_empty(self.url),
            "path": _none_if_empty(self.path),
            "base64": _none_if_empty(self.base64),
            "length": self.length,
        }


@dataclass(eq=False)
class FileMessage(MessageElement):
    """A group file; two file elements are equal when their ids match."""

    TYPE: ClassVar[str] = "File"
    file_id: str = ""
    name: str = ""
    size: int = 0

    def __eq__(self, other):
        if not isinstance(other, FileMessage):
            return NotImplemented
        return self.file_id == other.file_id

    __hash__ = None

    @classmethod
    def _from_fields(cls, data):
        return cls(
            file_id=_require(data, "id", str),
            name=_require(data, "name", str),
            size=_require(data, "size", int),
        )

    def _payload(self):
        return {"id": self.file_id, "name": self.name, "size": self.size}


_MEDIA_TYPES: dict[str, type[MessageElement]] = {
    cls.TYPE: cls
    for cls in (ImageMessage, FlashImageMessage, VoiceMessage, FileMessage)
}


def parse_media(data):
    """Build the image, flash image, voice or file element described by ``data``."""
    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        raise ValueError(_BAD_JSON)
    media_class = _MEDIA_TYPES.get(data["type"])
    if media_class is None:
        raise ValueError(f"not a media element type: {data['type']}")
    return media_class.from_json(data)