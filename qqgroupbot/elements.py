"""Message chain elements and their JSON form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar

_BAD_JSON = "给定的json不正确"

_REGISTRY: dict[str, type["MessageElement"]] = {}


def _require(data: dict, key: str, kind: type) -> Any:
    value = data.get(key)
    if value is None or not isinstance(value, kind) or (
        kind is int and isinstance(value, bool)
    ):
        raise ValueError(_BAD_JSON)
    return value


def _optional(data: dict, key: str, kind: type, default: Any) -> Any:
    if data.get(key) is None:
        return default
    return _require(data, key, kind)


class MessageElement:
    """Base of every element that can appear in a message chain."""

    TYPE: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("TYPE"):
            _REGISTRY[cls.TYPE] = cls

    @classmethod
    def from_json(cls, data):
        """Build an element from its JSON object, checking its type tag."""
        if not isinstance(data, dict) or not isinstance(data.get("type"), str):
            raise ValueError(_BAD_JSON)
        if cls is MessageElement:
            return parse_element(data)
        if data["type"] != cls.TYPE:
            raise ValueError(_BAD_JSON)
        return cls._from_fields(data)

    @classmethod
    def _from_fields(cls, data: dict) -> "MessageElement":
        return cls()

    def _payload(self) -> dict:
        return {}

    def to_json(self):
        """Return the JSON object for this element."""
        return {"type": self.TYPE, **self._payload()}


@dataclass
class PlainMessage(MessageElement):
    TYPE: ClassVar[str] = "Plain"
    text: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "text", str))

    def _payload(self):
        return {"text": self.text}


@dataclass
class AtMessage(MessageElement):
    TYPE: ClassVar[str] = "At"
    target: int = 0
    display: str = field(default="", compare=False)

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "target", int), _optional(data, "display", str, ""))

    def _payload(self):
        return {"target": self.target, "display": self.display}


@dataclass
class AtAllMessage(MessageElement):
    TYPE: ClassVar[str] = "AtAll"


@dataclass
class FaceMessage(MessageElement):
    TYPE: ClassVar[str] = "Face"
    face_id: int = 0
    name: str = field(default="", compare=False)

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "faceId", int), _require(data, "name", str))

    def _payload(self):
        return {"faceId": self.face_id, "name": self.name}


@dataclass
class MarketFaceMessage(MessageElement):
    TYPE: ClassVar[str] = "MarketFace"
    face_id: int = 0
    name: str = field(default="", compare=False)

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "id", int), _require(data, "name", str))

    def _payload(self):
        return {"id": self.face_id, "name": self.name}


@dataclass
class DiceMessage(MessageElement):
    TYPE: ClassVar[str] = "Dice"
    value: int = 1

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "value", int))

    def _payload(self):
        return {"value": self.value}


@dataclass
class AppMessage(MessageElement):
    TYPE: ClassVar[str] = "App"
    content: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "content", str))

    def _payload(self):
        return {"content": self.content}


@dataclass
class JsonMessage(MessageElement):
    TYPE: ClassVar[str] = "Json"
    json: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "json", str))

    def _payload(self):
        return {"json": self.json}


@dataclass
class XmlMessage(MessageElement):
    TYPE: ClassVar[str] = "Xml"
    xml: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "xml", str))

    def _payload(self):
        return {"xml": self.xml}


@dataclass
class MiraiCode(MessageElement):
    TYPE: ClassVar[str] = "MiraiCode"
    code: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "code", str))

    def _payload(self):
        return {"code": self.code}


class PokeType(enum.Enum):
    POKE = "Poke"
    SHOW_LOVE = "ShowLove"
    LIKE = "Like"
    HEARTBROKEN = "Heartbroken"
    SIX_SIX_SIX = "SixSixSix"
    FANG_DA_ZHAO = "FangDaZhao"


@dataclass
class PokeMessage(MessageElement):
    """A poke; the name follows the poke kind unless read from JSON."""

    TYPE: ClassVar[str] = "Poke"
    poke: PokeType = PokeType.POKE
    name: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.name:
            self.name = self.poke.value

    @classmethod
    def _from_fields(cls, data):
        name = _require(data, "name", str)
        try:
            poke = PokeType(name)
        except ValueError:
            poke = PokeType.POKE
        return cls(poke, name)

    def _payload(self):
        return {"name": self.name}


@dataclass
class QuoteMessage(MessageElement):
    TYPE: ClassVar[str] = "Quote"
    message_id: int = 0

    @classmethod
    def _from_fields(cls, data):
        return cls(_require(data, "id", int))

    def _payload(self):
        return {"id": self.message_id}


def parse_element(data):
    """Build the element named by the ``type`` field of ``data``."""
    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        raise ValueError(_BAD_JSON)
    element_class = _REGISTRY.get(data["type"])
    if element_class is None:
        raise ValueError(f"unknown message element type: {data['type']}")
    return element_class.from_json(data)