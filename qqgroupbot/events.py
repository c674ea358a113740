"""Events pushed by mirai-api-http and their JSON form."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar

from qqgroupbot.elements import _BAD_JSON, _require


class EventType(enum.Enum):
    """Every kind of event the service can push."""

    DEFAULT = "Default"
    BOT_ONLINE_EVENT = "BotOnlineEvent"
    BOT_OFFLINE_EVENT_ACTIVE = "BotOfflineEventActive"
    BOT_OFFLINE_EVENT_FORCE = "BotOfflineEventForce"
    BOT_OFFLINE_EVENT_DROPPED = "BotOfflineEventDropped"
    BOT_RELOGIN_EVENT = "BotReloginEvent"
    FRIEND_MESSAGE = "FriendMessage"
    GROUP_MESSAGE = "GroupMessage"
    TEMP_MESSAGE = "TempMessage"
    GROUP_RECALL_EVENT = "GroupRecallEvent"
    FRIEND_RECALL_EVENT = "FriendRecallEvent"
    BOT_MUTE_EVENT = "BotMuteEvent"
    BOT_UNMUTE_EVENT = "BotUnmuteEvent"
    BOT_JOIN_GROUP_EVENT = "BotJoinGroupEvent"
    GROUP_NAME_CHANGE_EVENT = "GroupNameChangeEvent"
    GROUP_MUTE_ALL_EVENT = "GroupMuteAllEvent"
    MEMBER_JOIN_EVENT = "MemberJoinEvent"
    MEMBER_LEAVE_EVENT_KICK = "MemberLeaveEventKick"
    MEMBER_LEAVE_EVENT_QUIT = "MemberLeaveEventQuit"
    MEMBER_MUTE_EVENT = "MemberMuteEvent"
    MEMBER_UNMUTE_EVENT = "MemberUnmuteEvent"
    NEW_FRIEND_REQUEST_EVENT = "NewFriendRequestEvent"
    MEMBER_JOIN_REQUEST_EVENT = "MemberJoinRequestEvent"
    BOT_LEAVE_EVENT_ACTIVE = "BotLeaveEventActive"
    BOT_LEAVE_EVENT_KICK = "BotLeaveEventKick"
    MESSAGE = "Message"
    BOT_INVITED_JOIN_GROUP_REQUEST_EVENT = "BotInvitedJoinGroupRequestEvent"
    MEMBER_CARD_CHANGE_EVENT = "MemberCardChangeEvent"
    COMMAND_EXECUTED_EVENT = "CommandExecutedEvent"
    NUDGE_EVENT = "NudgeEvent"
    STRANGER_MESSAGE = "StrangerMessage"
    OTHER_CLIENT_MESSAGE = "OtherClientMessage"
    FRIEND_INPUT_STATUS_CHANGED_EVENT = "FriendInputStatusChangedEvent"
    FRIEND_NICK_CHANGED_EVENT = "FriendNickChangedEvent"
    GROUP_ENTRANCE_ANNOUNCEMENT_CHANGE_EVENT = "GroupEntranceAnnouncementChangeEvent"
    GROUP_ALLOW_ANONYMOUS_CHAT_EVENT = "GroupAllowAnonymousChatEvent"
    GROUP_ALLOW_CONFESS_TALK_EVENT = "GroupAllowConfessTalkEvent"
    GROUP_ALLOW_MEMBER_INVITE_EVENT = "GroupAllowMemberInviteEvent"
    MEMBER_SPECIAL_TITLE_CHANGE_EVENT = "MemberSpecialTitleChangeEvent"
    BOT_GROUP_PERMISSION_CHANGE_EVENT = "BotGroupPermissionChangeEvent"
    MEMBER_PERMISSION_CHANGE_EVENT = "MemberPermissionChangeEvent"
    MEMBER_HONOR_CHANGE_EVENT = "MemberHonorChangeEvent"


_REGISTRY: dict[str, type["Event"]] = {}


def _require_object(data: Any, key: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ValueError(_BAD_JSON)
    return value


@dataclass
class Event:
    """Base of every event; ``bot`` is the client that received it, if any."""

    EVENT_TYPE: ClassVar[EventType] = EventType.DEFAULT
    bot: Any = field(default=None, compare=False, repr=False, kw_only=True)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        event_type = cls.__dict__.get("EVENT_TYPE")
        if event_type is not None and event_type is not EventType.DEFAULT:
            _REGISTRY[event_type.value] = cls

    @classmethod
    def from_json(cls, data):
        """Build an event from its JSON object."""
        if not isinstance(data, dict):
            raise ValueError(_BAD_JSON)
        if cls is Event:
            return parse_event(data)
        return cls._from_fields(data)

    @classmethod
    def _from_fields(cls, data: dict) -> "Event":
        return cls()

    def _payload(self) -> dict:
        return {}

    def to_json(self):
        """Return the JSON object for this event."""
        if self.EVENT_TYPE is EventType.DEFAULT:
            return self._payload()
        return {"type": self.EVENT_TYPE.value, **self._payload()}


@dataclass
class _BotAccountEvent(Event):
    qq: int = 0

    @classmethod
    def _from_fields(cls, data):
        return cls(qq=_require(data, "qq", int))

    def _payload(self):
        return {"qq": self.qq}


@dataclass
class BotOnlineEvent(_BotAccountEvent):
    """The bot logged in."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_ONLINE_EVENT


@dataclass
class BotOfflineEventActive(_BotAccountEvent):
    """The bot went offline by itself."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_OFFLINE_EVENT_ACTIVE


@dataclass
class BotOfflineEventForce(_BotAccountEvent):
    """The bot was pushed offline by another login."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_OFFLINE_EVENT_FORCE


@dataclass
class BotOfflineEventDropped(_BotAccountEvent):
    """The bot dropped offline because of the network."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_OFFLINE_EVENT_DROPPED


@dataclass
class BotReloginEvent(_BotAccountEvent):
    """The bot logged in again."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_RELOGIN_EVENT


@dataclass
class FriendRecallEvent(Event):
    """A friend recalled a message."""

    EVENT_TYPE: ClassVar[EventType] = EventType.FRIEND_RECALL_EVENT
    time: int = 0
    author_qq: int = 0
    message_id: int = 0
    operator: int = 0

    @classmethod
    def _from_fields(cls, data):
        return cls(
            time=_require(data, "time", int),
            author_qq=_require(data, "authorId", int),
            message_id=_require(data, "messageId", int),
            operator=_require(data, "operator", int),
        )

    def _payload(self):
        return {
            "time": self.time,
            "authorId": self.author_qq,
            "messageId": self.message_id,
            "operator": self.operator,
        }


@dataclass
class NewFriendRequestEvent(Event):
    """Someone asked to become the bot's friend."""

    EVENT_TYPE: ClassVar[EventType] = EventType.NEW_FRIEND_REQUEST_EVENT
    event_id: int = 0
    from_id: int = 0
    group_id: int = 0
    nick: str = ""
    message: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(
            event_id=_require(data, "eventId", int),
            from_id=_require(data, "fromId", int),
            group_id=_require(data, "groupId", int),
            nick=_require(data, "nick", str),
            message=_require(data, "message", str),
        )

    def _payload(self):
        return {
            "eventId": self.event_id,
            "fromId": self.from_id,
            "groupId": self.group_id,
            "nick": self.nick,
            "message": self.message,
        }


@dataclass
class _GroupRequestEvent(Event):
    event_id: int = 0
    from_id: int = 0
    group_id: int = 0
    group_name: str = ""
    nick: str = ""
    message: str = ""

    @classmethod
    def _from_fields(cls, data):
        return cls(
            event_id=_require(data, "eventId", int),
            from_id=_require(data, "fromId", int),
            group_name=_require(data, "groupName", str),
            group_id=_require(data, "groupId", int),
            nick=_require(data, "nick", str),
            message=_require(data, "message", str),
        )

    def _payload(self):
        return {
            "eventId": self.event_id,
            "fromId": self.from_id,
            "groupId": self.group_id,
            "groupName": self.group_name,
            "nick": self.nick,
            "message": self.message,
        }


@dataclass
class MemberJoinRequestEvent(_GroupRequestEvent):
    """Someone asked to join a group the bot manages."""

    EVENT_TYPE: ClassVar[EventType] = EventType.MEMBER_JOIN_REQUEST_EVENT


@dataclass
class BotInvitedJoinGroupRequestEvent(_GroupRequestEvent):
    """The bot was invited to join a group."""

    EVENT_TYPE: ClassVar[EventType] = EventType.BOT_INVITED_JOIN_GROUP_REQUEST_EVENT


class SubjectKind(enum.Enum):
    """Where a nudge happened."""

    FRIEND = "Friend"
    GROUP = "Group"


def _subject_kind(name: str) -> SubjectKind:
    try:
        return SubjectKind(name)
    except ValueError:
        raise ValueError("Unknown SubjectKind.") from None


@dataclass
class NudgeEvent(Event):
    """Someone nudged (poked the avatar of) a user."""

    EVENT_TYPE: ClassVar[EventType] = EventType.NUDGE_EVENT
    from_id: int = 0
    target: int = 0
    raw_subject_id: int = 0
    from_kind: SubjectKind = SubjectKind.FRIEND
    action: str = ""
    suffix: str = ""

    def subject_id(self):
        """Return the subject as a (kind, id) pair: a group id or a friend's QQ."""
        return (self.from_kind, self.raw_subject_id)

    @classmethod
    def _from_fields(cls, data):
        subject = _require_object(data, "subject")
        return cls(
            from_id=_require(data, "fromId", int),
            target=_require(data, "target", int),
            raw_subject_id=_require(subject, "id", int),
            from_kind=_subject_kind(_require(subject, "kind", str)),
            action=_require(data, "action", str),
            suffix=_require(data, "suffix", str),
        )

    def _payload(self):
        return {
            "fromId": self.from_id,
            "target": self.target,
            "subject": {"id": self.raw_subject_id, "kind": self.from_kind.value},
            "action": self.action,
            "suffix": self.suffix,
        }


@dataclass
class LostConnection(Event):
    """The connection to mirai-api-http was lost; never read from or written as JSON."""

    code: int = 0
    error_message: str = ""

    @classmethod
    def from_json(cls, data):
        raise TypeError("LostConnection has no JSON form")

    def to_json(self):
        raise TypeError("LostConnection has no JSON form")


@dataclass
class EventParsingError(Event):
    """An event could not be parsed; holds the error that was raised."""

    error: BaseException | None = None

    @classmethod
    def from_json(cls, data):
        raise TypeError("EventParsingError has no JSON form")

    def to_json(self):
        raise TypeError("EventParsingError has no JSON form")

    def rethrow(self):
        """Raise the stored error again, if there is one."""
        if self.error is not None:
            raise self.error


def parse_event(data):
    """Build the event named by the ``type`` field of ``data``."""
    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        raise ValueError(_BAD_JSON)
    event_class = _REGISTRY.get(data["type"])
    if event_class is None:
        raise ValueError(f"unknown event type: {data['type']}")
    return event_class.from_json(data)