import pytest

from qqgroupbot.events import (
    BotInvitedJoinGroupRequestEvent,
    BotOfflineEventActive,
    BotOfflineEventDropped,
    BotOfflineEventForce,
    BotOnlineEvent,
    BotReloginEvent,
    Event,
    EventParsingError,
    EventType,
    FriendRecallEvent,
    LostConnection,
    MemberJoinRequestEvent,
    NewFriendRequestEvent,
    NudgeEvent,
    SubjectKind,
    parse_event,
)

ACCOUNT_EVENTS = [
    (BotOnlineEvent, "BotOnlineEvent"),
    (BotOfflineEventActive, "BotOfflineEventActive"),
    (BotOfflineEventForce, "BotOfflineEventForce"),
    (BotOfflineEventDropped, "BotOfflineEventDropped"),
    (BotReloginEvent, "BotReloginEvent"),
]


@pytest.mark.parametrize("cls, name", ACCOUNT_EVENTS)
def test_account_event_round_trip(cls, name):
    data = {"type": name, "qq": 123456}
    event = parse_event(data)
    assert isinstance(event, cls)
    assert event.qq == 123456
    assert event.to_json() == data


@pytest.mark.parametrize("cls, name", ACCOUNT_EVENTS)
def test_account_event_type_tag(cls, name):
    event = parse_event({"type": name, "qq": 5})
    assert event.EVENT_TYPE.value == name
    assert event.to_json()["type"] == name


def test_account_event_missing_qq_raises():
    with pytest.raises(ValueError):
        BotOnlineEvent.from_json({"type": "BotOnlineEvent"})


def test_friend_recall_fields():
    data = {"type": "FriendRecallEvent", "time": 1000, "authorId": 11,
            "messageId": 22, "operator": 33}
    event = parse_event(data)
    assert isinstance(event, FriendRecallEvent)
    assert (event.time, event.author_qq, event.message_id, event.operator) == (1000, 11, 22, 33)
    assert parse_event(event.to_json()) == event


def test_new_friend_request_round_trip():
    data = {"type": "NewFriendRequestEvent", "eventId": 7, "fromId": 8,
            "groupId": 9, "nick": "nick", "message": "hello"}
    event = parse_event(data)
    assert isinstance(event, NewFriendRequestEvent)
    assert event.to_json() == data


@pytest.mark.parametrize("cls, name", [
    (MemberJoinRequestEvent, "MemberJoinRequestEvent"),
    (BotInvitedJoinGroupRequestEvent, "BotInvitedJoinGroupRequestEvent"),
])
def test_group_request_round_trip(cls, name):
    data = {"type": name, "eventId": 1, "fromId": 2, "groupId": 3,
            "groupName": "group", "nick": "nick", "message": "let me in"}
    event = parse_event(data)
    assert isinstance(event, cls)
    assert event.group_name == "group"
    assert event.to_json() == data


def test_group_request_wrong_field_type_raises():
    data = {"eventId": 1, "fromId": "2", "groupId": 3,
            "groupName": "g", "nick": "n", "message": "m"}
    with pytest.raises(ValueError):
        MemberJoinRequestEvent.from_json(data)


def test_nudge_round_trip_and_subject():
    data = {"type": "NudgeEvent", "fromId": 10, "target": 20,
            "subject": {"id": 30, "kind": "Group"},
            "action": "poke", "suffix": "face"}
    event = parse_event(data)
    assert isinstance(event, NudgeEvent)
    assert event.from_kind is SubjectKind.GROUP
    assert event.subject_id() == (SubjectKind.GROUP, 30)
    assert event.to_json() == data


def test_nudge_friend_subject():
    event = NudgeEvent(raw_subject_id=44, from_kind=SubjectKind.FRIEND)
    assert event.subject_id() == (SubjectKind.FRIEND, 44)
    assert event.to_json()["subject"] == {"id": 44, "kind": "Friend"}


def test_nudge_unknown_kind_raises():
    data = {"fromId": 1, "target": 2, "subject": {"id": 3, "kind": "Stranger"},
            "action": "", "suffix": ""}
    with pytest.raises(ValueError, match="Unknown SubjectKind."):
        NudgeEvent.from_json(data)


def test_event_base_from_json_dispatches():
    event = Event.from_json({"type": "BotReloginEvent", "qq": 99})
    assert isinstance(event, BotReloginEvent)
    assert event.qq == 99


def test_event_base_to_json_is_empty():
    assert Event().to_json() == {}


def test_parse_event_unknown_type_raises():
    with pytest.raises(ValueError):
        parse_event({"type": "NoSuchEvent"})


def test_parse_event_without_type_raises():
    with pytest.raises(ValueError):
        parse_event({"qq": 1})


def test_bot_attachment_ignored_in_equality():
    first = BotOnlineEvent(qq=1, bot="client-a")
    second = BotOnlineEvent(qq=1, bot="client-b")
    assert first == second
    assert first.bot == "client-a"


def test_lost_connection_has_no_json_form():
    lost = LostConnection(code=3, error_message="closed")
    assert lost.EVENT_TYPE is EventType.DEFAULT
    with pytest.raises(TypeError):
        lost.to_json()
    with pytest.raises(TypeError):
        LostConnection.from_json({})


def test_event_parsing_error_rethrows():
    error = KeyError("missing")
    wrapper = EventParsingError(error=error)
    with pytest.raises(KeyError) as caught:
        wrapper.rethrow()
    assert caught.value is error


def test_event_parsing_error_without_error_returns():
    assert EventParsingError().rethrow() is None
    with pytest.raises(TypeError):
        EventParsingError().to_json()


def test_event_type_names():
    assert EventType("CommandExecutedEvent") is EventType.COMMAND_EXECUTED_EVENT
    assert EventType("MemberHonorChangeEvent") is EventType.MEMBER_HONOR_CHANGE_EVENT
    with pytest.raises(ValueError):
        EventType("Unknown")