# qqgroupbot

The decision logic of a small QQ group chat bot, together with the message
element and event models of the mirai-api-http protocol.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The bot

`qqgroupbot.bot.GroupBot` decides how the bot answers each group message.
`GroupBot.handle(message)` takes an `IncomingGroupMessage` and returns a list
of `Reply` objects, which may be empty.

- A group is answered only when it is switched on. The master or an admin
  switches it on by sending exactly `/validate_this_group`;
  `/invalidate_this_group` switches it off.
- The master may send `/help`, `/invalidate_this_group`, `/add_admin qq`,
  `/delete_admin qq` and `/list_admins`. Admins may send `/help` and
  `/invalidate_this_group`; everyone else only `/help`. Any other command gets
  a "no such command" reply.
- The admin list is read from a JSON file of the form
  `{"admin_list": ["10002", "10003"]}` when the bot is created, and written
  back whenever an admin is added or deleted.
- Words starting with `./` are taken as function calls and get no reply.
- When the master @-mentions the bot with ordinary text, it answers
  "主人，我在.".
- A message containing one of the dirty words is dropped. If it also
  @-mentions the bot, the sender is put on a blacklist and gets a reply.
  The blacklist is cleared whenever the hour (Beijing time, read from
  `clock`) changes.
- In the groups listed in `RANDOM_SPEAK_GROUPS`, ordinary chatter is now and
  then answered with "嗯嗯" or echoed back.

```python
import json
import time

from qqgroupbot.bot import GroupBot, IncomingGroupMessage
from qqgroupbot.elements import PlainMessage

with open("admins.json", "w", encoding="utf-8") as f:
    json.dump({"admin_list": []}, f)

bot = GroupBot(
    master=10001,
    admin_file="admins.json",
    groups={20001: True},
    dirty_words=["badword"],
    clock=time.time,
)

message = IncomingGroupMessage(
    sender=10001,
    group=20001,
    chain=(PlainMessage("/add_admin 10002"),),
)
for reply in bot.handle(message):
    print(reply.at, reply.text)
```

A `Reply` holds its message elements in `elements`; `text` joins its plain
text and `at` gives the QQ number it mentions, if any. The module also offers
`split_text`, `is_command`, `is_function` and `contains_dirty_words`, and the
`COMMANDS` table behind `GroupBot.help_text()`.

## Message elements and events

- `qqgroupbot.elements`: `PlainMessage`, `AtMessage`, `AtAllMessage`,
  `FaceMessage`, `MarketFaceMessage`, `DiceMessage`, `AppMessage`,
  `JsonMessage`, `XmlMessage`, `MiraiCode`, `PokeMessage` (with `PokeType`)
  and `QuoteMessage`. `parse_element` builds any of them from its JSON object;
  `to_json` turns an element back into one. Malformed JSON raises
  `ValueError`.
- `qqgroupbot.media`: `ImageMessage`, `FlashImageMessage`, `VoiceMessage` and
  `FileMessage`, built with `parse_media`.
- `qqgroupbot.events`: `EventType` and the events `BotOnlineEvent`,
  `BotOfflineEventActive`, `BotOfflineEventForce`, `BotOfflineEventDropped`,
  `BotReloginEvent`, `FriendRecallEvent`, `NewFriendRequestEvent`,
  `MemberJoinRequestEvent`, `BotInvitedJoinGroupRequestEvent` and
  `NudgeEvent`, built with `parse_event`. `LostConnection` and
  `EventParsingError` have no JSON form; `EventParsingError.rethrow()` raises
  the error it holds.
- `qqgroupbot.exceptions`: `MiraiApiHttpError` and `NetworkError`.

## What it does not do

The package does not connect to mirai-api-http, receive messages or send
replies: the caller feeds messages to `GroupBot.handle` and delivers the
returned replies itself. It has no command-line program. It does not keep a
record of past chat, so the bot never repeats earlier messages from a group,
and the list of switched-on groups lives only in memory. Only the events
listed above are modelled; group messages, friend messages and the other
event kinds named in `EventType` have no classes.