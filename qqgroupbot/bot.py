"""Group chat bot: permissions, commands, dirty-word guard and random chatter."""

from __future__ import annotations

import json
import random
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from qqgroupbot.elements import AtMessage, MessageElement, PlainMessage

BEIJING = timezone(timedelta(hours=8))

#: Groups in which the bot joins the conversation now and then.
RANDOM_SPEAK_GROUPS = (749257398, 180068294, 867976597)

#: The group that gets a terse answer when it insults the bot.
QUIET_GROUP = 749257398

COMMANDS = {
    "/help": "查看帮助(All)",
    "/add_admin qq": "添加Admin权限(Master)",
    "/delete_admin qq": "删除Admin权限(Master)",
    "/list_admins": "查看当前admin(Master)",
    "/validate_this_group": "启用本群bot(Admin)",
    "/invalidate_this_group": "关闭本群bot(Admin)",
}

_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def split_text(text):
    """Split text into whitespace-separated words."""
    return [word for word in _WHITESPACE.split(text) if word]


def is_command(word):
    """A command starts with a slash."""
    return word.startswith("/")


def is_function(word):
    """A function call starts with ``./``."""
    return word.startswith("./")


def contains_dirty_words(words, dirty_words):
    """True when any word contains any of the dirty words."""
    return any(dirty in word for word in words for dirty in dirty_words)


def _parse_qq(text: str) -> int:
    """Read a leading 32-bit integer, ignoring what follows it."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"number out of range: {text!r}")
    return value


@dataclass(frozen=True)
class IncomingGroupMessage:
    """A message received in a group."""

    sender: int
    group: int
    chain: tuple[MessageElement, ...] = ()
    at_me: bool = False

    @property
    def plain_text(self) -> str:
        return "".join(e.text for e in self.chain if isinstance(e, PlainMessage))


@dataclass(frozen=True)
class Reply:
    """A message the bot sends back to the group."""

    elements: tuple[MessageElement, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return "".join(e.text for e in self.elements if isinstance(e, PlainMessage))

    @property
    def at(self) -> int | None:
        for element in self.elements:
            if isinstance(element, AtMessage):
                return element.target
        return None


def _at_reply(qq: int, *texts: str) -> Reply:
    return Reply((AtMessage(qq), *(PlainMessage(t) for t in texts)))


class GroupBot:
    """Decides how the bot answers each group message."""

    def __init__(self, master, admin_file, groups=None, dirty_words=(), clock=time.time):
        self.master = master
        self.admin_file = Path(admin_file)
        self.groups: dict[int, bool] = dict(groups or {})
        self.dirty_words = list(dirty_words)
        self.clock = clock
        self.rng = random.Random()
        self.black_list: set[int] = set()
        self._prev_hour = 1
        with self.admin_file.open(encoding="utf-8") as f:
            data = json.load(f)
        stored = (data or {}).get("admin_list") or []
        self.admins: list[int] = [_parse_qq(str(item)) for item in stored]

    def is_master(self, qq):
        return qq == self.master

    def is_admin(self, qq):
        return qq in self.admins

    def is_valid_group(self, group):
        return self.groups.get(group, False)

    def _save_admins(self) -> None:
        data = {"admin_list": [str(qq) for qq in self.admins]}
        self.admin_file.write_text(
            json.dumps(data, ensure_ascii=False, separators=(",", ":")),
            encoding="utf-8",
        )

    def validate_group(self, message):
        self.groups[message.group] = True
        return _at_reply(message.sender, "\nBot On.")

    def invalidate_group(self, message):
        self.groups[message.group] = False
        return _at_reply(message.sender, "\nBot Off.")

    def add_admin(self, message, qq):
        if self.is_admin(qq):
            return _at_reply(message.sender, "\n这位已经是admin了.")
        self.admins.append(qq)
        self._save_admins()
        return _at_reply(message.sender, "\n新的admin,ID:\n", str(qq))

    def delete_admin(self, message, qq):
        if not self.is_admin(qq):
            return _at_reply(message.sender, "\n这位不是admin哦.")
        self.admins.remove(qq)
        self._save_admins()
        return _at_reply(message.sender, "\nadmin已经删除,ID:\n", str(qq))

    def list_admins(self, message):
        texts = ["\n目前所有的管理员:\n"]
        for qq in self.admins:
            texts += [str(qq), "\n"]
        return _at_reply(message.sender, *texts)

    def help_text(self):
        return "".join(f"{name}  {text}\n" for name, text in sorted(COMMANDS.items()))

    def _help(self, message: IncomingGroupMessage) -> Reply:
        return _at_reply(message.sender, "\ncommand list: \n", self.help_text())

    def _refresh_black_list(self) -> None:
        hour = datetime.fromtimestamp(self.clock(), BEIJING).hour
        if hour != self._prev_hour:
            self._prev_hour = hour
            self.black_list.clear()

    def _master_command(self, message, words) -> Reply:
        command = words[0]
        if command == "/help":
            return self._help(message)
        if command == "/invalidate_this_group":
            return self.invalidate_group(message)
        if command in ("/add_admin", "/delete_admin"):
            if len(words) == 1:
                return _at_reply(message.sender, "\nNo Valid QQ.")
            qq = _parse_qq(words[1])
            if command == "/add_admin":
                return self.add_admin(message, qq)
            return self.delete_admin(message, qq)
        if command == "/list_admins":
            return self.list_admins(message)
        return _at_reply(message.sender, "\nno such MasterCommand.\n输入/help查看所有命令")

    def _admin_command(self, message, words) -> Reply:
        command = words[0]
        if command == "/help":
            return self._help(message)
        if command == "/invalidate_this_group":
            return self.invalidate_group(message)
        return _at_reply(message.sender, "\nno such AdminCommand.\n输入/help查看所有命令")

    def _people_command(self, message, words) -> Reply:
        if words[0] == "/help":
            return self._help(message)
        return _at_reply(message.sender, "\nno such PeopleCommand.\n输入/help查看所有命令")

    def _normal(self, message, words) -> list[Reply]:
        if contains_dirty_words(words, self.dirty_words):
            if not message.at_me:
                return []
            self.black_list.add(message.sender)
            if message.group == QUIET_GROUP:
                return [_at_reply(message.sender, "\n.")]
            return [_at_reply(message.sender, "\n不要骂我,我只是个机器人,呜呜...")]
        if message.group not in RANDOM_SPEAK_GROUPS:
            return []
        roll = self.rng.randrange(100)
        if roll == 1:
            return [Reply((PlainMessage("嗯嗯"),))]
        if roll == 2:
            return [Reply(tuple(message.chain))]
        return []

    def handle(self, message):
        """Return the replies the bot sends for ``message``, possibly none."""
        privileged = self.is_master(message.sender) or self.is_admin(message.sender)
        if privileged and message.plain_text == "/validate_this_group":
            return [self.validate_group(message)]
        if not self.is_valid_group(message.group):
            return []
        words = split_text(message.plain_text)
        if not words:
            return []
        self._refresh_black_list()
        if message.sender in self.black_list:
            return []

        first = words[0]
        if self.is_master(message.sender):
            if is_command(first):
                return [self._master_command(message, words)]
            if is_function(first):
                return []
            if message.at_me:
                return [_at_reply(message.sender, "\n主人，我在.")]
            return self._normal(message, words)

        if is_command(first):
            if self.is_admin(message.sender):
                return [self._admin_command(message, words)]
            return [self._people_command(message, words)]
        if is_function(first):
            return []
        return self._normal(message, words)