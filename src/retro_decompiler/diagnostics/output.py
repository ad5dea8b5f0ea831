# retro_decompiler/diagnostics/output.py
"""
診断メッセージの出力先。

分類されたメッセージ（エラー / 警告 / 情報 / 成功）を追記専用で蓄積し、
必要に応じてコンソールにも出力します。メッセージには、
問題箇所へジャンプするための任意のアドレスを付与できます。
"""
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TextIO, Tuple, Union

from retro_decompiler.core.address import Address, as_address


# @intent:responsibility メッセージの分類と表示色を定義します。
class MessageLevel(Enum):
    ERROR = "red"
    WARNING = "#ffd400"
    INFO = "grey"
    OK = "green"

    @property
    def color(self) -> str:
        return self.value


# @intent:data_structure 1件の診断メッセージ。
@dataclass(frozen=True)
class Message:
    level: MessageLevel
    lines: Tuple[str, ...]
    location: Optional[Address] = None
    location_text: Optional[str] = None  # リンクの表示テキスト

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


# @intent:responsibility 診断メッセージを蓄積する追記専用のシンク。
class Output:
    """
    echo=True の場合、メッセージをコンソールにも出力します。
    stream を省略するとエラーは標準エラー出力、それ以外は標準出力に書き込みます。
    """
    def __init__(self, echo: bool = False, stream: Optional[TextIO] = None):
        self._messages: List[Message] = []
        self._echo = echo
        self._stream = stream

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def has_errors(self) -> bool:
        return any(m.level is MessageLevel.ERROR for m in self._messages)

    def clear(self) -> None:
        self._messages = []

    # @intent:responsibility 任意の分類のメッセージを1件追加します。
    def report(self, level: MessageLevel, message: str,
               location: Optional[Union[int, Address]] = None,
               location_text: Optional[str] = None) -> Message:
        return self._print(level, location, location_text, *message.split("\n"))

    def error(self, first_line: str, *lines: str, location=None, location_text: Optional[str] = None) -> Message:
        return self._print(MessageLevel.ERROR, location, location_text, first_line, *lines)

    def warning(self, first_line: str, *lines: str, location=None, location_text: Optional[str] = None) -> Message:
        return self._print(MessageLevel.WARNING, location, location_text, first_line, *lines)

    def info(self, first_line: str, *lines: str, location=None, location_text: Optional[str] = None) -> Message:
        return self._print(MessageLevel.INFO, location, location_text, first_line, *lines)

    def ok(self, first_line: str, *lines: str, location=None, location_text: Optional[str] = None) -> Message:
        return self._print(MessageLevel.OK, location, location_text, first_line, *lines)

    def _print(self, level: MessageLevel, location, location_text: Optional[str], *lines: str) -> Message:
        if location is not None:
            location = as_address(location)
            if location_text is None:
                location_text = location.to_hex()
        message = Message(level, tuple(lines), location, location_text)
        self._messages.append(message)

        if self._echo:
            prefix = f"[{level.name}]"
            if location_text:
                prefix += f" {location_text}:"
            stream = self._stream or (sys.stderr if level is MessageLevel.ERROR else sys.stdout)
            print(f"{prefix} {message.text}", file=stream)
        return message
