"""Pydantic models for Telegram update payloads."""

from pydantic import BaseModel, Field


class TelegramUser(BaseModel):
    """Telegram user payload."""

    id: int
    is_bot: bool | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None


class TelegramChat(BaseModel):
    """Telegram chat payload."""

    id: int
    type: str
    title: str | None = None
    username: str | None = None


class TelegramMessageEntity(BaseModel):
    """Telegram message entity (commands, mentions, links)."""

    type: str
    offset: int
    length: int


class TelegramMessage(BaseModel):
    """Telegram message payload."""

    message_id: int
    date: int
    chat: TelegramChat
    from_user: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None
    entities: list[TelegramMessageEntity] | None = None

    def is_command(self) -> bool:
        """Return True when the message starts with a bot command entity."""
        return self._command_entity() is not None

    def command(self) -> str:
        """Return the command name without the slash and any @botname suffix."""
        entity = self._command_entity()
        if entity is None or not self.text:
            return ""
        token = self.text[1 : entity.length]
        return token.split("@", maxsplit=1)[0]

    def command_arguments(self) -> str:
        """Return the text after the command, stripped."""
        entity = self._command_entity()
        if entity is None or not self.text:
            return ""
        return self.text[entity.length :].strip()

    def _command_entity(self) -> TelegramMessageEntity | None:
        for entity in self.entities or []:
            if entity.type == "bot_command" and entity.offset == 0:
                return entity
        return None


class TelegramUpdate(BaseModel):
    """Telegram update payload."""

    update_id: int
    message: TelegramMessage | None = None
