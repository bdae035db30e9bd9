"""Configuration for actions dialogs and command bars."""

from __future__ import annotations

import os
import tempfile
import tomllib
from enum import StrEnum
from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, ValidationError

from actionbar.limits import COMMAND_BAR_PAGE_JUMP
from actionbar.models import SectionStyle
from actionbar.paths import get_config_path


class ConfigError(Exception):
    """Raised when the config file cannot be read or validated."""


class SearchPosition(StrEnum):
    TOP = "top"
    BOTTOM = "bottom"
    HIDDEN = "hidden"


class AnchorPosition(StrEnum):
    """Edge the list grows away from."""

    TOP = "top"
    BOTTOM = "bottom"


class DialogConfig(BaseModel):
    """Presentation settings of one actions dialog."""

    search_position: SearchPosition = Field(default=SearchPosition.BOTTOM)
    section_style: SectionStyle = Field(
        default=SectionStyle.SEPARATORS,
        description="headers inserts labelled rows; separators/none keep one row per action",
    )
    anchor: AnchorPosition = Field(default=AnchorPosition.BOTTOM)
    show_icons: bool = Field(default=False)
    show_footer: bool = Field(default=False, description="Show the keyboard hint footer")


def rebuild_required(previous: DialogConfig, new: DialogConfig) -> bool:
    """Whether switching configs changes the grouped rows.

    Only the section style affects rows, since headers add rows of their own.
    """
    return previous.section_style != new.section_style


class CommandBarConfig(BaseModel):
    """Dialog config plus the closing behaviour of a command bar."""

    dialog: DialogConfig = Field(default_factory=DialogConfig)
    close_on_select: bool = Field(default=True)
    close_on_click_outside: bool = Field(default=True)
    close_on_escape: bool = Field(default=True)

    @classmethod
    def main_menu_style(cls) -> CommandBarConfig:
        """Search at the bottom, separators between sections."""
        return cls(
            dialog=DialogConfig(
                search_position=SearchPosition.BOTTOM,
                section_style=SectionStyle.SEPARATORS,
                anchor=AnchorPosition.BOTTOM,
            )
        )

    @classmethod
    def ai_style(cls) -> CommandBarConfig:
        """Search at the top, section headers, icons and footer."""
        return cls(
            dialog=DialogConfig(
                search_position=SearchPosition.TOP,
                section_style=SectionStyle.HEADERS,
                anchor=AnchorPosition.TOP,
                show_icons=True,
                show_footer=True,
            )
        )

    @classmethod
    def no_search(cls) -> CommandBarConfig:
        """Search hidden; the host feeds the query."""
        return cls(
            dialog=DialogConfig(
                search_position=SearchPosition.HIDDEN,
                section_style=SectionStyle.SEPARATORS,
                anchor=AnchorPosition.BOTTOM,
            )
        )

    @classmethod
    def notes_style(cls) -> CommandBarConfig:
        return cls(
            dialog=DialogConfig(
                search_position=SearchPosition.TOP,
                section_style=SectionStyle.SEPARATORS,
                anchor=AnchorPosition.TOP,
                show_icons=True,
                show_footer=True,
            )
        )


COMMAND_BAR_PRESETS = {
    "main_menu": CommandBarConfig.main_menu_style,
    "ai": CommandBarConfig.ai_style,
    "no_search": CommandBarConfig.no_search,
    "notes": CommandBarConfig.notes_style,
}


class GeneralConfig(BaseModel):
    page_jump: int = Field(
        default=COMMAND_BAR_PAGE_JUMP, ge=1, description="Rows moved by page up/down"
    )
    default_dialog: str = Field(
        default="main_menu", description="Dialog whose config the CLI uses by default"
    )


class ActionbarConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    dialogs: dict[str, DialogConfig] = Field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Path | None = None) -> ActionbarConfig:
        """Load configuration from TOML or fall back to defaults."""
        if config_path is None:
            config_path = get_config_path()
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config {config_path}: {exc}") from exc

    def dialog_config(self, name: str) -> DialogConfig:
        """Config for the named dialog: user override, then preset, then defaults."""
        if name in self.dialogs:
            return self.dialogs[name]
        preset = COMMAND_BAR_PRESETS.get(name)
        if preset is not None:
            return preset().dialog
        return DialogConfig()

    def to_toml(self) -> str:
        doc = tomlkit.document()

        general_table = tomlkit.table()
        for key, value in self.general.model_dump(mode="json").items():
            general_table[key] = value
        doc["general"] = general_table

        if self.dialogs:
            dialogs_table = tomlkit.table()
            for name, dialog in self.dialogs.items():
                dialog_table = tomlkit.table()
                for key, value in dialog.model_dump(mode="json").items():
                    dialog_table[key] = value
                dialogs_table[name] = dialog_table
            doc["dialogs"] = dialogs_table

        return tomlkit.dumps(doc)

    def save(self, path: Path) -> None:
        """Serialize to TOML, replacing ``path`` atomically."""
        _atomic_write(path, self.to_toml())


def _atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        Path(tmp_name).replace(path)
    except Exception:
        Path(tmp_name).unlink(missing_ok=True)
        raise
