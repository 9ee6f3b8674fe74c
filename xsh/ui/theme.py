#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from rich.panel import Panel
from rich.text import Text
from ..config import Config


@dataclass(frozen=True)
class PanelStyle:
    border_style: str = "#888888"
    padding: Optional[tuple[int, int]] = (0, 1)
    title_style: Optional[str] = None
    title_align: str = "left"
    expand: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PanelStyle":
        padding = values.get("padding", (0, 1))
        return cls(
            border_style=values.get("border_style", "#888888"),
            padding=tuple(padding) if padding is not None else None,
            title_style=values.get("title_style"),
            title_align=values.get("title_align", "left"),
            expand=bool(values.get("expand", False)),
        )

    def panel_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "border_style": self.border_style,
            "title_align": self.title_align,
            "expand": self.expand,
        }
        if self.padding is not None:
            kwargs["padding"] = self.padding
        return kwargs


class PanelTheme:
    @staticmethod
    def get_style(name: str) -> PanelStyle:
        default_theme = Config.PANEL_STYLES.get("default", {})
        # named styles only override the keys they set
        merged = {**default_theme, **Config.PANEL_STYLES.get(name, {})}
        return PanelStyle.from_mapping(merged)

    @staticmethod
    def build(
        renderable: Any,
        title: str | Text = "",
        style: str = "default",
        *,
        fit: bool = False,
        **overrides: Any,
    ) -> Panel:
        panel_style = PanelTheme.get_style(style)
        panel_kwargs = {**panel_style.panel_kwargs(), **overrides}

        if isinstance(title, str) and panel_style.title_style:
            title = Text(title, style=panel_style.title_style)

        if fit:
            panel_kwargs.pop("expand", None)
            return Panel.fit(renderable, title=title, **panel_kwargs)

        return Panel(renderable, title=title, **panel_kwargs)
