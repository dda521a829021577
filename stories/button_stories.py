"""Example stories for a button component."""
from __future__ import annotations


def _button(label: str, variant: str = "default"):
    def render(context) -> str:
        return f'<button class="{variant}">{label}</button>'

    return render


def with_frame(get_story, context) -> str:
    return f'<div class="frame">{get_story()}</div>'


def register(api, module) -> None:
    (
        api.stories_of("Button", module)
        .add_decorator(with_frame)
        .add_parameters({"layout": {"padded": True}})
        .add("default", _button("Click me"))
        .add("primary", _button("Submit", "primary"), {"layout": {"fullscreen": False}})
    )
