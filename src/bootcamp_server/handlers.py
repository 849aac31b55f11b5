# Este archivo define los handlers de las dos rutas fijas: "/" y "/health".

"""
Response handlers for the fixed endpoints.

Handlers are pure functions of the response style; they never touch the
request and hold no state.
"""
from typing import Callable, Sequence

from .config.settings import ResponseStyle

WELCOME_MESSAGE = "Welcome to the DevOps Bootcamp!"
HEALTH_LINES = ("Status: Active", "User: Priyanshu")

Handler = Callable[[ResponseStyle], str]


def render_lines(lines: Sequence[str], style: ResponseStyle) -> str:
    """
    Format lines of text as a response body.

    LINES terminates every line with a newline, INLINE joins them with a
    single embedded newline and no trailing one.
    """
    if style is ResponseStyle.INLINE:
        return "\n".join(lines)
    return "".join(f"{line}\n" for line in lines)


def root_handler(style: ResponseStyle = ResponseStyle.LINES) -> str:
    return render_lines([WELCOME_MESSAGE], style)


def health_handler(style: ResponseStyle = ResponseStyle.LINES) -> str:
    return render_lines(HEALTH_LINES, style)
