"""Interactive prompts for the CLI."""

import questionary
from questionary import Style

from ..models.history import RECOVERY_ACTIVITIES, REST_DAY_FEELINGS

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("selected", "fg:#cc5454"),
        ("instruction", ""),
        ("text", ""),
    ]
)


async def ask_rest_day(
    feeling: str = "", activities: list[str] | None = None, note: str = ""
) -> tuple[str, list[str], str]:
    """Ask how a rest day went.

    Values already given on the command line are offered as defaults.

    Returns:
        (feeling, activities, note)
    """
    activities = activities or []

    feeling = await questionary.select(
        "How are you feeling today?",
        choices=REST_DAY_FEELINGS,
        default=feeling if feeling in REST_DAY_FEELINGS else None,
        style=custom_style,
    ).ask_async()

    activities = await questionary.checkbox(
        "Any recovery activities?",
        choices=[
            questionary.Choice(name, checked=name in activities)
            for name in RECOVERY_ACTIVITIES
        ],
        style=custom_style,
    ).ask_async()

    note = await questionary.text(
        "Notes (optional):",
        default=note,
        style=custom_style,
    ).ask_async()

    return feeling or "", activities or [], (note or "").strip()
