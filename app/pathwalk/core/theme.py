"""Console styles for pathwalk output.

Every style name the CLI renders (entry kinds, message levels, table
chrome) maps to one color in the bundled data/theme.toml.
"""

import logging
import tomllib
from functools import cache
from importlib import resources

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.color import Color, ColorParseError
from rich.theme import Theme

logger = logging.getLogger(__name__)

# Styles rendered bold on top of their color
BOLD_STYLES = frozenset({"error", "directory"})


class ThemeColors(BaseModel):
    """Colors per output style.

    Values are anything rich parses as a color: a name, ``#rrggbb`` or
    ``rgb(r,g,b)``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Messages
    muted: str = "#b2bec3"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Tables
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Entry kinds
    file: str = "default"
    directory: str = "#0e8ac8"
    archive_entry: str = "#c1ff62"

    @field_validator("*")
    @classmethod
    def check_color(cls, v: str) -> str:
        try:
            Color.parse(v)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        return v


def load_colors() -> ThemeColors:
    """Read the bundled colors, falling back to the built-in defaults."""
    source = resources.files("pathwalk.data").joinpath("theme.toml")
    try:
        data = tomllib.loads(source.read_text(encoding="utf-8"))
        return ThemeColors.model_validate(data.get("colors", {}))
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.warning("Bundled theme unusable, using defaults: %s", e)
        return ThemeColors()


def to_rich_theme(colors: ThemeColors) -> Theme:
    """Build the rich Theme, adding ``bold_header`` for table headers."""
    styles = {
        name: f"bold {color}" if name in BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Get the rich Theme for the bundled colors, built once."""
    return to_rich_theme(load_colors())
