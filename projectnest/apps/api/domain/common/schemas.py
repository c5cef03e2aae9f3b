"""Field types shared by the request and response schemas."""

from typing import Annotated

from pydantic import Field

# "#RRGGBB"
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
DEFAULT_COLOR = "#FFFFFF"

Color = Annotated[str, Field(pattern=HEX_COLOR_PATTERN)]
# Create requests accept an empty string and fall back to the default color.
OptionalColor = Annotated[str, Field(pattern=r"^(#[0-9A-Fa-f]{6})?$")]
Name = Annotated[str, Field(min_length=1, max_length=255)]
Position = Annotated[int, Field(ge=0)]
