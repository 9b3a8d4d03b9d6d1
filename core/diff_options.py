"""
Diff Options Module
Drawing and classification settings for the pixel diff sweep.
"""

from typing import Annotated, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

Channel = Annotated[int, Field(ge=0, le=255)]
Color = Tuple[Channel, Channel, Channel]


class DiffOptions(BaseModel):
    include_aa: bool = False                          # count anti-aliased pixels as differences
    alpha: float = Field(default=0.1, ge=0, le=1)     # opacity of img1 in the gray background
    aa_color: Color = (255, 255, 0)                   # anti-aliased pixels
    diff_color: Color = (255, 0, 0)                   # different pixels
    diff_color_alt: Optional[Color] = None            # different pixels where img1 is brighter
    diff_mask: bool = False                           # draw diff markers over a transparent background

    model_config = ConfigDict(extra="forbid")

    def color_for(self, delta: float) -> Color:
        """Marker color for a pixel counted as a difference."""
        if delta < 0 and self.diff_color_alt is not None:
            return self.diff_color_alt
        return self.diff_color
