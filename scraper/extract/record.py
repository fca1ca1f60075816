"""
Output record types and assembly.

One OutputRecord is built per page and pushed to the dataset as-is. Fields
are fixed; sentinel or empty values coming from upstream stages are carried
through verbatim.
"""

from __future__ import annotations

import base64
from dataclasses import asdict, dataclass

from scraper.extract.constants import SCREENSHOT_ENCODING, SCREENSHOT_MIME_TYPE


@dataclass(frozen=True)
class ScreenshotResult:
    """Base64 image payload plus the metadata needed to decode it."""

    encoding: str
    type: str
    img: str

    @classmethod
    def from_png(cls, png_bytes: bytes) -> "ScreenshotResult":
        return cls(
            encoding=SCREENSHOT_ENCODING,
            type=SCREENSHOT_MIME_TYPE,
            img=base64.b64encode(png_bytes).decode("ascii"),
        )


@dataclass(frozen=True)
class OutputRecord:
    """The unit pushed to the output dataset."""

    url: str
    name: str
    price: str
    screenshot: ScreenshotResult

    def to_dict(self) -> dict:
        return asdict(self)


def assemble_record(
    *,
    url: str,
    name: str,
    price: str,
    screenshot: ScreenshotResult,
) -> OutputRecord:
    """Combine the stage results into one record. Pure; no substitution."""
    return OutputRecord(url=url, name=name, price=price, screenshot=screenshot)
