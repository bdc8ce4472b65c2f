"""
Sitemap item model and attribute validation.
One SitemapItem becomes one <url> element.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from dateutil.tz import UTC
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from sitemap_writer.exceptions import ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)

LastModified = Union[int, float, datetime]


class ChangeFrequency(str, Enum):
    """Valid values for <changefreq>."""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


VALID_FREQUENCIES = [f.value for f in ChangeFrequency]


def validate_location(location: Any) -> str:
    """
    Check that location is an absolute URL.

    Returns:
        The URL exactly as given (not pydantic's normalized form)
    """
    if not isinstance(location, str):
        raise ValidationError(
            f"The location must be a valid URL. You have specified: {location!r}.",
            context={"location": location},
        )
    try:
        _URL_ADAPTER.validate_python(location)
    except PydanticValidationError as e:
        raise ValidationError(
            f"The location must be a valid URL. You have specified: {location}.",
            context={"location": location},
        ) from e
    return location


def validate_priority(priority: Any) -> float:
    """Priority must be numeric and between 0.0 and 1.0 inclusive."""
    value = None
    if isinstance(priority, (int, float, Decimal)) and not isinstance(priority, bool):
        value = float(priority)
    elif isinstance(priority, str):
        try:
            value = float(priority.strip())
        except ValueError:
            value = None

    if value is None or math.isnan(value) or value < 0 or value > 1:
        raise ValidationError(
            "Please specify valid priority. Valid values range from 0.0 to 1.0. "
            f"You have specified: {priority}.",
            context={"priority": priority},
        )
    return value


def validate_frequency(frequency: Any) -> ChangeFrequency:
    try:
        return ChangeFrequency(frequency)
    except (ValueError, TypeError) as e:
        raise ValidationError(
            "Please specify valid changeFrequency. Valid values are: "
            f"{', '.join(VALID_FREQUENCIES)}. You have specified: {frequency}.",
            context={"frequency": frequency},
        ) from e


def validate_last_modified(last_modified: Any, tz: Optional[tzinfo] = None) -> LastModified:
    """Accept a Unix timestamp or a datetime that renders in ``tz`` (UTC if omitted)."""
    if isinstance(last_modified, bool) or not isinstance(last_modified, (int, float, datetime)):
        raise ValidationError(
            "Last modified must be a Unix timestamp or a datetime. "
            f"You have specified: {last_modified!r}.",
            context={"last_modified": last_modified},
        )
    if isinstance(last_modified, float) and not math.isfinite(last_modified):
        raise ValidationError(
            f"Last modified must be a finite timestamp. You have specified: {last_modified}.",
            context={"last_modified": last_modified},
        )
    format_last_modified(last_modified, tz or UTC)
    return last_modified


def format_priority(priority: float) -> str:
    """Format with one decimal digit, rounding half up."""
    rounded = Decimal(repr(priority)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded:.1f}"


def format_last_modified(last_modified: LastModified, tz: tzinfo) -> str:
    """
    Render as YYYY-MM-DDTHH:MM:SS+HH:MM.

    Timestamps and naive datetimes are placed in ``tz``; aware datetimes
    keep their own offset.
    """
    if isinstance(last_modified, datetime):
        moment = last_modified if last_modified.tzinfo else last_modified.replace(tzinfo=tz)
    else:
        try:
            moment = datetime.fromtimestamp(last_modified, tz=tz)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(
                f"Last modified timestamp out of range: {last_modified}.",
                context={"last_modified": last_modified},
            ) from e
    return moment.replace(microsecond=0).isoformat()


@dataclass
class SitemapItem:
    """A single URL entry with optional metadata."""
    location: Optional[str] = None
    last_modified: Optional[LastModified] = None
    frequency: Optional[ChangeFrequency] = None
    priority: Optional[float] = None

    # language code -> URL, kept in insertion order
    alternate_languages: Dict[str, str] = field(default_factory=dict)

    def validated(self, tz: Optional[tzinfo] = None) -> "SitemapItem":
        """Return a checked copy with frequency and priority normalized."""
        return SitemapItem(
            location=validate_location(self.location) if self.location is not None else None,
            last_modified=(
                validate_last_modified(self.last_modified, tz)
                if self.last_modified is not None else None
            ),
            frequency=validate_frequency(self.frequency) if self.frequency is not None else None,
            priority=validate_priority(self.priority) if self.priority is not None else None,
            alternate_languages=dict(self.alternate_languages or {}),
        )

    def child_elements(self, tz: tzinfo) -> List[Tuple[str, str]]:
        """
        (tag, text) pairs for the <url> children, in output order.

        Unset fields are skipped. A priority of 0.0 counts as unset and
        is not written.
        """
        children = []
        if self.location:
            children.append(("loc", self.location))
        if self.last_modified is not None:
            children.append(("lastmod", format_last_modified(self.last_modified, tz)))
        if self.frequency:
            children.append(("changefreq", ChangeFrequency(self.frequency).value))
        if self.priority:
            children.append(("priority", format_priority(self.priority)))
        return children
