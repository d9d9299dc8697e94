# helpers/sitemap_utils.py
"""
Sitemap entry encoding: turns URL, image, video and index entries into
XML fragments. Pure functions, no I/O.

Entries may be given as the pydantic models below or as plain dicts
with the same keys. Unknown keys raise InvalidOptionError, invalid
values raise EntryValidationError.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union
from xml.sax.saxutils import escape, quoteattr

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as ModelValidationError

from core.errors import EntryValidationError, InvalidOptionError

DateLike = Union[datetime, date, int, str]


class ChangeFrequency(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


# ---------------------------------------------------------------
# Entry models
# ---------------------------------------------------------------
class _Entry(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ImageEntry(_Entry):
    loc: str
    title: Optional[str] = None
    caption: Optional[str] = None
    geo_location: Optional[str] = None
    license: Optional[str] = None


class VideoPlayer(_Entry):
    url: str
    allow_embed: Optional[bool] = None
    autoplay: Optional[str] = None


class VideoRestriction(_Entry):
    relationship: str = "allow"  # allow | deny
    value: str  # space separated ISO 3166 country codes


class VideoGallery(_Entry):
    url: str
    title: Optional[str] = None


class VideoPrice(_Entry):
    currency: str
    amount: Union[int, float, str]


class VideoUploader(_Entry):
    name: str
    info: Optional[str] = None


class VideoEntry(_Entry):
    thumbnail_url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    content_url: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1, le=28800)  # seconds
    expiration_date: Optional[DateLike] = None
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)
    view_count: Optional[int] = Field(None, ge=0)
    publication_date: Optional[DateLike] = None
    family_friendly: Optional[Union[bool, str]] = None
    requires_subscription: Optional[Union[bool, str]] = None
    live: Optional[Union[bool, str]] = None
    player: Optional[VideoPlayer] = None
    restriction: Optional[VideoRestriction] = None
    gallery: Optional[VideoGallery] = None
    price: Optional[VideoPrice] = None
    uploader: Optional[VideoUploader] = None


class UrlOptions(_Entry):
    """Optional metadata of a <url> block."""

    last_modified: Optional[DateLike] = None
    change_frequency: Optional[ChangeFrequency] = None
    priority: Optional[float] = Field(None, ge=0.0, le=1.0)
    images: List[ImageEntry] = Field(default_factory=list)
    videos: List[VideoEntry] = Field(default_factory=list)


M = TypeVar("M", bound=BaseModel)


def validate_entry(model: Type[M], data: Any, what: str = "options") -> M:
    """Build an entry model from a dict, mapping pydantic errors to sitemap errors."""
    if isinstance(data, model):
        return data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise EntryValidationError(f"{what} must be a mapping, got {type(data).__name__}")

    try:
        return model.model_validate(dict(data))
    except ModelValidationError as e:
        unknown = [_dotted(err["loc"]) for err in e.errors() if err["type"] == "extra_forbidden"]
        if unknown:
            raise InvalidOptionError(unknown) from e
        raise EntryValidationError(f"Invalid {what}: {e}") from e


def _dotted(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


# ---------------------------------------------------------------
# Value formatting
# ---------------------------------------------------------------
def normalize_date(value: DateLike) -> str:
    """
    Normalize a last-modified style value.
    Epoch seconds (int or digit string) become YYYY-MM-DD (UTC),
    date/datetime objects use isoformat(), naive datetimes are taken as UTC,
    other strings pass through.
    """
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, int) or (isinstance(value, str) and value.isdigit()):
        return datetime.fromtimestamp(int(value), tz=timezone.utc).strftime("%Y-%m-%d")
    return str(value)


def _yes_no(value: Union[bool, str]) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _attrs(attributes: Optional[Dict[str, Any]]) -> str:
    if not attributes:
        return ""
    return "".join(
        f" {name}={quoteattr(_yes_no(value))}"
        for name, value in attributes.items()
        if value is not None
    )


def _element(tag: str, text: Any, attributes: Optional[Dict[str, Any]] = None) -> str:
    return f"<{tag}{_attrs(attributes)}>{escape(str(text))}</{tag}>"


def _cdata_element(tag: str, text: str) -> str:
    # "]]>" cannot appear inside a CDATA section, split it across two
    body = text.replace("]]>", "]]]]><![CDATA[>")
    return f"<{tag}><![CDATA[{body}]]></{tag}>"


# ---------------------------------------------------------------
# Encoders
# ---------------------------------------------------------------
def encode_image(image: Union[ImageEntry, Mapping[str, Any]]) -> str:
    image = validate_entry(ImageEntry, image, "image")
    parts = ["<image:image>", _element("image:loc", image.loc)]
    for tag, value in (
        ("image:title", image.title),
        ("image:caption", image.caption),
        ("image:geo_location", image.geo_location),
        ("image:license", image.license),
    ):
        if value is not None:
            parts.append(_element(tag, value))
    parts.append("</image:image>")
    return "".join(parts)


def encode_video(video: Union[VideoEntry, Mapping[str, Any]]) -> str:
    """Build a <video:video> block; every unset field is left out."""
    video = validate_entry(VideoEntry, video, "video")
    parts = ["<video:video>"]

    if video.thumbnail_url is not None:
        parts.append(_element("video:thumbnail_loc", video.thumbnail_url))
    if video.title is not None:
        parts.append(_cdata_element("video:title", video.title))
    if video.description is not None:
        parts.append(_cdata_element("video:description", video.description))
    if video.content_url is not None:
        parts.append(_element("video:content_loc", video.content_url))
    if video.duration is not None:
        parts.append(_element("video:duration", video.duration))
    if video.expiration_date is not None:
        parts.append(_element("video:expiration_date", normalize_date(video.expiration_date)))
    if video.rating is not None:
        parts.append(_element("video:rating", video.rating))
    if video.view_count is not None:
        parts.append(_element("video:view_count", video.view_count))
    if video.publication_date is not None:
        parts.append(_element("video:publication_date", normalize_date(video.publication_date)))
    for tag, flag in (
        ("video:family_friendly", video.family_friendly),
        ("video:requires_subscription", video.requires_subscription),
        ("video:live", video.live),
    ):
        if flag is not None:
            parts.append(_element(tag, _yes_no(flag)))

    if video.player is not None:
        parts.append(_element(
            "video:player_loc",
            video.player.url,
            {"allow_embed": video.player.allow_embed, "autoplay": video.player.autoplay},
        ))
    if video.restriction is not None:
        parts.append(_element(
            "video:restriction",
            video.restriction.value,
            {"relationship": video.restriction.relationship},
        ))
    if video.gallery is not None:
        parts.append(_element("video:gallery_loc", video.gallery.url, {"title": video.gallery.title}))
    if video.price is not None:
        parts.append(_element("video:price", video.price.amount, {"currency": video.price.currency}))
    if video.uploader is not None:
        parts.append(_element("video:uploader", video.uploader.name, {"info": video.uploader.info}))

    parts.append("</video:video>")
    return "".join(parts)


def encode_url(
    url: str,
    options: Union[UrlOptions, Mapping[str, Any], None] = None,
    extra_content: Optional[str] = None,
) -> str:
    """
    Build a complete <url> block.
    Element order: loc, lastmod, changefreq, priority, images, videos,
    then extra_content as raw XML.
    """
    opts = validate_entry(UrlOptions, options)

    parts = ["<url>", _element("loc", url)]
    if opts.last_modified is not None:
        parts.append(_element("lastmod", normalize_date(opts.last_modified)))
    if opts.change_frequency is not None:
        parts.append(_element("changefreq", opts.change_frequency.value))
    if opts.priority is not None:
        parts.append(_element("priority", opts.priority))
    parts.extend(encode_image(image) for image in opts.images)
    parts.extend(encode_video(video) for video in opts.videos)
    if extra_content:
        parts.append(extra_content)
    parts.append("</url>")
    return "".join(parts)


def encode_sitemap(url: str, last_modified: Optional[DateLike] = None) -> str:
    """Build a <sitemap> block of an index file."""
    xml_code = "<sitemap>" + _element("loc", url)
    if last_modified is not None:
        xml_code += _element("lastmod", normalize_date(last_modified))
    return xml_code + "</sitemap>"
