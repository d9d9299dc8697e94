from datetime import date, datetime, timezone

import pytest

from core.errors import EntryValidationError, InvalidOptionError
from helpers.sitemap_utils import (
    ChangeFrequency,
    ImageEntry,
    UrlOptions,
    encode_image,
    encode_sitemap,
    encode_url,
    encode_video,
    normalize_date,
)


# ---------------------------------------------------------------
# normalize_date
# ---------------------------------------------------------------
def test_epoch_and_date_string_normalize_to_same_day():
    assert normalize_date(1594771200) == "2020-07-15"
    assert normalize_date("1594771200") == "2020-07-15"
    assert normalize_date("2020-07-15") == "2020-07-15"
    assert normalize_date(date(2020, 7, 15)) == "2020-07-15"


def test_normalize_date_keeps_datetime_precision():
    value = datetime(2020, 7, 15, 10, 30, tzinfo=timezone.utc)
    assert normalize_date(value) == "2020-07-15T10:30:00+00:00"


def test_normalize_date_naive_datetime_is_utc():
    assert normalize_date(datetime(2020, 7, 15, 10, 30)) == "2020-07-15T10:30:00+00:00"


def test_normalize_date_passes_literal_strings_through():
    assert normalize_date("2004-12-23T18:00:15+00:00") == "2004-12-23T18:00:15+00:00"


# ---------------------------------------------------------------
# encode_url
# ---------------------------------------------------------------
def test_encode_url_full_scenario():
    xml = encode_url("http://test.url", {
        "last_modified": "2010-07-15",
        "change_frequency": "daily",
        "priority": 0.2,
    })
    assert xml == (
        "<url><loc>http://test.url</loc><lastmod>2010-07-15</lastmod>"
        "<changefreq>daily</changefreq><priority>0.2</priority></url>"
    )


def test_encode_url_omits_unset_fields():
    assert encode_url("http://test.url") == "<url><loc>http://test.url</loc></url>"


def test_encode_url_escapes_location():
    xml = encode_url("http://test.url/?a=1&b=2")
    assert "<loc>http://test.url/?a=1&amp;b=2</loc>" in xml


def test_encode_url_epoch_and_string_lastmod_identical():
    assert encode_url("http://a", {"last_modified": 1594771200}) == \
        encode_url("http://a", {"last_modified": "2020-07-15"})


def test_encode_url_element_order():
    xml = encode_url(
        "http://test.url",
        {
            "videos": [{"title": "clip"}],
            "images": [{"loc": "http://test.url/a.jpg"}],
            "priority": 0.5,
            "change_frequency": ChangeFrequency.WEEKLY,
            "last_modified": "2020-01-01",
        },
        extra_content="<custom:tag>x</custom:tag>",
    )
    positions = [xml.index(tag) for tag in (
        "<loc>", "<lastmod>", "<changefreq>", "<priority>",
        "<image:image>", "<video:video>", "<custom:tag>", "</url>",
    )]
    assert positions == sorted(positions)


def test_encode_url_keeps_image_order():
    xml = encode_url("http://a", {"images": [{"loc": "http://a/1.jpg"}, {"loc": "http://a/2.jpg"}]})
    assert xml.index("1.jpg") < xml.index("2.jpg")


def test_encode_url_accepts_model():
    options = UrlOptions(priority=0.3, images=[ImageEntry(loc="http://a/1.jpg")])
    xml = encode_url("http://a", options)
    assert "<priority>0.3</priority>" in xml
    assert "<image:loc>http://a/1.jpg</image:loc>" in xml


def test_unknown_option_raises_even_with_valid_keys():
    with pytest.raises(InvalidOptionError) as exc_info:
        encode_url("http://a", {"priority": 0.5, "bogus": 1, "other": 2})
    assert sorted(exc_info.value.options) == ["bogus", "other"]
    assert "bogus" in str(exc_info.value)


def test_unknown_nested_option_is_reported_with_path():
    with pytest.raises(InvalidOptionError) as exc_info:
        encode_url("http://a", {"images": [{"loc": "http://a/1.jpg", "bogus": 1}]})
    assert exc_info.value.options == ["images.0.bogus"]


def test_unknown_option_wins_over_invalid_value():
    with pytest.raises(InvalidOptionError):
        encode_url("http://a", {"priority": 7, "bogus": 1})


@pytest.mark.parametrize("options", [
    {"priority": 1.5},
    {"change_frequency": "sometimes"},
    {"images": [{"title": "no location"}]},
])
def test_invalid_values_raise_validation_error(options):
    with pytest.raises(EntryValidationError):
        encode_url("http://a", options)


def test_options_must_be_mapping():
    with pytest.raises(EntryValidationError):
        encode_url("http://a", ["priority", 0.5])


# ---------------------------------------------------------------
# encode_image / encode_video
# ---------------------------------------------------------------
def test_encode_image_field_order():
    xml = encode_image({
        "license": "http://example.com/license",
        "geo_location": "Limerick, Ireland",
        "caption": "A & B",
        "title": "Cover",
        "loc": "http://example.com/image.jpg",
    })
    assert xml == (
        "<image:image>"
        "<image:loc>http://example.com/image.jpg</image:loc>"
        "<image:title>Cover</image:title>"
        "<image:caption>A &amp; B</image:caption>"
        "<image:geo_location>Limerick, Ireland</image:geo_location>"
        "<image:license>http://example.com/license</image:license>"
        "</image:image>"
    )


def test_encode_image_requires_loc():
    with pytest.raises(EntryValidationError):
        encode_image({"title": "Cover"})


def test_encode_video_full():
    xml = encode_video({
        "thumbnail_url": "http://v/thumb.jpg",
        "title": "Grilling <steaks>",
        "description": "Tips ]]> tricks",
        "content_url": "http://v/video.mp4",
        "duration": 600,
        "expiration_date": 1594771200,
        "rating": 4.2,
        "view_count": 12345,
        "publication_date": "2020-07-01",
        "family_friendly": True,
        "requires_subscription": False,
        "live": "no",
        "player": {"url": "http://v/player", "allow_embed": True, "autoplay": "ap=1"},
        "restriction": {"relationship": "allow", "value": "IE GB"},
        "gallery": {"title": "Cooking", "url": "http://v/gallery"},
        "price": {"currency": "EUR", "amount": "1.99"},
        "uploader": {"info": "http://v/users/grilly", "name": "Grilly"},
    })
    assert xml == (
        "<video:video>"
        "<video:thumbnail_loc>http://v/thumb.jpg</video:thumbnail_loc>"
        "<video:title><![CDATA[Grilling <steaks>]]></video:title>"
        "<video:description><![CDATA[Tips ]]]]><![CDATA[> tricks]]></video:description>"
        "<video:content_loc>http://v/video.mp4</video:content_loc>"
        "<video:duration>600</video:duration>"
        "<video:expiration_date>2020-07-15</video:expiration_date>"
        "<video:rating>4.2</video:rating>"
        "<video:view_count>12345</video:view_count>"
        "<video:publication_date>2020-07-01</video:publication_date>"
        "<video:family_friendly>yes</video:family_friendly>"
        "<video:requires_subscription>no</video:requires_subscription>"
        "<video:live>no</video:live>"
        '<video:player_loc allow_embed="yes" autoplay="ap=1">http://v/player</video:player_loc>'
        '<video:restriction relationship="allow">IE GB</video:restriction>'
        '<video:gallery_loc title="Cooking">http://v/gallery</video:gallery_loc>'
        '<video:price currency="EUR">1.99</video:price>'
        '<video:uploader info="http://v/users/grilly">Grilly</video:uploader>'
        "</video:video>"
    )


def test_encode_video_omits_unset_fields():
    assert encode_video({}) == "<video:video></video:video>"


def test_encode_video_player_without_attributes():
    xml = encode_video({"player": {"url": "http://v/player", "allow_embed": False}})
    assert '<video:player_loc allow_embed="no">http://v/player</video:player_loc>' in xml


def test_encode_video_rejects_unknown_player_key():
    with pytest.raises(InvalidOptionError) as exc_info:
        encode_video({"player": {"url": "http://v/player", "size": "big"}})
    assert exc_info.value.options == ["player.size"]


# ---------------------------------------------------------------
# encode_sitemap
# ---------------------------------------------------------------
def test_encode_sitemap():
    assert encode_sitemap("http://test.url/s1.xml", 1594771200) == (
        "<sitemap><loc>http://test.url/s1.xml</loc><lastmod>2020-07-15</lastmod></sitemap>"
    )
    assert encode_sitemap("http://test.url/s1.xml") == "<sitemap><loc>http://test.url/s1.xml</loc></sitemap>"
