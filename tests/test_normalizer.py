import pytest

from chromatch.normalizer import UnifiedImage, normalize_image
from chromatch.palette_deriver import derive
from chromatch.providers import PexelsImage, PixabayImage, UnsplashImage


def test_unsplash_maps_fields_and_derives_palette(unsplash_record):
    image = normalize_image(UnsplashImage.model_validate(unsplash_record("u9", "#0C2A4D")), "unsplash")

    assert isinstance(image, UnifiedImage)
    assert image.id == "u9"
    assert image.source == "unsplash"
    assert image.color == "#0c2a4d"
    assert image.dominant_colors == derive("#0c2a4d")
    assert image.user.username == "analima"
    assert image.links.html == "https://unsplash.com/photos/u9"
    assert image.alt_description == "blue water surface"


def test_unsplash_links_fall_back_to_photo_page(unsplash_record):
    record = UnsplashImage.model_validate(unsplash_record("abc", "#ffffff", links=False))
    assert normalize_image(record, "unsplash").links.html == "https://unsplash.com/photos/abc"


@pytest.mark.parametrize("color", [None, "", "blue", "#12345"])
def test_unsplash_without_usable_color_is_dropped(unsplash_record, color):
    record = UnsplashImage.model_validate(unsplash_record("x", color))
    assert normalize_image(record, "unsplash") is None


def test_pexels_maps_into_unsplash_shape(pexels_record):
    image = normalize_image(PexelsImage.model_validate(pexels_record(42, "#A0522D")), "pexels")

    assert image.id == "42"
    assert image.source == "pexels"
    assert image.color == "#a0522d"
    assert image.urls.raw.endswith("/original.jpg")
    assert image.urls.full.endswith("/large2x.jpg")
    assert image.urls.regular.endswith("/large.jpg")
    assert image.urls.small.endswith("/medium.jpg")
    assert image.urls.thumb.endswith("/small.jpg")
    assert image.user.name == "Jane Doe"
    assert image.user.username == "jane-doe"
    assert "name=Jane%20Doe" in image.user.profile_image.small
    assert image.links.html == "https://www.pexels.com/photo/42/"
    assert image.alt_description == "Photo by Jane Doe"
    assert image.description is None


def test_pexels_without_avg_color_is_dropped(pexels_record):
    assert normalize_image(PexelsImage.model_validate(pexels_record(1, None)), "pexels") is None


def test_pixabay_never_normalizes(pixabay_record):
    assert normalize_image(PixabayImage.model_validate(pixabay_record(5)), "pixabay") is None


def test_unknown_provider_raises(unsplash_record):
    with pytest.raises(ValueError):
        normalize_image(UnsplashImage.model_validate(unsplash_record()), "flickr")


def test_wire_shape(unsplash_record):
    image = normalize_image(UnsplashImage.model_validate(unsplash_record("w", "#3b82f6")), "unsplash")
    dumped = image.model_dump(by_alias=True)

    assert "dominantColors" in dumped
    assert "alt_description" in dumped
    assert dumped["dominantColors"]["vibrant"] == "#3b82f6"
    assert "darkVibrant" in dumped["dominantColors"]
    assert dumped["user"]["profile_image"]["small"]
