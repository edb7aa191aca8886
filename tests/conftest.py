"""Shared provider-record factories."""

import pytest


def _unsplash(image_id="u1", color="#0c2a4d", links=True):
    record = {
        "id": image_id,
        "urls": {
            "raw": f"https://images.unsplash.com/{image_id}?raw",
            "full": f"https://images.unsplash.com/{image_id}?full",
            "regular": f"https://images.unsplash.com/{image_id}?w=1080",
            "small": f"https://images.unsplash.com/{image_id}?w=400",
            "thumb": f"https://images.unsplash.com/{image_id}?w=200",
        },
        "user": {
            "name": "Ana Lima",
            "username": "analima",
            "profile_image": {"small": "https://images.unsplash.com/profile-ana"},
        },
        "description": "Calm water",
        "alt_description": "blue water surface",
        "color": color,
        "likes": 12,
    }
    if links:
        record["links"] = {"html": f"https://unsplash.com/photos/{image_id}"}
    return record


def _pexels(image_id=1, avg_color="#a0522d", photographer="Jane Doe"):
    return {
        "id": image_id,
        "width": 4000,
        "src": {
            "original": f"https://images.pexels.com/{image_id}/original.jpg",
            "large2x": f"https://images.pexels.com/{image_id}/large2x.jpg",
            "large": f"https://images.pexels.com/{image_id}/large.jpg",
            "medium": f"https://images.pexels.com/{image_id}/medium.jpg",
            "small": f"https://images.pexels.com/{image_id}/small.jpg",
        },
        "photographer": photographer,
        "avg_color": avg_color,
    }


def _pixabay(image_id=1):
    return {
        "id": image_id,
        "pageURL": f"https://pixabay.com/photos/{image_id}/",
        "type": "photo",
        "tags": "sea, teal, water",
        "previewURL": f"https://cdn.pixabay.com/{image_id}_150.jpg",
        "webformatURL": f"https://pixabay.com/get/{image_id}_640.jpg",
        "largeImageURL": f"https://pixabay.com/get/{image_id}_1280.jpg",
        "user": "Sea Lover",
        "userImageURL": "",
    }


@pytest.fixture
def unsplash_record():
    return _unsplash


@pytest.fixture
def pexels_record():
    return _pexels


@pytest.fixture
def pixabay_record():
    return _pixabay
