"""Image file input and output."""

from chromasplit.io.image_io import crop_image, load_image, resize_image, save_webp

__all__ = [
    "crop_image",
    "load_image",
    "resize_image",
    "save_webp",
]
