from dataclasses import dataclass

import numpy as np

from color_predictor.exceptions import DataError, InvalidInputError
from color_predictor.model_training.colors import hex_to_rgb


@dataclass(frozen=True)
class ColorDataset:
    xs: np.ndarray
    ys: np.ndarray
    total_samples: int
    # Entries that were not valid colors and were left out
    dropped: int = 0


def _parse_colors(colors):
    vectors = [hex_to_rgb(color) for color in colors]
    return [v for v in vectors if v is not None]


def preprocess_data(liked_colors, disliked_colors):
    """Turn liked and disliked hex colors into a labelled training set.

    Liked colors get label 1, disliked colors label 0, and the liked samples
    come first. Entries that are not valid hex colors are skipped.
    """
    if not isinstance(liked_colors, (list, tuple)) or not isinstance(disliked_colors, (list, tuple)):
        raise InvalidInputError('Color arrays must be provided')

    if len(liked_colors) == 0 or len(disliked_colors) == 0:
        raise InvalidInputError('Both liked and disliked colors must contain data')

    liked = _parse_colors(liked_colors)
    disliked = _parse_colors(disliked_colors)

    if not liked or not disliked:
        raise DataError('No valid colors found after processing')

    total = len(liked) + len(disliked)
    xs = np.array(liked + disliked, dtype='float32').reshape(total, 3)
    ys = np.array([1] * len(liked) + [0] * len(disliked), dtype='float32').reshape(total, 1)

    return ColorDataset(
        xs=xs,
        ys=ys,
        total_samples=total,
        dropped=len(liked_colors) + len(disliked_colors) - total
    )
