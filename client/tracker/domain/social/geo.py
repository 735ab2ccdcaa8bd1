"""Placeholder coordinates for friends who have not shared a location yet."""

from __future__ import annotations

import math
import random
from typing import Optional, Tuple

DEFAULT_BASE_LAT = 5.6037
DEFAULT_BASE_LNG = -0.1870
DEFAULT_RADIUS = 0.02


def random_nearby_coords(
	base_lat: Optional[float] = None,
	base_lng: Optional[float] = None,
	radius: float = DEFAULT_RADIUS,
	rng: Optional[random.Random] = None,
) -> Tuple[float, float]:
	"""Sample a point uniformly by area from the disk of `radius` degrees around the base.

	Taking the square root of the radial draw keeps the density flat across the
	disk instead of clustering near the centre.
	"""
	draw = rng.random if rng is not None else random.random
	lat0 = DEFAULT_BASE_LAT if base_lat is None else base_lat
	lng0 = DEFAULT_BASE_LNG if base_lng is None else base_lng
	r = radius * math.sqrt(draw())
	theta = draw() * 2 * math.pi
	return lat0 + r * math.cos(theta), lng0 + r * math.sin(theta)
