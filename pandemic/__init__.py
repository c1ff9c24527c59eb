"""A turn-based strategy game in which four AI players conquer cities and paths amid a spreading virus."""

__version__ = "1.0.0"