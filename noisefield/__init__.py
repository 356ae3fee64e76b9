from .fractal import BASES, NoiseField, make_basis
from .noise_2d import Perlin2D
from .simplex_2d import Simplex2D
from .value_noise_2d import ValueNoise2D

__all__ = ["BASES", "NoiseField", "Perlin2D", "Simplex2D", "ValueNoise2D", "make_basis"]
