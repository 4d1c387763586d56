"""Sample stream transforms."""

from .noise_injector import NoiseInjector, noisy, noisy_array

__all__ = ["NoiseInjector", "noisy", "noisy_array"]
