"""Procedural versions of the arcade sound effects.

Each entry in ``SYNTHS`` returns a mono float waveform in ``[-1, 1]`` at
``SAMPLE_RATE``.  :func:`load_sound` prefers a WAV file from a sound
directory and falls back to these waveforms.
"""

import logging
import os

import numpy as np
import pygame

from .settings import SAMPLE_RATE, SILENT_DURATION, SOUND_FILES


LOGGER = logging.getLogger(__name__)


def timeline(duration, sample_rate=SAMPLE_RATE):
    return np.linspace(0, duration, int(sample_rate * duration), endpoint=False)


def sine_wave(frequency, duration, volume=0.5):
    return volume * np.sin(2 * np.pi * frequency * timeline(duration))


def square_wave(frequency, duration, volume=0.5):
    return volume * np.sign(np.sin(2 * np.pi * frequency * timeline(duration)))


def sweep(start_freq, end_freq, duration, volume=0.5):
    """Square wave whose pitch slides from ``start_freq`` to ``end_freq``."""
    t = timeline(duration)
    freqs = np.linspace(start_freq, end_freq, len(t))
    phase = 2 * np.pi * np.cumsum(freqs) / SAMPLE_RATE
    return volume * np.sign(np.sin(phase))


def noise(duration, volume=0.5, seed=None):
    rng = np.random.default_rng(seed)
    return rng.uniform(-volume, volume, int(SAMPLE_RATE * duration))


def lowpass(wave, cutoff):
    window = max(1, int(SAMPLE_RATE / cutoff))
    kernel = np.ones(window) / window
    return np.convolve(wave, kernel, mode="same")


def envelope(wave, attack=0.005, decay=None):
    length = len(wave)
    env = np.ones(length)
    attack_samples = min(length, int(attack * SAMPLE_RATE))
    if attack_samples > 0:
        env[:attack_samples] = np.linspace(0, 1, attack_samples)
    if decay is None:
        decay_samples = length - attack_samples
    else:
        decay_samples = min(length - attack_samples, int(decay * SAMPLE_RATE))
    if decay_samples > 0:
        env[length - decay_samples:] = np.linspace(1, 0, decay_samples) ** 2
    return wave * env


def beat(frequency):
    return envelope(square_wave(frequency, 0.12, volume=0.6), decay=0.08)


def bang(duration, cutoff, volume):
    return envelope(lowpass(noise(duration, volume), cutoff))


def wave_end():
    notes = [sine_wave(freq, 0.12, volume=0.4) for freq in (523, 659, 784, 1047)]
    return envelope(np.concatenate(notes), decay=0.15)


SYNTHS = {
    "beat1": lambda: beat(60),
    "beat2": lambda: beat(55),
    "fire": lambda: envelope(sweep(1400, 300, 0.12, volume=0.35)),
    "bang_large": lambda: bang(0.8, 400, 0.9),
    "bang_medium": lambda: bang(0.5, 800, 0.8),
    "bang_small": lambda: bang(0.3, 1600, 0.7),
    "wave_end": wave_end,
    "thrust": lambda: envelope(lowpass(noise(0.22, 0.5), 300), attack=0.02, decay=0.05),
    "extra_life": lambda: envelope(square_wave(1000, 0.1, volume=0.35), decay=0.02),
}


def synthesize(key):
    try:
        builder = SYNTHS[key]
    except KeyError:
        raise ValueError(f"no synthesizer for sound {key!r}") from None
    return np.clip(builder(), -1.0, 1.0)


def to_sound(wave):
    init = pygame.mixer.get_init()
    if not init:
        raise pygame.error("mixer not initialized")
    frequency, _, channels = init
    if frequency != SAMPLE_RATE:
        positions = np.linspace(0, len(wave) - 1, int(len(wave) * frequency / SAMPLE_RATE))
        wave = np.interp(positions, np.arange(len(wave)), wave)
    samples = (wave * 32767).astype(np.int16)
    if channels > 1:
        samples = np.column_stack([samples] * channels)
    return pygame.sndarray.make_sound(np.ascontiguousarray(samples))


def silent_sound(duration=SILENT_DURATION):
    return to_sound(np.zeros(int(SAMPLE_RATE * duration)))


def load_sound(key, sound_dir=None):
    if not pygame.mixer.get_init():
        raise pygame.error("mixer not initialized")
    if sound_dir:
        path = os.path.join(sound_dir, SOUND_FILES.get(key, f"{key}.wav"))
        if os.path.exists(path):
            LOGGER.debug("loading sound %s from %s", key, path)
            return pygame.mixer.Sound(path)
        LOGGER.debug("no file for sound %s at %s, synthesizing", key, path)
    return to_sound(synthesize(key))
