"""Pooled sound playback, the background beat and the thrust loop.

Every sound key gets a fixed number of voices.  Triggering a sound takes a
free voice, or steals the one that started longest ago, and starts a fresh
mixer channel for it, so rapid repeats never cut off each other until the
pool is exhausted.  Nothing in here raises into game code: sounds that fail
to load are replaced by silence and playback errors are logged.
"""

import logging
import time
from dataclasses import dataclass

import pygame

from . import synth
from .settings import (
    BEAT_BASE_INTERVAL,
    BEAT_MIN_INTERVAL,
    EXTRA_LIFE_BEEP_INTERVAL,
    EXTRA_LIFE_BEEPS,
    SOUND_POOLS,
    SOUND_VOLUME,
    THRUST_INTERVAL,
)


LOGGER = logging.getLogger(__name__)

BANG_SOUNDS = {
    "large": "bang_large",
    "medium": "bang_medium",
    "small": "bang_small",
}


@dataclass
class SoundVoice:
    sound: object = None
    channel: object = None
    playing: bool = False
    started_at: float = 0.0

    def finished(self):
        if self.channel is None:
            return True
        return not self.channel.get_busy() or self.channel.get_sound() is not self.sound

    def stop(self):
        if self.channel is not None and self.channel.get_sound() is self.sound:
            self.channel.stop()
        self.channel = None
        self.playing = False


class SoundPoolManager:
    def __init__(self, scheduler, loader=None, pools=None, clock=time.monotonic, volume=SOUND_VOLUME):
        self.scheduler = scheduler
        self.loader = loader
        self.pool_sizes = dict(SOUND_POOLS if pools is None else pools)
        self.clock = clock
        self.volume = volume
        self.pools = {}
        self.loaded = False

        self.base_interval = BEAT_BASE_INTERVAL
        self.min_interval = BEAT_MIN_INTERVAL
        self.beat_interval = self.base_interval
        self.current_beat = 0
        self.wave = 0
        self._last_beat_at = None
        self._beat_timer = None
        self._thrust_timer = None
        self._beep_timers = []

    def load(self):
        if self.loaded:
            return
        silent = None
        for key, size in self.pool_sizes.items():
            sound = self._load_sound(key)
            if sound is None:
                if silent is None:
                    silent = self._silent_sound()
                sound = silent
            self.pools[key] = [SoundVoice(sound) for _ in range(size)]
        self.loaded = True
        LOGGER.info("sound pools ready: %s", ", ".join(f"{k}x{len(v)}" for k, v in self.pools.items()))

    def _load_sound(self, key):
        if self.loader is None:
            return None
        try:
            sound = self.loader(key)
        except (pygame.error, OSError, ValueError) as exc:
            LOGGER.warning("failed to load sound %s, using silence: %s", key, exc)
            return None
        if sound is not None and hasattr(sound, "set_volume"):
            sound.set_volume(self.volume)
        return sound

    def _silent_sound(self):
        try:
            return synth.silent_sound()
        except pygame.error as exc:
            LOGGER.warning("mixer unavailable, sounds are muted: %s", exc)
            return None

    def poll(self):
        for pool in self.pools.values():
            for voice in pool:
                if voice.playing and voice.finished():
                    voice.playing = False
                    voice.channel = None

    def play_sound(self, key):
        pool = self.pools.get(key)
        if not pool:
            LOGGER.debug("no voices for sound %s", key)
            return None
        self.poll()
        voice = next((v for v in pool if not v.playing), None)
        if voice is None:
            voice = min(pool, key=lambda v: v.started_at)
            LOGGER.debug("reclaiming %s voice started at %.3f", key, voice.started_at)
            voice.stop()
        voice.channel = None
        if voice.sound is not None:
            try:
                voice.channel = voice.sound.play()
            except pygame.error as exc:
                LOGGER.warning("could not play sound %s: %s", key, exc)
        voice.playing = True
        voice.started_at = self.clock()
        return voice

    def stop_sound(self, key):
        for voice in self.pools.get(key, ()):
            if voice.playing:
                voice.stop()

    def play_fire_sound(self):
        self.play_sound("fire")

    def play_bang_sound(self, tier):
        key = BANG_SOUNDS.get(tier)
        if key:
            self.play_sound(key)

    def play_wave_end_sound(self):
        self.play_sound("wave_end")

    def play_extra_life_sound(self):
        self._beep_timers = [t for t in self._beep_timers if t.active]
        self.play_sound("extra_life")
        for i in range(1, EXTRA_LIFE_BEEPS):
            timer = self.scheduler.call_later(i * EXTRA_LIFE_BEEP_INTERVAL, lambda: self.play_sound("extra_life"))
            self._beep_timers.append(timer)

    # Background beat

    @property
    def beat_playing(self):
        return self._beat_timer is not None and self._beat_timer.active

    def start_background_beat(self, wave=1, delay=0.0):
        self.stop_background_beat()
        self.wave = wave
        self.beat_interval = self.base_interval
        self._last_beat_at = None
        if delay > 0:
            self._beat_timer = self.scheduler.call_later(delay, self._start_beat_sequence)
        else:
            self._start_beat_sequence()

    def _start_beat_sequence(self):
        self.current_beat = 0
        self._play_next_beat()

    def _play_next_beat(self):
        self._last_beat_at = self.scheduler.time
        self.play_sound("beat1" if self.current_beat == 0 else "beat2")
        self.current_beat = 1 - self.current_beat
        self._beat_timer = self.scheduler.call_later(self.beat_interval, self._play_next_beat)

    def stop_background_beat(self):
        if self._beat_timer is not None:
            self._beat_timer.cancel()
            self._beat_timer = None

    def calculate_beat_interval(self, progress):
        progress = min(1.0, max(0.0, progress))
        return max(self.min_interval, self.base_interval - progress * (self.base_interval - self.min_interval))

    def update_beat_interval(self, remaining, total):
        progress = 1.0 if total <= 0 else 1 - remaining / total
        self.beat_interval = self.calculate_beat_interval(progress)
        if self.beat_playing and self._last_beat_at is not None:
            # never later than the beat already pending
            due = max(0.0, self._last_beat_at + self.beat_interval - self.scheduler.time)
            self._beat_timer.cancel()
            self._beat_timer = self.scheduler.call_later(due, self._play_next_beat)

    # Thrust loop

    @property
    def thrust_playing(self):
        return self._thrust_timer is not None and self._thrust_timer.active

    def play_thrust_sound(self):
        self.stop_thrust_sound()
        self.play_sound("thrust")
        self._thrust_timer = self.scheduler.call_every(THRUST_INTERVAL, lambda: self.play_sound("thrust"))

    def stop_thrust_sound(self):
        if self._thrust_timer is not None:
            self._thrust_timer.cancel()
            self._thrust_timer = None
        self.stop_sound("thrust")

    def stop_all(self):
        self.stop_background_beat()
        self.stop_thrust_sound()
        for timer in self._beep_timers:
            timer.cancel()
        self._beep_timers = []
        for pool in self.pools.values():
            for voice in pool:
                if voice.playing:
                    voice.stop()
