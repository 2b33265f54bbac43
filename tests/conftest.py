import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from vectoroids.audio import SoundPoolManager
from vectoroids.game import Game
from vectoroids.scheduler import Scheduler


WIDTH = 800
HEIGHT = 600


class FakeChannel:
    def __init__(self, sound):
        self.sound = sound
        self.busy = True
        self.stopped = False

    def get_busy(self):
        return self.busy

    def get_sound(self):
        return self.sound if self.busy else None

    def stop(self):
        self.busy = False
        self.stopped = True


class FakeSound:
    def __init__(self, key):
        self.key = key
        self.volume = None
        self.channels = []

    def set_volume(self, volume):
        self.volume = volume

    def play(self):
        channel = FakeChannel(self)
        self.channels.append(channel)
        return channel


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        self.now += 0.001
        return self.now


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def sounds():
    return {}


@pytest.fixture
def audio(scheduler, sounds):
    def loader(key):
        sounds[key] = FakeSound(key)
        return sounds[key]

    manager = SoundPoolManager(scheduler, loader=loader, clock=FakeClock())
    manager.load()
    return manager


@pytest.fixture
def game(audio):
    return Game(WIDTH, HEIGHT, audio=audio, rng=random.Random(1234))
