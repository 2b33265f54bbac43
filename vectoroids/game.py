import logging
import math
import random

import pygame

from . import kinematics, synth
from .asteroid import Asteroid
from .audio import SoundPoolManager
from .collision import find_bullet_hits, find_ship_hit
from .controls import Controls
from .scheduler import Scheduler
from .settings import (
    ASTEROID_SPEED_RANGE,
    BACKGROUND_BEAT_DELAY,
    BASE_ASTEROIDS,
    DEFAULT_HIGH_SCORE,
    EXTRA_LIFE_SCORE,
    GAME_OVER_DELAY,
    HEIGHT,
    INITIAL_LIVES,
    WAVE_CREATION_DELAY,
    WAVE_SPAWN_SPREAD,
    WIDTH,
)
from .ship import Ship


LOGGER = logging.getLogger(__name__)


class Game:
    """Owns every entity of a session and advances them one tick at a time.

    Deferred transitions (game over, next wave, beat restart) are timers on
    ``self.scheduler``; the game holds each one and cancels it on
    :meth:`reset` and when the game ends, so a stale callback can never
    touch a newer session.
    """

    def __init__(self, width=WIDTH, height=HEIGHT, audio=None, rng=None, high_score_store=None):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        if audio is None:
            self.scheduler = Scheduler()
            audio = SoundPoolManager(self.scheduler, loader=synth.load_sound)
        else:
            self.scheduler = audio.scheduler
        self.audio = audio
        self.audio.load()

        self.high_score_store = high_score_store
        stored = high_score_store.load() if high_score_store else None
        self.high_score = DEFAULT_HIGH_SCORE if stored is None else stored

        self._game_over_timer = None
        self._wave_timer = None
        self._beat_timer = None
        self.reset()

    def reset(self):
        self._cancel_timers()
        self.audio.stop_all()

        self.score = 0
        self.lives = INITIAL_LIVES
        self.wave = 1
        self.game_over = False
        self.game_over_pending = False
        self.game_over_visible = False
        self.final_score = 0
        self.paused = False
        self.last_extra_life_score = 0
        self.initial_asteroid_count = 0

        self.ship = Ship(self.width / 2, self.height / 2, self.width, self.height, rng=self.rng)
        self.ship.reset()
        self.bullets = []
        self.asteroids = []
        self.create_new_wave()
        self.audio.start_background_beat(self.wave)
        LOGGER.info("new game started")

    def _cancel_timers(self):
        for name in ("_game_over_timer", "_wave_timer", "_beat_timer"):
            timer = getattr(self, name)
            if timer is not None:
                timer.cancel()
                setattr(self, name, None)

    # Host hooks

    def hud(self):
        return {
            "score": self.score,
            "high_score": self.high_score,
            "lives": self.lives,
            "wave": self.wave,
            "game_over_visible": self.game_over_visible,
            "final_score": self.final_score,
        }

    def handle_key_press(self):
        if self.game_over:
            self.reset()
            return True
        return False

    def pause(self):
        if self.paused:
            return
        self.paused = True
        self.audio.stop_background_beat()
        self.audio.stop_thrust_sound()
        LOGGER.info("paused")

    def resume(self):
        if not self.paused:
            return
        self.paused = False
        if self.playing and self._wave_timer is None and self._beat_timer is None:
            self._restart_beat()
        if self.playing and self.ship.thrust_active:
            self.audio.play_thrust_sound()
        LOGGER.info("resumed")

    def toggle_pause(self):
        if self.paused:
            self.resume()
        else:
            self.pause()

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.ship.resize(width, height)

    @property
    def playing(self):
        return not self.game_over and not self.game_over_pending

    # Tick

    def update(self, dt, controls=None):
        if self.paused:
            return
        controls = controls or Controls()
        self.scheduler.advance(dt)
        self.audio.poll()

        if self.game_over:
            self._update_asteroids(dt)
            return

        self._update_ship(dt, controls)
        self._update_bullets(dt)
        self._update_asteroids(dt)
        self.check_collisions()
        self._wrap_all()

    def _update_ship(self, dt, controls):
        if self.game_over_pending:
            self.ship.update(dt, Controls(), self.width, self.height)
            return

        was_thrusting = self.ship.thrust_active
        self.ship.update(dt, controls, self.width, self.height)
        if self.ship.thrust_active and not was_thrusting:
            self.audio.play_thrust_sound()
        elif was_thrusting and not self.ship.thrust_active:
            self.audio.stop_thrust_sound()

        if controls.fire:
            bullet = self.ship.shoot()
            if bullet is not None:
                self.bullets.append(bullet)
                self.audio.play_fire_sound()

    def _update_bullets(self, dt):
        self.bullets = [b for b in self.bullets if not b.dead]
        for bullet in self.bullets:
            bullet.update(dt, self.width, self.height)

    def _update_asteroids(self, dt):
        for asteroid in self.asteroids:
            asteroid.update(dt, self.width, self.height)

    def _wrap_all(self):
        for entity in [self.ship, *self.bullets, *self.asteroids]:
            kinematics.wrap_position(entity, self.width, self.height)

    # Collisions and their consequences

    def check_collisions(self):
        destroyed = []
        for bullet, asteroid in find_bullet_hits(self.bullets, self.asteroids):
            bullet.kill()
            destroyed.append(asteroid)

        if self.playing:
            asteroid = find_ship_hit(self.ship, self.asteroids, exclude=destroyed)
            if asteroid is not None:
                self._ship_hit()
                destroyed.append(asteroid)

        for asteroid in destroyed:
            self.destroy_asteroid(asteroid)
        self._check_wave_cleared()

    def _ship_hit(self):
        self.lives -= 1
        self.audio.stop_thrust_sound()
        if self.lives <= 0:
            self._begin_game_over()
        else:
            LOGGER.info("ship destroyed, %d lives left", self.lives)
            self.ship.start_disintegration()

    def destroy_asteroid(self, asteroid):
        if asteroid not in self.asteroids:
            return
        self.audio.play_bang_sound(asteroid.tier)
        self.add_score(asteroid.score)
        self.asteroids.remove(asteroid)
        if self.playing:
            self.asteroids.extend(asteroid.split(self.rng))
        self.audio.update_beat_interval(len(self.asteroids), self.initial_asteroid_count)

    def add_score(self, points):
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
        self._check_extra_life()

    def _check_extra_life(self):
        earned = self.score // EXTRA_LIFE_SCORE
        awarded = self.last_extra_life_score // EXTRA_LIFE_SCORE
        if earned > awarded:
            self.lives += earned - awarded
            self.last_extra_life_score = earned * EXTRA_LIFE_SCORE
            self.audio.play_extra_life_sound()
            LOGGER.info("extra life at %d points, %d lives", self.score, self.lives)

    # Waves

    def _check_wave_cleared(self):
        if self.asteroids or not self.playing or self._wave_timer is not None:
            return
        self.wave += 1
        LOGGER.info("wave cleared, wave %d incoming", self.wave)
        self.audio.stop_background_beat()
        self.audio.play_wave_end_sound()
        self._wave_timer = self.scheduler.call_later(WAVE_CREATION_DELAY, self._spawn_next_wave)

    def _spawn_next_wave(self):
        self._wave_timer = None
        if not self.playing:
            return
        self.create_new_wave()
        self._beat_timer = self.scheduler.call_later(BACKGROUND_BEAT_DELAY, self._resume_beat)

    def _resume_beat(self):
        self._beat_timer = None
        if self.playing:
            self._restart_beat()

    def _restart_beat(self):
        self.audio.start_background_beat(self.wave)
        self.audio.update_beat_interval(len(self.asteroids), self.initial_asteroid_count)

    def create_new_wave(self):
        count = BASE_ASTEROIDS + self.wave
        self.initial_asteroid_count = count
        self.asteroids = [self._spawn_wave_asteroid() for _ in range(count)]

    def _spawn_wave_asteroid(self):
        side = self.rng.randrange(4)
        if side == 0:
            pos = pygame.Vector2(self.rng.uniform(0, self.width), 0)
        elif side == 1:
            pos = pygame.Vector2(self.width, self.rng.uniform(0, self.height))
        elif side == 2:
            pos = pygame.Vector2(self.rng.uniform(0, self.width), self.height)
        else:
            pos = pygame.Vector2(0, self.rng.uniform(0, self.height))
        center = pygame.Vector2(self.width / 2, self.height / 2)
        angle = math.atan2(center.y - pos.y, center.x - pos.x)
        angle += self.rng.uniform(-WAVE_SPAWN_SPREAD, WAVE_SPAWN_SPREAD)
        speed = self.rng.uniform(*ASTEROID_SPEED_RANGE)
        return Asteroid.launch(pos, "large", speed, angle, self.rng)

    # Game over

    def _begin_game_over(self):
        LOGGER.info("last ship destroyed with %d points", self.score)
        self.game_over_pending = True
        self.ship.start_disintegration(respawn=False)
        self.audio.stop_background_beat()
        self._cancel_timers()
        self._game_over_timer = self.scheduler.call_later(GAME_OVER_DELAY, self._finish_game_over)

    def _finish_game_over(self):
        self._game_over_timer = None
        if not self.game_over_pending:
            return
        self.game_over = True
        self.game_over_pending = False
        self._cancel_timers()
        self.audio.stop_background_beat()
        self.audio.stop_thrust_sound()
        self.final_score = self.score
        self.game_over_visible = True
        LOGGER.info("game over, final score %d", self.final_score)
        if self.high_score_store is not None:
            self.high_score_store.save(self.high_score)
