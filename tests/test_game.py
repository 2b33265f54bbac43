import random

import pygame
import pytest

from vectoroids.asteroid import Asteroid
from vectoroids.bullet import Bullet
from vectoroids.controls import Controls
from vectoroids.game import Game
from vectoroids.scores import HighScoreStore
from vectoroids.settings import (
    BACKGROUND_BEAT_DELAY,
    DEFAULT_HIGH_SCORE,
    GAME_OVER_DELAY,
    INITIAL_LIVES,
    WAVE_CREATION_DELAY,
)

DT = 1 / 60


def step(game, seconds, controls=None):
    for _ in range(int(round(seconds / DT))):
        game.update(DT, controls)


def make_immortal(game):
    game.ship.invulnerable = True
    game.ship.invulnerability_remaining = 1e9


def make_vulnerable(game):
    game.ship.invulnerable = False
    game.ship.invulnerability_remaining = 0.0


def park_asteroid_on_ship(game, tier="large"):
    asteroid = Asteroid(game.ship.position, tier, velocity=(0, 0))
    game.asteroids = [asteroid]
    return asteroid


def shoot_down_everything(game, limit=500):
    for _ in range(limit):
        if not game.asteroids:
            game.bullets = []
            return
        target = game.asteroids[0]
        game.bullets.append(Bullet(target.position, (0, 0)))
        game.update(DT)
    raise AssertionError("asteroids left after shooting")


def test_initial_state(game):
    assert game.score == 0
    assert game.lives == INITIAL_LIVES
    assert game.wave == 1
    assert game.high_score == DEFAULT_HIGH_SCORE
    assert not game.game_over and not game.game_over_pending
    assert len(game.asteroids) == 4
    assert all(a.tier == "large" for a in game.asteroids)
    assert game.ship.invulnerable
    assert game.audio.beat_playing


@pytest.mark.parametrize("wave", [1, 2, 3, 7])
def test_wave_size(game, wave):
    game.wave = wave
    game.create_new_wave()
    assert len(game.asteroids) == 3 + wave
    assert game.initial_asteroid_count == 3 + wave


def test_wave_spawns_on_perimeter(game):
    game.wave = 10
    game.create_new_wave()
    for asteroid in game.asteroids:
        x, y = asteroid.position
        assert x in (0, game.width) or y in (0, game.height)
        assert 50 <= asteroid.velocity.length() <= 100


def test_fire_spawns_bullet_with_cooldown(game, sounds):
    step(game, DT, Controls(fire=True))
    assert len(game.bullets) == 1
    assert len(sounds["fire"].channels) == 1
    step(game, DT * 3, Controls(fire=True))
    assert len(game.bullets) == 1
    step(game, 0.25, Controls(fire=True))
    assert len(game.bullets) == 2


def test_dead_bullets_are_removed(game):
    make_immortal(game)
    game.asteroids = []
    bullet = Bullet((100, 100), (0, 0))
    bullet.kill()
    game.bullets = [bullet]
    step(game, DT)
    assert game.bullets == []


def test_thrust_sound_follows_thrust(game):
    step(game, DT, Controls(up=True))
    assert game.audio.thrust_playing
    step(game, DT)
    assert not game.audio.thrust_playing


@pytest.mark.parametrize("tier, points", [("large", 20), ("medium", 50), ("small", 100)])
def test_bullet_kill_scores_by_tier(game, tier, points):
    make_immortal(game)
    target = Asteroid((100, 100), tier, velocity=(0, 0))
    game.asteroids = [target, Asteroid((700, 500), "large", velocity=(0, 0))]
    game.bullets = [Bullet((100, 100), (0, 0))]
    step(game, DT)
    assert game.score == points
    assert target not in game.asteroids
    expected = {"large": 2, "medium": 2, "small": 0}[tier]
    assert len(game.asteroids) == 1 + expected


@pytest.mark.parametrize("tier, points", [("large", 20), ("medium", 50), ("small", 100)])
def test_ship_kill_scores_by_tier(game, tier, points):
    make_vulnerable(game)
    park_asteroid_on_ship(game, tier)
    game.asteroids.append(Asteroid((10, 10), "large", velocity=(0, 0)))
    step(game, DT)
    assert game.score == points
    assert game.lives == INITIAL_LIVES - 1


def test_two_bullets_on_one_asteroid_score_once(game):
    make_immortal(game)
    target = Asteroid((100, 100), "small", velocity=(0, 0))
    game.asteroids = [target, Asteroid((700, 500), "large", velocity=(0, 0))]
    game.bullets = [Bullet((100, 100), (0, 0)), Bullet((101, 100), (0, 0))]
    step(game, DT)
    assert game.score == 100
    assert sum(b.dead for b in game.bullets) == 1


def test_extra_life_once_per_threshold(game):
    game.score = 9990
    game.add_score(20)
    assert game.lives == INITIAL_LIVES + 1
    assert game.last_extra_life_score == 10000
    game.add_score(20)
    assert game.lives == INITIAL_LIVES + 1


def test_extra_life_multiple_thresholds_in_one_jump(game, sounds):
    game.score = 9000
    game.add_score(12000)
    assert game.lives == INITIAL_LIVES + 2
    assert game.last_extra_life_score == 20000
    assert len(sounds["extra_life"].channels) == 1


def test_high_score_follows_score_and_survives_reset(game):
    game.add_score(DEFAULT_HIGH_SCORE + 100)
    assert game.high_score == DEFAULT_HIGH_SCORE + 100
    game.reset()
    assert game.score == 0
    assert game.high_score == DEFAULT_HIGH_SCORE + 100


def test_invulnerable_ship_takes_no_damage(game):
    park_asteroid_on_ship(game)
    step(game, 0.5)
    assert game.lives == INITIAL_LIVES
    assert len(game.asteroids) == 1


def test_lingering_overlap_costs_one_life(game):
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, 1.0)
    assert game.lives == INITIAL_LIVES - 1
    assert game.ship.disintegrating
    assert len(game.asteroids) == 2


def test_non_fatal_hit_respawns_ship(game):
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, DT)
    game.asteroids = [Asteroid((10, 10), "large", velocity=(0, 0))]
    step(game, 2.0 + DT)
    assert not game.ship.visible
    step(game, 2.0 + DT)
    assert game.ship.visible and game.ship.flying
    assert game.ship.invulnerable
    assert game.ship.position == pygame.Vector2(game.width / 2, game.height / 2)


def test_clearing_a_wave_spawns_the_next_one(game, sounds):
    make_immortal(game)
    shoot_down_everything(game)
    assert game.wave == 2
    assert game.score == 4 * (20 + 2 * 50 + 4 * 100)
    assert len(sounds["wave_end"].channels) == 1
    assert not game.audio.beat_playing

    step(game, WAVE_CREATION_DELAY - 0.1)
    assert game.asteroids == []
    for _ in range(30):
        game.update(DT)
        if game.asteroids:
            break
    assert len(game.asteroids) == 5
    assert all(a.tier == "large" for a in game.asteroids)
    assert not game.audio.beat_playing

    step(game, BACKGROUND_BEAT_DELAY + DT)
    assert game.audio.beat_playing


def test_fatal_hit_leads_to_game_over(game):
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, DT)
    assert game.lives == 0
    assert game.game_over_pending
    assert not game.game_over
    assert game.ship.disintegrating
    assert not game.audio.beat_playing

    step(game, GAME_OVER_DELAY - 0.1, Controls(up=True, fire=True, left=True))
    assert game.game_over_pending
    assert game.bullets == []
    assert not game.ship.visible

    step(game, 0.2)
    assert game.game_over
    assert not game.game_over_pending
    assert game.game_over_visible
    assert game.final_score == 20
    assert not game.audio.beat_playing


def test_game_over_stops_beat_restarted_elsewhere(game):
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, DT)
    game.audio.start_background_beat(1)
    step(game, GAME_OVER_DELAY + 2 * DT)
    assert game.game_over
    assert not game.audio.beat_playing


def test_last_asteroid_killing_ship_does_not_advance_wave(game):
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game, "small")
    step(game, DT)
    assert game.asteroids == []
    assert game.wave == 1
    step(game, GAME_OVER_DELAY + WAVE_CREATION_DELAY)
    assert game.game_over
    assert game.asteroids == []


def test_key_press_restarts_only_after_game_over(game):
    assert not game.handle_key_press()
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, GAME_OVER_DELAY + 2 * DT)
    assert game.game_over
    assert game.handle_key_press()
    assert not game.game_over


def test_reset_after_game_over(game):
    game.add_score(300)
    game.wave = 4
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, GAME_OVER_DELAY + 2 * DT)
    assert game.game_over

    game.reset()
    assert game.score == 0
    assert game.lives == INITIAL_LIVES
    assert game.wave == 1
    assert not game.game_over and not game.game_over_visible
    assert len(game.asteroids) == 4
    assert game.ship.visible and game.ship.invulnerable


def test_reset_cancels_pending_wave(game):
    make_immortal(game)
    shoot_down_everything(game)
    assert game.wave == 2

    game.reset()
    make_immortal(game)
    before = list(game.asteroids)
    step(game, WAVE_CREATION_DELAY + BACKGROUND_BEAT_DELAY + 1)
    assert game.wave == 1
    assert game.asteroids == before


def test_reset_cancels_pending_game_over(game):
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, DT)
    assert game.game_over_pending

    game.reset()
    make_immortal(game)
    step(game, GAME_OVER_DELAY + 1)
    assert not game.game_over
    assert not game.game_over_pending
    assert game.lives == INITIAL_LIVES


def test_pause_freezes_everything(game):
    positions = [pygame.Vector2(a.position) for a in game.asteroids]
    game.pause()
    assert not game.audio.beat_playing
    step(game, 1, Controls(fire=True, up=True))
    assert [a.position for a in game.asteroids] == positions
    assert game.bullets == []
    game.resume()
    assert game.audio.beat_playing
    step(game, DT)
    assert [a.position for a in game.asteroids] != positions


def test_pause_holds_pending_wave(game):
    make_immortal(game)
    shoot_down_everything(game)
    game.pause()
    step(game, WAVE_CREATION_DELAY + 1)
    assert game.asteroids == []
    game.toggle_pause()
    assert not game.audio.beat_playing
    step(game, WAVE_CREATION_DELAY + DT)
    assert len(game.asteroids) == 5


def test_resume_restarts_thrust_during_wave_delay(game):
    make_immortal(game)
    shoot_down_everything(game)
    step(game, DT, Controls(up=True))
    assert game.audio.thrust_playing
    game.pause()
    assert not game.audio.thrust_playing
    game.resume()
    assert game.audio.thrust_playing
    assert not game.audio.beat_playing


def test_resume_keeps_tempo_of_wave_progress(game):
    game.asteroids = game.asteroids[:1]
    game.pause()
    game.resume()
    assert game.audio.beat_playing
    assert game.audio.beat_interval == pytest.approx(game.audio.calculate_beat_interval(0.75))


def test_kills_before_beat_resumes_set_the_tempo(game):
    make_immortal(game)
    shoot_down_everything(game)
    step(game, WAVE_CREATION_DELAY + DT)
    assert len(game.asteroids) == 5
    assert not game.audio.beat_playing
    game.asteroids = game.asteroids[:2]
    step(game, BACKGROUND_BEAT_DELAY + 2 * DT)
    assert game.audio.beat_playing
    assert game.audio.beat_interval == pytest.approx(game.audio.calculate_beat_interval(0.6))


def test_asteroids_keep_drifting_after_game_over(game):
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game, "small")
    drifter = Asteroid((100, 100), "large", velocity=(30, 0))
    game.asteroids.append(drifter)
    step(game, GAME_OVER_DELAY + 2 * DT)
    assert game.game_over
    x = drifter.position.x
    step(game, 1)
    assert drifter.position.x > x


def test_entities_stay_inside_bounds(game):
    game.bullets = [Bullet((5, 5), (-400, -400))]
    for _ in range(120):
        game.update(DT, Controls(up=True, left=True, fire=True))
        for entity in [game.ship, *game.bullets, *game.asteroids]:
            assert 0 <= entity.position.x <= game.width
            assert 0 <= entity.position.y <= game.height


def test_high_score_saved_on_game_over(tmp_path, audio):
    store = HighScoreStore(str(tmp_path / "scores.json"))
    store.save(12345)
    game = Game(800, 600, audio=audio, rng=random.Random(3), high_score_store=store)
    assert game.high_score == 12345
    game.add_score(20000)
    game.lives = 1
    make_vulnerable(game)
    park_asteroid_on_ship(game)
    step(game, GAME_OVER_DELAY + 2 * DT)
    assert game.high_score == 20020
    assert store.load() == 20020


def test_default_audio_runs_headless():
    game = Game(640, 480, rng=random.Random(9))
    step(game, 0.1, Controls(up=True, fire=True))
    assert game.bullets
