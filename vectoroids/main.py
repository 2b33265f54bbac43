import argparse
import functools
import logging

import pygame

from . import synth
from .audio import SoundPoolManager
from .controls import read_controls
from .game import Game
from .render import load_fonts, render_game
from .scheduler import Scheduler
from .scores import HighScoreStore
from .settings import FPS, HEIGHT, HIGH_SCORE_PATH, SAMPLE_RATE, SOUND_POOLS, WIDTH


LOGGER = logging.getLogger(__name__)

PAUSE_KEYS = (pygame.K_p, pygame.K_PAUSE)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Vector asteroids arcade game")
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    parser.add_argument("--fps", type=int, default=FPS)
    parser.add_argument("--sounds", metavar="DIR", help="directory with WAV files overriding the synthesized sounds")
    parser.add_argument("--mute", action="store_true", help="do not open an audio device")
    parser.add_argument("--high-score-file", default=HIGH_SCORE_PATH)
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def init_mixer():
    try:
        pygame.mixer.pre_init(SAMPLE_RATE, size=-16, channels=1, buffer=512)
        pygame.mixer.init()
        pygame.mixer.set_num_channels(sum(SOUND_POOLS.values()))
    except pygame.error as exc:
        LOGGER.warning("audio unavailable, playing muted: %s", exc)
        return False
    return True


def open_joystick():
    pygame.joystick.init()
    if pygame.joystick.get_count() == 0:
        return None
    joystick = pygame.joystick.Joystick(0)
    joystick.init()
    LOGGER.info("using joystick %s", joystick.get_name())
    return joystick


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.mute:
        init_mixer()
    pygame.init()
    joystick = open_joystick()
    pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption("Vectoroids")
    clock = pygame.time.Clock()
    fonts = load_fonts()

    scheduler = Scheduler()
    loader = functools.partial(synth.load_sound, sound_dir=args.sounds)
    audio = SoundPoolManager(scheduler, loader=None if args.mute else loader)
    game = Game(
        args.width,
        args.height,
        audio=audio,
        high_score_store=HighScoreStore(args.high_score_file),
    )

    running = True
    while running:
        dt = clock.tick(args.fps) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                game.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in PAUSE_KEYS and not game.game_over:
                    game.toggle_pause()
                else:
                    game.handle_key_press()
            elif event.type == pygame.WINDOWFOCUSLOST and not game.game_over:
                game.pause()

        controls = read_controls(pygame.key.get_pressed(), joystick)
        game.update(dt, controls)

        screen = pygame.display.get_surface()
        render_game(screen, game, fonts, pygame.time.get_ticks())
        pygame.display.flip()

    audio.stop_all()
    pygame.quit()


if __name__ == "__main__":
    main()
