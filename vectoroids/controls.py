from dataclasses import dataclass

import pygame

from .settings import JOY_AXIS_DEADZONE, JOY_AXIS_X, JOY_AXIS_Y, JOY_FIRE_BUTTON


@dataclass(frozen=True)
class Controls:
    """Level-triggered input snapshot for one tick."""

    left: bool = False
    right: bool = False
    up: bool = False
    fire: bool = False


def read_controls(keys, joystick=None):
    left = bool(keys[pygame.K_LEFT] or keys[pygame.K_a])
    right = bool(keys[pygame.K_RIGHT] or keys[pygame.K_d])
    up = bool(keys[pygame.K_UP] or keys[pygame.K_w])
    fire = bool(keys[pygame.K_SPACE])

    if joystick is not None:
        hat_x = hat_y = 0
        if joystick.get_numhats() > 0:
            hat_x, hat_y = joystick.get_hat(0)
        axis_x = axis_y = 0.0
        num_axes = joystick.get_numaxes()
        if num_axes > JOY_AXIS_X:
            axis_x = joystick.get_axis(JOY_AXIS_X)
        if num_axes > JOY_AXIS_Y:
            axis_y = joystick.get_axis(JOY_AXIS_Y)
        if hat_x == 0 and hat_y == 0:
            left = left or axis_x < -JOY_AXIS_DEADZONE
            right = right or axis_x > JOY_AXIS_DEADZONE
            up = up or axis_y < -JOY_AXIS_DEADZONE
        else:
            left = left or hat_x < 0
            right = right or hat_x > 0
            up = up or hat_y > 0
        if joystick.get_numbuttons() > JOY_FIRE_BUTTON:
            fire = fire or bool(joystick.get_button(JOY_FIRE_BUTTON))

    return Controls(left=left, right=right, up=up, fire=fire)
