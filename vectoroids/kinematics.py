"""Motion and screen wrapping shared by the ship, bullets and asteroids.

Anything with ``position``, ``velocity`` (both ``pygame.Vector2``) and a
positive ``radius`` can be moved with :func:`advance`.  Every entity kind
wraps with the same hard-edge policy: leaving ``[0, width]`` puts the
coordinate on the opposite edge.
"""

import math

import pygame


def angle_to_vector(angle):
    return pygame.Vector2(math.cos(angle), math.sin(angle))


def vector_angle(vec):
    return math.atan2(vec.y, vec.x)


def wrap_position(entity, width, height):
    pos = entity.position
    wrapped_x = wrapped_y = False
    if pos.x < 0:
        pos.x = width
        wrapped_x = True
    elif pos.x > width:
        pos.x = 0
        wrapped_x = True
    if pos.y < 0:
        pos.y = height
        wrapped_y = True
    elif pos.y > height:
        pos.y = 0
        wrapped_y = True
    return wrapped_x, wrapped_y


def advance(entity, dt, width, height):
    """Move ``entity`` by one step and return the distance covered per axis.

    On an axis that wrapped, the covered distance is measured up to the edge
    that was crossed, not between the raw coordinates before and after.
    """
    old = pygame.Vector2(entity.position)
    entity.position += entity.velocity * dt
    moved = entity.position - old
    wrapped_x, wrapped_y = wrap_position(entity, width, height)
    if wrapped_x:
        moved.x = -old.x if moved.x < 0 else width - old.x
    if wrapped_y:
        moved.y = -old.y if moved.y < 0 else height - old.y
    return moved
