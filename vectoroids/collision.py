"""Circle overlap tests between bullets, asteroids and the ship."""


def circles_overlap(a, b):
    return a.position.distance_to(b.position) < a.radius + b.radius


def find_bullet_hits(bullets, asteroids):
    """Pair each live bullet with the first asteroid it overlaps.

    An asteroid claimed by one bullet is not offered to later bullets in the
    same scan, so a single tick never destroys the same asteroid twice.
    """
    hits = []
    claimed = set()
    for bullet in bullets:
        if bullet.dead:
            continue
        for asteroid in asteroids:
            if id(asteroid) in claimed:
                continue
            if circles_overlap(bullet, asteroid):
                hits.append((bullet, asteroid))
                claimed.add(id(asteroid))
                break
    return hits


def find_ship_hit(ship, asteroids, exclude=()):
    if not ship.can_collide:
        return None
    skip = {id(a) for a in exclude}
    for asteroid in asteroids:
        if id(asteroid) in skip:
            continue
        if circles_overlap(ship, asteroid):
            return asteroid
    return None
