import numpy as np
from vectors import vec, dot, subtract

# Specular exponent marking a surface with no specular highlight
NO_SPECULAR = -1


class Hit:

    def __init__(self, t, sphere=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          sphere : Sphere -- the sphere that was hit
        """
        self.t = t
        self.sphere = sphere

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


def intersect_ray_sphere(origin, direction, sphere):
    """Solve for the two t values where the ray origin + t * direction meets the sphere.

    Parameters:
      origin : (3,) -- the start point of the ray
      direction : (3,) -- the ray direction, not necessarily normalized but non-zero
      sphere : Sphere -- the sphere to intersect with
    Return:
      (float, float) -- the roots (t1, t2), t1 from the + square root; (inf, inf) when
      the ray misses
    """
    sphere_vec = subtract(origin, sphere.center)
    a = dot(direction, direction)
    b = 2 * dot(sphere_vec, direction)
    c = dot(sphere_vec, sphere_vec) - sphere.radius * sphere.radius
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return np.inf, np.inf
    disc_sqrt = np.sqrt(discriminant)
    plus = (-b + disc_sqrt) / (2 * a)
    minus = (-b - disc_sqrt) / (2 * a)
    return float(plus), float(minus)


class Sphere:

    def __init__(self, center, radius, color, specular=NO_SPECULAR):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius, > 0
          color : (3,) -- RGB color of the surface, channels in 0-255
          specular : float -- the specular exponent, or NO_SPECULAR for a matte surface
        """
        self.center = vec(center)
        self.radius = radius
        self.color = vec(color)
        self.specular = specular

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and this sphere.

        A root counts only if ray.start <= t <= ray.end.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data
        """
        closest = no_hit
        for t in intersect_ray_sphere(ray.origin, ray.direction, self):
            if ray.start <= t <= ray.end and t < closest.t:
                closest = Hit(t, self)
        return closest
