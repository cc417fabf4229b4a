import numpy as np
from utils import Point, Direction, as_color, dot

class Intersection:
    def __init__(self, point, normal, t):
        """Create an Intersection with the given data.

        Parameters:
          point : Point -- the 3D point where the intersection happens
          normal : Direction -- the surface normal at the hit point (not necessarily unit length)
          t : float -- the non-negative t value of the intersection along the ray
        """
        if not isinstance(point, Point):
            raise TypeError(f"intersection point must be a Point, got {point!r}")
        if not isinstance(normal, Direction):
            raise TypeError(f"intersection normal must be a Direction, got {normal!r}")
        if not t >= 0.0:
            raise ValueError(f"intersection t must be non-negative, got {t}")
        self.point = point
        self.normal = normal
        self.t = float(t)

    def __repr__(self):
        return f"Intersection(point={self.point!r}, normal={self.normal!r}, t={self.t})"


class SceneObject:

    def __init__(self, diffuse_color, specular_color, shininess=None):
        """Create a scene object with the given surface colors.

        Parameters:
          diffuse_color : (3,) -- the diffuse reflectance, each channel in [0, 1]
          specular_color : (3,) -- the specular reflectance, each channel in [0, 1]
          shininess : float or None -- Blinn-Phong exponent; None disables the specular term
        """
        self.diffuse_color = as_color(diffuse_color)
        self.specular_color = as_color(specular_color)
        if shininess is not None and not shininess > 0:
            raise ValueError(f"shininess must be positive, got {shininess}")
        self.shininess = shininess
        self.diffuse_color.flags.writeable = False
        self.specular_color.flags.writeable = False

    def intersect(self, ray_origin, ray_direction):
        """Return the nearest Intersection with t >= 0, or None on a miss."""
        raise NotImplementedError


class Sphere(SceneObject):

    def __init__(self, diffuse_color, specular_color, center, radius, shininess=None):
        """Create a sphere with the given center and radius.

        Parameters:
          center : Point -- the sphere's center
          radius : float -- a positive Python float specifying the sphere's radius
        """
        super().__init__(diffuse_color, specular_color, shininess)
        if not isinstance(center, Point):
            raise TypeError(f"sphere center must be a Point, got {center!r}")
        if not radius > 0.0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)

    def roots(self, ray_origin, ray_direction):
        """Solve the ray/sphere quadratic.

        Return:
          (t0, t1) with t0 <= t1, or None when the discriminant is negative
        """
        if not isinstance(ray_origin, Point):
            raise TypeError(f"ray origin must be a Point, got {ray_origin!r}")
        if not isinstance(ray_direction, Direction):
            raise TypeError(f"ray direction must be a Direction, got {ray_direction!r}")
        sphere_vec = ray_origin - self.center
        a = dot(ray_direction, ray_direction)
        if a == 0.0:
            raise ValueError("ray direction has zero length")
        b = 2 * dot(ray_direction, sphere_vec)
        c = dot(sphere_vec, sphere_vec) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None
        disc_sqrt = np.sqrt(discriminant)
        minus = (-b - disc_sqrt) / (2 * a)
        plus = (-b + disc_sqrt) / (2 * a)
        return float(minus), float(plus)

    def intersect(self, ray_origin, ray_direction):
        """Computes the first (smallest non-negative t) intersection between a ray and this sphere.

        Roots behind the ray origin are discarded, so a ray starting inside
        the sphere hits the far side and a ray aimed away from it misses.

        Parameters:
          ray_origin : Point -- where the ray starts
          ray_direction : Direction -- the ray direction, any non-zero length
        Return:
          Intersection or None
        """
        roots = self.roots(ray_origin, ray_direction)
        if roots is None:
            return None
        minus, plus = roots
        if minus >= 0.0:
            hit = minus
        elif plus >= 0.0:
            hit = plus
        else:
            return None
        point = ray_origin + hit * ray_direction
        normal = (point - self.center).normalized()
        return Intersection(point, normal, hit)

    def __repr__(self):
        return f"Sphere(center={self.center!r}, radius={self.radius})"
