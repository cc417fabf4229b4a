import logging
from functools import reduce

import numpy as np
from tqdm import tqdm

from geometry import Intersection, SceneObject
from ImLite import Image
from utils import Point, Direction, as_color, cross, dot

"""
Core implementation of the ray tracer.
"""

logger = logging.getLogger(__name__)

# Point lights closer than this to a surface point are treated as sitting
# at this distance, and shine straight along the normal.
MIN_LIGHT_DISTANCE = 1e-6


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.
        """
        if not isinstance(origin, Point):
            raise TypeError(f"ray origin must be a Point, got {origin!r}")
        if not isinstance(direction, Direction):
            raise TypeError(f"ray direction must be a Direction, got {direction!r}")
        self.origin = origin
        self.direction = direction

    def at(self, t):
        """Return the point origin + t * direction."""
        return self.origin + t * self.direction

    def __repr__(self):
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"


class Camera:

    def __init__(self, location, gaze, up, l, t, r, b, d):
        """Create a camera with given viewing parameters.

        Parameters:
          location : Point -- the eye position
          gaze : Direction -- where the camera looks
          up : Direction -- roughly which way is up; must not be parallel to gaze
          l, t, r, b : float -- image plane bounds, l < 0 < r and b < 0 < t
          d : float -- positive distance from the eye to the image plane
        """
        if not isinstance(location, Point):
            raise TypeError(f"camera location must be a Point, got {location!r}")
        if not isinstance(gaze, Direction):
            raise TypeError(f"camera gaze must be a Direction, got {gaze!r}")
        if not isinstance(up, Direction):
            raise TypeError(f"camera up must be a Direction, got {up!r}")
        if not (l < 0.0 < r):
            raise ValueError(f"image plane needs l < 0 < r, got l={l}, r={r}")
        if not (b < 0.0 < t):
            raise ValueError(f"image plane needs b < 0 < t, got b={b}, t={t}")
        if not d > 0.0:
            raise ValueError(f"image plane distance must be positive, got {d}")

        self.location = location
        self.gaze = gaze
        self.up = up
        self.l, self.t, self.r, self.b, self.d = float(l), float(t), float(r), float(b), float(d)

        self.w = (-gaze).normalized()
        side = cross(up, self.w)
        if side.magnitude() <= 1e-12 * up.magnitude():
            raise ValueError("camera gaze and up directions must not be parallel")
        self.u = side.normalized()
        self.v = cross(self.w, self.u)

    def image_plane_coords(self, i, j, width, height):
        """Map pixel (i, j) to its center on the image plane as (u, v)."""
        u = self.l + (self.r - self.l) * (i + 0.5) / width
        v = self.b + (self.t - self.b) * (j + 0.5) / height
        return u, v

    def generate_ray(self, i, j, width, height, perspective=True):
        """Compute the viewing ray through the center of pixel (i, j).

        Row j = 0 is the bottom of the image. Perspective rays share the
        camera location as origin; orthographic rays share the direction -w.
        """
        u, v = self.image_plane_coords(i, j, width, height)
        offset = u * self.u + v * self.v
        if perspective:
            return Ray(self.location, -self.d * self.w + offset)
        return Ray(self.location + offset, -self.w)


class Light:

    def __init__(self, color, intensity):
        """Create a light of given color and positive intensity."""
        self.color = as_color(color)
        self.color.flags.writeable = False
        if not intensity > 0.0:
            raise ValueError(f"light intensity must be positive, got {intensity}")
        self.intensity = float(intensity)

    def illuminate(self, ray, hit, obj):
        """Compute the (unclamped) RGB contribution of this light at a hit."""
        raise NotImplementedError


class AmbientLight(Light):

    def illuminate(self, ray, hit, obj):
        """Compute the shading at a surface point due to this light.
        """
        return self.intensity * self.color * obj.diffuse_color


class PointLight(Light):

    def __init__(self, color, intensity, location):
        """Create a point light at given location with given color and intensity"""
        super().__init__(color, intensity)
        if not isinstance(location, Point):
            raise TypeError(f"light location must be a Point, got {location!r}")
        self.location = location

    def illuminate(self, ray, hit, obj):
        """Compute the shading at a surface point due to this light."""
        normal_hit = hit.normal.normalized()
        light_vec_full = self.location - hit.point
        dist = light_vec_full.magnitude()

        if dist < MIN_LIGHT_DISTANCE:
            dist = MIN_LIGHT_DISTANCE
            light_vec = normal_hit
        else:
            light_vec = light_vec_full / dist

        intensity_attenuated = self.intensity / (dist * dist)

        diffuse = max(0.0, dot(normal_hit, light_vec))
        total = diffuse * obj.diffuse_color * self.color * intensity_attenuated

        if obj.shininess is not None:
            view_full = ray.origin - hit.point
            if view_full.magnitude() > 0.0:
                halfway = light_vec + view_full.normalized()
                if halfway.magnitude() > 0.0:
                    spec = max(0.0, dot(normal_hit, halfway.normalized())) ** obj.shininess
                    total = total + spec * obj.specular_color * self.color * intensity_attenuated

        return total


def shade(ray, hit, obj, ambient_light, point_lights):
    """Evaluate the local illumination at a single hit.

    Starts from the ambient term, adds each point light's contribution and
    clamps the sum into [0, 1] once at the end.
    """
    total = reduce(
        lambda acc, light: acc + light.illuminate(ray, hit, obj),
        point_lights,
        ambient_light.illuminate(ray, hit, obj),
    )
    return np.clip(total, 0.0, 1.0)


class Scene:

    def __init__(self, ambient_light, background_color, camera, perspective=True):
        """Create an empty scene; objects and point lights are added afterwards.

        Parameters:
          ambient_light : AmbientLight -- lights every hit point evenly
          background_color : (3,) -- color of pixels that hit nothing
          camera : Camera -- the single viewpoint
          perspective : bool -- perspective projection when True, orthographic otherwise
        """
        if not isinstance(ambient_light, AmbientLight):
            raise TypeError(f"ambient light must be an AmbientLight, got {ambient_light!r}")
        if not isinstance(camera, Camera):
            raise TypeError(f"camera must be a Camera, got {camera!r}")
        self._ambient_light = ambient_light
        self._background_color = as_color(background_color)
        self._background_color.flags.writeable = False
        self._camera = camera
        self._perspective = bool(perspective)
        self._objects = []
        self._point_lights = []

    @property
    def ambient_light(self):
        return self._ambient_light

    @property
    def background_color(self):
        return self._background_color

    @property
    def camera(self):
        return self._camera

    @property
    def perspective(self):
        return self._perspective

    @property
    def objects(self):
        return tuple(self._objects)

    @property
    def point_lights(self):
        return tuple(self._point_lights)

    def add_object(self, obj):
        if not isinstance(obj, SceneObject):
            raise TypeError(f"expected a SceneObject, got {obj!r}")
        self._objects.append(obj)

    def add_point_light(self, light):
        if not isinstance(light, PointLight):
            raise TypeError(f"expected a PointLight, got {light!r}")
        self._point_lights.append(light)

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.

        Return:
          (Intersection, SceneObject), or (None, None) if nothing is hit.
          On equal t the object added first wins.
        """
        closest_hit, closest_obj = None, None
        for obj in self._objects:
            hit = obj.intersect(ray.origin, ray.direction)
            if hit is not None and (closest_hit is None or hit.t < closest_hit.t):
                closest_hit, closest_obj = hit, obj
        return closest_hit, closest_obj

    def trace(self, ray):
        """Return the color seen along a viewing ray."""
        hit, obj = self.intersect(ray)
        if hit is None:
            return self._background_color.copy()
        return shade(ray, hit, obj, self._ambient_light, self._point_lights)

    def render(self, width, height, progress=False):
        """Render the scene into a new Image of the given width and height.

        Parameters:
          width, height : int -- positive image dimensions in pixels
          progress : bool -- show a progress bar over rows
        """
        for name, value in (('width', width), ('height', height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an int, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        logger.debug(
            "rendering %dx%d (%s) with %d objects and %d point lights",
            width, height, 'perspective' if self._perspective else 'orthographic',
            len(self._objects), len(self._point_lights),
        )
        image = Image(width, height, self._background_color)

        rows = range(height)
        if progress:
            rows = tqdm(rows, desc="rendering", unit="row")
        for j in rows:
            for i in range(width):
                ray = self._camera.generate_ray(i, j, width, height, self._perspective)
                hit, obj = self.intersect(ray)
                if hit is not None:
                    image.set_pixel(i, j, shade(ray, hit, obj, self._ambient_light, self._point_lights))

        logger.debug("finished rendering %dx%d", width, height)
        return image
