import ray
from geometry import Sphere
from utils import vec, point, direction, web_color


class ExampleSceneDef(object):
    def __init__(self, scene):
        self.scene = scene

    def render(self, output_path=None, output_shape=None, gamma_correct=False, progress=False):
        """Render at output_shape = [height, width].

        Returns the Image when no output_path is given, otherwise the write status.
        """
        if (output_shape is None):
            output_shape = [128, 128]
        im = self.scene.render(output_shape[1], output_shape[0], progress=progress)
        if (output_path is None):
            return im
        return im.writeToFile(output_path, gamma_correct=gamma_correct)


def _default_camera(location=None, half_width=0.5, half_height=0.5, d=1.0):
    if (location is None):
        location = point(0, 0, 0)
    return ray.Camera(location, direction(0, 0, -1), direction(0, 1, 0),
                      -half_width, half_height, half_width, -half_height, d)


def TwoSpheresExample(perspective=True):
    tan = vec([0.7, 0.7, 0.4])
    gray = vec([0.2, 0.2, 0.2])
    white = vec([1.0, 1.0, 1.0])

    scene = ray.Scene(ray.AmbientLight(white, 0.1), web_color(0x334D80),
                      _default_camera(point(0, 0.3, 4), 0.4, 0.3), perspective)
    scene.add_object(Sphere(tan, white, point(0, 0, 0), 0.5))
    scene.add_object(Sphere(gray, white, point(0, -40, 0), 39.5))
    scene.add_point_light(ray.PointLight(white, 120.0, point(6, 5, 5)))
    return ExampleSceneDef(scene=scene)


def ThreeSpheresExample(perspective=True):
    tan = vec([0.4, 0.4, 0.2])
    blue = vec([0.2, 0.2, 0.5])
    gray = vec([0.2, 0.2, 0.2])
    white = vec([1.0, 1.0, 1.0])

    scene = ray.Scene(ray.AmbientLight(white, 0.1), web_color(0x334D80),
                      _default_camera(point(0, 0.2, 5), 0.6, 0.35), perspective)
    scene.add_object(Sphere(tan, vec([0.3, 0.3, 0.3]), point(-0.7, 0, 0), 0.5, shininess=90))
    scene.add_object(Sphere(blue, white, point(0.7, 0, 0), 0.5))
    scene.add_object(Sphere(gray, white, point(0, -40, 0), 39.5))
    scene.add_point_light(ray.PointLight(white, 150.0, point(8, 6, 6)))
    scene.add_point_light(ray.PointLight(web_color(0xFFCC99), 20.0, point(-4, 2, 2)))
    return ExampleSceneDef(scene=scene)


def OrthoFriendlyExample(sphere_radius=0.25, perspective=False):
    gray = vec([0.5, 0.5, 0.5])

    # One small sphere centered at z=-0.5
    scene = ray.Scene(ray.AmbientLight(vec([1, 1, 1]), 0.5), vec([0, 0, 0]),
                      _default_camera(), perspective)
    scene.add_object(Sphere(gray, gray, point(0, 0, -0.5), sphere_radius))
    return ExampleSceneDef(scene=scene)


def CenteredSphereExample(perspective=True, light_distance=2.0):
    """A sphere on the optical axis lit from straight in front of the camera."""
    white = vec([1.0, 1.0, 1.0])
    scene = ray.Scene(ray.AmbientLight(white, 0.05), vec([0, 0, 0]),
                      _default_camera(point(0, 0, 0), 0.1, 0.1), perspective)
    scene.add_object(Sphere(vec([0.8, 0.3, 0.3]), white, point(0, 0, -3), 1.0))
    scene.add_point_light(ray.PointLight(white, 1.0, point(0, 0, -2 + light_distance)))
    return ExampleSceneDef(scene=scene)


EXAMPLES = {
    'two_spheres': TwoSpheresExample,
    'three_spheres': ThreeSpheresExample,
    'ortho_friendly': OrthoFriendlyExample,
    'centered_sphere': CenteredSphereExample,
}
