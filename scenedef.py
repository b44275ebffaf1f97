from geometry import Sphere, NO_SPECULAR
from raytracer import (Camera, Viewport, Scene, AmbientLight, PointLight,
                       DirectionalLight, render_image)
from vectors import vec


class SceneDef(object):
    def __init__(self, camera, scene):
        self.camera = camera
        self.scene = scene

    def render(self, output_path=None, output_shape=None):
        """Render the scene; output_shape is [height, width].

        Returns the Canvas, or writes it to output_path when one is given.
        """
        if output_shape is None:
            output_shape = [128, 128]
        canvas = render_image(self.camera, self.scene, output_shape[1], output_shape[0])
        if output_path is None:
            return canvas
        canvas.write_to_file(output_path)


def BasicSpheresExample():
    """Red, blue and green spheres resting on a huge yellow one, seen from the origin."""
    scene = Scene([
        Sphere(vec([0, -1, 3]), 1, vec([255, 0, 0]), specular=500),     # red
        Sphere(vec([2, 0, 4]), 1, vec([0, 0, 255]), specular=500),      # blue
        Sphere(vec([-2, 0, 4]), 1, vec([0, 255, 0]), specular=10),      # green
        Sphere(vec([0, -5001, 0]), 5000, vec([255, 255, 0]), specular=1000),  # yellow floor
    ], [
        AmbientLight(0.2),
        PointLight(vec([2, 1, 0]), 0.6),
        DirectionalLight(vec([1, 4, 4]), 0.2),
    ], bg_color=vec([255, 255, 255]))

    camera = Camera(vec([0, 0, 0]), Viewport(width=1., height=1., distance=1.))
    return SceneDef(camera=camera, scene=scene)


def SingleSphereExample():
    """One matte red sphere straight ahead, lit only by ambient light, on black."""
    scene = Scene([
        Sphere(vec([0, 0, 4]), 1, vec([255, 0, 0]), specular=NO_SPECULAR),
    ], [
        AmbientLight(1.0),
    ], bg_color=vec([0, 0, 0]))

    camera = Camera(vec([0, 0, 0]))
    return SceneDef(camera=camera, scene=scene)
