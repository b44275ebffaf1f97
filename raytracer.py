import numpy as np

from canvas import Canvas
from geometry import NO_SPECULAR, no_hit
from vectors import vec, dot, add, subtract, multiply, divide, length

"""
Core implementation of the ray tracer.  This module contains the classes (Camera, the
lights, Scene) that define what is rendered, the functions (canvas_to_viewport,
compute_lighting, trace_ray) used in the rendering algorithm, and the main entry point
`render_image`.

In the documentation of these classes, we indicate the expected types of arguments with a
colon, and use the convention that just writing a tuple means that the expected type is a
NumPy array of that shape.  Colors are RGB arrays with channels on the 0-255 scale; they
are only clamped when written to a Canvas.
"""


class Ray:

    def __init__(self, origin, direction, start=0., end=np.inf):
        """Create a ray with the given origin and direction.

        Parameters:
          origin : (3,) -- the start point of the ray, a 3D point
          direction : (3,) -- the direction of the ray, a 3D vector (not necessarily normalized)
          start, end : float -- the minimum and maximum t values for intersections
        """
        # Convert these vectors to double to help ensure intersection
        # computations will be done in double precision
        self.origin = vec(origin)
        self.direction = vec(direction)
        self.start = start
        self.end = end


def canvas_to_viewport(x, y, canvas_w, canvas_h, viewport_w=1., viewport_h=1., d=1.):
    """Map a canvas pixel to the point on the viewport it looks through.

    Parameters:
      x, y : int -- pixel position in centered coordinates (origin at the canvas
             center, y up)
      canvas_w, canvas_h : int -- canvas size in pixels, both > 0
      viewport_w, viewport_h : float -- viewport size in scene units
      d : float -- distance from the camera to the viewport
    Return:
      (3,) -- the ray direction through that pixel; its length varies across the canvas
    """
    return vec([x * viewport_w / canvas_w, y * viewport_h / canvas_h, d])


class Viewport:

    def __init__(self, width=1., height=1., distance=1.):
        """Create the projection plane the canvas is mapped onto.

        Parameters:
          width, height : float -- size of the plane in scene units
          distance : float -- how far in front of the camera the plane sits
        """
        assert width > 0 and height > 0, "viewport must have a positive size"
        assert distance != 0, "viewport cannot sit on the camera"
        self.width = width
        self.height = height
        self.distance = distance

    def canvas_to_viewport(self, x, y, canvas_w, canvas_h):
        return canvas_to_viewport(x, y, canvas_w, canvas_h,
                                  self.width, self.height, self.distance)


class Camera:

    def __init__(self, eye=vec([0,0,0]), viewport=None):
        """Create a camera at eye looking down the +z axis.

        Parameters:
          eye : (3,) -- the camera's location, aka viewpoint (a 3D point)
          viewport : Viewport -- the projection plane (defaults to 1x1 at distance 1)
        """
        self.eye = vec(eye)
        self.viewport = viewport if viewport is not None else Viewport()

    def generate_ray(self, x, y, nx, ny):
        """Compute the ray corresponding to a pixel of the image.

        Parameters:
          x, y : int -- pixel position in centered coordinates
          nx, ny : int -- the dimensions of the image
        Return:
          Ray -- the ray through that pixel, valid for t in [1, inf]
        """
        direction = self.viewport.canvas_to_viewport(x, y, nx, ny)
        return Ray(self.eye, direction, start=1., end=np.inf)


def _diffuse_specular(intensity, normal, light_vec, view, specular):
    """Diffuse plus specular intensity from one light arriving along light_vec."""
    n_len = length(normal)
    l_len = length(light_vec)
    if n_len == 0 or l_len == 0:
        return 0.

    i = 0.
    n_dot_l = dot(normal, light_vec)
    if n_dot_l > 0:
        i += intensity * n_dot_l / (n_len * l_len)

    if specular != NO_SPECULAR:
        reflected = subtract(multiply(normal, 2 * n_dot_l), light_vec)
        r_dot_v = dot(reflected, view)
        if r_dot_v > 0:
            i += intensity * (r_dot_v / (length(reflected) * length(view))) ** specular
    return i


class AmbientLight:

    def __init__(self, intensity):
        """Create an ambient light of given intensity

        Parameters:
          intensity : float -- the intensity of the ambient light
        """
        self.intensity = intensity

    def illuminate(self, point, normal, view, specular):
        return self.intensity


class PointLight:

    def __init__(self, position, intensity):
        """Create a point light at given position and with given intensity

        Parameters:
          position : (3,) -- 3D point giving the light source location in scene
          intensity : float -- scalar intensity of the source
        """
        self.position = vec(position)
        self.intensity = intensity

    def illuminate(self, point, normal, view, specular):
        """Compute the light intensity reaching a surface point from this light.

        Parameters:
          point : (3,) -- the surface point
          normal : (3,) -- the surface normal at point
          view : (3,) -- vector from point back towards the viewer
          specular : float -- the surface's specular exponent
        Return:
          float -- diffuse plus specular intensity, no attenuation with distance
        """
        light_vec = subtract(self.position, point)
        return _diffuse_specular(self.intensity, normal, light_vec, view, specular)


class DirectionalLight:

    def __init__(self, direction, intensity):
        """Create a light arriving from a fixed direction, like the sun.

        Parameters:
          direction : (3,) -- vector pointing from the scene towards the light
          intensity : float -- scalar intensity of the source
        """
        self.direction = vec(direction)
        self.intensity = intensity

    def illuminate(self, point, normal, view, specular):
        return _diffuse_specular(self.intensity, normal, self.direction, view, specular)


def compute_lighting(point, normal, view, specular, lights):
    """Compute the total light intensity at a surface point.

    Parameters:
      point : (3,) -- the surface point
      normal : (3,) -- the surface normal; a zero vector disables diffuse and specular
      view : (3,) -- vector from point back towards the viewer
      specular : float -- specular exponent, or NO_SPECULAR
      lights : [AmbientLight, PointLight or DirectionalLight] -- the lights
    Return:
      float -- the summed intensity, not clamped
    """
    i = 0.
    for light in lights:
        i += light.illuminate(point, normal, view, specular)
    return i


class Scene:

    def __init__(self, spheres, lights, bg_color=vec([255,255,255])):
        """Create a scene containing the given objects.

        Parameters:
          spheres : [Sphere] -- list of the spheres in the scene
          lights : [AmbientLight, PointLight or DirectionalLight] -- the lights
          bg_color : (3,) -- RGB color that is seen where no objects appear
        """
        self.spheres = tuple(spheres)
        self.lights = tuple(lights)
        self.bg_color = vec(bg_color)

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.

        On equal t the sphere listed first wins.

        Parameters:
          ray : Ray -- the ray to intersect with the scene
        Return:
          Hit -- the hit data
        """
        closest_hit = no_hit

        for sphere in self.spheres:
            hit = sphere.intersect(ray)

            if hit.t < closest_hit.t:
                closest_hit = hit

        return closest_hit


def trace_ray(ray, scene):
    """Compute the color seen along a ray.

    Parameters:
      ray : Ray -- the ray to trace; ray.start and ray.end bound the accepted t values
      scene : Scene -- the scene
    Return:
      (3,) -- the lit color of the closest sphere, or scene.bg_color on a miss
    """
    hit = scene.intersect(ray)
    if hit.t == np.inf:
        return scene.bg_color

    sphere = hit.sphere
    point = add(ray.origin, multiply(ray.direction, hit.t))
    normal = subtract(point, sphere.center)
    n_len = length(normal)
    if n_len > 0:
        normal = divide(normal, n_len)
    view = multiply(ray.direction, -1)

    lighting = compute_lighting(point, normal, view, sphere.specular, scene.lights)
    return multiply(sphere.color, lighting)


def to_raster(x, y, nx, ny):
    """Convert centered coordinates (y up) to raster coordinates (origin top left, y down)."""
    return nx // 2 + x, ny // 2 - y


def render_image(camera, scene, nx, ny, verbose=False):
    """Render a ray traced image.

    Parameters:
      camera : Camera -- the camera defining the view
      scene : Scene -- the scene to be rendered
      nx, ny : int -- the dimensions of the rendered image
      verbose : bool -- print progress while rendering
    Returns:
      Canvas -- the rendered RGBA image
    """
    canvas = Canvas(nx, ny, fill=scene.bg_color)
    xs = range(-(nx // 2), nx - nx // 2)
    ys = range(-(ny // 2), ny - ny // 2)
    for i, x in enumerate(xs):
        if verbose and i % 50 == 0:
            print(f"rendering column {i+1}/{nx}...")
        for y in ys:
            ray = camera.generate_ray(x, y, nx, ny)
            color = trace_ray(ray, scene)
            px, py = to_raster(x, y, nx, ny)
            canvas.put_pixel(px, py, color)

    return canvas
