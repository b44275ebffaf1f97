import argparse
import os
import sys
import time

from raytracer import render_image
from scenedef import BasicSpheresExample


def positive_int(text):
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def make_parser(prog=None):
    if prog is None:
        prog = os.path.basename(sys.argv[0])
    default_output = os.path.splitext(prog)[0] + '.png'

    parser = argparse.ArgumentParser(prog=prog, description='Ray trace a scene of spheres to an image file.')
    parser.add_argument('--width', type=positive_int, default=600, help='image width in pixels')
    parser.add_argument('--height', type=positive_int, default=600, help='image height in pixels')
    parser.add_argument('-o', '--output', default=default_output,
                        help=f'output file; the extension picks the format (default {default_output})')
    parser.add_argument('-q', '--quiet', action='store_true', help='do not print progress')
    return parser


def render(camera, scene, argv=None, prog=None):
    """Render a scene using options from the command line and write the image.

    Parameters:
      camera : Camera -- the camera defining the view
      scene : Scene -- the scene to be rendered
      argv : [str] -- command line arguments (defaults to sys.argv[1:])
      prog : str -- program name, also used for the default output file
    Return:
      Canvas -- the rendered image
    """
    args = make_parser(prog).parse_args(argv)
    verbose = not args.quiet

    if verbose:
        print(f"rendering {args.width}x{args.height} image...")
    start = time.time()
    canvas = render_image(camera, scene, args.width, args.height, verbose=verbose)
    canvas.write_to_file(args.output)
    if verbose:
        print(f"saved {args.output} in {time.time() - start:.1f}s")
    return canvas


def main(argv=None):
    example = BasicSpheresExample()
    render(example.camera, example.scene, argv)


if __name__ == '__main__':
    main()
