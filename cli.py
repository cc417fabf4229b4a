import argparse
import logging
import sys

from ExampleSceneDef import EXAMPLES

logger = logging.getLogger(__name__)


def render(scene, width, height, output_path, progress=False, gamma_correct=False):
    """Render a scene and write it to output_path.

    Returns the Image and whether it was written successfully.
    """
    image = scene.render(width, height, progress=progress)
    ok = image.writeToFile(output_path, gamma_correct=gamma_correct)
    return image, ok


def build_parser():
    parser = argparse.ArgumentParser(description="Render one of the example scenes.")
    parser.add_argument("scene", choices=sorted(EXAMPLES), help="Example scene to render.")
    parser.add_argument("--width", type=int, default=256, help="Image width in pixels.")
    parser.add_argument("--height", type=int, default=256, help="Image height in pixels.")
    parser.add_argument("-o", "--output", default=None,
                        help="Output path; .ppm writes plain PPM, anything else goes through Pillow. "
                             "Defaults to <scene>.ppm.")
    parser.add_argument("--orthographic", action="store_true", help="Use the orthographic projection.")
    parser.add_argument("--gamma", action="store_true", help="sRGB-encode non-PPM output.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while rendering.")
    parser.add_argument("--show", action="store_true", help="Display the result with matplotlib.")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.width <= 0 or args.height <= 0:
        logger.error("width and height must be positive, got %dx%d", args.width, args.height)
        return 2

    output = args.output or f"{args.scene}.ppm"
    example = EXAMPLES[args.scene](perspective=not args.orthographic)
    image, ok = render(example.scene, args.width, args.height, output,
                       progress=args.progress, gamma_correct=args.gamma)
    if not ok:
        return 1
    if args.show:
        image.show(title=args.scene)
    return 0


if __name__ == "__main__":
    sys.exit(main())
