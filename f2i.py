import argparse
import math
import sys
from typing import List, NamedTuple, Tuple

import numpy as np
from PIL import Image

from progress import update_progress

# CONFIG
OUTPUT_PATH = "saved.png"
IMAGE_FORMAT = "PNG"  # lossless, truecolor RGB
PACK_PER_PIXEL = 3  # bytes per pixel (RGB)
BLACK = (0, 0, 0)


class FileToImageError(Exception):
    """Base class for failures while turning a file into an image."""


class FileAccessError(FileToImageError):
    pass


class EmptyInputError(FileToImageError):
    pass


class EncodeError(FileToImageError):
    pass


class Color(NamedTuple):
    red: int
    green: int
    blue: int


def read_file_bytes(file_path) -> bytes:
    print("Getting bytes from file...")
    try:
        with open(file_path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise FileAccessError(f"Cannot read {file_path}: {exc}") from exc


def build_colour_list(data: bytes, progress=update_progress) -> List[Color]:
    """Pack bytes into colours, three at a time, in red/green/blue order.

    A trailing group of one or two bytes still makes a colour; its missing
    channels stay 0.
    """
    print("Assembling pixel colour list...")

    counter = 0
    colour_bytes = [0] * PACK_PER_PIXEL
    pixel_colours = []
    target = len(data) - 1

    for index, byte in enumerate(data):
        colour_bytes[counter] = byte
        counter += 1

        if counter == PACK_PER_PIXEL:
            pixel_colours.append(Color(*colour_bytes))
            counter = 0
            colour_bytes = [0] * PACK_PER_PIXEL

        progress(index, index - 1, target)

    if counter > 0:
        pixel_colours.append(Color(*colour_bytes))

    print()
    return pixel_colours


def canvas_size(pixel_count: int) -> Tuple[int, int]:
    """Near-square dimensions able to hold ``pixel_count`` pixels.

    Width is sqrt(N) rounded half-up, height is whatever is left over rounded up.
    Zero pixels gives a 0x0 canvas, which callers must refuse to encode.
    """
    if pixel_count < 0:
        raise ValueError(f"pixel count must not be negative: {pixel_count}")
    if pixel_count == 0:
        return 0, 0

    width = int(math.floor(math.sqrt(pixel_count) + 0.5))
    height = math.ceil(pixel_count / width)
    return width, height


def draw_image(pixel_colours: List[Color], width: int, height: int, progress=update_progress) -> np.ndarray:
    print("Drawing pixel data to image...")

    total = width * height
    if total < len(pixel_colours):
        raise ValueError(f"{width}x{height} canvas cannot hold {len(pixel_colours)} pixels")

    canvas = np.zeros((height, width, PACK_PER_PIXEL), dtype=np.uint8)
    cell = 0
    for y in range(height):
        for x in range(width):
            canvas[y, x] = pixel_colours[cell] if cell < len(pixel_colours) else BLACK
            progress(cell, cell - 1, total - 1)
            cell += 1

    print()
    return canvas


def create_image(pixel_colours: List[Color], progress=update_progress) -> np.ndarray:
    print("Creating image...")
    width, height = canvas_size(len(pixel_colours))
    return draw_image(pixel_colours, width, height, progress=progress)


def encode_image(canvas: np.ndarray, output_path=OUTPUT_PATH):
    if canvas.size == 0:
        raise EncodeError("Refusing to encode an empty canvas")
    try:
        img = Image.fromarray(canvas)
        img.save(output_path, IMAGE_FORMAT)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Cannot write {output_path}: {exc}") from exc


def save_image(canvas: np.ndarray, output_path=OUTPUT_PATH) -> bool:
    print("Saving image...")
    try:
        encode_image(canvas, output_path)
    except EncodeError as e:
        print(f"Error: {e}")
        return False
    return True


def file_to_image(input_file, output_png=OUTPUT_PATH, progress=update_progress) -> bool:
    data = read_file_bytes(input_file)
    pixel_colours = build_colour_list(data, progress=progress)
    if not pixel_colours:
        raise EmptyInputError(f"{input_file} is empty, nothing to draw")

    canvas = create_image(pixel_colours, progress=progress)
    return save_image(canvas, output_png)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description=(
            "Render a file's raw bytes as a near-square RGB image, three bytes "
            f"per pixel, saved to {OUTPUT_PATH}."
        )
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="File to render (when several are given, the last one is used)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.files:
        file_path = args.files[-1]
    else:
        file_path = input("Enter a file name: ").strip()

    try:
        saved = file_to_image(file_path)
    except FileToImageError as e:
        print(f"Error: {e}")
        saved = False

    if saved:
        print("All done!")
        return 0
    print("Unable to create image!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
