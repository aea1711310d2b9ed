import argparse
import hashlib
import sys

import numpy as np
from PIL import Image


def file_hash(path, algo="sha256"):
    h = hashlib.new(algo)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(4096), b""):
            h.update(chunk)
    return h.hexdigest()


def load_raster(path):
    with Image.open(path) as img:
        return np.asarray(img.convert("RGB"))


def same_pixels(path_a, path_b):
    raster_a = load_raster(path_a)
    raster_b = load_raster(path_b)
    return raster_a.shape == raster_b.shape and bool(np.array_equal(raster_a, raster_b))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare two rendered images.")
    parser.add_argument("first", help="first image, e.g. a previous saved.png")
    parser.add_argument("second", help="second image")
    args = parser.parse_args(argv)

    hash_a = file_hash(args.first)
    hash_b = file_hash(args.second)
    print("First hash: ", hash_a)
    print("Second hash:", hash_b)

    if hash_a == hash_b:
        print("Files are identical!")
        return 0
    if same_pixels(args.first, args.second):
        print("Files differ, but every pixel matches.")
    else:
        print("Files are different!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
