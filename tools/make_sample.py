import random
import uuid
from pathlib import Path

from PIL import Image, ImageDraw

from mrq_codec import BOX_SIZE, SCREENSHOT_SIZE, MarqueeDocument, write_marquee
from mrq_core.protocol import EXTENSION

TITLES = [
    ("Tempest 2000", "Llamasoft", "Atari Corporation", "1994"),
    ("Alien vs Predator", "Rebellion", "Atari Corporation", "1994"),
    ("Iron Soldier", "Eclipse Software", "Atari Corporation", "1994"),
    ("Rayman", "Ubi Soft", "Ubi Soft", "1995"),
]


def draw_art(size: tuple[int, int], seed: int) -> Image.Image:
    """Gradient background with a few random boxes, in RGB like most source art."""
    rng = random.Random(seed)
    w, h = size
    im = Image.new("RGB", size)
    px = im.load()
    for y in range(h):
        for x in range(w):
            px[x, y] = (x * 255 // (w - 1), y * 255 // (h - 1), (x + y) % 256)
    draw = ImageDraw.Draw(im)
    for _ in range(4):
        x0, y0 = rng.randrange(w // 2), rng.randrange(h // 2)
        x1, y1 = x0 + rng.randrange(4, w // 2), y0 + rng.randrange(4, h // 2)
        draw.rectangle([x0, y0, x1, y1], fill=tuple(rng.randrange(256) for _ in range(3)))
    return im


def generate_marquee(output_dir: str, custom_load: bool = False) -> Path:
    seed = random.randrange(1 << 30)
    title, developer, publisher, year = random.choice(TITLES)

    doc = MarqueeDocument(
        title=title,
        developer=developer,
        publisher=publisher,
        year=year,
        box=draw_art(BOX_SIZE, seed),
        screenshot=draw_art(SCREENSHOT_SIZE, seed + 1),
    )
    if custom_load:
        doc.load_addr, doc.exec_addr = 0x00802000, 0x00802000

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"sample-{uuid.uuid4().hex[:8]}{EXTENSION}"
    write_marquee(doc, path)

    print(f"GENERATED: {path}")
    return path


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_sample.py OUT_DIR [--runs N] [--custom-load]

    args = [a for a in sys.argv[1:] if a]

    custom_load = "--custom-load" in args
    args = [a for a in args if a != "--custom-load"]

    runs = 1
    if "--runs" in args:
        i = args.index("--runs")
        if i + 1 >= len(args):
            raise SystemExit("--runs requires a value")
        runs = int(args[i + 1])
        args = args[:i] + args[i + 2:]

    out = args[0] if len(args) > 0 else "samples"
    for _ in range(runs):
        generate_marquee(out, custom_load=custom_load)
